"""Batched image transformation with caching and per-image fallback."""

import asyncio
import logging
from typing import Optional

from parody.models.content import ExtractedImage
from parody.models.parody import ParodyStyle, TransformedImage
from parody.services.images.cache import TransformCache
from parody.services.images.restyler import ImageRestyler

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 3
FALLBACK_METHOD = "fallback"
CACHED_METHOD = "cached"


class ImageTransformer:
    """Restyles page images through an ``ImageRestyler``.

    Images are processed in sequential batches of ``batch_size`` concurrent
    calls, so no more than ``batch_size`` restyle calls are ever in flight
    for one ``transform_all`` call. A failing image keeps its original URL.
    """

    def __init__(
        self,
        restyler: ImageRestyler,
        *,
        batch_size: int = DEFAULT_BATCH_SIZE,
        cache: Optional[TransformCache] = None,
    ) -> None:
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self.restyler = restyler
        self.batch_size = batch_size
        self.cache = cache if cache is not None else TransformCache()

    async def transform_all(
        self,
        images: list[ExtractedImage],
        style: ParodyStyle,
        max_count: int = 5,
    ) -> list[TransformedImage]:
        """Restyle up to *max_count* distinct images.

        ``data:`` URIs are skipped and duplicate sources are restyled once.
        Never raises for individual image failures.
        """
        selected = self._select(images, max_count)
        if not selected:
            return []

        logger.info(
            f"Transforming {len(selected)} images to {style.value} "
            f"in batches of {self.batch_size}"
        )
        results: list[TransformedImage] = []
        for start in range(0, len(selected), self.batch_size):
            batch = selected[start : start + self.batch_size]
            results.extend(
                await asyncio.gather(*(self._transform_one(img, style) for img in batch))
            )

        restyled = sum(1 for r in results if r.method != FALLBACK_METHOD)
        logger.info(f"Transformed {restyled}/{len(results)} images")
        return results

    @staticmethod
    def _select(images: list[ExtractedImage], max_count: int) -> list[ExtractedImage]:
        seen: set[str] = set()
        selected: list[ExtractedImage] = []
        for image in images:
            if len(selected) >= max_count:
                break
            source = image.original_src
            if not source or source.startswith("data:") or source in seen:
                continue
            seen.add(source)
            selected.append(image)
        return selected

    async def _transform_one(
        self, image: ExtractedImage, style: ParodyStyle
    ) -> TransformedImage:
        key = (image.src or image.original_src, style, image.context)
        cached = self.cache.get(key)
        if cached is not None:
            return TransformedImage(
                original_src=image.original_src,
                transformed_url=cached,
                context=image.context,
                method=CACHED_METHOD,
            )

        try:
            url = await self.restyler.restyle(key[0], style, image.context)
        except Exception as e:
            logger.warning(f"Failed to transform image {image.original_src}: {e}")
            return TransformedImage(
                original_src=image.original_src,
                transformed_url=image.original_src,
                context=image.context,
                method=FALLBACK_METHOD,
            )

        self.cache.set(key, url)
        return TransformedImage(
            original_src=image.original_src,
            transformed_url=url,
            context=image.context,
            method=self.restyler.method_for(style, image.context),
        )
