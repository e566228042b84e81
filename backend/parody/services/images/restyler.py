"""Image restylers.

A restyler turns one source image URL into a URL for a replacement image
in a parody style. ``ImageTransformer`` owns batching, caching and
fallback; restylers only make the outbound call and may raise freely.

Two OpenAI paths exist: prompt-only generation for images that are
replaced outright (heroes, logos, the Simpsons style) and image-to-image
editing of the downloaded source for everything else, with a per-context
transformation strength. ``ContextRoutingRestyler`` picks between them.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

import httpx
import openai
from openai import AsyncOpenAI
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from parody.models.content import ImageContext
from parody.models.parody import ParodyStyle
from parody.services.styles import get_style

logger = logging.getLogger(__name__)

WIDE_SIZE = "1792x1024"
SQUARE_SIZE = "1024x1024"
WIDE_CONTEXTS = frozenset({ImageContext.HERO, ImageContext.BACKGROUND})
EDIT_WIDE_SIZE = "1536x1024"

# Contexts replaced outright instead of restyled from the source pixels
GENERATED_CONTEXTS = frozenset({ImageContext.HERO, ImageContext.LOGO})
GENERATED_STYLES = frozenset({ParodyStyle.SIMPSONS})

# Higher strength reimagines more of the source; lower preserves it
DEFAULT_STRENGTH = 0.6
HIGH_FIDELITY_BELOW = 0.6
TRANSFORMATION_STRENGTHS: dict[ParodyStyle, dict[ImageContext, float]] = {
    ParodyStyle.SIMPSONS: {
        ImageContext.HERO: 0.8,
        ImageContext.CONTENT: 0.7,
        ImageContext.BACKGROUND: 0.6,
        ImageContext.ICON: 0.5,
        ImageContext.LOGO: 0.7,
    },
    ParodyStyle.CORPORATE_BUZZWORD: {
        ImageContext.HERO: 0.6,
        ImageContext.CONTENT: 0.5,
        ImageContext.BACKGROUND: 0.4,
        ImageContext.ICON: 0.3,
        ImageContext.LOGO: 0.5,
    },
}

DOWNLOAD_TIMEOUT = 20.0
MAX_SOURCE_BYTES = 20 * 1024 * 1024
_EXTENSIONS = {"image/png": "png", "image/jpeg": "jpg", "image/webp": "webp"}


class ImageRestyler(ABC):
    """Interface consumed by ``ImageTransformer``."""

    name: str = "restyler"

    @abstractmethod
    async def restyle(
        self, url: str, style: ParodyStyle, context: ImageContext
    ) -> str:
        """Return the URL of a restyled replacement for *url*."""

    def method_for(self, style: ParodyStyle, context: ImageContext) -> str:
        """Label recorded on images this restyler produced."""
        return self.name


def image_size(context: ImageContext) -> str:
    return WIDE_SIZE if context in WIDE_CONTEXTS else SQUARE_SIZE


def build_image_prompt(style: ParodyStyle, context: ImageContext) -> str:
    profile = get_style(style)
    return (
        f"{profile.image_prompt(context)}. Parody of a website {context.value} "
        f"image in the '{profile.name}' style. No text, no watermarks."
    )


class OpenAIImageRestyler(ImageRestyler):
    """Generates replacement images with the OpenAI Images API.

    The generation is prompt-only: the source URL identifies which image is
    being replaced but its pixels are not sent.
    """

    name = "dall-e-3"

    def __init__(self, client: AsyncOpenAI, model: str = "dall-e-3") -> None:
        self.client = client
        self.model = model
        self.name = model

    @retry(
        retry=retry_if_exception_type((openai.RateLimitError, openai.APITimeoutError)),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=30),
        reraise=True,
    )
    async def restyle(
        self, url: str, style: ParodyStyle, context: ImageContext
    ) -> str:
        logger.debug(f"Generating {context.value} image for {url} in {style.value}")
        response = await self.client.images.generate(
            model=self.model,
            prompt=build_image_prompt(style, context),
            n=1,
            size=image_size(context),
            response_format="url",
        )
        generated = response.data[0].url if response.data else None
        if not generated:
            raise RuntimeError("Image API returned no URL")
        return generated


def uses_prompt_generation(style: ParodyStyle, context: ImageContext) -> bool:
    """True when the image is generated from a prompt rather than edited."""
    return context in GENERATED_CONTEXTS or style in GENERATED_STYLES


def transformation_strength(style: ParodyStyle, context: ImageContext) -> float:
    return TRANSFORMATION_STRENGTHS.get(style, {}).get(context, DEFAULT_STRENGTH)


def build_edit_prompt(style: ParodyStyle, context: ImageContext, strength: float) -> str:
    profile = get_style(style)
    if strength < HIGH_FIDELITY_BELOW:
        guidance = "Keep the original composition, subjects and layout recognisable"
    else:
        guidance = "Reimagine the scene freely, keeping only its overall layout"
    return (
        f"Restyle this website {context.value} image as {profile.image_prompt(context)}. "
        f"{guidance} (transformation strength {strength:.1f}). No text, no watermarks."
    )


class OpenAIImageEditRestyler(ImageRestyler):
    """Restyles the source image itself with the OpenAI image edit endpoint.

    The source is downloaded with httpx and sent as the edit input. The
    per-context strength picks the input fidelity and the prompt guidance.
    Edited images come back base64-encoded and are returned as data URLs.
    """

    name = "gpt-image-1"

    def __init__(
        self,
        client: AsyncOpenAI,
        model: str = "gpt-image-1",
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        download_timeout: float = DOWNLOAD_TIMEOUT,
    ) -> None:
        self.client = client
        self.model = model
        self.name = model
        self.download_timeout = download_timeout
        self._http_client = http_client

    async def restyle(
        self, url: str, style: ParodyStyle, context: ImageContext
    ) -> str:
        source, mime_type = await self._download(url)
        strength = transformation_strength(style, context)
        logger.debug(f"Editing {context.value} image {url} at strength {strength}")
        return await self._edit(source, mime_type, style, context, strength)

    @retry(
        retry=retry_if_exception_type((openai.RateLimitError, openai.APITimeoutError)),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=30),
        reraise=True,
    )
    async def _edit(
        self,
        source: bytes,
        mime_type: str,
        style: ParodyStyle,
        context: ImageContext,
        strength: float,
    ) -> str:
        extension = _EXTENSIONS[mime_type]
        response = await self.client.images.edit(
            model=self.model,
            image=(f"source.{extension}", source, mime_type),
            prompt=build_edit_prompt(style, context, strength),
            n=1,
            size=EDIT_WIDE_SIZE if context in WIDE_CONTEXTS else SQUARE_SIZE,
            input_fidelity="high" if strength < HIGH_FIDELITY_BELOW else "low",
        )
        if not response.data:
            raise RuntimeError("Image edit API returned no image")
        image = response.data[0]
        if image.b64_json:
            return f"data:image/png;base64,{image.b64_json}"
        if image.url:
            return image.url
        raise RuntimeError("Image edit API returned no image")

    async def _download(self, url: str) -> tuple[bytes, str]:
        """Fetch the source image. Raises ``ValueError`` for unusable sources."""
        if not url.lower().startswith(("http://", "https://")):
            raise ValueError(f"Cannot download non-HTTP image source: {url[:80]}")
        try:
            if self._http_client is not None:
                response = await self._http_client.get(url, follow_redirects=True)
            else:
                async with httpx.AsyncClient(timeout=self.download_timeout) as client:
                    response = await client.get(url, follow_redirects=True)
        except httpx.HTTPError as e:
            raise ValueError(f"Image download failed: {e.__class__.__name__}") from e

        if not response.is_success:
            raise ValueError(f"Image download failed: {response.status_code}")
        mime_type = response.headers.get("content-type", "").split(";")[0].strip().lower()
        if mime_type == "image/jpg":
            mime_type = "image/jpeg"
        if mime_type not in _EXTENSIONS:
            raise ValueError(f"Unsupported image type for editing: {mime_type or 'unknown'}")
        if not response.content or len(response.content) > MAX_SOURCE_BYTES:
            raise ValueError(f"Image size unsupported for editing: {len(response.content)} bytes")
        return response.content, mime_type


class ContextRoutingRestyler(ImageRestyler):
    """Sends heroes, logos and Simpsons images to the generator, the rest to the editor."""

    name = "routing"

    def __init__(self, generator: ImageRestyler, editor: ImageRestyler) -> None:
        self.generator = generator
        self.editor = editor

    def _pick(self, style: ParodyStyle, context: ImageContext) -> ImageRestyler:
        return self.generator if uses_prompt_generation(style, context) else self.editor

    def method_for(self, style: ParodyStyle, context: ImageContext) -> str:
        return self._pick(style, context).method_for(style, context)

    async def restyle(
        self, url: str, style: ParodyStyle, context: ImageContext
    ) -> str:
        return await self._pick(style, context).restyle(url, style, context)
