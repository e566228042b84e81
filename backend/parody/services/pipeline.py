"""Parody pipeline and singleton factories.

Coordinates capture → extraction → rewrite → image restyling →
reconstruction → preview storage without containing any of that logic
itself. Every collaborator is injected; the factories at the bottom wire
the production ones from settings.
"""

import asyncio
import logging
import time
from datetime import timedelta
from typing import Optional

import anthropic
from openai import AsyncOpenAI

from parody.config import get_settings
from parody.models.capture import CaptureFidelity
from parody.models.parody import (
    ParodyMetadata,
    ParodyRequest,
    ParodyResult,
    TransformedContent,
    TransformedImage,
)
from parody.services.capture import (
    CaptureOrchestrator,
    build_capture_strategies,
    normalize_url,
)
from parody.services.extraction import extract_complete
from parody.services.images import (
    ContextRoutingRestyler,
    ImageTransformer,
    OpenAIImageEditRestyler,
    OpenAIImageRestyler,
    TransformCache,
)
from parody.services.images.transformer import FALLBACK_METHOD
from parody.services.preview_store import (
    InMemoryPreviewStore,
    PreviewStore,
    SupabasePreviewStore,
)
from parody.services.reconstruction import SiteReconstructor
from parody.services.rewriting import ContentRewriter
from parody.services.roast import ElevenLabsSpeaker, RoastPipeline, RoastWriter
from parody.services.styles import get_style

logger = logging.getLogger(__name__)

PREVIEW_PATH = "/parody/preview/{id}"
DOWNLOAD_PATH = "/parody/download/{id}"

LOW_CONFIDENCE_WARNING = (
    "The site could not be fetched; this parody was built from a placeholder "
    "page and does not reflect the real content."
)

# Singleton state
_parody_pipeline: Optional["ParodyPipeline"] = None
_roast_pipeline: Optional[RoastPipeline] = None
_preview_store: Optional[PreviewStore] = None
_lock = asyncio.Lock()


class ParodyPipeline:
    """Turns a URL and a style into a stored parody page.

    Only ``ValueError`` (missing URL, unknown style) and ``CaptureFailure``
    propagate. Every other stage degrades and adds a warning.
    """

    def __init__(
        self,
        *,
        orchestrator: CaptureOrchestrator,
        rewriter: ContentRewriter,
        store: PreviewStore,
        transformer: Optional[ImageTransformer] = None,
        reconstructor: Optional[SiteReconstructor] = None,
        max_images: int = 5,
    ) -> None:
        self.orchestrator = orchestrator
        self.rewriter = rewriter
        self.store = store
        self.transformer = transformer
        self.reconstructor = reconstructor or SiteReconstructor()
        self.max_images = max_images

    async def generate(self, request: ParodyRequest) -> ParodyResult:
        """Main entry point: capture, rewrite and rebuild one site."""
        start_time = time.time()
        warnings: list[str] = []

        if not request.url or not request.url.strip():
            raise ValueError("URL is required")
        style = get_style(request.style).key
        url = normalize_url(request.url)

        # Phase 1: Capture
        logger.info(f"Generating {style.value} parody of {url}")
        outcome = await self.orchestrator.capture(url)
        if outcome.fidelity == CaptureFidelity.PLACEHOLDER:
            warnings.append(LOW_CONFIDENCE_WARNING)

        # Phase 2: Extraction
        extraction = extract_complete(outcome.result.html, base_url=url)
        logger.info(
            f"Extracted {len(extraction.paragraphs)} paragraphs, "
            f"{len(extraction.images)} images from {url}"
        )

        # Phase 3: Rewrite
        text = await self.rewriter.rewrite(extraction.to_content(), style)
        if text.fallback:
            warnings.append("Text rewriting failed; the original copy was kept.")

        # Phase 4: Images
        images: list[TransformedImage] = []
        if request.transform_images:
            if self.transformer is None:
                warnings.append("Image restyling is not configured; original images kept.")
            else:
                try:
                    images = await self.transformer.transform_all(
                        extraction.images, style, self.max_images
                    )
                except Exception as e:
                    logger.error(f"Image transformation failed: {e}")
                    warnings.append(f"Image restyling failed: {e!s}")
        images_transformed = sum(1 for img in images if img.method != FALLBACK_METHOD)
        if len(images) > images_transformed:
            warnings.append(
                f"{len(images) - images_transformed} image(s) kept their original version."
            )

        # Phase 5: Reconstruction
        html = self.reconstructor.reconstruct(
            extraction, TransformedContent(text=text, images=images), style
        )
        processing_time_ms = int((time.time() - start_time) * 1000)

        # Phase 6: Persist
        metadata = ParodyMetadata(
            images_transformed=images_transformed,
            processing_time_ms=processing_time_ms,
            file_size=len(html.encode("utf-8")),
            strategy=outcome.strategy,
        )
        result = ParodyResult(
            success=True,
            original_url=url,
            style=style,
            strategy=outcome.strategy,
            fidelity=outcome.fidelity,
            summary=text.summary,
            images_transformed=images_transformed,
            processing_time_ms=processing_time_ms,
            failed_attempts=outcome.failed_attempts,
            warnings=warnings,
        )
        try:
            stored = await self.store.store(
                html, original_url=url, style=style.value, metadata=metadata
            )
        except Exception as e:
            logger.error(f"Preview storage failed: {e}")
            result.warnings.append("Preview storage failed; the page is returned inline.")
            result.html = html
            return result

        result.preview_id = stored.id
        result.preview_url = PREVIEW_PATH.format(id=stored.id)
        result.download_url = DOWNLOAD_PATH.format(id=stored.id)
        result.expires_at = stored.expires_at
        logger.info(
            f"Parody {stored.id} ready in {processing_time_ms}ms "
            f"via {outcome.strategy} ({len(result.warnings)} warnings)"
        )
        return result


# =====================================================================
# Singleton factories (thread-safe via asyncio.Lock)
# =====================================================================


async def get_preview_store() -> PreviewStore:
    """Get or create the singleton preview store."""
    global _preview_store
    if _preview_store is not None:
        return _preview_store

    async with _lock:
        if _preview_store is None:
            _preview_store = await _create_preview_store()
    return _preview_store


async def _create_preview_store() -> PreviewStore:
    settings = get_settings()
    ttl = timedelta(hours=settings.preview_ttl_hours)
    if settings.preview_store == "supabase":
        from parody.db.supabase import get_async_supabase_client

        supabase = await get_async_supabase_client()
        return SupabasePreviewStore(supabase, ttl=ttl)
    return InMemoryPreviewStore(ttl=ttl)


def _anthropic_client() -> anthropic.AsyncAnthropic:
    settings = get_settings()
    if not settings.anthropic_api_key:
        raise ValueError("ANTHROPIC_API_KEY is required for parody generation")
    return anthropic.AsyncAnthropic(api_key=settings.anthropic_api_key)


async def get_parody_pipeline() -> ParodyPipeline:
    """Get or create the singleton ``ParodyPipeline``."""
    global _parody_pipeline
    if _parody_pipeline is not None:
        return _parody_pipeline

    store = await get_preview_store()
    async with _lock:
        # Double-checked locking
        if _parody_pipeline is not None:
            return _parody_pipeline

        settings = get_settings()
        rewriter = ContentRewriter(
            _anthropic_client(),
            settings.claude_model,
            max_tokens=settings.rewrite_max_tokens,
        )

        transformer: Optional[ImageTransformer] = None
        if settings.openai_api_key:
            openai_client = AsyncOpenAI(api_key=settings.openai_api_key)
            transformer = ImageTransformer(
                ContextRoutingRestyler(
                    generator=OpenAIImageRestyler(openai_client, settings.image_model),
                    editor=OpenAIImageEditRestyler(openai_client, settings.image_edit_model),
                ),
                batch_size=settings.image_transform_batch_size,
                cache=TransformCache(settings.image_cache_capacity),
            )
        else:
            logger.warning("OpenAI API key not configured - image restyling disabled")

        _parody_pipeline = ParodyPipeline(
            orchestrator=CaptureOrchestrator(build_capture_strategies(settings)),
            rewriter=rewriter,
            store=store,
            transformer=transformer,
            max_images=settings.image_transform_max_images,
        )

    return _parody_pipeline


async def get_roast_pipeline() -> RoastPipeline:
    """Get or create the singleton ``RoastPipeline``."""
    global _roast_pipeline
    if _roast_pipeline is not None:
        return _roast_pipeline

    async with _lock:
        if _roast_pipeline is not None:
            return _roast_pipeline

        settings = get_settings()
        speaker: Optional[ElevenLabsSpeaker] = None
        if settings.elevenlabs_api_key:
            speaker = ElevenLabsSpeaker(
                settings.elevenlabs_api_key,
                voice_id=settings.elevenlabs_voice_id,
                model_id=settings.elevenlabs_model_id,
            )
        else:
            logger.warning("ElevenLabs API key not configured - roast narration disabled")

        _roast_pipeline = RoastPipeline(
            orchestrator=CaptureOrchestrator(build_capture_strategies(settings)),
            writer=RoastWriter(_anthropic_client(), settings.claude_model),
            speaker=speaker,
        )

    return _roast_pipeline


def reset_pipelines() -> None:
    """Reset singletons for testing."""
    global _parody_pipeline, _roast_pipeline, _preview_store
    _parody_pipeline = None
    _roast_pipeline = None
    _preview_store = None
