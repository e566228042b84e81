"""Tests for parody.services.pipeline."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from parody.config import Settings
from parody.models.capture import CaptureAttempt, CaptureFidelity, CaptureOutcome, CaptureResult
from parody.models.content import ImageContext
from parody.models.parody import ParodyContent, ParodyRequest, ParodyStyle, TransformedImage
from parody.services.capture import CaptureFailure
from parody.services.images import ContextRoutingRestyler
from parody.services.pipeline import (
    LOW_CONFIDENCE_WARNING,
    ParodyPipeline,
    get_parody_pipeline,
    get_roast_pipeline,
    reset_pipelines,
)
from parody.services.preview_store import InMemoryPreviewStore

PAGE = """<html><head><title>Acme</title></head>
<body><h1>Welcome</h1><p>We sell anvils.</p><img src="/anvil.jpg"></body></html>"""


def _make_orchestrator(
    html: str = PAGE,
    strategy: str = "browserless",
    fidelity: CaptureFidelity = CaptureFidelity.RENDERED,
) -> MagicMock:
    orchestrator = MagicMock()
    orchestrator.capture = AsyncMock(
        return_value=CaptureOutcome(
            result=CaptureResult(screenshot=b"png", html=html),
            strategy=strategy,
            fidelity=fidelity,
            failed_attempts=[CaptureAttempt(name="x", error="nope")],
        )
    )
    return orchestrator


def _make_rewriter(fallback: bool = False) -> MagicMock:
    rewriter = MagicMock()
    rewriter.rewrite = AsyncMock(
        return_value=ParodyContent(
            title="Hear Ye",
            paragraphs=["We forge anvils."],
            summary="Feudal Acme",
            style="medieval",
            fallback=fallback,
        )
    )
    return rewriter


def _make_transformer(method: str = "dall-e-3") -> MagicMock:
    transformer = MagicMock()
    transformer.transform_all = AsyncMock(
        return_value=[
            TransformedImage(
                original_src="/anvil.jpg",
                transformed_url="https://img.test/anvil.png" if method != "fallback" else "/anvil.jpg",
                context=ImageContext.CONTENT,
                method=method,
            )
        ]
    )
    return transformer


def _make_pipeline(**overrides) -> ParodyPipeline:
    kwargs = dict(
        orchestrator=_make_orchestrator(),
        rewriter=_make_rewriter(),
        store=InMemoryPreviewStore(),
        transformer=_make_transformer(),
    )
    kwargs.update(overrides)
    return ParodyPipeline(**kwargs)


@pytest.mark.asyncio
class TestParodyPipeline:
    async def test_full_generation(self):
        store = InMemoryPreviewStore()
        pipeline = _make_pipeline(store=store)

        result = await pipeline.generate(
            ParodyRequest(url="acme.test", style=ParodyStyle.MEDIEVAL)
        )

        assert result.success
        assert result.original_url == "https://acme.test"
        assert result.strategy == "browserless"
        assert result.fidelity == CaptureFidelity.RENDERED
        assert result.summary == "Feudal Acme"
        assert result.images_transformed == 1
        assert result.failed_attempts[0].name == "x"
        assert result.warnings == []
        assert result.html is None
        assert result.preview_url == f"/parody/preview/{result.preview_id}"
        assert result.download_url == f"/parody/download/{result.preview_id}"

        stored = await store.get(result.preview_id)
        assert "Hear Ye" in stored.html
        assert "We forge anvils." in stored.html
        assert "https://img.test/anvil.png" in stored.html
        assert "data-parody-theme" in stored.html
        assert stored.metadata.strategy == "browserless"

    async def test_rewriter_receives_extracted_content(self):
        rewriter = _make_rewriter()
        pipeline = _make_pipeline(rewriter=rewriter)
        await pipeline.generate(ParodyRequest(url="acme.test", style="simpsons"))

        content, style = rewriter.rewrite.call_args.args
        assert content.title == "Acme"
        assert content.headings.h1 == ["Welcome"]
        assert style == ParodyStyle.SIMPSONS

    async def test_template_capture_flags_low_confidence(self):
        pipeline = _make_pipeline(
            orchestrator=_make_orchestrator(
                strategy="template", fidelity=CaptureFidelity.PLACEHOLDER
            )
        )
        result = await pipeline.generate(ParodyRequest(url="acme.test", style="medieval"))
        assert result.fidelity == CaptureFidelity.PLACEHOLDER
        assert LOW_CONFIDENCE_WARNING in result.warnings

    async def test_images_skipped_when_not_requested(self):
        transformer = _make_transformer()
        pipeline = _make_pipeline(transformer=transformer)
        result = await pipeline.generate(
            ParodyRequest(url="acme.test", style="medieval", transform_images=False)
        )
        transformer.transform_all.assert_not_called()
        assert result.images_transformed == 0

    async def test_missing_transformer_warns(self):
        pipeline = _make_pipeline(transformer=None)
        result = await pipeline.generate(ParodyRequest(url="acme.test", style="medieval"))
        assert any("not configured" in w for w in result.warnings)

    async def test_image_fallback_counted_and_warned(self):
        pipeline = _make_pipeline(transformer=_make_transformer(method="fallback"))
        result = await pipeline.generate(ParodyRequest(url="acme.test", style="medieval"))
        assert result.images_transformed == 0
        assert any("original version" in w for w in result.warnings)

    async def test_rewrite_fallback_warns(self):
        pipeline = _make_pipeline(rewriter=_make_rewriter(fallback=True))
        result = await pipeline.generate(ParodyRequest(url="acme.test", style="medieval"))
        assert result.success
        assert any("rewriting failed" in w for w in result.warnings)

    async def test_store_failure_returns_inline_html(self):
        store = MagicMock()
        store.store = AsyncMock(side_effect=RuntimeError("db down"))
        pipeline = _make_pipeline(store=store)

        result = await pipeline.generate(ParodyRequest(url="acme.test", style="medieval"))

        assert result.success
        assert result.preview_id is None
        assert "Hear Ye" in result.html
        assert any("inline" in w for w in result.warnings)

    async def test_capture_failure_propagates(self):
        orchestrator = MagicMock()
        orchestrator.capture = AsyncMock(
            side_effect=CaptureFailure([CaptureAttempt(name="template", error="x")])
        )
        pipeline = _make_pipeline(orchestrator=orchestrator)
        with pytest.raises(CaptureFailure):
            await pipeline.generate(ParodyRequest(url="acme.test", style="medieval"))

    async def test_empty_url_rejected(self):
        pipeline = _make_pipeline()
        with pytest.raises(ValueError, match="URL is required"):
            await pipeline.generate(ParodyRequest(url="  ", style="medieval"))


@pytest.mark.asyncio
class TestFactories:
    async def test_parody_pipeline_requires_anthropic_key(self):
        reset_pipelines()
        with patch(
            "parody.services.pipeline.get_settings",
            return_value=Settings(_env_file=None, anthropic_api_key=None),
        ):
            with pytest.raises(ValueError, match="ANTHROPIC_API_KEY"):
                await get_parody_pipeline()
        reset_pipelines()

    async def test_optional_collaborators_disabled_without_keys(self):
        reset_pipelines()
        settings = Settings(
            _env_file=None,
            anthropic_api_key="sk-test",
            openai_api_key=None,
            elevenlabs_api_key=None,
        )
        with patch("parody.services.pipeline.get_settings", return_value=settings):
            parody_pipeline = await get_parody_pipeline()
            roast_pipeline = await get_roast_pipeline()

            assert parody_pipeline.transformer is None
            assert roast_pipeline.speaker is None
            assert isinstance(parody_pipeline.store, InMemoryPreviewStore)
            assert await get_parody_pipeline() is parody_pipeline
        reset_pipelines()

    async def test_image_transformer_built_with_openai_key(self):
        reset_pipelines()
        settings = Settings(
            _env_file=None,
            anthropic_api_key="sk-test",
            openai_api_key="sk-openai",
            image_transform_batch_size=2,
        )
        with patch("parody.services.pipeline.get_settings", return_value=settings):
            pipeline = await get_parody_pipeline()
        assert pipeline.transformer is not None
        assert pipeline.transformer.batch_size == 2
        restyler = pipeline.transformer.restyler
        assert isinstance(restyler, ContextRoutingRestyler)
        assert restyler.generator.name == "dall-e-3"
        assert restyler.editor.name == "gpt-image-1"
        reset_pipelines()
