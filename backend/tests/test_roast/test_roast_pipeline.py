"""Tests for parody.services.roast.pipeline."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from parody.models.capture import CaptureFidelity, CaptureOutcome, CaptureResult
from parody.models.roast import RoastRequest
from parody.services.capture import CaptureFailure
from parody.services.roast import RoastPipeline

PORTFOLIO = "<html><body><h1>Jamie Doe</h1><p>passionate coder</p></body></html>"


def _make_orchestrator(html: str = PORTFOLIO, strategy: str = "direct-fetch") -> MagicMock:
    orchestrator = MagicMock()
    orchestrator.capture = AsyncMock(
        return_value=CaptureOutcome(
            result=CaptureResult(screenshot=b"", html=html),
            strategy=strategy,
            fidelity=CaptureFidelity.RAW_HTML,
        )
    )
    return orchestrator


def _make_writer(text: str = "Roasted.") -> MagicMock:
    writer = MagicMock()
    writer.write = AsyncMock(return_value=text)
    return writer


@pytest.mark.asyncio
class TestRoastPipeline:
    async def test_text_and_audio(self):
        speaker = MagicMock()
        speaker.speak = AsyncMock(return_value=b"mp3")
        orchestrator = _make_orchestrator()
        pipeline = RoastPipeline(
            orchestrator=orchestrator, writer=_make_writer(), speaker=speaker
        )

        result = await pipeline.roast(RoastRequest(url="jamie.dev"))

        assert result.success
        assert result.text == "Roasted."
        assert result.audio_url.startswith("data:audio/mpeg;base64,")
        assert result.portfolio_name == "Jamie Doe"
        assert result.strategy == "direct-fetch"
        assert result.warnings == []
        orchestrator.capture.assert_awaited_once_with("https://jamie.dev")
        speaker.speak.assert_awaited_once_with("Roasted.")

    async def test_tts_failure_degrades_to_text(self):
        speaker = MagicMock()
        speaker.speak = AsyncMock(side_effect=RuntimeError("quota exceeded"))
        pipeline = RoastPipeline(
            orchestrator=_make_orchestrator(), writer=_make_writer(), speaker=speaker
        )

        result = await pipeline.roast("jamie.dev")

        assert result.success
        assert result.audio_url is None
        assert any("quota exceeded" in w for w in result.warnings)

    async def test_without_speaker(self):
        pipeline = RoastPipeline(orchestrator=_make_orchestrator(), writer=_make_writer())
        result = await pipeline.roast("jamie.dev")
        assert result.audio_url is None
        assert len(result.warnings) == 1

    async def test_template_capture_warns(self):
        pipeline = RoastPipeline(
            orchestrator=_make_orchestrator(strategy="template"), writer=_make_writer()
        )
        result = await pipeline.roast("jamie.dev")
        assert any("placeholder" in w for w in result.warnings)

    async def test_capture_failure_propagates(self):
        orchestrator = MagicMock()
        orchestrator.capture = AsyncMock(side_effect=CaptureFailure([]))
        pipeline = RoastPipeline(orchestrator=orchestrator, writer=_make_writer())
        with pytest.raises(CaptureFailure):
            await pipeline.roast("jamie.dev")

    async def test_empty_url(self):
        pipeline = RoastPipeline(orchestrator=_make_orchestrator(), writer=_make_writer())
        with pytest.raises(ValueError):
            await pipeline.roast(RoastRequest(url=" "))
