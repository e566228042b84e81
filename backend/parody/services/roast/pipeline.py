"""Roast pipeline: capture → portfolio extraction → roast → narration."""

import logging
from typing import Optional

from parody.models.roast import RoastRequest, RoastResult
from parody.services.capture import CaptureOrchestrator, normalize_url
from parody.services.capture.constants import TEMPLATE_STRATEGY
from parody.services.extraction import extract_portfolio
from parody.services.roast.roast_writer import RoastWriter
from parody.services.roast.tts import ElevenLabsSpeaker, audio_to_data_url

logger = logging.getLogger(__name__)


class RoastPipeline:
    """Roasts a developer portfolio page.

    Only capture failures (``CaptureFailure``) and a missing URL
    (``ValueError``) propagate. Narration is optional: without a speaker, or
    when it fails, the result is text-only with a warning.
    """

    def __init__(
        self,
        *,
        orchestrator: CaptureOrchestrator,
        writer: RoastWriter,
        speaker: Optional[ElevenLabsSpeaker] = None,
    ) -> None:
        self.orchestrator = orchestrator
        self.writer = writer
        self.speaker = speaker

    async def roast(self, request: RoastRequest | str) -> RoastResult:
        raw_url = request.url if isinstance(request, RoastRequest) else request
        if not raw_url or not raw_url.strip():
            raise ValueError("URL is required")
        url = normalize_url(raw_url)
        warnings: list[str] = []

        outcome = await self.orchestrator.capture(url)
        if outcome.strategy == TEMPLATE_STRATEGY:
            warnings.append(
                "The portfolio could not be fetched; the roast is based on a placeholder page."
            )

        portfolio = extract_portfolio(outcome.result.html)
        logger.info(
            f"Portfolio {portfolio.name}: {len(portfolio.projects)} projects, "
            f"{len(portfolio.skills)} skills, {len(portfolio.cliches)} clichés"
        )

        text = await self.writer.write(portfolio)

        audio_url: Optional[str] = None
        if self.speaker is None:
            warnings.append("Narration is not configured; returning text only.")
        else:
            try:
                audio_url = audio_to_data_url(await self.speaker.speak(text))
            except Exception as e:
                logger.warning(f"Narration failed for {url}: {e}")
                warnings.append(f"Narration failed: {e}")

        return RoastResult(
            success=True,
            text=text,
            audio_url=audio_url,
            portfolio_name=portfolio.name,
            strategy=outcome.strategy,
            warnings=warnings,
        )
