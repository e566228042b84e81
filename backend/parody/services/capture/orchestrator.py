"""Capture orchestrator: walk the strategy chain until one succeeds.

Strategies run strictly one at a time in ascending priority, each under its
own timeout. A timeout counts as an ordinary failure.
"""

import asyncio
import logging
from typing import Iterable

from parody.models.capture import CaptureAttempt, CaptureOutcome
from parody.services.capture.strategies import CaptureStrategy

logger = logging.getLogger(__name__)


class CaptureFailure(Exception):
    """Every strategy in the chain failed."""

    def __init__(self, attempts: list[CaptureAttempt]) -> None:
        self.attempts = attempts
        if attempts:
            detail = "; ".join(f"{a.name}: {a.error}" for a in attempts)
            message = f"All capture strategies failed. {detail}"
        else:
            message = "No capture strategies configured"
        super().__init__(message)

    @property
    def last_error(self) -> str | None:
        return self.attempts[-1].error if self.attempts else None


class CaptureOrchestrator:
    """Chain-of-responsibility driver over ``CaptureStrategy`` records."""

    def __init__(self, strategies: Iterable[CaptureStrategy]) -> None:
        self.strategies: list[CaptureStrategy] = sorted(
            strategies, key=lambda s: s.priority
        )

    async def capture(self, url: str) -> CaptureOutcome:
        """Capture *url* with the first strategy that succeeds.

        Raises:
            ValueError: If *url* is empty.
            CaptureFailure: If every strategy fails.
        """
        if not url or not url.strip():
            raise ValueError("URL is required")
        url = url.strip()

        attempts: list[CaptureAttempt] = []
        for strategy in self.strategies:
            logger.info(f"Trying capture strategy: {strategy.name}")
            try:
                result = await asyncio.wait_for(
                    strategy.execute(url), timeout=strategy.timeout
                )
            except asyncio.TimeoutError:
                error = f"Timed out after {strategy.timeout:g}s"
                logger.warning(f"Strategy {strategy.name} failed: {error}")
                attempts.append(CaptureAttempt(name=strategy.name, error=error))
                continue
            except Exception as e:
                logger.warning(f"Strategy {strategy.name} failed: {e}")
                attempts.append(
                    CaptureAttempt(name=strategy.name, error=str(e) or repr(e))
                )
                continue

            logger.info(f"Captured {url} with strategy: {strategy.name}")
            return CaptureOutcome(
                result=result,
                strategy=strategy.name,
                fidelity=strategy.fidelity,
                failed_attempts=attempts,
            )

        raise CaptureFailure(attempts)
