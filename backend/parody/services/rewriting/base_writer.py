"""Abstract base class for Claude-backed writers.

Template Method: subclasses supply the prompts and the response parsing,
the base class owns the API call, retry policy and degradation. A writer
never raises for model or parse failures; it returns ``_fallback()``.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

import anthropic
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

logger = logging.getLogger(__name__)


class BaseLLMWriter(ABC):
    """Template base for the rewriting and roast writers.

    Subclasses must implement:
        - ``_system_prompt()``: instructions for the model
        - ``_build_prompt()``: the user message for one subject
        - ``_parse_response()``: convert the reply text into the result
        - ``_fallback()``: safe result when the call or parsing fails
    """

    def __init__(
        self,
        client: anthropic.AsyncAnthropic,
        model: str,
        *,
        max_tokens: int = 2000,
    ) -> None:
        self.client = client
        self.model = model
        self.max_tokens = max_tokens

    # ------------------------------------------------------------------
    # Template method
    # ------------------------------------------------------------------

    async def generate(self, subject: Any, **kwargs: Any) -> Any:
        """Run prepare → call → parse, degrading to ``_fallback()``."""
        system = self._system_prompt(**kwargs)
        prompt = self._build_prompt(subject, **kwargs)

        try:
            raw_text = await self._call_llm(system, prompt)
        except Exception as e:
            logger.error(f"{self.__class__.__name__} LLM call failed: {e}")
            return self._fallback(subject, reason=str(e), **kwargs)

        try:
            return self._parse_response(raw_text, subject, **kwargs)
        except Exception as e:
            logger.error(f"{self.__class__.__name__} parse failed: {e}")
            return self._fallback(subject, reason=f"unparseable reply: {e}", **kwargs)

    # ------------------------------------------------------------------
    # LLM interaction (shared)
    # ------------------------------------------------------------------

    @retry(
        retry=retry_if_exception_type(
            (anthropic.RateLimitError, anthropic.APITimeoutError)
        ),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=30),
        reraise=True,
    )
    async def _call_llm(self, system: str, user_content: str) -> str:
        """Call the Anthropic API and return the concatenated reply text.

        Retries up to 3 times on rate-limit or timeout errors with
        exponential backoff.
        """
        response = await self.client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            temperature=self._temperature(),
            system=system,
            messages=[{"role": "user", "content": user_content}],
        )
        return "".join(
            block.text for block in response.content if hasattr(block, "text")
        )

    # ------------------------------------------------------------------
    # Hooks for subclasses
    # ------------------------------------------------------------------

    @abstractmethod
    def _system_prompt(self, **kwargs: Any) -> str:
        """Return the system prompt."""

    @abstractmethod
    def _build_prompt(self, subject: Any, **kwargs: Any) -> str:
        """Build the user message for *subject*."""

    @abstractmethod
    def _parse_response(self, text: str, subject: Any, **kwargs: Any) -> Any:
        """Convert the model's reply into the domain result."""

    @abstractmethod
    def _fallback(self, subject: Any, *, reason: str, **kwargs: Any) -> Any:
        """Return a safe default when generation cannot proceed."""

    def _temperature(self) -> float:
        """Override to change sampling temperature."""
        return 0.8
