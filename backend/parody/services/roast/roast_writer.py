"""Claude-backed roast writer for developer portfolios."""

import json
import logging
import re
from typing import Any

import anthropic

from parody.models.roast import PortfolioContent
from parody.services.rewriting.base_writer import BaseLLMWriter

logger = logging.getLogger(__name__)

FALLBACK_ROAST = "This portfolio is so bad, even the AI refused to roast it."
CLASSIC_PROJECTS = ("todo", "weather", "calculator")

SYSTEM_PROMPT = (
    "You are a savage comedy roaster specializing in tech portfolios. Your "
    "style is brutal but clever, mixing technical knowledge with Comedy "
    "Central roast-style humor. You roast the portfolio, never the person's "
    "identity."
)

ROAST_GUIDELINES = """ROASTING GUIDELINES:
- Reference specific things from the portfolio (project names, tech choices, descriptions)
- Mock the clichés and buzzwords mercilessly
- Make fun of typical portfolio patterns (todo apps, weather apps, "passionate developer")
- Use tech-specific burns and programming metaphors
- Start with the best burn, no warmup
- End with a quick backhanded compliment
- 80-120 words, written as one tight spoken monologue with no stage directions"""

_BLANK_LINES = re.compile(r"\n{3,}")


class RoastWriter(BaseLLMWriter):
    """Writes a short spoken roast of a ``PortfolioContent``."""

    def __init__(
        self,
        client: anthropic.AsyncAnthropic,
        model: str,
        *,
        max_tokens: int = 400,
    ) -> None:
        super().__init__(client, model, max_tokens=max_tokens)

    async def write(self, portfolio: PortfolioContent) -> str:
        """Return roast text; never raises for model failures."""
        logger.info(
            f"Roasting {portfolio.name}: {len(portfolio.projects)} projects, "
            f"{len(portfolio.skills)} skills"
        )
        return await self.generate(portfolio)

    def _system_prompt(self, **kwargs: Any) -> str:
        return SYSTEM_PROMPT

    def _build_prompt(self, portfolio: PortfolioContent, **kwargs: Any) -> str:
        projects = [
            {"name": p.name, "desc": p.description, "tech": p.technologies}
            for p in portfolio.projects
        ]
        classics = [kind for kind in CLASSIC_PROJECTS if portfolio.has_project_about(kind)]
        return (
            "Create a brutal, hilarious roast of this developer's portfolio.\n\n"
            "PORTFOLIO CONTENT:\n"
            f"Name: {portfolio.name}\n"
            f"Title/Role: {portfolio.title}\n"
            f"Tagline: {portfolio.tagline}\n"
            f"Projects: {json.dumps(projects, ensure_ascii=False)}\n"
            f"Skills: {', '.join(portfolio.skills)}\n"
            f"Clichés found: {', '.join(portfolio.cliches) or 'none'}\n"
            f"About: {portfolio.about_me}\n"
            f"Classic beginner projects: {', '.join(classics) or 'none'}\n\n"
            f"{ROAST_GUIDELINES}"
        )

    def _parse_response(self, text: str, portfolio: PortfolioContent, **kwargs: Any) -> str:
        roast = _BLANK_LINES.sub("\n\n", text.strip())
        return roast or FALLBACK_ROAST

    def _fallback(self, portfolio: PortfolioContent, *, reason: str, **kwargs: Any) -> str:
        logger.warning(f"Using canned roast for {portfolio.name}: {reason}")
        return FALLBACK_ROAST

    def _temperature(self) -> float:
        return 0.9
