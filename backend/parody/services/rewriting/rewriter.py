"""Claude-backed parody rewriter.

Turns an ``ExtractedContent`` into a ``ParodyContent`` in one of the
registered comedic styles. The model is asked to mirror every input array;
the reply is coerced leniently and never padded or truncated, because
reconstruction substitutes by position and tolerates length mismatches.
"""

import json
import logging
from typing import Any

import anthropic

from parody.models.content import ExtractedContent, Headings, NavLink
from parody.models.parody import ParodyContent, ParodyStyle
from parody.services.rewriting.base_writer import BaseLLMWriter
from parody.services.rewriting.json_utils import as_text_list, parse_json_object
from parody.services.styles import get_style

logger = logging.getLogger(__name__)

# Paragraphs beyond this are left as original text by reconstruction
MAX_PARAGRAPHS = 20
MAX_ITEM_CHARS = 600

SYSTEM_PROMPT = """You are a comedy writer who creates parody versions of websites.
You rewrite page copy in a requested comedic style while keeping the page's
information architecture intact: every list you return has the same number
of entries, in the same order, as the list you were given.

{instructions}

Examples of this style: {examples}

Respond with a single JSON object and nothing else."""


def _clip(text: str) -> str:
    return text if len(text) <= MAX_ITEM_CHARS else text[:MAX_ITEM_CHARS] + "…"


class ContentRewriter(BaseLLMWriter):
    """Rewrites extracted page text through Claude."""

    def __init__(
        self,
        client: anthropic.AsyncAnthropic,
        model: str,
        *,
        max_tokens: int = 4000,
    ) -> None:
        super().__init__(client, model, max_tokens=max_tokens)

    async def rewrite(
        self, content: ExtractedContent, style: ParodyStyle | str
    ) -> ParodyContent:
        """Rewrite *content* in *style*.

        Raises:
            ValueError: If *style* is not a registered style. Model and
                parse failures do not raise; they yield an identity rewrite
                with ``fallback=True``.
        """
        profile = get_style(style)
        logger.info(
            f"Rewriting '{content.title}' as {profile.key.value}: "
            f"{len(content.paragraphs)} paragraphs, "
            f"{len(content.navigation)} nav links, {len(content.buttons)} buttons"
        )
        return await self.generate(content, style=profile.key)

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    def _system_prompt(self, *, style: ParodyStyle, **kwargs: Any) -> str:
        profile = get_style(style)
        return SYSTEM_PROMPT.format(
            instructions=profile.instructions, examples=profile.examples
        )

    def _build_prompt(
        self, content: ExtractedContent, *, style: ParodyStyle, **kwargs: Any
    ) -> str:
        profile = get_style(style)
        paragraphs = [_clip(p) for p in content.paragraphs[:MAX_PARAGRAPHS]]
        source = {
            "title": content.title,
            "headings": {
                "h1": content.headings.h1,
                "h2": content.headings.h2,
                "h3": content.headings.h3,
            },
            "paragraphs": paragraphs,
            "navigation": [link.text for link in content.navigation],
            "buttons": content.buttons,
        }
        counts = (
            f"- headings.h1: {len(content.headings.h1)} strings\n"
            f"- headings.h2: {len(content.headings.h2)} strings\n"
            f"- headings.h3: {len(content.headings.h3)} strings\n"
            f"- paragraphs: {len(paragraphs)} strings\n"
            f"- navigation: {len(content.navigation)} strings\n"
            f"- buttons: {len(content.buttons)} strings"
        )
        return (
            f"Transform this website content into {profile.name} style.\n\n"
            f"SOURCE CONTENT:\n{json.dumps(source, ensure_ascii=False, indent=2)}\n\n"
            "Return JSON with exactly these fields:\n"
            "- title (string)\n"
            "- headings (object with h1, h2, h3 arrays of strings)\n"
            "- paragraphs (array of strings)\n"
            "- navigation (array of strings)\n"
            "- buttons (array of strings)\n"
            "- summary (one sentence describing the transformation)\n\n"
            f"Array lengths must be:\n{counts}\n\n"
            "Keep empty strings empty. Make it funny and exaggerated, and keep "
            "navigation and button labels short enough to fit where they were."
        )

    def _parse_response(
        self,
        text: str,
        content: ExtractedContent,
        *,
        style: ParodyStyle,
        **kwargs: Any,
    ) -> ParodyContent:
        data = parse_json_object(text)
        return _coerce_parody(data, content, style)

    def _fallback(
        self,
        content: ExtractedContent,
        *,
        reason: str,
        style: ParodyStyle,
        **kwargs: Any,
    ) -> ParodyContent:
        logger.warning(f"Using original text for {style.value} parody: {reason}")
        return identity_rewrite(content, style, reason=reason)


def _coerce_parody(
    data: dict[str, Any], content: ExtractedContent, style: ParodyStyle
) -> ParodyContent:
    """Build a ``ParodyContent`` from loosely-shaped model JSON."""
    headings = data.get("headings") or {}
    if not isinstance(headings, dict):
        headings = {}

    original_nav = [link.text for link in content.navigation]
    navigation: list[NavLink] = []
    for index, item in enumerate(as_text_list(data.get("navigation"), original_nav)):
        href = content.navigation[index].href if index < len(content.navigation) else None
        navigation.append(NavLink(text=item, href=href))

    title = data.get("title")
    return ParodyContent(
        title=str(title) if title else content.title,
        headings=Headings(
            h1=as_text_list(headings.get("h1"), content.headings.h1),
            h2=as_text_list(headings.get("h2"), content.headings.h2),
            h3=as_text_list(headings.get("h3"), content.headings.h3),
        ),
        paragraphs=as_text_list(data.get("paragraphs"), content.paragraphs),
        navigation=navigation,
        buttons=as_text_list(data.get("buttons"), content.buttons),
        summary=str(data.get("summary") or ""),
        style=style.value,
    )


def identity_rewrite(
    content: ExtractedContent, style: ParodyStyle, *, reason: str = ""
) -> ParodyContent:
    """Echo the original text so reconstruction can still theme the page."""
    summary = "The parody writer was unavailable, so the original text was kept."
    if reason:
        summary = f"{summary} ({reason})"
    return ParodyContent(
        title=content.title,
        headings=content.headings.model_copy(deep=True),
        paragraphs=list(content.paragraphs),
        navigation=[link.model_copy() for link in content.navigation],
        buttons=list(content.buttons),
        summary=summary,
        style=style.value,
        fallback=True,
    )
