"""Site reconstruction.

Re-injects rewritten text and restyled images into the original page's
HTML, then themes it, labels it as a parody and strips trackers. Steps run
in a fixed order on a fresh DOM parsed from ``CompleteExtraction.full_html``;
the extraction itself is never mutated.
"""

import logging
from typing import Optional

from bs4 import BeautifulSoup, Doctype, Tag

from parody.models.content import CompleteExtraction
from parody.models.parody import ParodyContent, ParodyStyle, TransformedContent, TransformedImage
from parody.services.extraction.dom import (
    TRACKING_INLINE_MARKERS,
    TRACKING_PIXEL_PATTERNS,
    TRACKING_SCRIPT_PATTERNS,
    button_elements,
    find_title,
    is_input,
    is_tracking_url,
    nav_links,
    parse_html,
    replace_css_urls,
)
from parody.services.reconstruction.themes import (
    NOTICE_CLASS,
    NOTICE_MARKER_ATTR,
    THEME_MARKER_ATTR,
    theme_stylesheet,
)
from parody.services.styles import get_style

logger = logging.getLogger(__name__)

EMPTY_DOCUMENT = "<!DOCTYPE html><html><head></head><body></body></html>"


def _declares_charset(soup: BeautifulSoup) -> bool:
    """True for ``<meta charset>`` or an http-equiv Content-Type naming a charset."""
    if soup.find("meta", charset=True) is not None:
        return True
    for meta in soup.find_all("meta", attrs={"http-equiv": True}):
        content = meta.get("content", "").lower()
        if meta["http-equiv"].lower() == "content-type" and "charset=" in content:
            return True
    return False


def _replace_text(elements: list[Tag], texts: list[str]) -> int:
    """Set the Nth element's text to the Nth entry; extra entries on either side are ignored."""
    for element, text in zip(elements, texts):
        element.string = text
    return min(len(elements), len(texts))


class SiteReconstructor:
    """Builds the parody page from the original DOM."""

    def reconstruct(
        self,
        original: CompleteExtraction,
        transformed: TransformedContent,
        style: ParodyStyle,
    ) -> str:
        """Return the reconstructed HTML document.

        Falls back to the unmodified original HTML if anything goes wrong.
        """
        try:
            return self._reconstruct(original, transformed, ParodyStyle(style))
        except Exception as e:
            logger.error(f"Reconstruction failed, returning original HTML: {e}")
            return original.full_html

    def _reconstruct(
        self,
        original: CompleteExtraction,
        transformed: TransformedContent,
        style: ParodyStyle,
    ) -> str:
        soup = parse_html(original.full_html if original.full_html.strip() else EMPTY_DOCUMENT)
        head = self._ensure_head(soup)

        replaced = self._replace_text_content(soup, head, transformed.text)
        swapped = self._replace_images(soup, transformed.images)
        self._inject_theme(soup, head, theme_stylesheet(style, original.layout))
        self._add_notice(soup, head, style)
        removed = self._cleanup(soup, head)

        logger.info(
            f"Reconstructed {style.value} page: {replaced} text nodes, "
            f"{swapped} image references, {removed} trackers removed"
        )
        return str(soup)

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    @staticmethod
    def _ensure_head(soup: BeautifulSoup) -> Tag:
        if soup.head is not None:
            return soup.head
        head = soup.new_tag("head")
        if soup.html is not None:
            soup.html.insert(0, head)
        elif soup.contents and isinstance(soup.contents[0], Doctype):
            soup.insert(1, head)
        else:
            soup.insert(0, head)
        return head

    @staticmethod
    def _replace_text_content(soup: BeautifulSoup, head: Tag, text: ParodyContent) -> int:
        # Collect every target list before writing so indices stay stable
        targets = [
            (soup.find_all("h1"), text.headings.h1),
            (soup.find_all("h2"), text.headings.h2),
            (soup.find_all("h3"), text.headings.h3),
            (soup.find_all("p"), text.paragraphs),
            (nav_links(soup), [link.text for link in text.navigation]),
        ]
        buttons = button_elements(soup)

        count = 0
        if text.title:
            title = find_title(soup)
            if title is None:
                title = soup.new_tag("title")
                head.append(title)
            title.string = text.title
            count += 1

        for elements, texts in targets:
            count += _replace_text(elements, texts)

        for button, label in zip(buttons, text.buttons):
            if is_input(button):
                button["value"] = label
            else:
                button.string = label
            count += 1
        return count

    @staticmethod
    def _replace_images(soup: BeautifulSoup, images: list[TransformedImage]) -> int:
        mapping = {
            img.original_src: img.transformed_url
            for img in images
            if img.original_src and img.transformed_url != img.original_src
        }
        if not mapping:
            return 0

        count = 0
        for tag in soup.find_all("img", src=True):
            new_src = mapping.get(tag["src"])
            if new_src:
                tag["src"] = new_src
                count += 1

        for tag in soup.find_all(style=True):
            style_attr, swapped = replace_css_urls(tag["style"], mapping)
            if swapped:
                tag["style"] = style_attr
                count += swapped

        for block in soup.find_all("style"):
            css, swapped = replace_css_urls(block.get_text(), mapping)
            if swapped:
                block.string = css
                count += swapped
        return count

    @staticmethod
    def _inject_theme(soup: BeautifulSoup, head: Tag, css: str) -> None:
        for existing in soup.find_all("style", attrs={THEME_MARKER_ATTR: True}):
            existing.decompose()
        tag = soup.new_tag("style", attrs={THEME_MARKER_ATTR: "true"})
        tag.string = css
        head.append(tag)

    @staticmethod
    def _add_notice(soup: BeautifulSoup, head: Tag, style: ParodyStyle) -> None:
        for existing in soup.find_all(attrs={NOTICE_MARKER_ATTR: True}):
            existing.decompose()
        notice = soup.new_tag(
            "div", attrs={"class": NOTICE_CLASS, NOTICE_MARKER_ATTR: style.value}
        )
        notice.string = f"\N{PERFORMING ARTS} {get_style(style).name.upper()} PARODY"
        if soup.body is not None:
            soup.body.insert(0, notice)
        else:
            head.insert_after(notice)

    @staticmethod
    def _cleanup(soup: BeautifulSoup, head: Tag) -> int:
        removed = 0
        for script in soup.find_all("script"):
            src: Optional[str] = script.get("src")
            inline = script.get_text() if not src else ""
            if is_tracking_url(src, TRACKING_SCRIPT_PATTERNS) or any(
                marker in inline for marker in TRACKING_INLINE_MARKERS
            ):
                script.decompose()
                removed += 1

        for pixel in soup.find_all("img", src=True):
            if is_tracking_url(pixel["src"], TRACKING_PIXEL_PATTERNS):
                pixel.decompose()
                removed += 1

        if not _declares_charset(soup):
            head.insert(0, soup.new_tag("meta", attrs={"charset": "UTF-8"}))
        if soup.find("meta", attrs={"name": "viewport"}) is None:
            head.append(
                soup.new_tag(
                    "meta",
                    attrs={"name": "viewport", "content": "width=device-width, initial-scale=1.0"},
                )
            )
        return removed


def reconstruct_site(
    original: CompleteExtraction,
    transformed: TransformedContent,
    style: ParodyStyle,
) -> str:
    """Convenience wrapper around ``SiteReconstructor().reconstruct``."""
    return SiteReconstructor().reconstruct(original, transformed, style)
