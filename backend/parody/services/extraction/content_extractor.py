"""Pure HTML -> ExtractedContent extractor.

No I/O and no filtering: short or empty paragraphs are kept so positions line
up with the original document. Callers that want filtering do it themselves.
"""

import logging

from bs4 import BeautifulSoup

from parody.models.content import ExtractedContent, Headings, ImageRef, NavLink
from parody.services.extraction.dom import (
    button_elements,
    button_text,
    element_text,
    find_title,
    nav_links,
    parse_html,
)

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Untitled"


def read_title(soup: BeautifulSoup) -> str:
    title_tag = find_title(soup)
    if title_tag is not None and element_text(title_tag):
        return element_text(title_tag)
    first_h1 = soup.find("h1")
    if first_h1 is not None and element_text(first_h1):
        return element_text(first_h1)
    return DEFAULT_TITLE


def read_headings(soup: BeautifulSoup) -> Headings:
    return Headings(
        h1=[element_text(el) for el in soup.find_all("h1")],
        h2=[element_text(el) for el in soup.find_all("h2")],
        h3=[element_text(el) for el in soup.find_all("h3")],
    )


def read_paragraphs(soup: BeautifulSoup) -> list[str]:
    return [element_text(el) for el in soup.find_all("p")]


def read_navigation(soup: BeautifulSoup) -> list[NavLink]:
    return [
        NavLink(text=element_text(link), href=link.get("href"))
        for link in nav_links(soup)
    ]


def read_buttons(soup: BeautifulSoup) -> list[str]:
    return [button_text(el) for el in button_elements(soup)]


class ContentExtractor:
    """Extracts the text-level content model from raw HTML."""

    def extract(self, html: str) -> ExtractedContent:
        """Parse *html*; malformed input degrades to empty fields, never raises."""
        try:
            soup = parse_html(html or "")
        except Exception as e:
            logger.warning(f"HTML parse failed, returning empty content: {e}")
            return ExtractedContent()

        return ExtractedContent(
            title=read_title(soup),
            headings=read_headings(soup),
            paragraphs=read_paragraphs(soup),
            navigation=read_navigation(soup),
            buttons=read_buttons(soup),
            images=[
                ImageRef(src=img.get("src"), alt=img.get("alt"))
                for img in soup.find_all("img")
            ],
        )


def extract_content(html: str) -> ExtractedContent:
    return ContentExtractor().extract(html)
