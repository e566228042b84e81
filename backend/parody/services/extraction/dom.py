"""DOM helpers shared by extraction and reconstruction.

Positional substitution only works if both sides pick the same elements in
the same order, so the selectors live here and nowhere else.
"""

import re
from typing import Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

HTML_PARSER = "html.parser"

NAV_LINK_SELECTOR = "nav a, header a, .nav a, .navbar a"
BUTTON_SELECTOR = 'button, .btn, .button, input[type="submit"]'

# Substrings identifying analytics/tracking resources (best-effort, not exhaustive)
TRACKING_SCRIPT_PATTERNS: tuple[str, ...] = (
    "google-analytics.com",
    "googletagmanager.com",
    "gtag/js",
    "analytics",
    "connect.facebook.net",
    "fbevents",
    "hotjar",
    "segment.com",
    "segment.io",
    "doubleclick.net",
    "clarity.ms",
    "mixpanel",
)
TRACKING_PIXEL_PATTERNS: tuple[str, ...] = (
    "facebook.com/tr",
    "google-analytics.com",
    "doubleclick.net",
    "bat.bing.com",
    "px.ads.linkedin.com",
)
TRACKING_INLINE_MARKERS: tuple[str, ...] = ("gtag(", "fbq(", "_gaq.push", "hj(")

_LEADING_INT = re.compile(r"^\s*(\d+)")
_CSS_URL_TOKEN = re.compile(r"url\(\s*(['\"]?)([^'\")]+?)\1\s*\)", re.IGNORECASE)


def parse_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, HTML_PARSER)


def element_text(tag: Tag) -> str:
    return tag.get_text().strip()


def find_title(soup: BeautifulSoup) -> Optional[Tag]:
    """First document ``<title>``, ignoring ``<title>`` children of inline SVG."""
    for tag in soup.find_all("title"):
        if tag.find_parent("svg") is None:
            return tag
    return None


def nav_links(soup: BeautifulSoup) -> list[Tag]:
    """Anchors inside navigation or header containers, in document order."""
    return soup.select(NAV_LINK_SELECTOR)


def button_elements(soup: BeautifulSoup) -> list[Tag]:
    """Button-like elements, in document order."""
    return soup.select(BUTTON_SELECTOR)


def is_input(tag: Tag) -> bool:
    return tag.name == "input"


def button_text(tag: Tag) -> str:
    if is_input(tag):
        return (tag.get("value") or "").strip()
    return element_text(tag) or (tag.get("value") or "").strip()


def class_string(tag: Tag) -> str:
    classes = tag.get("class") or []
    if isinstance(classes, str):
        return classes
    return " ".join(classes)


def element_selector(tag: Tag) -> str:
    """Short CSS-ish label: ``tag#id`` or ``tag.cls1.cls2``."""
    name = (tag.name or "div").lower()
    element_id = tag.get("id")
    if element_id:
        return f"{name}#{element_id}"
    classes = [c for c in class_string(tag).split() if c][:2]
    if classes:
        return f"{name}.{'.'.join(classes)}"
    return name


def parent_selector(tag: Tag) -> str:
    parent = tag.parent
    if parent is None or not isinstance(parent, Tag) or parent.name == "[document]":
        return "body"
    return element_selector(parent)


def parse_dimension(value: Optional[str]) -> int:
    """Leading integer of an HTML width/height attribute (``"120px"`` -> 120)."""
    if not value:
        return 0
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else 0


def resolve_url(raw: str, base_url: Optional[str]) -> str:
    """Absolute form of *raw* relative to *base_url*, when one is known."""
    raw = raw.strip()
    if not base_url or raw.startswith(("data:", "blob:", "javascript:")):
        return raw
    return urljoin(base_url, raw)


def is_tracking_url(url: Optional[str], patterns: tuple[str, ...] = TRACKING_SCRIPT_PATTERNS) -> bool:
    if not url:
        return False
    lowered = url.lower()
    return any(pattern in lowered for pattern in patterns)


def replace_css_urls(css: str, mapping: dict[str, str]) -> tuple[str, int]:
    """Swap whole ``url(...)`` tokens whose argument is a key of *mapping*.

    Quoting is preserved. Returns the new text and the number of tokens
    replaced.
    """
    count = 0

    def _swap(match: re.Match) -> str:
        nonlocal count
        quote, target = match.group(1), match.group(2).strip()
        new = mapping.get(target)
        if new is None:
            return match.group(0)
        count += 1
        return f"url({quote}{new}{quote})"

    return _CSS_URL_TOKEN.sub(_swap, css), count
