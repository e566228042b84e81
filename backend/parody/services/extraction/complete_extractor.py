"""Complete extraction: everything needed to rebuild the page later.

Adds classified images (``<img>`` and CSS backgrounds), videos, structural
sections, styling, layout hints, forms, scripts and SEO metadata on top of the
basic text model, and keeps the original HTML for re-parsing.
"""

import logging
import re
from typing import Optional
from urllib.parse import parse_qs, urlparse

from bs4 import BeautifulSoup, Tag

from parody.models.content import (
    ColorScheme,
    CompleteExtraction,
    Dimensions,
    ExtractedImage,
    FormField,
    FormInfo,
    ImageContext,
    LayoutInfo,
    ScriptInfo,
    SectionInfo,
    SeoInfo,
    Styling,
    VideoInfo,
)
from parody.services.extraction.content_extractor import (
    read_buttons,
    read_headings,
    read_navigation,
    read_paragraphs,
    read_title,
)
from parody.services.extraction.dom import (
    TRACKING_INLINE_MARKERS,
    class_string,
    element_selector,
    element_text,
    is_tracking_url,
    parent_selector,
    parse_dimension,
    parse_html,
    resolve_url,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Image classification heuristics
# ---------------------------------------------------------------------------
SMALL_IMAGE_THRESHOLD_PX = 100  # declared width or height below this => icon
HERO_TOKENS = ("hero", "banner", "jumbotron", "masthead")
LOGO_TOKENS = ("logo",)
ICON_TOKENS = ("icon", "favicon", "sprite")

SECTION_SELECTOR = (
    "header, nav, main, section, aside, footer, "
    'div[class*="section"], div[class*="container"]'
)
MAX_INLINE_SCRIPT_CHARS = 5_000

_CSS_URL = re.compile(
    r"background(?:-image)?\s*:[^;}]*?url\(\s*['\"]?([^'\")]+?)['\"]?\s*\)",
    re.IGNORECASE,
)
_FONT_FAMILY = re.compile(r"font-family\s*:\s*([^;}{]+)", re.IGNORECASE)
_MEDIA_QUERY = re.compile(r"@media[^{]+")
_BODY_RULE = re.compile(r"(?:^|[\s,}])body\s*\{([^}]*)\}", re.IGNORECASE)
_COLOR_VARS: dict[str, re.Pattern] = {
    "primary": re.compile(r"--(?:primary|brand)(?:-color)?\s*:\s*([^;}\n]+)"),
    "secondary": re.compile(r"--(?:secondary|accent)(?:-color)?\s*:\s*([^;}\n]+)"),
    "background": re.compile(r"--(?:background|bg)(?:-color)?\s*:\s*([^;}\n]+)"),
    "text": re.compile(r"--(?:text|foreground)(?:-color)?\s*:\s*([^;}\n]+)"),
}
_BOOTSTRAP_CLASS = re.compile(r"^col-(?:(?:xs|sm|md|lg|xl|xxl)-)?\d{1,2}$")
_TAILWIND_CLASS = re.compile(r"^(?:[a-z]{2,3}:)?grid-cols-\d+$")
_FOUNDATION_CLASS = re.compile(r"^(?:small|medium|large)-\d{1,2}$")


# =====================================================================
# Image context classification
# =====================================================================


def _tag_tokens(tag: Tag) -> str:
    return f"{class_string(tag)} {tag.get('id') or ''}".lower()


def _filename(src: str) -> str:
    path = urlparse(src).path or src
    return path.rsplit("/", 1)[-1].lower()


def classify_image(
    tag: Optional[Tag],
    src: str,
    *,
    is_background: bool = False,
) -> ImageContext:
    """Best-effort role of an image.

    Ordered rules: hero/banner region, then logo or icon (class, id, alt or
    filename tokens, or a declared size under ``SMALL_IMAGE_THRESHOLD_PX``),
    then background for CSS-discovered images, else content.
    """
    own_tokens = ""
    alt = ""
    if tag is not None:
        own_tokens = _tag_tokens(tag)
        alt = (tag.get("alt") or "").lower()
        region = [own_tokens, alt] + [
            _tag_tokens(parent) for parent in tag.parents if isinstance(parent, Tag)
        ]
        if any(token in text for text in region for token in HERO_TOKENS):
            return ImageContext.HERO

    name = _filename(src)
    haystacks = (own_tokens, alt, name)
    if any(token in text for text in haystacks for token in LOGO_TOKENS):
        return ImageContext.LOGO
    if any(token in text for text in haystacks for token in ICON_TOKENS):
        return ImageContext.ICON

    if tag is not None and not is_background:
        width = parse_dimension(tag.get("width"))
        height = parse_dimension(tag.get("height"))
        if 0 < width < SMALL_IMAGE_THRESHOLD_PX or 0 < height < SMALL_IMAGE_THRESHOLD_PX:
            return ImageContext.ICON

    if is_background:
        return ImageContext.BACKGROUND
    return ImageContext.CONTENT


# =====================================================================
# Section extractors
# =====================================================================


def _data_attributes(tag: Tag) -> dict[str, str]:
    return {
        key: str(value) for key, value in tag.attrs.items() if key.startswith("data-")
    }


def _extract_images(soup: BeautifulSoup, base_url: Optional[str]) -> list[ExtractedImage]:
    images: list[ExtractedImage] = []

    for img in soup.find_all("img"):
        raw = (img.get("src") or "").strip()
        if not raw:
            continue
        images.append(
            ExtractedImage(
                src=resolve_url(raw, base_url),
                original_src=raw,
                alt=img.get("alt"),
                class_name=class_string(img) or None,
                element_id=img.get("id"),
                parent_selector=parent_selector(img),
                dimensions=Dimensions(
                    width=parse_dimension(img.get("width")),
                    height=parse_dimension(img.get("height")),
                ),
                is_background=False,
                data_attributes=_data_attributes(img),
                context=classify_image(img, raw),
            )
        )

    for tag in soup.find_all(style=True):
        for raw in _CSS_URL.findall(tag.get("style") or ""):
            raw = raw.strip()
            images.append(
                ExtractedImage(
                    src=resolve_url(raw, base_url),
                    original_src=raw,
                    class_name=class_string(tag) or None,
                    element_id=tag.get("id"),
                    parent_selector=parent_selector(tag),
                    is_background=True,
                    data_attributes=_data_attributes(tag),
                    context=classify_image(tag, raw, is_background=True),
                )
            )

    seen_in_stylesheets: set[str] = set()
    for style_tag in soup.find_all("style"):
        for raw in _CSS_URL.findall(style_tag.get_text()):
            raw = raw.strip()
            if raw in seen_in_stylesheets:
                continue
            seen_in_stylesheets.add(raw)
            images.append(
                ExtractedImage(
                    src=resolve_url(raw, base_url),
                    original_src=raw,
                    parent_selector="style",
                    is_background=True,
                    context=classify_image(None, raw, is_background=True),
                )
            )

    return images


def _extract_videos(soup: BeautifulSoup, base_url: Optional[str]) -> list[VideoInfo]:
    videos: list[VideoInfo] = []
    for video in soup.find_all("video"):
        src = video.get("src")
        if not src:
            source = video.find("source")
            src = source.get("src") if source is not None else None
        if not src:
            continue
        poster = video.get("poster")
        videos.append(
            VideoInfo(
                src=resolve_url(src, base_url),
                poster=resolve_url(poster, base_url) if poster else None,
                class_name=class_string(video) or None,
                parent_selector=parent_selector(video),
                autoplay=video.has_attr("autoplay"),
            )
        )
    return videos


def _extract_sections(soup: BeautifulSoup) -> list[SectionInfo]:
    return [
        SectionInfo(
            selector=element_selector(tag),
            tag_name=tag.name.lower(),
            class_name=class_string(tag),
            child_count=len(tag.find_all(recursive=False)),
            order=order,
        )
        for order, tag in enumerate(soup.select(SECTION_SELECTOR))
    ]


def _extract_fonts(soup: BeautifulSoup, css: str) -> list[str]:
    fonts: list[str] = []

    def add(family: str) -> None:
        family = family.strip().strip("'\"").strip()
        if family and family not in fonts:
            fonts.append(family)

    for declaration in _FONT_FAMILY.findall(css):
        add(declaration.replace("!important", "").split(",")[0])

    for link in soup.find_all("link", href=True):
        href = link["href"]
        if "fonts.googleapis.com" not in href:
            continue
        for value in parse_qs(urlparse(href).query).get("family", []):
            for family in value.split("|"):
                add(family.split(":")[0].replace("+", " "))

    return fonts


def _extract_color_scheme(soup: BeautifulSoup, css: str) -> ColorScheme:
    colors = ColorScheme()
    root_styles = " ".join(
        tag.get("style") or "" for tag in (soup.find("html"), soup.find("body")) if tag
    )
    haystack = f"{root_styles}\n{css}"

    for field_name, pattern in _COLOR_VARS.items():
        match = pattern.search(haystack)
        if match:
            setattr(colors, field_name, match.group(1).strip())

    body_rule = _BODY_RULE.search(css)
    if body_rule:
        declarations = body_rule.group(1)
        bg = re.search(r"background(?:-color)?\s*:\s*(#[0-9a-fA-F]{3,8}|[a-z]+\([^)]*\)|[a-z]+)", declarations)
        fg = re.search(r"(?<![-\w])color\s*:\s*([^;]+)", declarations)
        if bg and not _COLOR_VARS["background"].search(haystack):
            colors.background = bg.group(1).strip()
        if fg and not _COLOR_VARS["text"].search(haystack):
            colors.text = fg.group(1).strip()

    return colors


def _extract_styling(soup: BeautifulSoup) -> Styling:
    inline_styles: dict[str, str] = {}
    for tag in soup.find_all(style=True):
        key = element_selector(tag)
        if key in inline_styles:
            key = f"{key}[{len(inline_styles)}]"
        inline_styles[key] = tag.get("style") or ""

    css_rules = [tag.get_text() for tag in soup.find_all("style")]
    css = "\n".join(css_rules + list(inline_styles.values()))

    return Styling(
        inline_styles=inline_styles,
        css_rules=css_rules,
        color_scheme=_extract_color_scheme(soup, "\n".join(css_rules)),
        fonts=_extract_fonts(soup, css),
    )


def _analyze_layout(soup: BeautifulSoup, styling: Styling) -> LayoutInfo:
    css = "\n".join(styling.css_rules + list(styling.inline_styles.values()))
    has_grid = re.search(r"display\s*:\s*(?:inline-)?grid", css) is not None
    has_flexbox = re.search(r"display\s*:\s*(?:inline-)?flex", css) is not None
    has_columns = re.search(r"(?:^|[\s;{])(?:columns|column-count)\s*:", css) is not None

    breakpoints: list[str] = []
    for query in _MEDIA_QUERY.findall(css):
        query = " ".join(query.split())
        if query not in breakpoints:
            breakpoints.append(query)

    classes: set[str] = set()
    for tag in soup.find_all(class_=True):
        classes.update(class_string(tag).split())

    grid_systems: list[str] = []
    if any(_BOOTSTRAP_CLASS.match(c) for c in classes) and "row" in classes:
        grid_systems.append("bootstrap")
    if any(_TAILWIND_CLASS.match(c) for c in classes):
        grid_systems.append("tailwind")
    if any(_FOUNDATION_CLASS.match(c) for c in classes) and "columns" in classes:
        grid_systems.append("foundation")
    if has_grid:
        grid_systems.append("css-grid")

    return LayoutInfo(
        has_grid=has_grid or "tailwind" in grid_systems,
        has_flexbox=has_flexbox,
        has_columns=has_columns,
        grid_systems=grid_systems,
        breakpoints=breakpoints,
    )


def _field_label(soup: BeautifulSoup, field: Tag) -> str:
    field_id = field.get("id")
    if field_id:
        label = soup.find("label", attrs={"for": field_id})
        if label is not None and element_text(label):
            return element_text(label)
    previous = field.find_previous_sibling()
    if previous is not None and previous.name == "label" and element_text(previous):
        return element_text(previous)
    return (
        field.get("placeholder")
        or field.get("aria-label")
        or field.get("name")
        or "Unnamed field"
    )


def _extract_forms(soup: BeautifulSoup) -> list[FormInfo]:
    forms: list[FormInfo] = []
    for form in soup.find_all("form"):
        fields = [
            FormField(
                label=_field_label(soup, field),
                type=field.get("type") or field.name.lower(),
                name=field.get("name") or "",
                required=field.has_attr("required"),
            )
            for field in form.find_all(["input", "textarea", "select"])
        ]
        forms.append(
            FormInfo(
                action=form.get("action") or "",
                method=(form.get("method") or "GET").upper(),
                fields=fields,
            )
        )
    return forms


def _extract_scripts(soup: BeautifulSoup, base_url: Optional[str]) -> list[ScriptInfo]:
    scripts: list[ScriptInfo] = []
    for script in soup.find_all("script"):
        src = script.get("src")
        if src:
            scripts.append(
                ScriptInfo(
                    src=resolve_url(src, base_url),
                    type=script.get("type") or "text/javascript",
                    is_tracking=is_tracking_url(src),
                )
            )
            continue
        body = script.get_text()
        scripts.append(
            ScriptInfo(
                inline=body[:MAX_INLINE_SCRIPT_CHARS],
                type=script.get("type") or "text/javascript",
                is_tracking=any(marker in body for marker in TRACKING_INLINE_MARKERS),
            )
        )
    return scripts


def _extract_seo(soup: BeautifulSoup, title: str) -> SeoInfo:
    def meta(**attrs: str) -> Optional[str]:
        tag = soup.find("meta", attrs=attrs)
        content = tag.get("content") if tag is not None else None
        return content.strip() if content else None

    keywords = meta(name="keywords")
    canonical = soup.find("link", rel="canonical")
    html_tag = soup.find("html")

    open_graph: dict[str, str] = {}
    for tag in soup.find_all("meta", property=True):
        prop = tag.get("property") or ""
        if prop.startswith("og:") and tag.get("content"):
            open_graph[prop[3:]] = tag["content"].strip()

    return SeoInfo(
        title=title,
        description=meta(name="description"),
        keywords=[k.strip() for k in keywords.split(",") if k.strip()] if keywords else [],
        canonical=canonical.get("href") if canonical is not None else None,
        language=html_tag.get("lang") if html_tag is not None else None,
        open_graph=open_graph,
    )


# =====================================================================
# Public API
# =====================================================================


class CompleteExtractor:
    """Builds a ``CompleteExtraction`` from captured HTML."""

    def extract(self, html: str, base_url: Optional[str] = None) -> CompleteExtraction:
        """Extract everything; never raises on malformed HTML.

        Args:
            html: Captured document.
            base_url: Page URL used to resolve relative asset URLs.
        """
        html = html or ""
        try:
            soup = parse_html(html)
        except Exception as e:
            logger.warning(f"HTML parse failed, returning minimal extraction: {e}")
            return CompleteExtraction(full_html=html)

        title = read_title(soup)
        styling = _extract_styling(soup)

        return CompleteExtraction(
            title=title,
            headings=read_headings(soup),
            paragraphs=read_paragraphs(soup),
            navigation=read_navigation(soup),
            buttons=read_buttons(soup),
            images=_extract_images(soup, base_url),
            videos=_extract_videos(soup, base_url),
            sections=_extract_sections(soup),
            styling=styling,
            layout=_analyze_layout(soup, styling),
            forms=_extract_forms(soup),
            scripts=_extract_scripts(soup, base_url),
            seo=_extract_seo(soup, title),
            full_html=html,
        )


def extract_complete(html: str, base_url: Optional[str] = None) -> CompleteExtraction:
    return CompleteExtractor().extract(html, base_url)
