"""Structural content models produced by HTML extraction.

Every list preserves document order. Reconstruction substitutes rewritten
text by position, so the ordering here is load-bearing.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class ImageContext(str, Enum):
    """Heuristic role of an image on the page."""

    HERO = "hero"
    CONTENT = "content"
    BACKGROUND = "background"
    ICON = "icon"
    LOGO = "logo"


# =============================================================================
# Basic content model (input to the rewriter)
# =============================================================================


class Headings(BaseModel):
    h1: list[str] = Field(default_factory=list)
    h2: list[str] = Field(default_factory=list)
    h3: list[str] = Field(default_factory=list)


class NavLink(BaseModel):
    text: str
    href: Optional[str] = None


class ImageRef(BaseModel):
    src: Optional[str] = None
    alt: Optional[str] = None


class ExtractedContent(BaseModel):
    """Text-level view of a page."""

    title: str = "Untitled"
    headings: Headings = Field(default_factory=Headings)
    paragraphs: list[str] = Field(default_factory=list)
    navigation: list[NavLink] = Field(default_factory=list)
    buttons: list[str] = Field(default_factory=list)
    images: list[ImageRef] = Field(default_factory=list)


# =============================================================================
# Complete extraction (input to reconstruction)
# =============================================================================


class Dimensions(BaseModel):
    width: int = 0
    height: int = 0


class ExtractedImage(BaseModel):
    """An image found via ``<img>`` or a CSS ``background-image``."""

    src: str = Field(..., description="Resolved (absolute when possible) URL")
    original_src: str = Field(..., description="URL exactly as written in the page")
    alt: Optional[str] = None
    class_name: Optional[str] = None
    element_id: Optional[str] = None
    parent_selector: str = "body"
    dimensions: Optional[Dimensions] = None
    is_background: bool = False
    data_attributes: dict[str, str] = Field(default_factory=dict)
    context: ImageContext = ImageContext.CONTENT


class VideoInfo(BaseModel):
    src: str
    poster: Optional[str] = None
    class_name: Optional[str] = None
    parent_selector: str = "body"
    autoplay: bool = False


class SectionInfo(BaseModel):
    selector: str
    tag_name: str
    class_name: str = ""
    child_count: int = 0
    order: int


class ColorScheme(BaseModel):
    primary: str = "#000000"
    secondary: str = "#666666"
    background: str = "#ffffff"
    text: str = "#000000"


class Styling(BaseModel):
    inline_styles: dict[str, str] = Field(default_factory=dict)
    css_rules: list[str] = Field(default_factory=list)
    color_scheme: ColorScheme = Field(default_factory=ColorScheme)
    fonts: list[str] = Field(default_factory=list)


class LayoutInfo(BaseModel):
    has_grid: bool = False
    has_flexbox: bool = False
    has_columns: bool = False
    grid_systems: list[str] = Field(
        default_factory=list, description="Detected grid frameworks/conventions"
    )
    breakpoints: list[str] = Field(default_factory=list)


class FormField(BaseModel):
    label: str
    type: str
    name: str = ""
    required: bool = False


class FormInfo(BaseModel):
    action: str = ""
    method: str = "GET"
    fields: list[FormField] = Field(default_factory=list)


class ScriptInfo(BaseModel):
    src: Optional[str] = None
    inline: Optional[str] = None
    type: str = "text/javascript"
    is_tracking: bool = False


class SeoInfo(BaseModel):
    title: str = ""
    description: Optional[str] = None
    keywords: list[str] = Field(default_factory=list)
    canonical: Optional[str] = None
    language: Optional[str] = None
    open_graph: dict[str, str] = Field(default_factory=dict)


class CompleteExtraction(BaseModel):
    """Everything reconstruction needs, including the original HTML."""

    title: str = "Untitled"
    headings: Headings = Field(default_factory=Headings)
    paragraphs: list[str] = Field(default_factory=list)
    navigation: list[NavLink] = Field(default_factory=list)
    buttons: list[str] = Field(default_factory=list)
    images: list[ExtractedImage] = Field(default_factory=list)
    videos: list[VideoInfo] = Field(default_factory=list)
    sections: list[SectionInfo] = Field(default_factory=list)
    styling: Styling = Field(default_factory=Styling)
    layout: LayoutInfo = Field(default_factory=LayoutInfo)
    forms: list[FormInfo] = Field(default_factory=list)
    scripts: list[ScriptInfo] = Field(default_factory=list)
    seo: SeoInfo = Field(default_factory=SeoInfo)
    full_html: str = ""

    def to_content(self) -> ExtractedContent:
        """Project down to the text model the rewriter consumes."""
        return ExtractedContent(
            title=self.title,
            headings=self.headings.model_copy(deep=True),
            paragraphs=list(self.paragraphs),
            navigation=[link.model_copy() for link in self.navigation],
            buttons=list(self.buttons),
            images=[
                ImageRef(src=img.original_src, alt=img.alt)
                for img in self.images
                if not img.is_background
            ],
        )
