"""Parody generation models: styles, rewritten content, stored artifacts."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from parody.models.capture import CaptureAttempt, CaptureFidelity
from parody.models.content import Headings, ImageContext, NavLink


class ParodyStyle(str, Enum):
    """Closed set of comedic themes."""

    CORPORATE_BUZZWORD = "corporate-buzzword"
    GEN_Z_BRAINROT = "gen-z-brainrot"
    MEDIEVAL = "medieval"
    INFOMERCIAL = "infomercial"
    CONSPIRACY = "conspiracy"
    SIMPSONS = "simpsons"


class ParodyContent(BaseModel):
    """Rewritten text mirroring ``ExtractedContent``.

    The rewriter is asked to keep every array the same length and order as its
    input, but callers must not rely on it: reconstruction substitutes by
    position and tolerates shorter or longer arrays.
    """

    title: str = ""
    headings: Headings = Field(default_factory=Headings)
    paragraphs: list[str] = Field(default_factory=list)
    navigation: list[NavLink] = Field(default_factory=list)
    buttons: list[str] = Field(default_factory=list)
    summary: str = ""
    style: str = ""
    fallback: bool = Field(
        default=False, description="True when the original text was kept unchanged"
    )


class TransformedImage(BaseModel):
    """Outcome of restyling one image."""

    original_src: str = Field(..., description="URL as written in the original page")
    transformed_url: str
    context: ImageContext = ImageContext.CONTENT
    method: str = Field(
        ..., description="Restyler name, 'cached', or 'fallback' (original kept)"
    )


class TransformedContent(BaseModel):
    """Everything the reconstructor substitutes into the original page."""

    text: ParodyContent
    images: list[TransformedImage] = Field(default_factory=list)


class ParodyMetadata(BaseModel):
    images_transformed: int = 0
    processing_time_ms: int = 0
    file_size: int = 0
    strategy: Optional[str] = None


class StoredParody(BaseModel):
    """A reconstructed artifact held by the preview store."""

    id: str
    html: str
    original_url: str
    style: str
    created_at: datetime
    expires_at: datetime
    metadata: ParodyMetadata = Field(default_factory=ParodyMetadata)


# =============================================================================
# Request/Response Models
# =============================================================================


class ParodyRequest(BaseModel):
    """Request to parody a website."""

    url: str = Field(..., description="Target site (scheme optional)")
    style: ParodyStyle = Field(..., description="Comedic theme")
    transform_images: bool = Field(
        default=True, description="Restyle page images when a restyler is configured"
    )


class ParodyResult(BaseModel):
    """Outcome of a parody request."""

    success: bool
    original_url: str
    style: ParodyStyle
    strategy: str
    fidelity: CaptureFidelity
    summary: str = ""
    html: Optional[str] = None
    preview_id: Optional[str] = None
    preview_url: Optional[str] = None
    download_url: Optional[str] = None
    expires_at: Optional[datetime] = None
    images_transformed: int = 0
    processing_time_ms: int = 0
    failed_attempts: list[CaptureAttempt] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class StyleInfo(BaseModel):
    key: ParodyStyle
    name: str
    description: str
