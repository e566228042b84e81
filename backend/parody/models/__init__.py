from parody.models.capture import (
    CaptureAttempt,
    CaptureFidelity,
    CaptureOutcome,
    CaptureResult,
)
from parody.models.content import (
    CompleteExtraction,
    ExtractedContent,
    ExtractedImage,
    Headings,
    ImageContext,
    ImageRef,
    NavLink,
)
from parody.models.parody import (
    ParodyContent,
    ParodyRequest,
    ParodyResult,
    ParodyStyle,
    StoredParody,
    TransformedContent,
    TransformedImage,
)
from parody.models.roast import PortfolioContent, RoastRequest, RoastResult

__all__ = [
    # Capture models
    "CaptureAttempt",
    "CaptureFidelity",
    "CaptureOutcome",
    "CaptureResult",
    # Content models
    "CompleteExtraction",
    "ExtractedContent",
    "ExtractedImage",
    "Headings",
    "ImageContext",
    "ImageRef",
    "NavLink",
    # Parody models
    "ParodyContent",
    "ParodyRequest",
    "ParodyResult",
    "ParodyStyle",
    "StoredParody",
    "TransformedContent",
    "TransformedImage",
    # Roast models
    "PortfolioContent",
    "RoastRequest",
    "RoastResult",
]
