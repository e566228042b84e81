"""HTML extraction package: no network, no LLM calls.

Re-exports the public API so consumers can use::

    from parody.services.extraction import extract_complete, extract_content
"""

from parody.services.extraction.complete_extractor import (
    CompleteExtractor,
    classify_image,
    extract_complete,
)
from parody.services.extraction.content_extractor import (
    ContentExtractor,
    extract_content,
)
from parody.services.extraction.portfolio_extractor import extract_portfolio

__all__ = [
    "CompleteExtractor",
    "ContentExtractor",
    "classify_image",
    "extract_complete",
    "extract_content",
    "extract_portfolio",
]
