"""Capture package: fallback chain for acquiring third-party pages.

Re-exports the public API so consumers can use::

    from parody.services.capture import CaptureOrchestrator, build_capture_strategies
"""

from parody.services.capture.orchestrator import CaptureFailure, CaptureOrchestrator
from parody.services.capture.strategies import (
    CaptureError,
    CaptureStrategy,
    build_capture_strategies,
)
from parody.services.capture.url import normalize_url

__all__ = [
    "CaptureError",
    "CaptureFailure",
    "CaptureOrchestrator",
    "CaptureStrategy",
    "build_capture_strategies",
    "normalize_url",
]
