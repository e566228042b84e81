"""Capture data models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class CaptureFidelity(str, Enum):
    """How faithfully a strategy reproduces the live page."""

    RENDERED = "rendered"  # real browser: screenshot + rendered DOM
    RAW_HTML = "raw_html"  # unrendered HTML, placeholder screenshot
    PLACEHOLDER = "placeholder"  # synthetic template, no real content


class CaptureResult(BaseModel):
    """A single strategy's snapshot of a remote page."""

    screenshot: bytes = Field(..., description="PNG bytes (may be a placeholder)")
    html: str = Field(..., description="Captured HTML document")

    model_config = ConfigDict(frozen=True)


class CaptureAttempt(BaseModel):
    """A failed strategy attempt, as surfaced to callers."""

    name: str
    error: str


class CaptureOutcome(BaseModel):
    """Successful capture tagged with the strategy that produced it."""

    result: CaptureResult
    strategy: str
    fidelity: CaptureFidelity = CaptureFidelity.RENDERED
    failed_attempts: list[CaptureAttempt] = Field(default_factory=list)

    @property
    def is_placeholder(self) -> bool:
        return self.fidelity == CaptureFidelity.PLACEHOLDER
