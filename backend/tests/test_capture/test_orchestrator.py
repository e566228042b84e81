"""Tests for parody.services.capture.orchestrator."""

import asyncio

import pytest

from parody.models.capture import CaptureFidelity, CaptureResult
from parody.services.capture import (
    CaptureError,
    CaptureFailure,
    CaptureOrchestrator,
    CaptureStrategy,
)


def _result(tag: str) -> CaptureResult:
    return CaptureResult(screenshot=b"png", html=f"<html><body>{tag}</body></html>")


def _make_strategy(
    name: str,
    priority: int,
    calls: list[str],
    *,
    fail: bool = False,
    delay: float = 0.0,
    timeout: float = 5.0,
    fidelity: CaptureFidelity = CaptureFidelity.RENDERED,
) -> CaptureStrategy:
    async def execute(url: str) -> CaptureResult:
        calls.append(name)
        if delay:
            await asyncio.sleep(delay)
        if fail:
            raise CaptureError(f"{name} broke")
        return _result(name)

    return CaptureStrategy(
        name=name, priority=priority, execute=execute, timeout=timeout, fidelity=fidelity
    )


@pytest.mark.asyncio
class TestCaptureOrchestrator:
    async def test_first_success_wins(self):
        calls: list[str] = []
        orchestrator = CaptureOrchestrator(
            [_make_strategy("a", 1, calls), _make_strategy("b", 2, calls)]
        )
        outcome = await orchestrator.capture("https://example.com")
        assert outcome.strategy == "a"
        assert calls == ["a"]
        assert outcome.failed_attempts == []

    async def test_kth_success_invokes_exactly_first_k_in_order(self):
        calls: list[str] = []
        orchestrator = CaptureOrchestrator(
            [
                _make_strategy("fourth", 4, calls),
                _make_strategy("first", 1, calls, fail=True),
                _make_strategy("third", 3, calls, fidelity=CaptureFidelity.RAW_HTML),
                _make_strategy("second", 2, calls, fail=True),
            ]
        )
        outcome = await orchestrator.capture("https://example.com")

        assert calls == ["first", "second", "third"]
        assert outcome.strategy == "third"
        assert "third" in outcome.result.html
        assert outcome.fidelity == CaptureFidelity.RAW_HTML
        assert [a.name for a in outcome.failed_attempts] == ["first", "second"]

    async def test_all_fail_lists_every_attempt(self):
        calls: list[str] = []
        orchestrator = CaptureOrchestrator(
            [
                _make_strategy("a", 1, calls, fail=True),
                _make_strategy("b", 2, calls, fail=True),
            ]
        )
        with pytest.raises(CaptureFailure) as exc_info:
            await orchestrator.capture("https://example.com")

        failure = exc_info.value
        assert [a.name for a in failure.attempts] == ["a", "b"]
        assert failure.last_error == "b broke"
        assert "b: b broke" in str(failure)
        assert "a: a broke" in str(failure)

    async def test_timeout_is_ordinary_failure(self):
        calls: list[str] = []
        orchestrator = CaptureOrchestrator(
            [
                _make_strategy("slow", 1, calls, delay=1.0, timeout=0.05),
                _make_strategy("fast", 2, calls),
            ]
        )
        outcome = await orchestrator.capture("https://example.com")
        assert outcome.strategy == "fast"
        assert outcome.failed_attempts[0].name == "slow"
        assert "Timed out" in outcome.failed_attempts[0].error

    async def test_unexpected_exception_recorded(self):
        async def boom(url: str) -> CaptureResult:
            raise RuntimeError("kaput")

        calls: list[str] = []
        orchestrator = CaptureOrchestrator(
            [
                CaptureStrategy(name="boom", priority=1, execute=boom),
                _make_strategy("ok", 2, calls),
            ]
        )
        outcome = await orchestrator.capture("https://example.com")
        assert outcome.failed_attempts[0].error == "kaput"

    async def test_empty_url_rejected(self):
        orchestrator = CaptureOrchestrator([_make_strategy("a", 1, [])])
        with pytest.raises(ValueError, match="URL is required"):
            await orchestrator.capture("   ")

    async def test_no_strategies_fails(self):
        with pytest.raises(CaptureFailure, match="No capture strategies"):
            await CaptureOrchestrator([]).capture("https://example.com")
