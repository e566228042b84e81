"""Capture strategies: independent ways of getting HTML (and maybe a screenshot).

Each strategy is a plain ``async (url) -> CaptureResult`` function wrapped in a
``CaptureStrategy`` record. A strategy makes a single attempt and raises
``CaptureError`` on failure; the orchestrator's walk down the chain is the only
retry mechanism.
"""

import functools
import html
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator, Awaitable, Callable, Optional

import httpx

from parody.config import Settings
from parody.models.capture import CaptureFidelity, CaptureResult
from parody.services.capture.constants import (
    BROWSER_HEADERS,
    BROWSERLESS_STRATEGY,
    BROWSERLESS_WAIT_MS,
    DIRECT_FETCH_STRATEGY,
    ERROR_BODY_PREVIEW_CHARS,
    PLACEHOLDER_SCREENSHOT,
    PROXY_FETCH_STRATEGY,
    TEMPLATE_STRATEGY,
)
from parody.services.capture.url import normalize_url

logger = logging.getLogger(__name__)

CaptureFn = Callable[[str], Awaitable[CaptureResult]]


class CaptureError(Exception):
    """A single strategy failed. The message is safe to show to users."""


@dataclass(frozen=True)
class CaptureStrategy:
    """One entry in the capture chain (lower priority runs first)."""

    name: str
    priority: int
    execute: CaptureFn
    timeout: float = 30.0
    fidelity: CaptureFidelity = CaptureFidelity.RENDERED


@asynccontextmanager
async def _http_client(
    client: Optional[httpx.AsyncClient], timeout: float
) -> AsyncIterator[httpx.AsyncClient]:
    """Yield *client* if given, otherwise a short-lived client we own."""
    if client is not None:
        yield client
        return
    async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as owned:
        yield owned


def _body_preview(response: httpx.Response) -> str:
    try:
        return response.text[:ERROR_BODY_PREVIEW_CHARS]
    except Exception:
        return ""


# =====================================================================
# Strategy 1: managed headless browser (Browserless)
# =====================================================================


async def browserless_capture(
    url: str,
    *,
    api_key: Optional[str],
    base_url: str,
    timeout: float = 45.0,
    client: Optional[httpx.AsyncClient] = None,
) -> CaptureResult:
    """Render *url* in Browserless and return a full-page PNG plus rendered HTML."""
    if not api_key:
        raise CaptureError("BROWSERLESS_API_KEY not configured")

    target = normalize_url(url)
    params = {"token": api_key}
    headers = {"Cache-Control": "no-cache", "Content-Type": "application/json"}
    base_url = base_url.rstrip("/")

    logger.info(f"[browserless] Capturing {target}")
    try:
        async with _http_client(client, timeout) as http:
            shot = await http.post(
                f"{base_url}/screenshot",
                params=params,
                headers=headers,
                json={
                    "url": target,
                    "options": {"fullPage": True, "type": "png"},
                    "waitForTimeout": BROWSERLESS_WAIT_MS,
                },
            )
            if not shot.is_success:
                raise CaptureError(
                    f"Browserless screenshot failed: {shot.status_code} - "
                    f"{_body_preview(shot)}"
                )

            content = await http.post(
                f"{base_url}/content",
                params=params,
                headers=headers,
                json={"url": target, "waitForTimeout": BROWSERLESS_WAIT_MS},
            )
            if not content.is_success:
                raise CaptureError(
                    f"Browserless content failed: {content.status_code} - "
                    f"{_body_preview(content)}"
                )
    except httpx.HTTPError as e:
        # httpx messages can embed the request URL, which carries the token
        raise CaptureError(
            f"Browserless request failed: {e.__class__.__name__}"
        ) from e

    return CaptureResult(screenshot=shot.content, html=content.text)


# =====================================================================
# Strategy 2: direct fetch with browser-like headers
# =====================================================================


async def direct_fetch_capture(
    url: str,
    *,
    timeout: float = 20.0,
    client: Optional[httpx.AsyncClient] = None,
) -> CaptureResult:
    """GET the raw (unrendered) HTML; the screenshot is a placeholder."""
    target = normalize_url(url)
    logger.info(f"[direct-fetch] Fetching {target}")

    try:
        async with _http_client(client, timeout) as http:
            resp = await http.get(target, headers=BROWSER_HEADERS)
    except httpx.HTTPError as e:
        raise CaptureError(f"Direct fetch failed: {e.__class__.__name__}") from e

    if not resp.is_success:
        raise CaptureError(f"Direct fetch failed: {resp.status_code}")
    if not resp.text.strip():
        raise CaptureError("Direct fetch returned an empty document")

    return CaptureResult(screenshot=PLACEHOLDER_SCREENSHOT, html=resp.text)


# =====================================================================
# Strategy 3: fetch relayed through a public CORS proxy
# =====================================================================


async def proxy_fetch_capture(
    url: str,
    *,
    proxy_url: str,
    timeout: float = 25.0,
    client: Optional[httpx.AsyncClient] = None,
) -> CaptureResult:
    """Fetch via an allorigins-style relay that wraps the page in ``contents``."""
    target = normalize_url(url)
    logger.info(f"[cors-proxy] Fetching {target} via relay")

    try:
        async with _http_client(client, timeout) as http:
            resp = await http.get(proxy_url, params={"url": target})
    except httpx.HTTPError as e:
        raise CaptureError(f"Proxy fetch failed: {e.__class__.__name__}") from e

    if not resp.is_success:
        raise CaptureError(f"Proxy fetch failed: {resp.status_code}")

    try:
        envelope = resp.json()
    except ValueError as e:
        raise CaptureError("Proxy returned a non-JSON envelope") from e
    if not isinstance(envelope, dict):
        raise CaptureError("Proxy returned an unexpected envelope")

    upstream_status = (envelope.get("status") or {}).get("http_code")
    if isinstance(upstream_status, int) and upstream_status >= 400:
        raise CaptureError(f"Proxy reached target but got {upstream_status}")

    contents = envelope.get("contents")
    if not isinstance(contents, str) or not contents.strip():
        raise CaptureError("Proxy envelope had no contents")

    return CaptureResult(screenshot=PLACEHOLDER_SCREENSHOT, html=contents)


# =====================================================================
# Strategy 4: synthetic template (never fails)
# =====================================================================


async def template_capture(url: str) -> CaptureResult:
    """Build a minimal stand-in page naming *url*."""
    logger.info(f"[template] Emergency fallback for {url}")
    safe_url = html.escape(url.strip())
    document = (
        "<!DOCTYPE html>\n"
        "<html>\n"
        "<head>\n"
        '<meta charset="UTF-8">\n'
        "<title>Website Preview</title>\n"
        "</head>\n"
        "<body>\n"
        f"<h1>Website: {safe_url}</h1>\n"
        "<p>This is a template-based capture fallback.</p>\n"
        "<p>The original website content could not be fetched.</p>\n"
        "<p>The parody is based only on the address of the site.</p>\n"
        "</body>\n"
        "</html>\n"
    )
    return CaptureResult(screenshot=PLACEHOLDER_SCREENSHOT, html=document)


# =====================================================================
# Default chain
# =====================================================================


def build_capture_strategies(
    settings: Settings,
    *,
    client: Optional[httpx.AsyncClient] = None,
) -> list[CaptureStrategy]:
    """Assemble the default chain, most faithful method first."""
    strategies = [
        CaptureStrategy(
            name=BROWSERLESS_STRATEGY,
            priority=1,
            execute=functools.partial(
                browserless_capture,
                api_key=settings.browserless_api_key,
                base_url=settings.browserless_base_url,
                timeout=settings.capture_browser_timeout,
                client=client,
            ),
            timeout=settings.capture_browser_timeout,
            fidelity=CaptureFidelity.RENDERED,
        ),
        CaptureStrategy(
            name=DIRECT_FETCH_STRATEGY,
            priority=2,
            execute=functools.partial(
                direct_fetch_capture,
                timeout=settings.capture_fetch_timeout,
                client=client,
            ),
            timeout=settings.capture_fetch_timeout,
            fidelity=CaptureFidelity.RAW_HTML,
        ),
        CaptureStrategy(
            name=PROXY_FETCH_STRATEGY,
            priority=3,
            execute=functools.partial(
                proxy_fetch_capture,
                proxy_url=settings.cors_proxy_url,
                timeout=settings.capture_proxy_timeout,
                client=client,
            ),
            timeout=settings.capture_proxy_timeout,
            fidelity=CaptureFidelity.RAW_HTML,
        ),
    ]

    if settings.capture_template_fallback:
        strategies.append(
            CaptureStrategy(
                name=TEMPLATE_STRATEGY,
                priority=4,
                execute=template_capture,
                timeout=5.0,
                fidelity=CaptureFidelity.PLACEHOLDER,
            )
        )

    return strategies
