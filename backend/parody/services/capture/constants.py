"""Named constants for the capture package."""

import base64

# ---------------------------------------------------------------------------
# Strategy names (callers detect degraded output by name)
# ---------------------------------------------------------------------------
BROWSERLESS_STRATEGY = "browserless"
DIRECT_FETCH_STRATEGY = "direct-fetch"
PROXY_FETCH_STRATEGY = "cors-proxy"
TEMPLATE_STRATEGY = "template"

# ---------------------------------------------------------------------------
# Request shaping
# ---------------------------------------------------------------------------
BROWSER_HEADERS: dict[str, str] = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/126.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
}
BROWSERLESS_WAIT_MS = 5_000  # settle time before screenshot/content
ERROR_BODY_PREVIEW_CHARS = 200  # response body included in failure messages

# ---------------------------------------------------------------------------
# Placeholder screenshot (1x1 transparent PNG) for strategies that cannot render
# ---------------------------------------------------------------------------
PLACEHOLDER_SCREENSHOT: bytes = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII="
)
