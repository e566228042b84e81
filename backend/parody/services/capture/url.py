"""URL helpers shared by every capture strategy."""


def normalize_url(url: str) -> str:
    """Prepend ``https://`` when *url* has no http(s) scheme.

    Idempotent: already-normalized URLs are returned unchanged.
    """
    url = url.strip()
    if url.lower().startswith(("http://", "https://")):
        return url
    return f"https://{url}"
