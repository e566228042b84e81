"""Supabase client connection for the preview store."""

import asyncio

from supabase import AsyncClient, create_async_client

from parody.config import get_settings

_async_client: AsyncClient | None = None
_lock = asyncio.Lock()


async def get_async_supabase_client() -> AsyncClient:
    """Get async Supabase client (cached singleton).

    Raises:
        ValueError: If the Supabase URL or service key is not configured.
    """
    global _async_client
    if _async_client is not None:
        return _async_client

    async with _lock:
        if _async_client is None:
            settings = get_settings()
            if not settings.supabase_url or not settings.supabase_service_key:
                raise ValueError("SUPABASE_URL and SUPABASE_SERVICE_KEY must be set")
            _async_client = await create_async_client(
                settings.supabase_url,
                settings.supabase_service_key,
            )
    return _async_client


def reset_clients() -> None:
    """Reset clients for testing."""
    global _async_client
    _async_client = None
