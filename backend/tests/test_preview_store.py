"""Tests for parody.services.preview_store."""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from parody.models.parody import ParodyMetadata
from parody.services.preview_store import InMemoryPreviewStore, SupabasePreviewStore


class FakeClock:
    def __init__(self) -> None:
        self.now = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.mark.asyncio
class TestInMemoryPreviewStore:
    async def test_store_and_get(self):
        clock = FakeClock()
        store = InMemoryPreviewStore(ttl=timedelta(hours=24), clock=clock)

        stored = await store.store(
            "<html></html>",
            original_url="https://example.com",
            style="medieval",
            metadata=ParodyMetadata(images_transformed=2),
        )

        assert stored.expires_at == clock.now + timedelta(hours=24)
        fetched = await store.get(stored.id)
        assert fetched is not None
        assert fetched.html == "<html></html>"
        assert fetched.metadata.images_transformed == 2

    async def test_ids_are_unique(self):
        store = InMemoryPreviewStore()
        a = await store.store("a", original_url="u", style="s")
        b = await store.store("b", original_url="u", style="s")
        assert a.id != b.id

    async def test_expired_read_returns_none_and_deletes(self):
        clock = FakeClock()
        store = InMemoryPreviewStore(ttl=timedelta(hours=1), clock=clock)
        stored = await store.store("x", original_url="u", style="s")

        clock.advance(hours=1)

        assert await store.get(stored.id) is None
        assert len(store) == 0

    async def test_per_item_ttl(self):
        clock = FakeClock()
        store = InMemoryPreviewStore(ttl=timedelta(hours=1), clock=clock)
        stored = await store.store("x", original_url="u", style="s", ttl=timedelta(days=2))
        clock.advance(hours=5)
        assert await store.get(stored.id) is not None

    async def test_cleanup_expired(self):
        clock = FakeClock()
        store = InMemoryPreviewStore(ttl=timedelta(hours=1), clock=clock)
        await store.store("old", original_url="u", style="s")
        clock.advance(minutes=30)
        fresh = await store.store("fresh", original_url="u", style="s")
        clock.advance(minutes=45)

        assert await store.cleanup_expired() == 1
        assert len(store) == 1
        assert await store.get(fresh.id) is not None

    async def test_delete(self):
        store = InMemoryPreviewStore()
        stored = await store.store("x", original_url="u", style="s")
        assert await store.delete(stored.id) is True
        assert await store.delete(stored.id) is False
        assert await store.get("missing") is None


def _mock_supabase(rows: list[dict]) -> MagicMock:
    """Supabase client whose every query chain resolves to *rows*."""
    result = MagicMock(data=rows)
    query = MagicMock()
    for method in ("select", "eq", "limit", "delete", "lte", "upsert"):
        getattr(query, method).return_value = query
    query.execute = AsyncMock(return_value=result)
    client = MagicMock()
    client.table.return_value = query
    return client


@pytest.mark.asyncio
class TestSupabasePreviewStore:
    async def test_save_upserts_json_row(self):
        client = _mock_supabase([])
        store = SupabasePreviewStore(client)
        stored = await store.store("<p>x</p>", original_url="u", style="simpsons")

        client.table.assert_called_with("parody_previews")
        row = client.table.return_value.upsert.call_args.args[0]
        assert row["id"] == stored.id
        assert row["style"] == "simpsons"
        assert isinstance(row["expires_at"], str)

    async def test_get_parses_row(self):
        clock = FakeClock()
        row = {
            "id": "abc",
            "html": "<p>x</p>",
            "original_url": "u",
            "style": "medieval",
            "created_at": clock.now.isoformat(),
            "expires_at": (clock.now + timedelta(hours=1)).isoformat(),
            "metadata": {"images_transformed": 1},
        }
        store = SupabasePreviewStore(_mock_supabase([row]), clock=clock)
        parody = await store.get("abc")
        assert parody is not None
        assert parody.metadata.images_transformed == 1

    async def test_get_expired_deletes(self):
        clock = FakeClock()
        row = {
            "id": "abc",
            "html": "",
            "original_url": "u",
            "style": "medieval",
            "created_at": (clock.now - timedelta(days=2)).isoformat(),
            "expires_at": (clock.now - timedelta(days=1)).isoformat(),
        }
        client = _mock_supabase([row])
        store = SupabasePreviewStore(client, clock=clock)

        assert await store.get("abc") is None
        client.table.return_value.delete.assert_called_once()

    async def test_missing_row(self):
        store = SupabasePreviewStore(_mock_supabase([]))
        assert await store.get("nope") is None
