"""Preview storage for reconstructed parody pages.

Artifacts live for a fixed TTL. Expiry is enforced on every read: fetching
an expired id deletes it and reports it missing, so correctness never
depends on ``cleanup_expired`` having run.
"""

import asyncio
import logging
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from supabase import AsyncClient

from parody.models.parody import ParodyMetadata, StoredParody

logger = logging.getLogger(__name__)

PREVIEW_TABLE = "parody_previews"
DEFAULT_TTL = timedelta(hours=24)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class PreviewStore(ABC):
    """Keyed, expiring storage of ``StoredParody`` artifacts."""

    def __init__(self, *, ttl: timedelta = DEFAULT_TTL, clock: Clock = utc_now) -> None:
        self.ttl = ttl
        self.clock = clock

    async def store(
        self,
        html: str,
        *,
        original_url: str,
        style: str,
        metadata: Optional[ParodyMetadata] = None,
        ttl: Optional[timedelta] = None,
    ) -> StoredParody:
        """Save *html* under a fresh random id and return the stored record."""
        now = self.clock()
        parody = StoredParody(
            id=uuid.uuid4().hex,
            html=html,
            original_url=original_url,
            style=style,
            created_at=now,
            expires_at=now + (ttl or self.ttl),
            metadata=metadata or ParodyMetadata(),
        )
        await self.save(parody)
        logger.info(f"Stored parody {parody.id} until {parody.expires_at.isoformat()}")
        return parody

    async def get(self, parody_id: str) -> Optional[StoredParody]:
        """Return the artifact, or ``None`` when missing or expired."""
        parody = await self._load(parody_id)
        if parody is None:
            return None
        if parody.expires_at <= self.clock():
            logger.info(f"Parody {parody_id} expired, deleting")
            await self.delete(parody_id)
            return None
        return parody

    @abstractmethod
    async def save(self, parody: StoredParody) -> None:
        """Insert or replace *parody*."""

    @abstractmethod
    async def delete(self, parody_id: str) -> bool:
        """Delete an artifact; ``True`` if one was removed."""

    @abstractmethod
    async def cleanup_expired(self) -> int:
        """Remove every expired artifact and return how many were removed."""

    @abstractmethod
    async def _load(self, parody_id: str) -> Optional[StoredParody]:
        """Fetch an artifact without checking expiry."""


class InMemoryPreviewStore(PreviewStore):
    """Process-local store; contents are lost on restart."""

    def __init__(self, *, ttl: timedelta = DEFAULT_TTL, clock: Clock = utc_now) -> None:
        super().__init__(ttl=ttl, clock=clock)
        self._items: dict[str, StoredParody] = {}
        self._lock = asyncio.Lock()

    async def save(self, parody: StoredParody) -> None:
        async with self._lock:
            self._items[parody.id] = parody

    async def delete(self, parody_id: str) -> bool:
        async with self._lock:
            return self._items.pop(parody_id, None) is not None

    async def cleanup_expired(self) -> int:
        now = self.clock()
        async with self._lock:
            expired = [pid for pid, p in self._items.items() if p.expires_at <= now]
            for pid in expired:
                del self._items[pid]
        if expired:
            logger.info(f"Removed {len(expired)} expired previews")
        return len(expired)

    async def _load(self, parody_id: str) -> Optional[StoredParody]:
        async with self._lock:
            return self._items.get(parody_id)

    def __len__(self) -> int:
        return len(self._items)


class SupabasePreviewStore(PreviewStore):
    """Stores previews in the ``parody_previews`` table."""

    def __init__(
        self,
        supabase: AsyncClient,
        *,
        ttl: timedelta = DEFAULT_TTL,
        clock: Clock = utc_now,
    ) -> None:
        super().__init__(ttl=ttl, clock=clock)
        self.supabase = supabase

    async def save(self, parody: StoredParody) -> None:
        data = parody.model_dump(mode="json")
        await self.supabase.table(PREVIEW_TABLE).upsert(data).execute()

    async def delete(self, parody_id: str) -> bool:
        result = (
            await self.supabase.table(PREVIEW_TABLE).delete().eq("id", parody_id).execute()
        )
        return bool(result.data)

    async def cleanup_expired(self) -> int:
        now = self.clock().isoformat()
        result = (
            await self.supabase.table(PREVIEW_TABLE).delete().lte("expires_at", now).execute()
        )
        removed = len(result.data or [])
        if removed:
            logger.info(f"Removed {removed} expired previews")
        return removed

    async def _load(self, parody_id: str) -> Optional[StoredParody]:
        result = (
            await self.supabase.table(PREVIEW_TABLE)
            .select("*")
            .eq("id", parody_id)
            .limit(1)
            .execute()
        )
        if not result.data:
            return None
        return StoredParody.model_validate(result.data[0])
