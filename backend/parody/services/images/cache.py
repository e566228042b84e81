"""Bounded LRU cache for restyled image URLs."""

import threading
from collections import OrderedDict
from typing import Optional

from parody.models.content import ImageContext
from parody.models.parody import ParodyStyle

CacheKey = tuple[str, ParodyStyle, ImageContext]


class TransformCache:
    """Thread-safe LRU map of ``(url, style, context)`` to restyled URL.

    Concurrent requests may compute the same key twice; the last write wins.
    """

    def __init__(self, capacity: int = 256) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._entries: OrderedDict[CacheKey, str] = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key: CacheKey) -> Optional[str]:
        with self._lock:
            value = self._entries.get(key)
            if value is not None:
                self._entries.move_to_end(key)
            return value

    def set(self, key: CacheKey, value: str) -> None:
        with self._lock:
            self._entries[key] = value
            self._entries.move_to_end(key)
            while len(self._entries) > self.capacity:
                self._entries.popitem(last=False)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries
