"""In-memory cache store implementation."""

import fnmatch
from datetime import timedelta
from typing import Any

from cachetools import LRUCache  # type: ignore[import-untyped]

from cachefetch.core.entities.cache_entry import CacheEntry
from cachefetch.core.interfaces.serializer import ISerializer
from cachefetch.infrastructure.stores.base import SerializingStore
from cachefetch.utils.clock import Clock, utc_now


class InMemoryCacheStore(SerializingStore):
    """In-memory cache store with LRU bounding.

    Suitable for tests and single-process use where nothing needs
    to survive a restart. Entries are kept after they expire and
    only leave when evicted by size or deleted.
    """

    def __init__(
        self,
        maxsize: int = 1000,
        serializer: ISerializer | None = None,
        clock: Clock = utc_now,
    ) -> None:
        """Initialize the in-memory store.

        Args:
            maxsize: Maximum number of entries kept.
            serializer: Payload serializer. Defaults to JSON.
            clock: Source of the current time.
        """
        super().__init__(serializer=serializer, clock=clock)
        self._maxsize = maxsize
        self._cache: LRUCache[str, CacheEntry] = LRUCache(maxsize=maxsize)

    async def exists(self, key: str) -> bool:
        return key in self._cache

    async def is_expired(self, key: str) -> bool:
        entry = self._cache.get(key)
        if entry is None:
            return True
        return entry.is_expired(self._clock())

    async def get(self, key: str) -> Any:
        entry = self._cache[key]
        return self._decode(key, entry.payload)

    async def put(self, key: str, value: Any, ttl: timedelta) -> None:
        self._cache[key] = CacheEntry.create(
            key=key,
            payload=self._encode(value),
            ttl=ttl,
            now=self._clock(),
        )

    async def entry(self, key: str) -> CacheEntry | None:
        """Return the raw entry for ``key``, if present."""
        return self._cache.get(key)

    async def delete(self, key: str) -> bool:
        try:
            del self._cache[key]
            return True
        except KeyError:
            return False

    async def delete_pattern(self, pattern: str) -> int:
        keys_to_delete = [
            key for key in list(self._cache.keys())
            if fnmatch.fnmatchcase(key, pattern)
        ]
        for key in keys_to_delete:
            del self._cache[key]
        return len(keys_to_delete)

    async def clear(self) -> None:
        self._cache.clear()

    def __len__(self) -> int:
        """Return the number of entries, fresh or stale."""
        return len(self._cache)

    @property
    def maxsize(self) -> int:
        """Return the maximum size of the store."""
        return self._maxsize
