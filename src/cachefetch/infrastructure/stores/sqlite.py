"""Durable SQLite cache store implementation."""

import asyncio
import logging
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any

import aiosqlite

from cachefetch.core.entities.cache_entry import CacheEntry
from cachefetch.core.interfaces.serializer import ISerializer
from cachefetch.infrastructure.stores.base import SerializingStore
from cachefetch.utils.clock import Clock, utc_now

logger = logging.getLogger(__name__)

_SCHEMA = """
    CREATE TABLE IF NOT EXISTS cache_entries (
        key TEXT PRIMARY KEY,
        payload BLOB NOT NULL,
        created_at TEXT NOT NULL,
        ttl_seconds REAL NOT NULL
    )
"""


class SqliteCacheStore(SerializingStore):
    """Cache store backed by a local SQLite file.

    Entries survive process restarts, which is what lets an app start
    offline and still show the last collections it fetched. The
    connection is opened on first use; call :meth:`close` when done.
    """

    def __init__(
        self,
        path: str | Path,
        serializer: ISerializer | None = None,
        clock: Clock = utc_now,
    ) -> None:
        """Initialize the SQLite store.

        Args:
            path: Database file. Parent directories are created.
            serializer: Payload serializer. Defaults to JSON.
            clock: Source of the current time.
        """
        super().__init__(serializer=serializer, clock=clock)
        self._path = Path(path)
        self._db: aiosqlite.Connection | None = None
        self._lock = asyncio.Lock()

    @property
    def path(self) -> Path:
        return self._path

    async def exists(self, key: str) -> bool:
        return await self.entry(key) is not None

    async def is_expired(self, key: str) -> bool:
        entry = await self.entry(key)
        if entry is None:
            return True
        return entry.is_expired(self._clock())

    async def get(self, key: str) -> Any:
        entry = await self.entry(key)
        if entry is None:
            raise KeyError(key)
        return self._decode(key, entry.payload)

    async def put(self, key: str, value: Any, ttl: timedelta) -> None:
        payload = self._encode(value)
        db = await self._connection()
        await db.execute(
            "INSERT OR REPLACE INTO cache_entries (key, payload, created_at, ttl_seconds) "
            "VALUES (?, ?, ?, ?)",
            (key, payload, self._clock().isoformat(), ttl.total_seconds()),
        )
        await db.commit()

    async def entry(self, key: str) -> CacheEntry | None:
        """Return the raw entry for ``key``, if present."""
        db = await self._connection()
        async with db.execute(
            "SELECT payload, created_at, ttl_seconds FROM cache_entries WHERE key = ?",
            (key,),
        ) as cursor:
            row = await cursor.fetchone()
        if row is None:
            return None
        return CacheEntry(
            key=key,
            payload=bytes(row["payload"]),
            created_at=datetime.fromisoformat(row["created_at"]),
            ttl=timedelta(seconds=row["ttl_seconds"]),
        )

    async def delete(self, key: str) -> bool:
        db = await self._connection()
        cursor = await db.execute("DELETE FROM cache_entries WHERE key = ?", (key,))
        await db.commit()
        return cursor.rowcount > 0

    async def delete_pattern(self, pattern: str) -> int:
        db = await self._connection()
        cursor = await db.execute("DELETE FROM cache_entries WHERE key GLOB ?", (pattern,))
        await db.commit()
        return cursor.rowcount

    async def clear(self) -> None:
        db = await self._connection()
        await db.execute("DELETE FROM cache_entries")
        await db.commit()

    async def close(self) -> None:
        """Close the database connection."""
        if self._db is not None:
            await self._db.close()
            self._db = None

    async def _connection(self) -> aiosqlite.Connection:
        async with self._lock:
            if self._db is None:
                self._path.parent.mkdir(parents=True, exist_ok=True)
                db = await aiosqlite.connect(self._path)
                db.row_factory = aiosqlite.Row
                await db.execute(_SCHEMA)
                await db.commit()
                self._db = db
                logger.debug("Opened cache database at %s", self._path)
            return self._db

    async def __aenter__(self) -> "SqliteCacheStore":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: type, exc_val: Exception, exc_tb: object) -> None:
        """Async context manager exit."""
        await self.close()
