"""Tests for SqliteCacheStore."""

from datetime import timedelta
from pathlib import Path

import pytest

from cachefetch import CacheCorruptionError, SqliteCacheStore

TTL = timedelta(seconds=5)


@pytest.fixture
async def sqlite_store(tmp_path: Path, clock):
    """Create a store in a temporary directory."""
    store = SqliteCacheStore(tmp_path / "cache" / "fetch.db", clock=clock)
    yield store
    await store.close()


class TestSqliteCacheStore:
    """Tests for SqliteCacheStore."""

    @pytest.mark.asyncio
    async def test_put_and_get(self, sqlite_store: SqliteCacheStore) -> None:
        """Test basic put and get operations."""
        await sqlite_store.put("cachefetch:job", [{"id": "1"}], TTL)

        assert await sqlite_store.get("cachefetch:job") == [{"id": "1"}]
        assert sqlite_store.path.exists()

    @pytest.mark.asyncio
    async def test_missing_key(self, sqlite_store: SqliteCacheStore) -> None:
        """Test absent keys."""
        assert await sqlite_store.exists("nope") is False
        assert await sqlite_store.is_expired("nope") is True
        with pytest.raises(KeyError):
            await sqlite_store.get("nope")

    @pytest.mark.asyncio
    async def test_ttl_round_trip(self, sqlite_store: SqliteCacheStore, clock) -> None:
        """Test freshness and staleness around the TTL."""
        await sqlite_store.put("k", [1], TTL)
        assert await sqlite_store.is_expired("k") is False

        clock.advance(5)
        assert await sqlite_store.is_expired("k") is True
        assert await sqlite_store.exists("k") is True

    @pytest.mark.asyncio
    async def test_overwrite(self, sqlite_store: SqliteCacheStore, clock) -> None:
        """Test that put overwrites and resets the creation time."""
        await sqlite_store.put("k", [1], TTL)
        clock.advance(30)
        await sqlite_store.put("k", [2], TTL)

        entry = await sqlite_store.entry("k")
        assert entry is not None
        assert entry.created_at == clock()
        assert await sqlite_store.get("k") == [2]

    @pytest.mark.asyncio
    async def test_survives_restart(self, tmp_path: Path, clock) -> None:
        """Test that entries persist across store instances."""
        path = tmp_path / "fetch.db"

        async with SqliteCacheStore(path, clock=clock) as first:
            await first.put("cachefetch:job", [{"id": "1"}], TTL)

        async with SqliteCacheStore(path, clock=clock) as second:
            assert await second.get("cachefetch:job") == [{"id": "1"}]
            assert await second.is_expired("cachefetch:job") is False

    @pytest.mark.asyncio
    async def test_corrupt_payload(self, sqlite_store: SqliteCacheStore) -> None:
        """Test that an unreadable payload raises CacheCorruptionError."""
        await sqlite_store.put("k", [1], TTL)
        db = await sqlite_store._connection()
        await db.execute("UPDATE cache_entries SET payload = ? WHERE key = ?", (b"\x00{", "k"))
        await db.commit()

        with pytest.raises(CacheCorruptionError):
            await sqlite_store.get("k")

    @pytest.mark.asyncio
    async def test_delete_and_patterns(self, sqlite_store: SqliteCacheStore) -> None:
        """Test delete, delete_pattern and clear."""
        await sqlite_store.put("cachefetch:job", [1], TTL)
        await sqlite_store.put("cachefetch:job:p:1", [2], TTL)
        await sqlite_store.put("cachefetch:part", [3], TTL)
        await sqlite_store.put("other", [4], TTL)

        assert await sqlite_store.delete("other") is True
        assert await sqlite_store.delete("other") is False
        assert await sqlite_store.delete_pattern("cachefetch:job*") == 2
        assert await sqlite_store.exists("cachefetch:part")

        await sqlite_store.clear()
        assert await sqlite_store.exists("cachefetch:part") is False
