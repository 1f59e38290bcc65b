"""Redis cache store implementation."""

from datetime import datetime, timedelta
from typing import Any, Optional

import redis.asyncio as redis

from cachefetch.core.entities.cache_entry import CacheEntry
from cachefetch.core.interfaces.serializer import ISerializer
from cachefetch.infrastructure.stores.base import SerializingStore
from cachefetch.utils.clock import Clock, utc_now


class RedisCacheStore(SerializingStore):
    """Redis cache store for shared or server-side deployments.

    Each entry is a Redis hash holding the payload, its creation time
    and TTL. Redis does not expire entries on the fetch TTL, because a
    stale entry must still be readable while offline. ``retention``
    optionally bounds how long stale entries are kept at all.
    """

    def __init__(
        self,
        redis_url: str = "redis://localhost:6379",
        key_prefix: str = "cachefetch",
        retention: Optional[timedelta] = None,
        serializer: Optional[ISerializer] = None,
        clock: Clock = utc_now,
        client: Optional[redis.Redis] = None,
    ) -> None:
        """Initialize the Redis cache store.

        Args:
            redis_url: Redis connection URL.
            key_prefix: Prefix for all cache keys.
            retention: Optional physical lifetime of an entry in Redis.
            serializer: Payload serializer. Defaults to JSON.
            clock: Source of the current time.
            client: Existing Redis client to use instead of ``redis_url``.
                Clients with either ``decode_responses`` setting work.
        """
        super().__init__(serializer=serializer, clock=clock)
        self._redis: redis.Redis = client or redis.from_url(redis_url)  # type: ignore
        self._key_prefix = key_prefix
        self._retention = retention

    async def exists(self, key: str) -> bool:
        result = await self._redis.exists(self._prefixed_key(key))
        return result > 0

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
        prefixed_key = self._prefixed_key(key)
        mapping = {
            "payload": self._encode(value),
            "created_at": self._clock().isoformat(),
            "ttl": str(ttl.total_seconds()),
        }
        async with self._redis.pipeline(transaction=True) as pipe:
            pipe.delete(prefixed_key)
            pipe.hset(prefixed_key, mapping=mapping)
            if self._retention is not None:
                pipe.expire(prefixed_key, int(self._retention.total_seconds()))
            await pipe.execute()

    async def entry(self, key: str) -> Optional[CacheEntry]:
        """Return the raw entry for ``key``, if present."""
        raw = await self._redis.hgetall(self._prefixed_key(key))
        if not raw:
            return None
        fields = {_text(name): value for name, value in raw.items()}
        payload = fields["payload"]
        if isinstance(payload, str):
            payload = payload.encode("utf-8")
        return CacheEntry(
            key=key,
            payload=payload,
            created_at=datetime.fromisoformat(_text(fields["created_at"])),
            ttl=timedelta(seconds=float(_text(fields["ttl"]))),
        )

    async def delete(self, key: str) -> bool:
        result = await self._redis.delete(self._prefixed_key(key))
        return result > 0

    async def clear(self) -> None:
        """Clear all entries with our prefix.

        Note: This only clears keys with our prefix, not the entire Redis DB.
        """
        await self._delete_by_pattern(f"{self._key_prefix}:*")

    async def delete_pattern(self, pattern: str) -> int:
        return await self._delete_by_pattern(self._prefixed_key(pattern))

    async def _delete_by_pattern(self, pattern: str) -> int:
        """Delete keys matching a pattern using SCAN.

        Uses SCAN instead of KEYS for production safety.

        Args:
            pattern: Redis glob pattern.

        Returns:
            Number of keys deleted.
        """
        count = 0
        cursor = 0

        while True:
            cursor, keys = await self._redis.scan(cursor, match=pattern, count=100)

            if keys:
                deleted = await self._redis.delete(*keys)
                count += deleted

            if cursor == 0:
                break

        return count

    def _prefixed_key(self, key: str) -> str:
        """Add prefix to key if not already present."""
        if key == self._key_prefix or key.startswith(f"{self._key_prefix}:"):
            return key
        return f"{self._key_prefix}:{key}"

    async def close(self) -> None:
        """Close the Redis connection."""
        await self._redis.aclose()

    async def __aenter__(self) -> "RedisCacheStore":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: type, exc_val: Exception, exc_tb: object) -> None:
        """Async context manager exit."""
        await self.close()


def _text(value: bytes | str) -> str:
    """Hash fields arrive as bytes unless the client decodes responses."""
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return value
