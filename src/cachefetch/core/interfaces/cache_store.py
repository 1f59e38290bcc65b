"""Cache store interface."""

from datetime import timedelta
from typing import Any, Protocol


class ICacheStore(Protocol):
    """Contract for cache stores used by ResilientFetchClient.

    Entries are never removed when they expire; expiry is evaluated
    lazily on read. Methods are async so that durable and networked
    stores fit the same contract as the in-memory one.
    """

    async def exists(self, key: str) -> bool:
        """Check if an entry is present, fresh or stale.

        Args:
            key: The cache key to check.

        Returns:
            True if the key exists, False otherwise.
        """
        ...

    async def is_expired(self, key: str) -> bool:
        """Check if an entry is stale.

        Args:
            key: The cache key to check.

        Returns:
            True if the entry's TTL has elapsed, and also True when
            the key is absent.
        """
        ...

    async def get(self, key: str) -> Any:
        """Return the last stored value regardless of freshness.

        Each call returns a freshly decoded copy.

        Args:
            key: The cache key to read.

        Returns:
            The stored value.

        Raises:
            KeyError: If the key is absent.
            CacheCorruptionError: If the payload cannot be decoded.
        """
        ...

    async def put(self, key: str, value: Any, ttl: timedelta) -> None:
        """Store a value, overwriting any entry and resetting its age.

        Args:
            key: The cache key.
            value: The value to store.
            ttl: Freshness window for the entry.
        """
        ...

    async def delete(self, key: str) -> bool:
        """Delete an entry.

        Args:
            key: The cache key to delete.

        Returns:
            True if the key existed and was deleted, False otherwise.
        """
        ...

    async def delete_pattern(self, pattern: str) -> int:
        """Delete keys matching pattern.

        Args:
            pattern: Glob-style pattern to match keys.

        Returns:
            Number of keys deleted.
        """
        ...

    async def clear(self) -> None:
        """Remove every entry."""
        ...
