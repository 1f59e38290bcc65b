"""Cache entry entity."""

from dataclasses import dataclass
from datetime import datetime, timedelta

from cachefetch.utils.clock import utc_now


@dataclass(frozen=True)
class CacheEntry:
    """Immutable cache entry value object.

    Holds a serialized payload together with the time it was stored
    and how long it stays fresh. An entry stays present after it
    expires; expiry only marks it stale.
    """

    key: str
    payload: bytes
    created_at: datetime
    ttl: timedelta

    @property
    def expires_at(self) -> datetime:
        """The instant this entry turns stale."""
        return self.created_at + self.ttl

    def is_expired(self, now: datetime | None = None) -> bool:
        """Check whether the entry's TTL has elapsed.

        Args:
            now: Reference time. Defaults to the current UTC time.

        Returns:
            True once ``now - created_at`` reaches ``ttl``.
        """
        reference = now if now is not None else utc_now()
        return reference - self.created_at >= self.ttl

    @classmethod
    def create(
        cls,
        key: str,
        payload: bytes,
        ttl: timedelta,
        now: datetime | None = None,
    ) -> "CacheEntry":
        """Factory method to create a new cache entry.

        Args:
            key: The cache key.
            payload: The serialized value.
            ttl: Time-to-live for the entry.
            now: Creation time. Defaults to the current UTC time.

        Returns:
            A new CacheEntry instance.
        """
        return cls(
            key=key,
            payload=payload,
            created_at=now if now is not None else utc_now(),
            ttl=ttl,
        )
