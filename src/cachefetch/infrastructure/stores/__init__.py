"""Cache store implementations.

``RedisCacheStore`` lives in :mod:`cachefetch.infrastructure.stores.redis`
and needs the ``redis`` extra.
"""

from cachefetch.infrastructure.stores.memory import InMemoryCacheStore
from cachefetch.infrastructure.stores.sqlite import SqliteCacheStore

__all__ = ["InMemoryCacheStore", "SqliteCacheStore"]
