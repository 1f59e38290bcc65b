"""Domain entities for cachefetch."""

from cachefetch.core.entities.cache_entry import CacheEntry
from cachefetch.core.entities.cache_key import ResourceKey
from cachefetch.core.entities.fetch_config import FetchConfig, TransportConfig
from cachefetch.core.entities.fetch_request import FetchRequest

__all__ = [
    "CacheEntry",
    "ResourceKey",
    "FetchConfig",
    "TransportConfig",
    "FetchRequest",
]
