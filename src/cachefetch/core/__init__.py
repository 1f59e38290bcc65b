"""Core domain layer for cachefetch."""

from cachefetch.core.entities import (
    CacheEntry,
    FetchConfig,
    FetchRequest,
    ResourceKey,
    TransportConfig,
)
from cachefetch.core.interfaces import (
    ICacheStore,
    IConnectivityOracle,
    ISerializer,
    ITransport,
)
from cachefetch.core.services import ResilientFetchClient, ResourceService, RetryPolicy

__all__ = [
    # Entities
    "CacheEntry",
    "FetchConfig",
    "FetchRequest",
    "ResourceKey",
    "TransportConfig",
    # Interfaces
    "ICacheStore",
    "IConnectivityOracle",
    "ISerializer",
    "ITransport",
    # Services
    "ResilientFetchClient",
    "ResourceService",
    "RetryPolicy",
]
