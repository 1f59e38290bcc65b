"""Infrastructure layer implementations for cachefetch."""

from cachefetch.infrastructure.connectivity import (
    ProbeConnectivityOracle,
    StaticConnectivityOracle,
)
from cachefetch.infrastructure.serializers import JsonSerializer
from cachefetch.infrastructure.stores import InMemoryCacheStore, SqliteCacheStore
from cachefetch.infrastructure.transport import HttpTransport

__all__ = [
    "InMemoryCacheStore",
    "SqliteCacheStore",
    "JsonSerializer",
    "StaticConnectivityOracle",
    "ProbeConnectivityOracle",
    "HttpTransport",
]
