"""Core interfaces (Protocol classes) for cachefetch."""

from cachefetch.core.interfaces.cache_store import ICacheStore
from cachefetch.core.interfaces.connectivity import IConnectivityOracle
from cachefetch.core.interfaces.serializer import ISerializer
from cachefetch.core.interfaces.transport import ITransport

__all__ = [
    "ICacheStore",
    "IConnectivityOracle",
    "ISerializer",
    "ITransport",
]
