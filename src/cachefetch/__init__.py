"""cachefetch - resilient cached fetching of remote collections.

Fetches lists of resources (jobs, parts, ...) from a REST backend with
transparent caching, connectivity-aware fallback to the last known data
while offline, and bounded exponential-backoff retry on transient
failures.

Example:
    from cachefetch import (
        HttpTransport,
        ResilientFetchClient,
        ResourceService,
        SqliteCacheStore,
        StaticConnectivityOracle,
        TransportConfig,
    )

    transport = HttpTransport(
        TransportConfig(base_url="https://api.example.com", api_key="...")
    )
    client = ResilientFetchClient(
        store=SqliteCacheStore("~/.cache/fieldservice/cache.db"),
        connectivity=StaticConnectivityOracle(),
    )
    jobs = ResourceService("job", transport, client)

    # Served from cache for five seconds, and whenever offline
    current = await jobs.fetch_all()

    # Pull-to-refresh
    current = await jobs.fetch_all(force=True)

    # Search is never cached
    matches = await jobs.search("boiler")

Errors:
    Failures surface as subclasses of ``FetchError``:
    ``TransientTransportError`` after retries are exhausted,
    ``FatalTransportError`` immediately, and ``UnreachableNoDataError``
    when offline with nothing cached.
"""

from cachefetch.core.entities import (
    CacheEntry,
    FetchConfig,
    FetchRequest,
    ResourceKey,
    TransportConfig,
)
from cachefetch.core.errors import (
    CacheCorruptionError,
    FatalTransportError,
    FetchError,
    SerializationError,
    TransientTransportError,
    TransportError,
    TransportErrorKind,
    UnreachableNoDataError,
)
from cachefetch.core.interfaces import (
    ICacheStore,
    IConnectivityOracle,
    ISerializer,
    ITransport,
)
from cachefetch.core.services import ResilientFetchClient, ResourceService, RetryPolicy
from cachefetch.decorators import configure, invalidates, resilient
from cachefetch.infrastructure import (
    HttpTransport,
    InMemoryCacheStore,
    JsonSerializer,
    ProbeConnectivityOracle,
    SqliteCacheStore,
    StaticConnectivityOracle,
)

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Core entities
    "CacheEntry",
    "FetchConfig",
    "FetchRequest",
    "ResourceKey",
    "TransportConfig",
    # Errors
    "FetchError",
    "TransportError",
    "TransportErrorKind",
    "TransientTransportError",
    "FatalTransportError",
    "UnreachableNoDataError",
    "CacheCorruptionError",
    "SerializationError",
    # Core interfaces
    "ICacheStore",
    "IConnectivityOracle",
    "ISerializer",
    "ITransport",
    # Core services
    "ResilientFetchClient",
    "ResourceService",
    "RetryPolicy",
    # Infrastructure implementations
    "InMemoryCacheStore",
    "SqliteCacheStore",
    "JsonSerializer",
    "StaticConnectivityOracle",
    "ProbeConnectivityOracle",
    "HttpTransport",
    # Decorators
    "resilient",
    "invalidates",
    "configure",
]
