"""Resilient fetch client - cache, connectivity and retry orchestration."""

import asyncio
import copy
import logging
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, TypeVar

from cachefetch.core.entities.cache_key import ResourceKey
from cachefetch.core.entities.fetch_config import FetchConfig
from cachefetch.core.entities.fetch_request import Decoder, Fetcher, FetchRequest
from cachefetch.core.errors import (
    CacheCorruptionError,
    TransportError,
    UnreachableNoDataError,
)
from cachefetch.core.interfaces.cache_store import ICacheStore
from cachefetch.core.interfaces.connectivity import IConnectivityOracle
from cachefetch.core.services.retry_policy import RetryPolicy

logger = logging.getLogger(__name__)

T = TypeVar("T")

_MISSING = object()


@dataclass
class _InFlight:
    task: "asyncio.Future[Any]"
    waiters: int = 0


class ResilientFetchClient:
    """Answers "get me the current list of X" under flaky connectivity.

    Decision order for :meth:`fetch`, first match wins:

    1. Offline with a cached entry: return the cached value, no network.
    2. Cached entry still fresh and ``force`` not set: return it.
    3. Otherwise call the transport through the retry policy, store the
       result with the request's TTL and return it. A failed refresh
       raises; it never falls back to stale data.

    Offline with nothing cached raises :class:`UnreachableNoDataError`
    without touching the network.
    """

    def __init__(
        self,
        store: ICacheStore,
        connectivity: IConnectivityOracle,
        retry_policy: RetryPolicy | None = None,
        config: FetchConfig | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            store: Where fetched collections are kept between calls.
            connectivity: Reports whether the network is reachable.
            retry_policy: Wraps live calls. Built from ``config`` if omitted.
            config: Optional configuration. Uses defaults if not provided.
        """
        self._store = store
        self._connectivity = connectivity
        self._config = config or FetchConfig()
        self._retry = retry_policy or RetryPolicy.from_config(self._config)
        self._in_flight: dict[str, _InFlight] = {}

        # Statistics
        self._hits = 0
        self._offline_hits = 0
        self._misses = 0
        self._live_fetches = 0
        self._failures = 0

    @property
    def config(self) -> FetchConfig:
        """Get the fetch configuration."""
        return self._config

    @property
    def store(self) -> ICacheStore:
        """Get the cache store."""
        return self._store

    @property
    def stats(self) -> dict[str, int]:
        """Get fetch statistics.

        Returns:
            Dictionary with cache hits, offline hits, misses, successful
            live fetches and failed live fetches.
        """
        return {
            "hits": self._hits,
            "offline_hits": self._offline_hits,
            "misses": self._misses,
            "live_fetches": self._live_fetches,
            "failures": self._failures,
        }

    async def fetch(
        self,
        key: str | ResourceKey,
        fetcher: Fetcher[T],
        *,
        ttl: timedelta | None = None,
        force: bool = False,
        decode: Decoder[T] | None = None,
    ) -> list[T]:
        """Fetch the collection stored under ``key``.

        Args:
            key: Cache key for the resource and its query parameters.
            fetcher: Zero-argument coroutine function doing the live call.
            ttl: Freshness window for a newly fetched result. Zero means
                the stored copy only serves offline reads.
            force: Bypass a fresh cache entry when the network is up.
            decode: Rebuilds one item from its cached form.

        Returns:
            The collection, owned by the caller.

        Raises:
            UnreachableNoDataError: Offline and nothing cached.
            TransientTransportError: Live fetch failed on every attempt.
            FatalTransportError: Live fetch was rejected.
            ValueError: ``ttl`` is negative.
        """
        request = FetchRequest(
            key=str(key),
            fetcher=fetcher,
            ttl=ttl,
            force=force,
            decode=decode,
        )
        return await self.execute(request)

    async def execute(self, request: FetchRequest[T]) -> list[T]:
        """Run a prepared FetchRequest. See :meth:`fetch`."""
        if not self._config.enabled:
            return await self._retry.execute(request.fetcher)

        key = request.key

        if not self._connectivity.is_connected():
            cached = await self._read_cached(request)
            if cached is _MISSING:
                logger.debug("Offline with no usable cache for %s", key)
                raise UnreachableNoDataError(key)
            self._offline_hits += 1
            logger.debug("Offline, serving cached %s", key)
            return cached  # type: ignore[return-value]

        if (
            not request.force
            and await self._store.exists(key)
            and not await self._store.is_expired(key)
        ):
            cached = await self._read_cached(request)
            if cached is not _MISSING:
                self._hits += 1
                logger.debug("Fresh cache hit for %s", key)
                return cached  # type: ignore[return-value]

        self._misses += 1
        if self._config.coalesce:
            return await self._coalesced(request)
        return await self._refresh(request)

    async def fetch_now(self, fetcher: Callable[[], Awaitable[T]]) -> T:
        """Call the transport directly, bypassing the cache.

        Used for search and other unbounded queries. Goes through the
        retry policy only when ``config.retry_uncached`` is set.
        """
        if self._config.retry_uncached:
            return await self._retry.execute(fetcher)
        return await fetcher()

    async def mutate(
        self,
        operation: Callable[[], Awaitable[T]],
        invalidates: Iterable[str] = (),
    ) -> T:
        """Run a create/update/delete call and invalidate stale collections.

        The operation runs once; mutations are not retried. Cache
        entries matching ``invalidates`` (glob patterns) are deleted only
        after it succeeds.

        Args:
            operation: Zero-argument coroutine function for the mutation.
            invalidates: Key patterns whose entries become stale.

        Returns:
            The operation's result.
        """
        result = await operation()
        for pattern in invalidates:
            removed = await self._store.delete_pattern(pattern)
            logger.debug("Invalidated %d entries matching %s", removed, pattern)
        return result

    async def invalidate(self, key: str | ResourceKey) -> bool:
        """Delete one cache entry."""
        return await self._store.delete(str(key))

    async def _refresh(self, request: FetchRequest[T]) -> list[T]:
        """Fetch live through the retry policy and store the result."""
        try:
            items = await self._retry.execute(request.fetcher)
        except TransportError:
            self._failures += 1
            raise

        self._live_fetches += 1
        ttl = request.ttl if request.ttl is not None else self._config.default_ttl
        await self._store.put(request.key, items, ttl)  # type: ignore[arg-type]
        return items

    async def _coalesced(self, request: FetchRequest[T]) -> list[T]:
        """Share one live fetch between concurrent callers of a key."""
        key = request.key
        flight = self._in_flight.get(key)
        if flight is None:
            flight = _InFlight(task=asyncio.ensure_future(self._refresh(request)))
            self._in_flight[key] = flight

            def _forget(_: "asyncio.Future[Any]", flight: _InFlight = flight) -> None:
                if self._in_flight.get(key) is flight:
                    del self._in_flight[key]

            flight.task.add_done_callback(_forget)
        else:
            logger.debug("Joining in-flight fetch for %s", key)

        flight.waiters += 1
        try:
            items = await asyncio.shield(flight.task)
        except asyncio.CancelledError:
            # Last waiter gone: stop retrying on nobody's behalf.
            if flight.waiters == 1 and not flight.task.done():
                flight.task.cancel()
            raise
        finally:
            flight.waiters -= 1
        # Each caller owns its result, as with a cache read.
        return copy.deepcopy(items)

    async def _read_cached(self, request: FetchRequest[T]) -> Any:
        """Read and decode the cached collection.

        Returns:
            The decoded list, or ``_MISSING`` when absent or unreadable.
        """
        key = request.key
        try:
            value = await self._store.get(key)
        except KeyError:
            return _MISSING
        except CacheCorruptionError as e:
            logger.warning("%s; treating as cache miss", e)
            return _MISSING

        if not isinstance(value, list):
            logger.warning(
                "%s; treating as cache miss",
                CacheCorruptionError(key, f"expected a list, got {type(value).__name__}"),
            )
            return _MISSING

        if request.decode is None:
            return value

        try:
            return [request.decode(item) for item in value]
        except (TypeError, ValueError, KeyError) as e:
            logger.warning("%s; treating as cache miss", CacheCorruptionError(key, str(e)))
            return _MISSING
