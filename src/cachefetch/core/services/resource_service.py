"""Per-resource data access built on the resilient fetch client."""

import dataclasses
from collections.abc import Callable
from datetime import timedelta
from typing import Any, Generic, TypeVar

from cachefetch.core.entities.cache_key import ResourceKey
from cachefetch.core.errors import FatalTransportError, TransportErrorKind
from cachefetch.core.interfaces.transport import ITransport
from cachefetch.core.services.fetch_client import ResilientFetchClient

T = TypeVar("T")


def default_encode(item: Any) -> Any:
    """Turn a dataclass into a request body; pass anything else through."""
    if dataclasses.is_dataclass(item) and not isinstance(item, type):
        return dataclasses.asdict(item)
    return item


class ResourceService(Generic[T]):
    """CRUD and search for one resource kind, e.g. jobs or parts.

    Listing goes through :class:`ResilientFetchClient` and is cached per
    query parameters. Single-item reads and search always hit the
    transport. Successful mutations invalidate every cached listing of
    the resource when ``invalidate_on_mutation`` is enabled.

    Example:
        jobs = ResourceService("job", transport, client, decode=Job.from_dict)
        current = await jobs.fetch_all()
        matches = await jobs.search("boiler")
    """

    def __init__(
        self,
        resource: str,
        transport: ITransport,
        client: ResilientFetchClient,
        plural: str | None = None,
        decode: Callable[[Any], T] | None = None,
        encode: Callable[[T], Any] = default_encode,
        ttl: timedelta | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            resource: Singular resource name, used in paths and keys.
            transport: Performs the HTTP calls.
            client: Resilient fetch client shared by all resources.
            plural: Plural name for the search path. Defaults to ``resource + "s"``.
            decode: Builds an item from its JSON form.
            encode: Builds a request body from an item.
            ttl: Freshness window for listings. Defaults to the client's.
        """
        self._resource = resource
        self._plural = plural or f"{resource}s"
        self._transport = transport
        self._client = client
        self._decode = decode
        self._encode = encode
        self._ttl = ttl

    @property
    def resource(self) -> str:
        """The singular resource name."""
        return self._resource

    @property
    def collection_path(self) -> str:
        return f"/{self._resource}/"

    @property
    def search_path(self) -> str:
        return f"/search/{self._plural}/"

    def item_path(self, item_id: str) -> str:
        return f"/{self._resource}/{item_id}/"

    def key(self, params: dict[str, Any] | None = None) -> ResourceKey:
        """Cache key for a listing with ``params``."""
        return ResourceKey(
            resource=self._resource,
            params=params or {},
            prefix=self._client.config.key_prefix,
        )

    async def fetch_all(
        self,
        params: dict[str, Any] | None = None,
        force: bool = False,
    ) -> list[T]:
        """List items, served from cache when allowed.

        Args:
            params: Optional query parameters.
            force: Skip a fresh cache entry when the network is up.
        """

        async def fetch_collection() -> list[T]:
            raw = await self._transport.get_collection(self.collection_path, params)
            return self._decode_all(raw)

        return await self._client.fetch(
            self.key(params),
            fetch_collection,
            ttl=self._ttl,
            force=force,
            decode=self._decode,
        )

    async def get(self, item_id: str) -> T:
        """Fetch one item from the transport."""
        raw = await self._transport.get_item(self.item_path(item_id))
        return self._decode_one(raw)

    async def search(self, keyword: str) -> list[T]:
        """Search items by keyword. Never cached."""

        async def search_collection() -> list[T]:
            raw = await self._transport.get_collection(
                self.search_path, {"keyword": keyword}
            )
            return self._decode_all(raw)

        return await self._client.fetch_now(search_collection)

    async def create(self, item: T) -> T:
        """Create an item."""

        async def post() -> Any:
            return await self._transport.post(self.collection_path, self._encode(item))

        return self._decode_one(await self._mutate(post))

    async def update(self, item_id: str, item: T) -> T:
        """Replace an item."""

        async def put() -> Any:
            return await self._transport.put(self.item_path(item_id), self._encode(item))

        return self._decode_one(await self._mutate(put))

    async def delete(self, item_id: str) -> T:
        """Delete an item."""

        async def delete() -> Any:
            return await self._transport.delete(self.item_path(item_id))

        return self._decode_one(await self._mutate(delete))

    async def _mutate(self, operation: Callable[[], Any]) -> Any:
        patterns: list[str] = []
        if self._client.config.invalidate_on_mutation:
            patterns = self.key().invalidation_patterns()
        return await self._client.mutate(operation, invalidates=patterns)

    def _decode_one(self, raw: Any) -> T:
        if self._decode is None:
            return raw  # type: ignore[no-any-return]
        try:
            return self._decode(raw)
        except (TypeError, ValueError, KeyError) as e:
            raise FatalTransportError(
                f"Malformed {self._resource} in response: {e}",
                kind=TransportErrorKind.MALFORMED_RESPONSE,
            ) from e

    def _decode_all(self, raw: Any) -> list[T]:
        if not isinstance(raw, list):
            raise FatalTransportError(
                f"Expected a list of {self._plural}, got {type(raw).__name__}",
                kind=TransportErrorKind.MALFORMED_RESPONSE,
            )
        return [self._decode_one(item) for item in raw]
