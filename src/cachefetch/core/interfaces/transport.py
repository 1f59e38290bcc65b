"""Transport interface."""

from typing import Any, Protocol


class ITransport(Protocol):
    """One remote API performing requests against resource paths.

    Implementations raise ``TransientTransportError`` for timeouts,
    dropped connections and generic faults, and ``FatalTransportError``
    for client rejections.
    """

    async def get_collection(
        self,
        path: str,
        params: dict[str, Any] | None = None,
    ) -> list[Any]:
        """Fetch a collection of items."""
        ...

    async def get_item(self, path: str) -> Any:
        """Fetch a single item."""
        ...

    async def post(self, path: str, body: Any) -> Any:
        """Create an item and return the stored representation."""
        ...

    async def put(self, path: str, body: Any) -> Any:
        """Replace an item and return the stored representation."""
        ...

    async def delete(self, path: str) -> Any:
        """Delete an item and return the removed representation."""
        ...
