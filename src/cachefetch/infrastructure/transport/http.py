"""HTTP transport implementation using httpx."""

import logging
from typing import Any

import httpx

from cachefetch.core.entities.fetch_config import TransportConfig
from cachefetch.core.errors import (
    FatalTransportError,
    TransportError,
    TransportErrorKind,
    transport_error,
)

logger = logging.getLogger(__name__)


def classify_http_error(error: httpx.HTTPError) -> TransportError:
    """Map an httpx failure onto the transport error taxonomy.

    Timeouts and connection problems are transient, as are 5xx
    responses and other transport faults. 4xx responses and requests
    httpx refuses to send are fatal.
    """
    if isinstance(error, (httpx.UnsupportedProtocol, httpx.LocalProtocolError)):
        kind = TransportErrorKind.MALFORMED_REQUEST
        status_code = None
    elif isinstance(error, httpx.TimeoutException):
        kind = TransportErrorKind.TIMEOUT
        status_code = None
    elif isinstance(error, (httpx.ConnectError, httpx.NetworkError)):
        kind = TransportErrorKind.CONNECTION_FAILED
        status_code = None
    elif isinstance(error, httpx.HTTPStatusError):
        status_code = error.response.status_code
        if 400 <= status_code < 500:
            kind = TransportErrorKind.CLIENT_ERROR
        else:
            kind = TransportErrorKind.OTHER
    else:
        kind = TransportErrorKind.OTHER
        status_code = None

    return transport_error(str(error) or type(error).__name__, kind, status_code)


class HttpTransport:
    """JSON REST transport for resource collections.

    Example:
        config = TransportConfig(base_url="https://api.example.com", api_key="...")
        async with HttpTransport(config) as transport:
            jobs = await transport.get_collection("/job/")
    """

    def __init__(
        self,
        config: TransportConfig,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            config: Base URL, credentials and timeout.
            client: Optional preconfigured httpx client. Owned by the caller.
        """
        self._config = config
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(
            base_url=config.base_url,
            headers=config.headers,
            timeout=config.timeout,
        )

    async def get_collection(
        self,
        path: str,
        params: dict[str, Any] | None = None,
    ) -> list[Any]:
        body = await self._request("GET", path, params=params)
        if not isinstance(body, list):
            raise FatalTransportError(
                f"Expected a JSON array from {path}, got {type(body).__name__}",
                kind=TransportErrorKind.MALFORMED_RESPONSE,
            )
        return body

    async def get_item(self, path: str) -> Any:
        return await self._request("GET", path)

    async def post(self, path: str, body: Any) -> Any:
        return await self._request("POST", path, json=body)

    async def put(self, path: str, body: Any) -> Any:
        return await self._request("PUT", path, json=body)

    async def delete(self, path: str) -> Any:
        return await self._request("DELETE", path)

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = await self.client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPError as e:
            error = classify_http_error(e)
            logger.debug("%s %s failed (%s): %s", method, path, error.kind.value, e)
            raise error from e
        except httpx.InvalidURL as e:
            raise FatalTransportError(
                f"Invalid URL for {method} {path}: {e}",
                kind=TransportErrorKind.MALFORMED_REQUEST,
            ) from e

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise FatalTransportError(
                f"Invalid JSON from {method} {path}: {e}",
                kind=TransportErrorKind.MALFORMED_RESPONSE,
                status_code=response.status_code,
            ) from e

    async def close(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self) -> "HttpTransport":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: type, exc_val: Exception, exc_tb: object) -> None:
        """Async context manager exit."""
        await self.close()
