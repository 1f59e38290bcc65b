"""Connectivity oracle backed by an HTTP probe."""

import logging
from datetime import datetime

import httpx

from cachefetch.utils.clock import Clock, utc_now

logger = logging.getLogger(__name__)


class ProbeConnectivityOracle:
    """Reports the outcome of the most recent reachability probe.

    :meth:`is_connected` never does I/O; it reads the last result of
    :meth:`refresh`. Until the first probe completes the network is
    assumed reachable, so a wrong guess only costs a failed live fetch.
    """

    def __init__(
        self,
        url: str,
        timeout: float = 3.0,
        client: httpx.AsyncClient | None = None,
        clock: Clock = utc_now,
    ) -> None:
        """Initialize the probe.

        Args:
            url: Address requested with HEAD; any HTTP response counts as reachable.
            timeout: Probe timeout in seconds.
            client: Optional shared httpx client.
            clock: Source of the current time.
        """
        self._url = url
        self._timeout = timeout
        self._client = client
        self._clock = clock
        self._connected: bool | None = None
        self._checked_at: datetime | None = None

    @property
    def checked_at(self) -> datetime | None:
        """When the last probe finished, if ever."""
        return self._checked_at

    def is_connected(self) -> bool:
        if self._connected is None:
            return True
        return self._connected

    async def refresh(self) -> bool:
        """Probe the network and record the result.

        Returns:
            Whether the probe reached the server.
        """
        try:
            if self._client is not None:
                await self._client.head(self._url, timeout=self._timeout)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    await client.head(self._url)
            connected = True
        except httpx.HTTPError as e:
            logger.debug("Connectivity probe to %s failed: %s", self._url, e)
            connected = False

        if connected != self._connected:
            logger.info("Connectivity changed: %s", "online" if connected else "offline")
        self._connected = connected
        self._checked_at = self._clock()
        return connected
