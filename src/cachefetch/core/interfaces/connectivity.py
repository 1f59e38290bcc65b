"""Connectivity oracle interface."""

from typing import Protocol


class IConnectivityOracle(Protocol):
    """Reports best-effort network reachability.

    ``is_connected`` is synchronous, never blocks and never raises.
    Implementations answer True when reachability is unknown.
    """

    def is_connected(self) -> bool:
        """Return whether the network is currently reachable."""
        ...
