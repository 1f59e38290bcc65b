"""Connectivity oracle driven by the host platform."""


class StaticConnectivityOracle:
    """Holds a reachability flag that the embedding app keeps current.

    Mobile and desktop shells usually get connectivity change callbacks
    from the OS; wire those to :meth:`set_connected`.
    """

    def __init__(self, connected: bool = True) -> None:
        self._connected = connected

    def is_connected(self) -> bool:
        return self._connected

    def set_connected(self, connected: bool) -> None:
        self._connected = connected
