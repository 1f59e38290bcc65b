"""Connectivity oracle implementations."""

from cachefetch.infrastructure.connectivity.probe import ProbeConnectivityOracle
from cachefetch.infrastructure.connectivity.static import StaticConnectivityOracle

__all__ = ["ProbeConnectivityOracle", "StaticConnectivityOracle"]
