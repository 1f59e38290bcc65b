"""Fetch configuration entities."""

from dataclasses import dataclass
from datetime import timedelta


@dataclass
class FetchConfig:
    """Resilient fetch configuration.

    The defaults reproduce the field-service policy: five-second
    freshness window, five attempts in total, and exponential backoff
    of 2, 4, 8 and 16 seconds between them.
    """

    enabled: bool = True
    default_ttl: timedelta | None = None
    key_prefix: str = "cachefetch"

    # Retry settings
    max_attempts: int = 5
    backoff_base: float = 2.0  # seconds; wait after attempt n is base * 2**(n-1)
    backoff_max: float | None = None
    retry_uncached: bool = False

    # Concurrency
    coalesce: bool = False

    # Invalidation
    invalidate_on_mutation: bool = True

    def __post_init__(self) -> None:
        """Set default TTL if not provided and validate bounds."""
        if self.default_ttl is None:
            self.default_ttl = timedelta(seconds=5)
        if self.default_ttl <= timedelta(0):
            raise ValueError("default_ttl must be positive")
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.backoff_base < 0:
            raise ValueError("backoff_base must not be negative")


@dataclass
class TransportConfig:
    """HTTP transport configuration."""

    base_url: str
    api_key: str | None = None
    api_key_header: str = "Ocp-Apim-Subscription-Key"
    timeout: float = 30.0

    @property
    def headers(self) -> dict[str, str]:
        """Default request headers."""
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers[self.api_key_header] = self.api_key
        return headers
