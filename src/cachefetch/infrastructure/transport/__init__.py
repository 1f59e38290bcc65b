"""Transport implementations."""

from cachefetch.infrastructure.transport.http import HttpTransport, classify_http_error

__all__ = ["HttpTransport", "classify_http_error"]
