"""Error taxonomy for resilient fetches."""

from enum import Enum


class TransportErrorKind(str, Enum):
    """Classification of a failed transport call."""

    TIMEOUT = "timeout"
    CONNECTION_FAILED = "connection_failed"
    CLIENT_ERROR = "client_error"
    MALFORMED_REQUEST = "malformed_request"
    MALFORMED_RESPONSE = "malformed_response"
    OTHER = "other"

    @property
    def is_transient(self) -> bool:
        """Whether a failure of this kind may succeed on retry."""
        return self not in _FATAL_KINDS


_FATAL_KINDS = frozenset(
    {
        TransportErrorKind.CLIENT_ERROR,
        TransportErrorKind.MALFORMED_REQUEST,
        TransportErrorKind.MALFORMED_RESPONSE,
    }
)


class FetchError(Exception):
    """Base class for every error raised by cachefetch."""

    pass


class TransportError(FetchError):
    """A remote call failed.

    Use :func:`transport_error` to build the right subclass for a kind.
    """

    def __init__(
        self,
        message: str,
        kind: TransportErrorKind = TransportErrorKind.OTHER,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.status_code = status_code


class TransientTransportError(TransportError):
    """Timeout, dropped connection or generic transport fault. Retried."""

    pass


class FatalTransportError(TransportError):
    """Malformed request or client rejection. Never retried."""

    def __init__(
        self,
        message: str,
        kind: TransportErrorKind = TransportErrorKind.CLIENT_ERROR,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message, kind=kind, status_code=status_code)


class UnreachableNoDataError(TransientTransportError):
    """Device is offline and nothing is cached for the requested key."""

    def __init__(self, key: str) -> None:
        super().__init__(
            f"Network unreachable and no cached data for '{key}'",
            kind=TransportErrorKind.CONNECTION_FAILED,
        )
        self.key = key


class CacheCorruptionError(FetchError):
    """A stored payload cannot be decoded to the expected type."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(f"Cached payload for '{key}' is unreadable: {reason}")
        self.key = key
        self.reason = reason


class SerializationError(FetchError):
    """Raised when serialization or deserialization fails."""

    pass


def transport_error(
    message: str,
    kind: TransportErrorKind,
    status_code: int | None = None,
) -> TransportError:
    """Build a transient or fatal transport error for ``kind``."""
    if kind.is_transient:
        return TransientTransportError(message, kind=kind, status_code=status_code)
    return FatalTransportError(message, kind=kind, status_code=status_code)
