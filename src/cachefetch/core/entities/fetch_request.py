"""Fetch request entity."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Generic, TypeVar

T = TypeVar("T")

Fetcher = Callable[[], Awaitable[list[T]]]
Decoder = Callable[[Any], T]


@dataclass(frozen=True)
class FetchRequest(Generic[T]):
    """A single "get me the current list of X" request.

    Attributes:
        key: Stable cache key for the resource and its query parameters.
        fetcher: Zero-argument coroutine function performing the live call.
        ttl: Freshness window for the stored result. ``None`` uses the
            client's configured default; zero stores an entry that is
            stale immediately.
        force: Skip a fresh cache entry and go to the network.
        decode: Rebuilds one item from its cached (JSON) form.
    """

    key: str
    fetcher: Fetcher[T]
    ttl: timedelta | None = None
    force: bool = False
    decode: Decoder[T] | None = None

    def __post_init__(self) -> None:
        if self.ttl is not None and self.ttl < timedelta(0):
            raise ValueError(f"ttl must not be negative, got {self.ttl}")
