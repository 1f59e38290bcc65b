"""Shared plumbing for serializing cache stores."""

from typing import Any

from cachefetch.core.errors import CacheCorruptionError, SerializationError
from cachefetch.core.interfaces.serializer import ISerializer
from cachefetch.infrastructure.serializers.json import JsonSerializer
from cachefetch.utils.clock import Clock, utc_now


class SerializingStore:
    """Base for stores that keep values as serialized payloads.

    Values are encoded on ``put`` and decoded on every ``get``, so
    callers always receive their own copy.
    """

    def __init__(
        self,
        serializer: ISerializer | None = None,
        clock: Clock = utc_now,
    ) -> None:
        self._serializer = serializer or JsonSerializer()
        self._clock = clock

    def _encode(self, value: Any) -> bytes:
        return self._serializer.serialize(value)

    def _decode(self, key: str, payload: bytes) -> Any:
        try:
            return self._serializer.deserialize(payload)
        except SerializationError as e:
            raise CacheCorruptionError(key, str(e)) from e
