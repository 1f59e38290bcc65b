"""Serializer implementations."""

from cachefetch.infrastructure.serializers.json import JsonSerializer

__all__ = ["JsonSerializer"]
