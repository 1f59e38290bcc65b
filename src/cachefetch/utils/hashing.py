"""Hashing utilities for cache key generation."""

import hashlib
import json
from typing import Any


def hash_value(value: Any) -> str:
    """Create a deterministic hash of a value.

    Args:
        value: Any JSON-serializable value.

    Returns:
        A hexadecimal hash string (first 16 chars of SHA-256).
    """
    if value is None:
        return "none"

    # Normalize to JSON with sorted keys for determinism
    normalized = json.dumps(value, sort_keys=True, default=str)
    return hashlib.sha256(normalized.encode()).hexdigest()[:16]


def normalize_params(params: dict[str, Any] | None) -> dict[str, Any]:
    """Drop ``None`` values so omitted and null parameters share a key.

    Args:
        params: Query parameters for a collection request.

    Returns:
        A new dict without ``None`` values.
    """
    if not params:
        return {}
    return {name: value for name, value in params.items() if value is not None}
