"""Resource key value object."""

from dataclasses import dataclass, field
from typing import Any

from cachefetch.utils.hashing import hash_value, normalize_params


@dataclass(frozen=True)
class ResourceKey:
    """Stable cache key for a logical resource and its query parameters.

    Two keys built from the same resource and equal parameters render
    to the same string regardless of parameter order.
    """

    resource: str
    params: dict[str, Any] = field(default_factory=dict)
    prefix: str = "cachefetch"

    def __str__(self) -> str:
        """Return the full cache key string."""
        parts = [self.prefix, self.resource]
        params = normalize_params(self.params)
        if params:
            parts.append(f"p:{hash_value(params)}")
        return ":".join(parts)

    def __hash__(self) -> int:
        return hash(str(self))

    def invalidation_patterns(self) -> list[str]:
        """Glob patterns matching this resource under any parameters."""
        base = f"{self.prefix}:{self.resource}"
        return [base, f"{base}:*"]
