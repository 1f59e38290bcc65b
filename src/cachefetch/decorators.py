"""Decorators that route async loaders through a ResilientFetchClient.

Call :func:`configure` once at startup, then decorate collection
loaders with :func:`resilient` and mutations with :func:`invalidates`.
"""

import functools
import inspect
import re
from collections.abc import Callable
from datetime import timedelta
from typing import Any, TypeVar

from cachefetch.core.entities.cache_key import ResourceKey
from cachefetch.core.services.fetch_client import ResilientFetchClient

F = TypeVar("F", bound=Callable[..., Any])

# Module-level client reference
_client: ResilientFetchClient | None = None


def configure(client: ResilientFetchClient) -> None:
    """Configure the client used by the decorators.

    Must be called before decorated functions are awaited.

    Args:
        client: The resilient fetch client to use.

    Example:
        client = ResilientFetchClient(
            store=SqliteCacheStore("cache.db"),
            connectivity=StaticConnectivityOracle(),
        )
        configure(client)
    """
    global _client
    _client = client


def get_client() -> ResilientFetchClient | None:
    """Get the configured client.

    Returns:
        The configured client, or None if not configured.
    """
    return _client


def resilient(
    key: str | Callable[..., str] | None = None,
    ttl: timedelta | None = None,
    decode: Callable[[Any], Any] | None = None,
) -> Callable[[F], F]:
    """Decorator turning an async collection loader into a resilient fetch.

    The wrapped function accepts an extra keyword-only ``force`` argument
    that bypasses a fresh cache entry.

    Args:
        key: Cache key, or function receiving the call's arguments and
            returning one. Strings support ``{arg_name}`` interpolation.
            Defaults to the function name plus its arguments.
        ttl: Freshness window. Uses the client's default if None.
        decode: Rebuilds one item from its cached form.

    Returns:
        Decorated function.

    Example:
        @resilient(key="parts:{category}", ttl=timedelta(seconds=30))
        async def load_parts(category: str) -> list[Part]:
            return await api.get_parts(category)

        parts = await load_parts(category="valves", force=True)
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args: Any, force: bool = False, **kwargs: Any) -> Any:
            client = _require_client()
            cache_key = _build_cache_key(func, args, kwargs, key, client)

            async def fetcher() -> Any:
                return await func(*args, **kwargs)

            return await client.fetch(
                cache_key,
                fetcher,
                ttl=ttl,
                force=force,
                decode=decode,
            )

        return wrapper  # type: ignore

    return decorator


def invalidates(
    keys: list[str],
) -> Callable[[F], F]:
    """Decorator for invalidating cached collections after a mutation.

    Executes the decorated function once and, if it succeeds, deletes
    cache entries matching each key pattern.

    Args:
        keys: Key glob patterns. Supports {arg_name} interpolation.

    Returns:
        Decorated function.

    Example:
        @invalidates(keys=["parts:{category}", "cachefetch:part*"])
        async def add_part(category: str, part: Part) -> Part:
            return await api.create_part(part)
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            client = _require_client()
            bound = _bind_arguments(func, args, kwargs)
            patterns = [_interpolate_string(pattern, bound) for pattern in keys]

            async def operation() -> Any:
                return await func(*args, **kwargs)

            return await client.mutate(operation, invalidates=patterns)

        return wrapper  # type: ignore

    return decorator


def _require_client() -> ResilientFetchClient:
    if _client is None:
        raise RuntimeError("Client not configured. Call configure() first.")
    return _client


def _build_cache_key(
    func: Callable[..., Any],
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
    custom_key: str | Callable[..., str] | None,
    client: ResilientFetchClient,
) -> str:
    """Build cache key for a function call.

    Args:
        func: The function being wrapped.
        args: Positional arguments.
        kwargs: Keyword arguments.
        custom_key: Custom key or key builder function.
        client: Client whose key prefix is used for default keys.

    Returns:
        The cache key string.
    """
    if custom_key is not None:
        if callable(custom_key):
            return custom_key(*args, **kwargs)
        return _interpolate_string(custom_key, _bind_arguments(func, args, kwargs))

    # Build default key from function name and bound arguments
    return str(
        ResourceKey(
            resource=func.__name__,
            params=_bind_arguments(func, args, kwargs),
            prefix=client.config.key_prefix,
        )
    )


def _bind_arguments(
    func: Callable[..., Any],
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
) -> dict[str, Any]:
    """Map positional and keyword arguments onto parameter names."""
    try:
        bound = inspect.signature(func).bind_partial(*args, **kwargs)
    except (TypeError, ValueError):
        return dict(kwargs)
    bound.apply_defaults()
    return dict(bound.arguments)


def _interpolate_string(
    template: str,
    arguments: dict[str, Any],
) -> str:
    """Interpolate {arg_name} placeholders in string.

    Args:
        template: String with {arg_name} placeholders.
        arguments: Bound arguments for interpolation.

    Returns:
        Interpolated string.
    """
    pattern = r"\{(\w+)\}"

    def replacer(match: re.Match[str]) -> str:
        name = match.group(1)
        if name in arguments:
            return str(arguments[name])
        return match.group(0)  # Keep original if not found

    return re.sub(pattern, replacer, template)
