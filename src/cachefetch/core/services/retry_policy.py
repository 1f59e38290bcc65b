"""Bounded exponential-backoff retry for transport calls."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from cachefetch.core.entities.fetch_config import FetchConfig
from cachefetch.core.errors import TransientTransportError

logger = logging.getLogger(__name__)

T = TypeVar("T")

Sleep = Callable[[float], Awaitable[Any]]


class RetryPolicy:
    """Retries an async operation on transient transport failures.

    The wait after failed attempt ``n`` is ``backoff_base * 2**(n-1)``
    seconds, so the default base of 2 gives 2, 4, 8 and 16 seconds.
    Any other exception propagates on the first failure. When every
    attempt fails the last transient error is re-raised unchanged.

    The policy keeps no state between calls and may be shared by
    concurrent callers. Cancelling the awaiting task stops the loop,
    including while it sleeps.
    """

    def __init__(
        self,
        max_attempts: int = 5,
        backoff_base: float = 2.0,
        backoff_max: float | None = None,
        retry_on: tuple[type[BaseException], ...] = (TransientTransportError,),
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        """Initialize the retry policy.

        Args:
            max_attempts: Total attempts including the first one.
            backoff_base: Wait in seconds after the first failure.
            backoff_max: Optional cap for a single wait.
            retry_on: Exception types considered transient.
            sleep: Coroutine used to wait between attempts.
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._max_attempts = max_attempts
        self._backoff_base = backoff_base
        self._backoff_max = backoff_max
        self._retry_on = retry_on
        self._sleep = sleep

    @classmethod
    def from_config(cls, config: FetchConfig, sleep: Sleep = asyncio.sleep) -> "RetryPolicy":
        """Build a policy from a FetchConfig."""
        return cls(
            max_attempts=config.max_attempts,
            backoff_base=config.backoff_base,
            backoff_max=config.backoff_max,
            sleep=sleep,
        )

    @property
    def max_attempts(self) -> int:
        """Total attempts including the first one."""
        return self._max_attempts

    def delay_for(self, attempt: int) -> float:
        """Return the wait in seconds after failed attempt ``attempt``."""
        delay = self._backoff_base * 2 ** (attempt - 1)
        if self._backoff_max is not None:
            delay = min(delay, self._backoff_max)
        return delay

    async def execute(self, operation: Callable[[], Awaitable[T]]) -> T:
        """Run ``operation`` until it succeeds or the policy gives up.

        Args:
            operation: Zero-argument coroutine function to call.

        Returns:
            The operation's result.

        Raises:
            TransientTransportError: The last failure after all attempts.
            Exception: Any non-transient failure, on first occurrence.
        """
        wait_kwargs: dict[str, float] = {"multiplier": self._backoff_base}
        if self._backoff_max is not None:
            wait_kwargs["max"] = self._backoff_max

        retrying = AsyncRetrying(
            stop=stop_after_attempt(self._max_attempts),
            wait=wait_exponential(**wait_kwargs),
            retry=retry_if_exception_type(self._retry_on),
            before_sleep=self._log_retry,
            sleep=self._sleep,
            reraise=True,
        )

        async for attempt in retrying:
            with attempt:
                result = await operation()
        return result

    def _log_retry(self, retry_state: RetryCallState) -> None:
        """Log a failed attempt before sleeping."""
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        wait = retry_state.next_action.sleep if retry_state.next_action else 0.0
        logger.warning(
            "Transient transport failure (attempt %d/%d), retrying in %.1fs: %s",
            retry_state.attempt_number,
            self._max_attempts,
            wait,
            exc,
        )
