"""Pytest configuration for cachefetch tests."""

from datetime import datetime, timedelta, timezone
from typing import Any

import pytest

from cachefetch import (
    InMemoryCacheStore,
    ResilientFetchClient,
    RetryPolicy,
    StaticConnectivityOracle,
)


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


class RecordingSleep:
    """Records backoff delays instead of waiting."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def sleep(self, delay: float) -> None:
        self.delays.append(delay)


class ScriptedFetcher:
    """Raises queued errors in order, then returns ``result``."""

    def __init__(self, result: Any, failures: list[Exception] | None = None) -> None:
        self.result = result
        self.failures = list(failures or [])
        self.calls = 0

    async def __call__(self) -> Any:
        self.calls += 1
        if self.failures:
            raise self.failures.pop(0)
        return self.result


@pytest.fixture(autouse=True)
def reset_decorator_config():
    """Reset decorator configuration before each test."""
    import cachefetch.decorators

    original_client = cachefetch.decorators._client

    yield

    cachefetch.decorators._client = original_client


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sleeper() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def store(clock: FakeClock) -> InMemoryCacheStore:
    return InMemoryCacheStore(maxsize=100, clock=clock)


@pytest.fixture
def connectivity() -> StaticConnectivityOracle:
    return StaticConnectivityOracle(connected=True)


@pytest.fixture
def client(
    store: InMemoryCacheStore,
    connectivity: StaticConnectivityOracle,
    sleeper: RecordingSleep,
) -> ResilientFetchClient:
    """Client with instant backoff so retry timing can be asserted."""
    return ResilientFetchClient(
        store=store,
        connectivity=connectivity,
        retry_policy=RetryPolicy(sleep=sleeper.sleep),
    )


@pytest.fixture
def make_fetcher() -> type[ScriptedFetcher]:
    """Factory for scripted transport calls."""
    return ScriptedFetcher
