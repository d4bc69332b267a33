"""Pytest configuration for kvcache tests."""

import fakeredis
import pytest

from kvcache.infrastructure.backends.memory import InMemoryCacheBackend
from kvcache.infrastructure.backends.redis import RedisCacheBackend


class FakeClock:
    """Manually advanced clock for deterministic expiry tests."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    """Create a fake clock starting at an arbitrary instant."""
    return FakeClock()


@pytest.fixture
def memory_backend(clock: FakeClock) -> InMemoryCacheBackend:
    """Create an in-memory backend driven by the fake clock."""
    return InMemoryCacheBackend(clock=clock)


@pytest.fixture
def redis_client() -> fakeredis.FakeAsyncRedis:
    """Create an isolated fake Redis client."""
    return fakeredis.FakeAsyncRedis(server=fakeredis.FakeServer())


@pytest.fixture
def redis_backend(redis_client: fakeredis.FakeAsyncRedis) -> RedisCacheBackend:
    """Create a Redis backend over the fake client."""
    return RedisCacheBackend(redis_client, key_prefix="test")
