"""Cache backend implementations."""

from kvcache.infrastructure.backends.memory import InMemoryCacheBackend
from kvcache.infrastructure.backends.redis import RedisCacheBackend

__all__ = ["InMemoryCacheBackend", "RedisCacheBackend"]
