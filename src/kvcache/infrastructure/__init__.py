"""Infrastructure layer implementations for kvcache."""

from kvcache.infrastructure.backends import InMemoryCacheBackend, RedisCacheBackend
from kvcache.infrastructure.key_codecs import DefaultKeyCodec
from kvcache.infrastructure.queues import RedisQueue

__all__ = [
    "InMemoryCacheBackend",
    "RedisCacheBackend",
    "DefaultKeyCodec",
    "RedisQueue",
]
