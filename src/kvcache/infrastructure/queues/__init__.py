"""Queue implementations."""

from kvcache.infrastructure.queues.redis import RedisQueue

__all__ = ["RedisQueue"]
