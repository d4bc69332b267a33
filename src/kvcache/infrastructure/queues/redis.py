"""Redis list-backed queue."""

from typing import Any

import redis.asyncio as redis

from kvcache.core.entities.cache_value import ensure_cache_value
from kvcache.core.entities.caster import Caster


class RedisQueue:
    """Nil-safe queue stored in a Redis list.

    Items are pushed to the head of the list and come back as the raw
    bytes Redis holds, so the client must not decode responses. ``pull`` takes from the
    head (newest first) and ``pop`` from the tail (oldest first). An
    empty queue yields None rather than an error.
    """

    def __init__(self, name: str, client: redis.Redis) -> None:
        """Initialize the queue.

        Args:
            name: Redis key of the backing list.
            client: The async Redis client.
        """
        self._name = name
        self._redis = client

    @property
    def name(self) -> str:
        return self._name

    async def push(self, value: Any) -> None:
        """Push a value onto the head of the queue."""
        ensure_cache_value(value)
        await self._redis.lpush(self._name, value)

    async def pull(self) -> Any | None:
        """Remove and return the item at the head, or None if empty."""
        return await self._redis.lpop(self._name)

    async def pop(self) -> Any | None:
        """Remove and return the item at the tail, or None if empty."""
        return await self._redis.rpop(self._name)

    async def cast(self) -> Caster:
        """Pull the head item wrapped in a Caster."""
        return Caster(await self.pull())

    async def length(self) -> int:
        """Number of items in the queue."""
        return int(await self._redis.llen(self._name))
