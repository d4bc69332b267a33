"""Redis cache backend implementation."""

import logging
import math
from collections.abc import Awaitable
from datetime import timedelta
from typing import Any

import redis.asyncio as redis
from redis.exceptions import ResponseError

from kvcache.core.entities.cache_value import (
    INFINITE_TTL,
    ensure_cache_value,
    ttl_seconds,
)
from kvcache.core.entities.caster import Caster
from kvcache.core.errors import CounterOverflowError, TypeMismatchError
from kvcache.core.interfaces.key_codec import IKeyCodec
from kvcache.infrastructure.key_codecs.default import DefaultKeyCodec

logger = logging.getLogger(__name__)

# PTTL replies for keys without expiry and for missing keys
_NO_EXPIRY = -1
_MISSING = -2

_NUMERIC_ERRORS = ("not an integer", "not a valid float")
_OVERFLOW_ERRORS = ("would overflow", "NaN or Infinity")

# Keys fetched per SCAN call and deleted per DEL call by clear()
_CLEAR_BATCH = 100


class RedisCacheBackend:
    """Redis cache backend for distributed deployments.

    Relies on Redis for expiry and atomic counters. Keys are stored as
    ``<prefix>:<slug>``. The client does not decode replies, so values
    come back as the raw bytes Redis holds (``42`` reads as ``b"42"``)
    and binary payloads round-trip unchanged; use :meth:`cast` for typed
    reads.

    Requires Redis 6.2 or later (``GETDEL``; ``SET ... KEEPTTL`` needs
    6.0).

    Consistency notes:
        ``set`` is a single ``SET ... XX KEEPTTL`` command, so the
        existence check and the write are atomic. The counter methods
        check existence with a separate ``EXISTS`` round trip before the
        atomic ``INCRBY``/``DECRBY``/``INCRBYFLOAT``: a key deleted
        between the two calls is recreated by the counter command.
    """

    def __init__(
        self,
        client: redis.Redis | None = None,
        *,
        redis_url: str = "redis://localhost:6379/0",
        key_prefix: str = "",
        key_codec: IKeyCodec | None = None,
    ) -> None:
        """Initialize the Redis cache backend.

        Args:
            client: An existing async Redis client. Created from
                ``redis_url`` when omitted. Must not decode responses,
                or binary values cannot be read back.
            redis_url: Redis connection URL.
            key_prefix: Prefix for all cache keys.
            key_codec: Custom key codec. Overrides key_prefix.
        """
        if client is None:
            client = redis.from_url(redis_url)
        self._redis: redis.Redis = client
        self._codec: IKeyCodec = (
            key_codec if key_codec is not None else DefaultKeyCodec(key_prefix)
        )
        logger.debug("RedisCacheBackend created (prefix=%r)", self._codec.prefix)

    async def put(
        self,
        key: str,
        value: Any,
        ttl: timedelta | None = None,
    ) -> None:
        """Store value with optional TTL.

        Args:
            key: The cache key.
            value: The value to store.
            ttl: Optional time-to-live. If None, the key never expires.
        """
        ensure_cache_value(value)
        seconds = ttl_seconds(ttl)
        storage_key = self._codec.build(key)

        if seconds is None:
            await self._redis.set(storage_key, value)
        else:
            await self._redis.set(storage_key, value, px=math.ceil(seconds * 1000))

    async def set(self, key: str, value: Any) -> bool:
        """Replace the value of an existing key, keeping its TTL.

        Args:
            key: The cache key.
            value: The new value.

        Returns:
            True if the key existed, False otherwise.
        """
        ensure_cache_value(value)
        result = await self._redis.set(
            self._codec.build(key),
            value,
            xx=True,
            keepttl=True,
        )
        return bool(result)

    async def override(
        self,
        key: str,
        value: Any,
        ttl: timedelta | None = None,
    ) -> None:
        """Update a key keeping its TTL, or create it with ``ttl``.

        Args:
            key: The cache key.
            value: The value to store.
            ttl: TTL used when the key does not exist yet.
        """
        ttl_seconds(ttl)  # reject a bad TTL before the conditional write
        if not await self.set(key, value):
            await self.put(key, value, ttl)

    async def get(self, key: str) -> Any | None:
        """Retrieve cached value by key.

        Args:
            key: The cache key to retrieve.

        Returns:
            The cached value, or None if not found or expired.
        """
        return await self._redis.get(self._codec.build(key))

    async def pull(self, key: str) -> Any | None:
        """Retrieve cached value and remove it with ``GETDEL``.

        Args:
            key: The cache key to retrieve.

        Returns:
            The value held before deletion, or None if not found.
        """
        return await self._redis.getdel(self._codec.build(key))

    async def cast(self, key: str) -> Caster:
        """Retrieve cached value wrapped in a Caster."""
        return Caster(await self.get(key))

    async def exists(self, key: str) -> bool:
        """Check if key exists in cache.

        Args:
            key: The cache key to check.

        Returns:
            True if the key exists, False otherwise.
        """
        result = await self._redis.exists(self._codec.build(key))
        return result > 0

    async def forget(self, key: str) -> None:
        """Delete cached value. Missing keys are ignored.

        Args:
            key: The cache key to delete.
        """
        await self._redis.delete(self._codec.build(key))

    async def ttl(self, key: str) -> timedelta:
        """Remaining time-to-live of a key.

        Args:
            key: The cache key.

        Returns:
            INFINITE_TTL for keys without expiry, ``timedelta(0)`` for
            missing keys.
        """
        remaining = await self._redis.pttl(self._codec.build(key))
        if remaining == _MISSING:
            return timedelta(0)
        if remaining == _NO_EXPIRY:
            return INFINITE_TTL
        return timedelta(milliseconds=remaining)

    async def increment(self, key: str, delta: int = 1) -> bool:
        """Add ``delta`` to an integer value with ``INCRBY``."""
        storage_key = self._codec.build(key)
        if not await self._redis.exists(storage_key):
            return False
        await self._numeric(self._redis.incrby(storage_key, delta))
        return True

    async def decrement(self, key: str, delta: int = 1) -> bool:
        """Subtract ``delta`` from an integer value with ``DECRBY``."""
        storage_key = self._codec.build(key)
        if not await self._redis.exists(storage_key):
            return False
        await self._numeric(self._redis.decrby(storage_key, delta))
        return True

    async def increment_float(self, key: str, delta: float) -> bool:
        """Add ``delta`` to a numeric value with ``INCRBYFLOAT``."""
        storage_key = self._codec.build(key)
        if not await self._redis.exists(storage_key):
            return False
        await self._numeric(self._redis.incrbyfloat(storage_key, delta))
        return True

    async def decrement_float(self, key: str, delta: float) -> bool:
        """Subtract ``delta`` from a numeric value with ``INCRBYFLOAT``."""
        storage_key = self._codec.build(key)
        if not await self._redis.exists(storage_key):
            return False
        await self._numeric(self._redis.incrbyfloat(storage_key, -delta))
        return True

    async def clear(self) -> None:
        """Clear all cached values with our prefix.

        Walks the namespace with ``SCAN`` rather than ``KEYS`` so a large
        database is never blocked, deleting matches in batches.

        Note: Without a prefix this clears every key in the database.
        """
        batch: list[bytes] = []
        async for key in self._redis.scan_iter(
            match=self._codec.pattern(), count=_CLEAR_BATCH
        ):
            batch.append(key)
            if len(batch) >= _CLEAR_BATCH:
                await self._redis.delete(*batch)
                batch.clear()
        if batch:
            await self._redis.delete(*batch)

    async def _numeric(self, command: Awaitable[Any]) -> Any:
        """Await a counter command, mapping Redis value errors.

        Raises:
            TypeMismatchError: If Redis rejects the stored value as
                non-numeric.
            CounterOverflowError: If the result would leave the 64-bit
                integer range or stop being a finite float.

        Other replies propagate unchanged.
        """
        try:
            return await command
        except ResponseError as e:
            message = str(e)
            if any(marker in message for marker in _NUMERIC_ERRORS):
                logger.warning("Counter update on non-numeric key: %s", e)
                raise TypeMismatchError("value is not numeric") from e
            if any(marker in message for marker in _OVERFLOW_ERRORS):
                raise CounterOverflowError(message) from e
            raise

    async def close(self) -> None:
        """Close the Redis connection."""
        await self._redis.aclose()

    async def __aenter__(self) -> "RedisCacheBackend":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: type, exc_val: Exception, exc_tb: object) -> None:
        """Async context manager exit."""
        await self.close()
