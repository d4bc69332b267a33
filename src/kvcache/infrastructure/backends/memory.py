"""In-memory cache backend implementation."""

import logging
import math
import threading
import time
from collections.abc import Callable
from datetime import timedelta
from typing import Any

from cachetools import TLRUCache  # type: ignore[import-untyped]

from kvcache.core.entities.cache_entry import CacheEntry
from kvcache.core.entities.cache_value import ensure_cache_value, ttl_seconds
from kvcache.core.entities.caster import Caster
from kvcache.core.errors import CounterOverflowError, TypeMismatchError
from kvcache.core.interfaces.key_codec import IKeyCodec
from kvcache.infrastructure.key_codecs.default import DefaultKeyCodec

logger = logging.getLogger(__name__)

# Integer counters share the signed 64-bit range of Redis counters
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


def _time_to_use(_key: str, entry: CacheEntry, _now: float) -> float:
    return entry.expiry


class InMemoryCacheBackend:
    """In-memory cache backend with per-entry TTL.

    Suitable for single-process deployments. Entries live in a
    cachetools ``TLRUCache`` whose time-to-use is each entry's own
    expiry, so TTLs are exact per key and survive value updates.

    Expiry is lazy: expired entries are reported absent immediately but
    their memory is only reclaimed on a later access to the backend.
    There is no background sweeper.

    Every operation holds one lock for its whole duration, with the
    cache clock frozen, so read-modify-write operations (``set``,
    ``pull`` and the counters) are atomic.
    """

    def __init__(
        self,
        maxsize: int | None = None,
        key_prefix: str = "",
        clock: Callable[[], float] = time.monotonic,
        key_codec: IKeyCodec | None = None,
    ) -> None:
        """Initialize the in-memory cache backend.

        Args:
            maxsize: Maximum number of items before LRU eviction.
                None keeps the cache unbounded.
            key_prefix: Namespace prefix applied to every key.
            clock: Time source in seconds. Only differences matter.
            key_codec: Custom key codec. Overrides key_prefix.
        """
        self._maxsize = maxsize
        self._codec: IKeyCodec = (
            key_codec if key_codec is not None else DefaultKeyCodec(key_prefix)
        )
        self._lock = threading.Lock()
        self._cache: TLRUCache[str, CacheEntry] = TLRUCache(
            maxsize=maxsize if maxsize is not None else math.inf,
            ttu=_time_to_use,
            timer=clock,
        )
        logger.debug("InMemoryCacheBackend created (maxsize=%s)", maxsize)

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
            ttl: Optional time-to-live. If None, the entry never expires.
        """
        ensure_cache_value(value)
        seconds = ttl_seconds(ttl)
        storage_key = self._codec.build(key)

        with self._lock, self._cache.timer as now:
            self._cache[storage_key] = CacheEntry.create(value, now, seconds)

    async def set(self, key: str, value: Any) -> bool:
        """Replace the value of an existing key, keeping its TTL.

        Args:
            key: The cache key.
            value: The new value.

        Returns:
            True if the key existed, False otherwise.
        """
        ensure_cache_value(value)
        storage_key = self._codec.build(key)

        with self._lock, self._cache.timer as now:
            entry = self._read(storage_key, now)
            if entry is None:
                return False
            self._cache[storage_key] = entry.with_value(value)
            return True

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
        ensure_cache_value(value)
        seconds = ttl_seconds(ttl)
        storage_key = self._codec.build(key)

        with self._lock, self._cache.timer as now:
            entry = self._read(storage_key, now)
            if entry is None:
                entry = CacheEntry.create(value, now, seconds)
            else:
                entry = entry.with_value(value)
            self._cache[storage_key] = entry

    async def get(self, key: str) -> Any | None:
        """Retrieve cached value by key.

        Args:
            key: The cache key to retrieve.

        Returns:
            The cached value, or None if not found or expired.
        """
        storage_key = self._codec.build(key)

        with self._lock, self._cache.timer as now:
            entry = self._read(storage_key, now)
            return None if entry is None else entry.value

    async def pull(self, key: str) -> Any | None:
        """Retrieve cached value and remove it.

        Args:
            key: The cache key to retrieve.

        Returns:
            The value held before deletion, or None if not found.
        """
        storage_key = self._codec.build(key)

        with self._lock, self._cache.timer as now:
            entry = self._read(storage_key, now)
            if entry is None:
                return None
            del self._cache[storage_key]
            return entry.value

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
        storage_key = self._codec.build(key)

        with self._lock, self._cache.timer as now:
            return self._read(storage_key, now) is not None

    async def forget(self, key: str) -> None:
        """Delete cached value. Missing keys are ignored.

        Args:
            key: The cache key to delete.
        """
        storage_key = self._codec.build(key)

        with self._lock, self._cache.timer as now:
            self._cache.expire(now)
            self._cache.pop(storage_key, None)

    async def ttl(self, key: str) -> timedelta:
        """Remaining time-to-live of a key.

        Args:
            key: The cache key.

        Returns:
            INFINITE_TTL for entries without expiry, ``timedelta(0)``
            for missing keys.
        """
        storage_key = self._codec.build(key)

        with self._lock, self._cache.timer as now:
            entry = self._read(storage_key, now)
            if entry is None:
                return timedelta(0)
            return entry.remaining(now)

    async def increment(self, key: str, delta: int = 1) -> bool:
        """Add ``delta`` to an integer value, keeping its TTL."""
        return self._add(key, delta, floating=False)

    async def decrement(self, key: str, delta: int = 1) -> bool:
        """Subtract ``delta`` from an integer value, keeping its TTL."""
        return self._add(key, -delta, floating=False)

    async def increment_float(self, key: str, delta: float) -> bool:
        """Add ``delta`` to a numeric value, keeping its TTL."""
        return self._add(key, delta, floating=True)

    async def decrement_float(self, key: str, delta: float) -> bool:
        """Subtract ``delta`` from a numeric value, keeping its TTL."""
        return self._add(key, -delta, floating=True)

    async def clear(self) -> None:
        """Clear all cached values."""
        with self._lock:
            self._cache.clear()

    def _add(self, key: str, delta: int | float, floating: bool) -> bool:
        """Read, cast and write a counter in one critical section.

        Args:
            key: The cache key.
            delta: Signed amount to add.
            floating: Use float arithmetic instead of integer arithmetic.

        Returns:
            True if the key existed, False otherwise.

        Raises:
            TypeMismatchError: If the stored value is not numeric.
            CounterOverflowError: If the result leaves the signed 64-bit
                range, or is not finite for float counters.
        """
        storage_key = self._codec.build(key)

        with self._lock, self._cache.timer as now:
            entry = self._read(storage_key, now)
            if entry is None:
                return False

            caster = Caster(entry.value)
            try:
                current = caster.to_float() if floating else caster.to_int()
            except TypeMismatchError as e:
                logger.warning("Counter update on non-numeric key %s", storage_key)
                raise TypeMismatchError("value is not numeric") from e

            result = current + delta
            if floating and not math.isfinite(result):
                raise CounterOverflowError("increment would produce NaN or Infinity")
            if not floating and not _INT64_MIN <= result <= _INT64_MAX:
                raise CounterOverflowError("increment or decrement would overflow")

            self._cache[storage_key] = entry.with_value(result)
            return True

    def _read(self, storage_key: str, now: float) -> CacheEntry | None:
        """Look up a live entry. Callers must hold the lock.

        Expired entries are purged here, on access.
        """
        self._cache.expire(now)
        entry: CacheEntry | None = self._cache.get(storage_key)
        return entry

    def __len__(self) -> int:
        """Return the number of live items in the cache."""
        with self._lock, self._cache.timer as now:
            self._cache.expire(now)
            return len(self._cache)

    @property
    def maxsize(self) -> int | None:
        """Return the maximum size of the cache (None when unbounded)."""
        return self._maxsize
