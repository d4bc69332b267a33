"""Fixed-window rate limiter over a cache backend."""

import logging
from datetime import timedelta

from kvcache.core.entities.cache_value import ttl_seconds
from kvcache.core.interfaces.cache_backend import ICacheBackend

logger = logging.getLogger(__name__)


class RateLimiter:
    """Per-subject attempt budget stored in a single cache entry.

    The entry holds the number of attempts left. A missing entry means
    the subject is fresh with the full budget; a value of zero or less
    means it is locked. The entry's TTL is the window: once it expires
    the subject is fresh again.

    Lifecycle:
        fresh -> hit() -> max_attempts - 1 left -> ... -> locked
        locked -> TTL expiry, reset() or clear() -> fresh/full budget

    Backend errors propagate unchanged.

    Example:
        limiter = RateLimiter("login john", 5, timedelta(minutes=15), backend)
        if await limiter.must_lock():
            wait = await limiter.available_in()
            ...
        await limiter.hit()
    """

    def __init__(
        self,
        name: str,
        max_attempts: int,
        ttl: timedelta,
        backend: ICacheBackend,
    ) -> None:
        """Initialize the rate limiter.

        Args:
            name: Subject name, e.g. a user id or IP address.
            max_attempts: Attempts allowed per window.
            ttl: Window length.
            backend: Cache backend holding the counter.

        Raises:
            ValueError: If max_attempts < 1 or ttl is not positive.
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        ttl_seconds(ttl)

        self._name = name
        self._key = f"limiter {name}"
        self._max_attempts = max_attempts
        self._ttl = ttl
        self._backend = backend

    @property
    def name(self) -> str:
        return self._name

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    async def hit(self) -> None:
        """Consume one attempt, opening a new window on the first hit."""
        if not await self._backend.decrement(self._key, 1):
            await self._backend.put(self._key, self._max_attempts - 1, self._ttl)

    async def lock(self) -> None:
        """Lock the subject immediately, keeping any open window."""
        if not await self._backend.set(self._key, 0):
            await self._backend.put(self._key, 0, self._ttl)
        logger.info("Rate limiter %r locked", self._name)

    async def reset(self) -> None:
        """Restore the full budget with a fresh window."""
        await self._backend.put(self._key, self._max_attempts, self._ttl)

    async def clear(self) -> None:
        """Remove the limiter entry, returning the subject to fresh."""
        await self._backend.forget(self._key)

    async def must_lock(self) -> bool:
        """Check whether the subject has no attempts left.

        Returns:
            True if the entry exists and its counter is zero or less.
        """
        caster = await self._backend.cast(self._key)
        if caster.is_nil:
            return False
        return caster.to_int() <= 0

    async def total_attempts(self) -> int:
        """Attempts consumed in the current window.

        A stored counter above ``max_attempts`` counts as zero consumed.
        """
        caster = await self._backend.cast(self._key)
        if caster.is_nil:
            return 0
        remaining = min(caster.to_int(), self._max_attempts)
        return self._max_attempts - remaining

    async def retries_left(self) -> int:
        """Attempts remaining in the current window, never negative.

        A fresh subject with no entry reports 0, like a missing counter.
        """
        caster = await self._backend.cast(self._key)
        if caster.is_nil:
            return 0
        return max(caster.to_int(), 0)

    async def available_in(self) -> timedelta:
        """Time until the current window ends (zero when fresh)."""
        return await self._backend.ttl(self._key)
