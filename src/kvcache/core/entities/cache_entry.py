"""Cache entry entity."""

import math
from dataclasses import dataclass, replace
from datetime import timedelta
from typing import Any

from kvcache.core.entities.cache_value import INFINITE_TTL


@dataclass(frozen=True)
class CacheEntry:
    """Immutable in-memory cache entry.

    ``expires_at`` is measured on the owning backend's clock. ``None``
    means the entry never expires.
    """

    value: Any
    expires_at: float | None = None

    @property
    def expiry(self) -> float:
        """Expiry usable as a time-to-use (``math.inf`` when unbounded)."""
        if self.expires_at is None:
            return math.inf
        return self.expires_at

    def is_expired(self, now: float) -> bool:
        """Check whether the entry has expired at ``now``."""
        return self.expires_at is not None and now >= self.expires_at

    def remaining(self, now: float) -> timedelta:
        """Remaining lifetime at ``now``.

        Returns:
            INFINITE_TTL for entries without expiry, otherwise the time
            left (never negative).
        """
        if self.expires_at is None:
            return INFINITE_TTL
        return timedelta(seconds=max(self.expires_at - now, 0.0))

    def with_value(self, value: Any) -> "CacheEntry":
        """Copy of this entry holding ``value`` with the same expiry."""
        return replace(self, value=value)

    @classmethod
    def create(
        cls,
        value: Any,
        now: float,
        ttl_seconds: float | None = None,
    ) -> "CacheEntry":
        """Factory method to create a new cache entry.

        Args:
            value: The value to cache.
            now: Current time on the backend clock.
            ttl_seconds: Optional lifetime in seconds.

        Returns:
            A new CacheEntry instance.
        """
        expires_at = None if ttl_seconds is None else now + ttl_seconds
        return cls(value=value, expires_at=expires_at)
