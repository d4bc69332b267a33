"""Cache payload type."""

from datetime import timedelta
from typing import Any

from kvcache.core.errors import TypeMismatchError

CacheValue = int | float | str | bytes

# Reported by ttl() for entries stored without expiry
INFINITE_TTL = timedelta.max


def ensure_cache_value(value: Any) -> Any:
    """Validate that a value can be stored by every backend.

    Args:
        value: The value about to be written.

    Returns:
        The value unchanged.

    Raises:
        TypeMismatchError: If the value is not an int, float, str or bytes.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float, str, bytes)):
        raise TypeMismatchError(
            f"unsupported cache value type: {type(value).__name__}"
        )
    return value


def ttl_seconds(ttl: timedelta | None) -> float | None:
    """Convert an optional TTL to seconds, rejecting non-positive spans.

    Raises:
        ValueError: If the TTL is zero or negative.
    """
    if ttl is None:
        return None
    seconds = ttl.total_seconds()
    if seconds <= 0:
        raise ValueError("ttl must be positive")
    return seconds
