"""Errors raised by kvcache.

Absence is never an error: lookups of missing keys return ``None``,
``False`` or a zero duration. Transport failures from Redis are not
wrapped and surface as ``redis.exceptions.RedisError``.
"""


class CacheError(Exception):
    """Base class for errors raised by kvcache."""

    pass


class TypeMismatchError(CacheError, TypeError):
    """Raised when a value cannot be read as the requested type.

    Also raised when a value of an unsupported type is written to a
    backend, and when a counter operation targets a non-numeric value.
    """

    pass


class CounterOverflowError(CacheError, OverflowError):
    """Raised when a counter update would leave the value range.

    Integer counters are bounded to signed 64-bit values and float
    counters to finite values. The stored value is left unchanged.
    """

    pass
