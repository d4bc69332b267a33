"""Core domain layer for kvcache."""

from kvcache.core.entities import CacheConfig, CacheEntry, Caster
from kvcache.core.errors import CacheError, CounterOverflowError, TypeMismatchError
from kvcache.core.interfaces import ICacheBackend, IKeyCodec
from kvcache.core.services import RateLimiter, VerificationCode

__all__ = [
    # Entities
    "CacheConfig",
    "CacheEntry",
    "Caster",
    # Errors
    "CacheError",
    "CounterOverflowError",
    "TypeMismatchError",
    # Interfaces
    "ICacheBackend",
    "IKeyCodec",
    # Services
    "RateLimiter",
    "VerificationCode",
]
