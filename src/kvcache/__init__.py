"""kvcache - Nil-safe key-value cache with rate limiting and verification codes.

One async contract (:class:`ICacheBackend`) over two backends: an
in-process store with lazy per-entry expiry, and Redis. Two primitives
are built on the contract alone: a fixed-window :class:`RateLimiter`
and a single-use :class:`VerificationCode`.

Example:
    from datetime import timedelta
    from kvcache import CacheConfig, RateLimiter, VerificationCode, create_backend

    backend = create_backend(CacheConfig(backend="memory"))

    await backend.put("greeting", "hello", ttl=timedelta(minutes=5))
    await backend.get("greeting")          # "hello"
    await backend.get("missing")           # None, never an error

    limiter = RateLimiter("login john", 3, timedelta(minutes=10), backend)
    await limiter.hit()
    await limiter.retries_left()           # 2

    otp = VerificationCode("john@example.com", timedelta(minutes=2), backend)
    code = await otp.generate(6)
    await otp.verify(code)                 # True, and the code is gone
"""

from kvcache.core.entities import (
    INFINITE_TTL,
    CacheConfig,
    CacheEntry,
    CacheValue,
    Caster,
)
from kvcache.core.errors import CacheError, CounterOverflowError, TypeMismatchError
from kvcache.core.interfaces import ICacheBackend, IKeyCodec
from kvcache.core.services import RateLimiter, VerificationCode
from kvcache.factory import create_backend
from kvcache.infrastructure import (
    DefaultKeyCodec,
    InMemoryCacheBackend,
    RedisCacheBackend,
    RedisQueue,
)
from kvcache.utils import random_digits, slugify

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Core entities
    "CacheConfig",
    "CacheEntry",
    "CacheValue",
    "Caster",
    "INFINITE_TTL",
    # Errors
    "CacheError",
    "CounterOverflowError",
    "TypeMismatchError",
    # Core interfaces
    "ICacheBackend",
    "IKeyCodec",
    # Core services
    "RateLimiter",
    "VerificationCode",
    # Infrastructure implementations
    "InMemoryCacheBackend",
    "RedisCacheBackend",
    "DefaultKeyCodec",
    "RedisQueue",
    # Construction
    "create_backend",
    # Utilities
    "random_digits",
    "slugify",
]
