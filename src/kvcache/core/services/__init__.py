"""Domain services built on the cache backend contract."""

from kvcache.core.services.rate_limiter import RateLimiter
from kvcache.core.services.verification import VerificationCode

__all__ = [
    "RateLimiter",
    "VerificationCode",
]
