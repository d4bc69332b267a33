"""Domain entities for kvcache."""

from kvcache.core.entities.cache_config import CacheConfig
from kvcache.core.entities.cache_entry import CacheEntry
from kvcache.core.entities.cache_value import (
    INFINITE_TTL,
    CacheValue,
    ensure_cache_value,
    ttl_seconds,
)
from kvcache.core.entities.caster import Caster

__all__ = [
    "CacheConfig",
    "CacheEntry",
    "CacheValue",
    "Caster",
    "INFINITE_TTL",
    "ensure_cache_value",
    "ttl_seconds",
]
