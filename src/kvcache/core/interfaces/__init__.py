"""Core interfaces (Protocol classes) for kvcache."""

from kvcache.core.interfaces.cache_backend import ICacheBackend
from kvcache.core.interfaces.key_codec import IKeyCodec

__all__ = [
    "ICacheBackend",
    "IKeyCodec",
]
