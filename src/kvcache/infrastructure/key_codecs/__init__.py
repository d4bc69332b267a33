"""Key codec implementations."""

from kvcache.infrastructure.key_codecs.default import DefaultKeyCodec

__all__ = ["DefaultKeyCodec"]
