"""Utility helpers for kvcache."""

from kvcache.utils.codes import random_digits
from kvcache.utils.slug import slugify

__all__ = ["random_digits", "slugify"]
