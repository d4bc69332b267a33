"""Slug utilities for cache key normalization."""

import re

_SPACES = re.compile(r"\s+")
_INVALID = re.compile(r"[^A-Za-z0-9\-]")
_DASHES = re.compile(r"-+")


def slugify(*parts: str) -> str:
    """Normalize strings into a slug.

    Fragments are joined with ``-``, whitespace runs become a single
    dash, every character outside ``[A-Za-z0-9-]`` is dropped and
    repeated dashes collapse to one.

    Args:
        parts: The strings to normalize.

    Returns:
        The slug (possibly empty).

    Example:
        >>> slugify("limiter ", "John  Doe!")
        'limiter-John-Doe'
    """
    content = "-".join(parts)
    content = _SPACES.sub("-", content)
    content = _INVALID.sub("", content)
    return _DASHES.sub("-", content)
