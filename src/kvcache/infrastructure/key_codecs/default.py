"""Default key codec implementation."""

from kvcache.utils.slug import slugify


class DefaultKeyCodec:
    """Key codec producing ``<prefix>:<key>`` slugs.

    Both the prefix and the joined key fragments are slugified, so keys
    only ever contain ASCII letters, digits, dashes and the single
    namespace separator.
    """

    def __init__(self, prefix: str = "") -> None:
        """Initialize the key codec.

        Args:
            prefix: Namespace prefix for all keys. Empty means no prefix.
        """
        self._prefix = slugify(prefix)

    @property
    def prefix(self) -> str:
        """The normalized namespace prefix."""
        return self._prefix

    def build(self, *keys: str) -> str:
        """Build the storage key for one or more raw key fragments.

        Args:
            keys: Raw key fragments, joined with ``-`` before normalization.

        Returns:
            ``"<prefix>:<slug>"``, or just the slug without a prefix.
        """
        key = slugify(*keys)
        if self._prefix:
            return f"{self._prefix}:{key}"
        return key

    def pattern(self) -> str:
        """Glob pattern matching every key in this codec's namespace."""
        if self._prefix:
            return f"{self._prefix}:*"
        return "*"
