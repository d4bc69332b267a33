"""Key codec interface."""

from typing import Protocol


class IKeyCodec(Protocol):
    """Contract for turning raw keys into canonical storage keys.

    Codecs must be deterministic: equal inputs always produce the same
    storage key.
    """

    @property
    def prefix(self) -> str:
        """The normalized namespace prefix (may be empty)."""
        ...

    def build(self, *keys: str) -> str:
        """Build the storage key for one or more raw key fragments.

        Args:
            keys: Raw key fragments, joined before normalization.

        Returns:
            The canonical storage key.
        """
        ...

    def pattern(self) -> str:
        """Glob pattern matching every key in the codec's namespace."""
        ...
