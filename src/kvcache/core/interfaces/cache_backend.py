"""Cache backend interface."""

from datetime import timedelta
from typing import Any, Protocol

from kvcache.core.entities.caster import Caster


class ICacheBackend(Protocol):
    """Nil-safe contract for cache storage backends.

    Every read-style operation treats a missing key as an ordinary
    result (``None``, ``False`` or a zero duration), never as an error,
    so callers behave the same on every backend. Methods are async so
    in-process and networked backends share one contract.
    """

    async def put(
        self,
        key: str,
        value: Any,
        ttl: timedelta | None = None,
    ) -> None:
        """Store a value unconditionally.

        Args:
            key: The cache key.
            value: An int, float, str or bytes value.
            ttl: Optional time-to-live. If None, the entry never expires.
                Any previous TTL on the key is replaced.

        Raises:
            TypeMismatchError: If the value type is not supported.
            ValueError: If the TTL is not positive.
        """
        ...

    async def set(self, key: str, value: Any) -> bool:
        """Replace the value of an existing key, keeping its TTL.

        Args:
            key: The cache key.
            value: The new value.

        Returns:
            True if the key existed and was updated, False otherwise.
            Nothing is written for a missing key.
        """
        ...

    async def override(
        self,
        key: str,
        value: Any,
        ttl: timedelta | None = None,
    ) -> None:
        """Update a key keeping its TTL, or create it with ``ttl``.

        Args:
            key: The cache key.
            value: The value to store.
            ttl: TTL used only when the key does not exist yet.
        """
        ...

    async def get(self, key: str) -> Any | None:
        """Retrieve a value by key.

        Returns:
            The cached value, or None if not found or expired.
        """
        ...

    async def pull(self, key: str) -> Any | None:
        """Retrieve a value and remove it.

        Returns:
            The value held before deletion, or None if not found.
        """
        ...

    async def cast(self, key: str) -> Caster:
        """Retrieve a value wrapped in a typed accessor.

        Returns:
            A Caster, nil when the key is not found.
        """
        ...

    async def exists(self, key: str) -> bool:
        """Check if key exists in cache."""
        ...

    async def forget(self, key: str) -> None:
        """Delete a key. Deleting a missing key is not an error."""
        ...

    async def ttl(self, key: str) -> timedelta:
        """Remaining time-to-live of a key.

        Returns:
            INFINITE_TTL for entries without expiry, ``timedelta(0)`` for
            missing keys.
        """
        ...

    async def increment(self, key: str, delta: int = 1) -> bool:
        """Add an integer to an existing numeric value, keeping its TTL.

        Returns:
            True if the key existed, False otherwise (nothing written).

        Raises:
            TypeMismatchError: If the stored value is not an integer.
        """
        ...

    async def decrement(self, key: str, delta: int = 1) -> bool:
        """Subtract an integer from an existing numeric value.

        Same contract as :meth:`increment`.
        """
        ...

    async def increment_float(self, key: str, delta: float) -> bool:
        """Add a float to an existing numeric value, keeping its TTL.

        Returns:
            True if the key existed, False otherwise (nothing written).

        Raises:
            TypeMismatchError: If the stored value is not numeric.
        """
        ...

    async def decrement_float(self, key: str, delta: float) -> bool:
        """Subtract a float from an existing numeric value.

        Same contract as :meth:`increment_float`.
        """
        ...

    async def clear(self) -> None:
        """Remove every entry in the backend's namespace."""
        ...
