"""Typed accessor over raw cached values."""

from typing import Any

from kvcache.core.errors import TypeMismatchError


class Caster:
    """Typed accessor around a value read from a cache backend.

    Redis hands back strings while the in-memory backend keeps the
    original Python objects, so typed reads go through a Caster rather
    than through ``isinstance`` checks at every call site.

    Example:
        caster = await backend.cast("visits")
        if not caster.is_nil:
            visits = caster.to_int()
    """

    __slots__ = ("_value",)

    def __init__(self, value: Any) -> None:
        self._value = value

    @property
    def value(self) -> Any:
        """The raw wrapped value."""
        return self._value

    @property
    def is_nil(self) -> bool:
        """True when the key was absent."""
        return self._value is None

    def to_int(self) -> int:
        """Read the value as an integer.

        Integral floats and strings holding an integer literal convert;
        anything else fails.

        Raises:
            TypeMismatchError: If the value is not an integer.
        """
        value = self._value
        if isinstance(value, bool):
            raise self._mismatch("int")
        if isinstance(value, int):
            return value
        if isinstance(value, float):
            if value.is_integer():
                return int(value)
            raise self._mismatch("int")
        text = self._text()
        if text is None:
            raise self._mismatch("int")
        try:
            return int(text)
        except ValueError as e:
            raise self._mismatch("int") from e

    def to_float(self) -> float:
        """Read the value as a float.

        Raises:
            TypeMismatchError: If the value is not numeric.
        """
        value = self._value
        if isinstance(value, bool):
            raise self._mismatch("float")
        if isinstance(value, (int, float)):
            return float(value)
        text = self._text()
        if text is None:
            raise self._mismatch("float")
        try:
            return float(text)
        except ValueError as e:
            raise self._mismatch("float") from e

    def to_str(self) -> str:
        """Read the value as a string.

        Raises:
            TypeMismatchError: If the value is nil, a bool, or bytes that
                are not valid UTF-8.
        """
        value = self._value
        if isinstance(value, bool):
            raise self._mismatch("str")
        if isinstance(value, (int, float)):
            return str(value)
        text = self._text()
        if text is None:
            raise self._mismatch("str")
        return text

    def _text(self) -> str | None:
        if isinstance(self._value, str):
            return self._value
        if isinstance(self._value, bytes):
            try:
                return self._value.decode("utf-8")
            except UnicodeDecodeError:
                return None
        return None

    def _mismatch(self, target: str) -> TypeMismatchError:
        return TypeMismatchError(
            f"cannot cast {type(self._value).__name__} value to {target}"
        )

    def __repr__(self) -> str:
        return f"Caster({self._value!r})"
