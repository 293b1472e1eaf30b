"""A UUID that is guaranteed not to be the nil UUID."""

from __future__ import annotations

import uuid

__all__ = ["NilUuidError", "NonNilUuid"]


class NilUuidError(ValueError):
    """Raised when a nil UUID is given where a non-nil one is required."""

    def __init__(self, message: str = "the UUID is nil") -> None:
        super().__init__(message)


class NonNilUuid:
    """A UUID whose value is never all zeroes."""

    __slots__ = ("_value",)

    def __init__(self, value: uuid.UUID) -> None:
        if not isinstance(value, uuid.UUID):
            raise TypeError(f"expected a UUID, got {type(value).__name__}")
        if value.int == 0:
            raise NilUuidError()
        self._value = value

    @classmethod
    def new(cls, value: uuid.UUID) -> NonNilUuid | None:
        """Return a non-nil UUID, or None if ``value`` is nil."""
        try:
            return cls(value)
        except NilUuidError:
            return None

    def get(self) -> uuid.UUID:
        """Return the underlying UUID."""
        return self._value

    def __eq__(self, other: object) -> bool:
        if isinstance(other, NonNilUuid):
            return self._value == other._value
        if isinstance(other, uuid.UUID):
            return self._value == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)

    def __str__(self) -> str:
        return str(self._value)

    def __repr__(self) -> str:
        return f"NonNilUuid('{self._value}')"