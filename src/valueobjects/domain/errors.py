"""Exception types raised by coercion, export, and the text codecs."""

from __future__ import annotations


class ValueObjectError(Exception):
    """Base class for all valueobjects errors."""


class TypeMismatch(ValueObjectError, ValueError):
    """A value could not be coerced to any declared candidate type."""

    def __init__(self, expected: str, actual: str, owner: str | None = None) -> None:
        self.expected = expected
        self.actual = actual
        self.owner = owner
        prefix = f"{owner} only accepts" if owner else "Expected"
        super().__init__(f"{prefix} values of type {expected}, {actual} given")


class NotExportable(ValueObjectError, TypeError):
    """An object-valued field or element lacks the Exportable capability."""

    def __init__(self, key: object, actual: str) -> None:
        self.key = key
        self.actual = actual
        super().__init__(f"Property {key} of type {actual} is not Exportable")


class CodecError(ValueObjectError, ValueError):
    """Text could not be decoded, or the requested format is unknown."""
