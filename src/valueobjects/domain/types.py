"""Type kinds and descriptor resolution.

A type descriptor is one of the primitive :class:`TypeKind` members, a class
(normally an Exportable subclass), or an unrecognised name. Alias names
accepted from declarations map onto the five kinds.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, TypeAlias


class TypeKind(StrEnum):
    """Primitive kinds a collection element can be coerced to."""

    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    SEQUENCE = "sequence"


TypeDescriptor: TypeAlias = TypeKind | type | str

TYPE_ALIASES: dict[str, TypeKind] = {
    "boolean": TypeKind.BOOLEAN,
    "bool": TypeKind.BOOLEAN,
    "integer": TypeKind.INTEGER,
    "int": TypeKind.INTEGER,
    "float": TypeKind.FLOAT,
    "double": TypeKind.FLOAT,
    "string": TypeKind.STRING,
    "str": TypeKind.STRING,
    "sequence": TypeKind.SEQUENCE,
    "array": TypeKind.SEQUENCE,
    "list": TypeKind.SEQUENCE,
}

_BUILTIN_KINDS: dict[type, TypeKind] = {
    bool: TypeKind.BOOLEAN,
    int: TypeKind.INTEGER,
    float: TypeKind.FLOAT,
    str: TypeKind.STRING,
    list: TypeKind.SEQUENCE,
    dict: TypeKind.SEQUENCE,
}


def resolve_descriptor(descriptor: Any) -> TypeDescriptor:
    """Normalize a declared descriptor.

    Alias strings and the builtin types ``bool``, ``int``, ``float``,
    ``str``, ``list`` and ``dict`` resolve to a :class:`TypeKind`. Other
    classes are returned as-is. Unknown strings are kept: they accept
    nothing but ``None`` at coercion time.
    """
    if isinstance(descriptor, TypeKind):
        return descriptor
    if isinstance(descriptor, str):
        return TYPE_ALIASES.get(descriptor.strip().lower(), descriptor)
    if isinstance(descriptor, type):
        return _BUILTIN_KINDS.get(descriptor, descriptor)
    msg = f"Unsupported type descriptor: {descriptor!r}"
    raise TypeError(msg)


def resolve_descriptors(declared: Any) -> tuple[TypeDescriptor, ...]:
    """Normalize a single descriptor or an ordered iterable of them."""
    if declared is None:
        return ()
    if isinstance(declared, (str, type)):
        return (resolve_descriptor(declared),)
    return tuple(resolve_descriptor(d) for d in declared)


def describe(descriptor: TypeDescriptor) -> str:
    """Human-readable name for a descriptor (used in error messages)."""
    if isinstance(descriptor, TypeKind):
        return descriptor.value
    if isinstance(descriptor, type):
        return descriptor.__qualname__
    return str(descriptor)


def describe_value(value: Any) -> str:
    """Name the runtime type of *value* for error messages."""
    if value is None:
        return "null"
    return type(value).__qualname__


Tree: TypeAlias = None | bool | int | float | str | list["Tree"] | dict[int | str, "Tree"]
