"""Type coercion engine.

``coerce(value, types)`` tries each candidate descriptor in declared order
and keeps the first non-``None`` result. Every per-kind rule returns either
a value of exactly that kind or ``None`` ("no conversion"), so the final
check only trips when a class factory hands back something unexpected or
when no candidate produced a value at all.

Rules follow loose, form-based conversion: numeric strings become numbers,
the usual truthy/falsy words become booleans, and tree-shaped mappings or
lists are turned into Exportable objects when the target type is one.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Callable, Sequence
from typing import Any

from valueobjects.domain.errors import TypeMismatch
from valueobjects.domain.export import Exportable
from valueobjects.domain.record import ValueObject
from valueobjects.domain.types import (
    TypeDescriptor,
    TypeKind,
    describe,
    describe_value,
    resolve_descriptors,
)

logger = logging.getLogger(__name__)

_INTEGER_STRING = re.compile(r"^\s*[+-]?\d+\s*$")
_NUMERIC_STRING = re.compile(r"^\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?\s*$")

_TRUE_WORDS = frozenset({"1", "true", "on", "yes"})
_FALSE_WORDS = frozenset({"0", "false", "off", "no", ""})


# ---------------------------------------------------------------------------
# Per-kind rules
# ---------------------------------------------------------------------------


def _to_sequence(value: Any) -> Any:
    from valueobjects.domain.collection import Collection

    if isinstance(value, (list, dict)):
        return value
    if isinstance(value, tuple):
        return list(value)
    if isinstance(value, Collection):
        return value.to_tree()
    return None


def _to_boolean(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        if value == 1:
            return True
        if value == 0:
            return False
        return None
    if isinstance(value, str):
        word = value.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
    return None


def _to_float(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, float):
        return value
    if isinstance(value, int):
        try:
            return float(value)
        except OverflowError:
            return None
    if isinstance(value, str) and _NUMERIC_STRING.match(value):
        return float(value)
    return None


def _to_integer(value: Any) -> int | None:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return int(value)
        return None
    if isinstance(value, str):
        if _INTEGER_STRING.match(value):
            # Past the interpreter's digit limit int() raises ValueError.
            try:
                return int(value)
            except ValueError:
                return None
        if _NUMERIC_STRING.match(value):
            number = float(value)
            if math.isfinite(number) and number.is_integer():
                return int(number)
    return None


def _to_string(value: Any) -> str | None:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        try:
            return str(value)
        except ValueError:
            return None
    return None


def _to_instance(value: Any, target: type) -> Any:
    if isinstance(value, target):
        return value
    if not issubclass(target, Exportable):
        return None
    # Records are keyed by field name, so only a mapping can populate one.
    if issubclass(target, ValueObject):
        if isinstance(value, dict):
            return target().from_tree(value)
        return None
    if isinstance(value, (list, dict)):
        return target().from_tree(value)
    return None


_KIND_RULES: dict[TypeKind, Callable[[Any], Any]] = {
    TypeKind.SEQUENCE: _to_sequence,
    TypeKind.BOOLEAN: _to_boolean,
    TypeKind.FLOAT: _to_float,
    TypeKind.INTEGER: _to_integer,
    TypeKind.STRING: _to_string,
}


def convert(value: Any, descriptor: TypeDescriptor) -> Any:
    """Apply a single descriptor's rule; ``None`` means no conversion."""
    if isinstance(descriptor, TypeKind):
        return _KIND_RULES[descriptor](value)
    if isinstance(descriptor, type):
        return _to_instance(value, descriptor)
    return None


def matches(value: Any, descriptor: TypeDescriptor) -> bool:
    """Check that *value*'s runtime type is exactly what *descriptor* demands."""
    if descriptor is TypeKind.INTEGER:
        return type(value) is int
    if descriptor is TypeKind.BOOLEAN:
        return type(value) is bool
    if descriptor is TypeKind.FLOAT:
        return isinstance(value, float)
    if descriptor is TypeKind.STRING:
        return isinstance(value, str)
    if descriptor is TypeKind.SEQUENCE:
        return isinstance(value, (list, dict))
    if isinstance(descriptor, type):
        return isinstance(value, descriptor)
    return False


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------


def coerce(value: Any, types: Any, *, owner: str | None = None) -> Any:
    """Coerce *value* to the first candidate in *types* that accepts it.

    Args:
        value: Raw value, usually taken from a decoded tree.
        types: A descriptor or an ordered sequence of descriptors. Alias
            strings are resolved on the fly; collections pass descriptors
            already resolved at class creation.
        owner: Name of the container doing the coercion, for error messages.

    Returns:
        The coerced value. ``None`` passes through unchanged, and an empty
        candidate list accepts any value as-is.

    Raises:
        TypeMismatch: No candidate yields a value of its kind.
    """
    candidates: Sequence[TypeDescriptor] = resolve_descriptors(types)
    if value is None or not candidates:
        return value

    for descriptor in candidates:
        new_value = convert(value, descriptor)
        if new_value is None:
            continue
        if not matches(new_value, descriptor):
            raise _mismatch(describe(descriptor), new_value, owner)
        return new_value

    expected = " or ".join(describe(d) for d in candidates)
    raise _mismatch(expected, value, owner)


def _mismatch(expected: str, value: Any, owner: str | None) -> TypeMismatch:
    actual = describe_value(value)
    logger.debug("Coercion failed: expected %s, got %s (%s)", expected, actual, owner)
    return TypeMismatch(expected, actual, owner=owner)
