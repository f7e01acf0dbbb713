"""Collections — ordered, key-addressable Exportable containers.

Keys are ``int`` or ``str``. As with ordered associative arrays, canonical
decimal strings (``"8"``) and bools are stored as ``int`` keys, and
``append`` uses the next integer index: one past the largest integer key
ever stored, never the current length.

:class:`Collection` accepts any value. :class:`TypedCollection` declares
``required_type`` and coerces every value on the way in (append, keyed set,
exchange, merges), so no stored element ever violates the declared type.

Only ``exchange`` is transactional: all incoming elements are coerced into a
new store before it replaces the old one. ``append``, keyed set and the two
merges apply element by element and leave earlier elements in place when a
later one fails.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Iterable, Iterator, Mapping, MutableMapping
from typing import Any, ClassVar, Self, TypeAlias

from pydantic import GetCoreSchemaHandler
from pydantic_core import CoreSchema, core_schema

from valueobjects.domain.coercion import coerce
from valueobjects.domain.export import Exportable, export_value
from valueobjects.domain.types import Tree, TypeDescriptor, describe_value, resolve_descriptors

logger = logging.getLogger(__name__)

Key: TypeAlias = int | str

_INT_KEY = re.compile(r"^(?:0|-?[1-9]\d*)$")


def normalize_key(key: Any) -> Key:
    """Map a raw key onto the ``int | str`` key space."""
    if isinstance(key, bool):
        return int(key)
    if isinstance(key, int):
        return key
    if isinstance(key, str):
        if not _INT_KEY.match(key):
            return key
        try:
            return int(key)
        except ValueError:
            return key
    if isinstance(key, float) and math.isfinite(key):
        return int(key)
    msg = f"Illegal collection key type: {describe_value(key)}"
    raise TypeError(msg)


def _entries(values: Any) -> Iterable[tuple[Any, Any]]:
    if isinstance(values, Mapping):
        return values.items()
    if isinstance(values, (list, tuple)):
        return enumerate(values)
    msg = f"Expected a list, mapping or collection, got {describe_value(values)}"
    raise TypeError(msg)


# ---------------------------------------------------------------------------
# Untyped collection
# ---------------------------------------------------------------------------


class Collection(MutableMapping[Key, Any], Exportable):
    """Ordered key/value container with tree export."""

    def __init__(self, values: Any = None) -> None:
        self._data: dict[Key, Any] = {}
        self._next_index = 0
        if values is not None:
            self.exchange(values)

    # --- Mapping protocol ---

    def __getitem__(self, key: Any) -> Any:
        return self._data[normalize_key(key)]

    def __setitem__(self, key: Any, value: Any) -> None:
        self._store(key, self._filter(value))

    def __delitem__(self, key: Any) -> None:
        del self._data[normalize_key(key)]

    def __contains__(self, key: object) -> bool:
        try:
            return normalize_key(key) in self._data
        except TypeError:
            return False

    def __iter__(self) -> Iterator[Key]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"{type(self).__qualname__}({self._data!r})"

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source: Any, handler: GetCoreSchemaHandler
    ) -> CoreSchema:
        """Validate record fields holding a collection by instance check only."""
        return core_schema.is_instance_schema(cls)

    # --- Mutation ---

    def append(self, value: Any) -> None:
        """Store *value* at the next integer index."""
        self._store(self._next_index, self._filter(value))

    def exchange(self, values: Any) -> dict[Key, Any]:
        """Replace the entire store with *values* and return the old entries.

        *values* may be a list, tuple, mapping or another collection. Every
        element is filtered before anything is replaced, so a failure leaves
        the collection untouched.
        """
        replacement: dict[Key, Any] = {}
        for key, value in _entries(values):
            replacement[normalize_key(key)] = self._filter(value)

        previous = self._data
        self._data = replacement
        self._next_index = max([0, *(key + 1 for key in replacement if isinstance(key, int))])
        logger.debug("Exchanged %d entries into %s", len(replacement), type(self).__qualname__)
        return previous

    # --- Exportable ---

    def to_tree(self) -> Tree:
        """Export as a list when keys are exactly ``0..n-1`` in order, else a dict.

        Raises:
            NotExportable: An element is an object without the Exportable
                capability; the error names its key.
        """
        tree = {key: export_value(key, value) for key, value in self._data.items()}
        if list(tree) == list(range(len(tree))):
            return list(tree.values())
        return tree

    def from_tree(self, tree: Any) -> Self:
        self.exchange(tree)
        return self

    # --- Internals ---

    def _filter(self, value: Any) -> Any:
        return value

    def _store(self, key: Any, value: Any) -> None:
        key = normalize_key(key)
        self._data[key] = value
        if isinstance(key, int) and key >= self._next_index:
            self._next_index = key + 1


# ---------------------------------------------------------------------------
# Typed collection
# ---------------------------------------------------------------------------


class TypedCollection(Collection):
    """Collection constrained to one declared element type.

    Subclasses set ``required_type`` to a descriptor or an ordered tuple of
    candidate descriptors::

        class ListingSet(TypedCollection):
            required_type = (Listing,)

        class Ids(TypedCollection):
            required_type = "integer"
    """

    required_type: ClassVar[Any] = ()
    _required: ClassVar[tuple[TypeDescriptor, ...]] = ()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._required = resolve_descriptors(cls.required_type)

    def merge_in(self, other: Any) -> None:
        """Merge *other* in with ordered-array merge rules.

        Integer keys never overwrite: their values are appended at the next
        index. String keys overwrite the value stored under the same key.
        """
        for key, item in _entries(other):
            item = self._filter(item)
            key = normalize_key(key)
            if isinstance(key, int):
                self._store(self._next_index, item)
            else:
                self._store(key, item)

    def merge_in_unique_data(self, other: Any) -> None:
        """Merge in only values not already present, compared with ``==``.

        Keys are secondary: a new value keeps its source key unless that
        key is taken, in which case it is appended. Values appended earlier
        in the same call count as present for later ones.
        """
        for key, item in _entries(other):
            item = self._filter(item)
            if any(existing == item for existing in self._data.values()):
                logger.debug("Skipped duplicate value under key %r", key)
                continue
            key = normalize_key(key)
            if key in self._data:
                self._store(self._next_index, item)
            else:
                self._store(key, item)

    def _filter(self, value: Any) -> Any:
        return coerce(value, self._required, owner=type(self).__qualname__)
