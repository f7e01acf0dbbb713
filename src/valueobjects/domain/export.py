"""Exportable capability — tree import/export plus text hooks.

Records and collections both extend :class:`Exportable`. Export code checks
for this base class explicitly; an object that merely happens to have a
``to_tree`` method is not treated as exportable.

Text conversion is a thin pass-through: ``to_text`` encodes ``to_tree()``
with the codec registered for the format, ``from_text`` decodes and hands
the tree to ``from_tree``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Self

from valueobjects.domain.errors import NotExportable
from valueobjects.domain.types import Tree, describe_value
from valueobjects.infrastructure.codecs import get_codec

_SCALAR_TYPES = (str, int, float, bool)


class Exportable(ABC):
    """Capability set ``{to_tree, from_tree, to_text, from_text}``."""

    __slots__ = ()

    @abstractmethod
    def to_tree(self) -> Tree:
        """Return a plain nested structure holding no Exportable objects."""

    @abstractmethod
    def from_tree(self, tree: Any) -> Self:
        """Populate this object in place from a plain tree and return it."""

    # --- Text hooks ---

    def to_text(self, fmt: str = "json") -> str:
        return get_codec(fmt).encode(self.to_tree())

    def from_text(self, text: str, fmt: str = "json") -> Self:
        return self.from_tree(get_codec(fmt).decode(text))

    def to_json(self) -> str:
        return self.to_text("json")

    def from_json(self, text: str) -> Self:
        return self.from_text(text, "json")

    def to_yaml(self) -> str:
        return self.to_text("yaml")

    def from_yaml(self, text: str) -> Self:
        return self.from_text(text, "yaml")


def export_value(key: object, value: Any) -> Tree:
    """Convert one field or element value to its tree form.

    Scalars pass through, Exportable objects are replaced by their own
    ``to_tree()``, and plain lists/dicts are walked so nested objects are
    exported too.

    Raises:
        NotExportable: *value* (or something nested in it) is an object
            without the Exportable capability. *key* names the field.
    """
    if value is None or isinstance(value, _SCALAR_TYPES):
        return value
    if isinstance(value, Exportable):
        return value.to_tree()
    if isinstance(value, (list, tuple)):
        return [export_value(key, item) for item in value]
    if isinstance(value, dict):
        return {k: export_value(key, item) for k, item in value.items()}
    raise NotExportable(key, describe_value(value))
