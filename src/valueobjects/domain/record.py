"""ValueObject — a keyed record whose attributes ARE tree keys.

Fields are declared as pydantic fields and must all carry defaults so a
record can be built with no arguments. Nested records and collections are
declared with ``Field(default_factory=...)``; the record owns them and
``from_tree`` fills them in place rather than replacing them.

Assignment goes through pydantic validation, so the usual lax conversions
apply (``"1"`` to an ``int`` field, ``"true"`` to a ``bool`` field).
Assigning ``None`` to a field that cannot hold it is ignored during
``from_tree``; every other validation error propagates.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, ClassVar, Self

from pydantic import BaseModel, ConfigDict, ValidationError

from valueobjects.domain.errors import NotExportable
from valueobjects.domain.export import Exportable, export_value
from valueobjects.domain.types import describe_value

logger = logging.getLogger(__name__)


class ValueObject(BaseModel, Exportable):
    """Base record — subclass and declare fields with defaults.

    Subclasses may set ``unique_id_field`` to the name of the field that
    identifies a record (e.g. a primary key), and may override
    :meth:`to_tree` to pre-format specific fields before calling
    ``super().to_tree(data)``.
    """

    model_config = ConfigDict(
        validate_assignment=True,
        arbitrary_types_allowed=True,
    )

    unique_id_field: ClassVar[str] = ""

    def to_tree(self, data: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """Export the record as a plain dict in field declaration order.

        Args:
            data: Optional pre-transformed snapshot. Values already in
                tree form pass straight through; remaining objects are
                exported recursively.

        Raises:
            NotExportable: A field holds an object that is not Exportable.
        """
        snapshot = dict(data) if data is not None else self._snapshot()
        return {key: export_value(key, value) for key, value in snapshot.items()}

    def from_tree(self, tree: Mapping[str, Any]) -> Self:
        """Populate declared fields from *tree*; unknown keys are ignored.

        Raises:
            NotExportable: A field holds a non-Exportable object and the
                tree carries a value for it.
            pydantic.ValidationError: A non-``None`` value fails field
                validation.
        """
        if not isinstance(tree, Mapping):
            msg = f"{type(self).__qualname__}.from_tree expects a mapping, got {describe_value(tree)}"
            raise TypeError(msg)

        fields = type(self).model_fields
        for key, value in tree.items():
            if key not in fields:
                continue
            current = getattr(self, key, None)
            if isinstance(current, Exportable):
                current.from_tree(value)
            elif current is not None and not _is_plain(current):
                raise NotExportable(key, describe_value(current))
            else:
                self._assign(key, value)
        return self

    def unique_id(self) -> Any:
        """Return the value of ``unique_id_field``, or None if not declared."""
        if not self.unique_id_field:
            return None
        return getattr(self, self.unique_id_field, None)

    def _snapshot(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in type(self).model_fields}

    def _assign(self, key: str, value: Any) -> None:
        try:
            setattr(self, key, value)
        except ValidationError:
            if value is not None:
                raise
            logger.debug("Ignored null for non-nullable field %s.%s", type(self).__qualname__, key)


def _is_plain(value: Any) -> bool:
    return isinstance(value, (str, int, float, bool, list, tuple, dict))
