"""Builder — construct records from source maps with flexible key names.

Source data rarely uses the same key names as the record it feeds. A
builder subclass implements :meth:`Builder.create` and uses
:meth:`Builder.set_value` to copy each field from the first matching key
in a prioritized list.

Builders are plain instances owned by the caller; there is no shared
builder state between callers.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any, Generic, TypeVar

_T = TypeVar("_T")


class Builder(ABC, Generic[_T]):
    """Base class for record builders."""

    @abstractmethod
    def create(self, data: Mapping[str, Any]) -> _T:
        """Build a new object from *data*."""

    def build(self, data: Mapping[str, Any]) -> _T:
        return self.create(data)

    @staticmethod
    def set_value(
        obj: object,
        key: str,
        data: Mapping[str, Any],
        data_keys: Sequence[str] = (),
        return_not_null: bool = True,
    ) -> None:
        """Set attribute *key* on *obj* from the first "found" key in *data*.

        Candidate keys are tried in order, followed by *key* itself. Every
        candidate present in *data* is assigned; the scan stops at the first
        one counted as found.

        Args:
            obj: Object whose attribute is being set.
            key: Attribute name, also tried last as a source key.
            data: Source mapping.
            data_keys: Source keys to try, highest priority first.
            return_not_null: When True a non-``None`` value counts as found;
                otherwise only a truthy value does.
        """
        for candidate in (*data_keys, key):
            if candidate not in data:
                continue
            value = data[candidate]
            setattr(obj, key, value)
            if return_not_null:
                if value is not None:
                    break
            elif value:
                break

    @staticmethod
    def get_value(key: str, data: Mapping[str, Any]) -> Any:
        """Return ``data[key]`` or None when the key is absent."""
        return data.get(key)
