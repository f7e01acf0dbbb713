"""valueobjects — typed records and collections over loosely-typed trees."""

from valueobjects.domain.builder import Builder
from valueobjects.domain.coercion import coerce
from valueobjects.domain.collection import Collection, TypedCollection
from valueobjects.domain.errors import CodecError, NotExportable, TypeMismatch, ValueObjectError
from valueobjects.domain.export import Exportable
from valueobjects.domain.record import ValueObject
from valueobjects.domain.types import TypeKind

__version__ = "0.1.0"

__all__ = [
    "Builder",
    "CodecError",
    "Collection",
    "Exportable",
    "NotExportable",
    "TypeKind",
    "TypeMismatch",
    "TypedCollection",
    "ValueObject",
    "ValueObjectError",
    "__version__",
    "coerce",
]
