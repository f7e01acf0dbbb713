"""Domain layer — type kinds, coercion, records, and collections.

The Exportable text hooks reach the codecs in ``valueobjects.infrastructure``,
which read their defaults from ``valueobjects.config``. Nothing else in this
layer touches settings.
"""
