"""
Core exception types raised while building or composing type descriptors.

Provides typed exceptions for schema-definition failures:
- InvalidTypeConstructor when a freshly built descriptor fails its valid() check.
- TypeMismatchInMerge when two records share a field whose types are unrelated.

Notes:
    - This module uses only the Python standard library and has no side effects.
    - Construction errors are never recovered automatically; the schema author
      must fix the definition. Conversion failures live in alge.serde.errors.

Examples:
    Catch an invalid enum definition.

    >>> from alge.core.descriptors import enum_of
    >>> from alge.core.errors import InvalidTypeConstructor
    >>> try:
    ...     enum_of(1, "one")
    ... except InvalidTypeConstructor as e:
    ...     msg = str(e)
    >>> "invalid enum" in msg
    True
"""

from __future__ import annotations

__all__ = [
    "ConstructionError",
    "InvalidTypeConstructor",
    "TypeMismatchInMerge",
]


class ConstructionError(ValueError):
    """Base class for failures raised while defining or composing descriptors."""


class InvalidTypeConstructor(ConstructionError):
    """A descriptor (or subtype declaration) failed its validity check."""


class TypeMismatchInMerge(ConstructionError):
    """
    Record merge found a shared field whose types have no subtype relation.

    Attributes:
        field (str): Name of the conflicting field.
    """

    def __init__(self, field: str, message: str | None = None) -> None:
        super().__init__(message or f"type mismatch in Record.merge: {field}")
        self.field = field
