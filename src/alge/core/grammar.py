"""
Canonical alge type grammar and helpers.

Defines the closed set of descriptor kinds and primitive kinds, plus zero-IO
normalization helpers used by the descriptor constructors and the engine.

Design principles
-----------------
1) One naming standard:
   - Enum classes: PascalCase
   - Enum member names: UPPER_SNAKE (Python constants)
   - Enum serialized values: lower_snake

2) Closed variant set:
   - TypeKind enumerates every descriptor shape. The engine dispatches on it
     through an explicit table, so adding a shape means adding a member here,
     a descriptor class, and a converter.

3) Naming is enforced at import:
   - ensure_all_enum_values_lower_snake runs on TypeKind and PrimitiveKind when
     this module loads (and on SchemaName when alge.core.catalog loads).

Examples
--------
>>> from alge.core.grammar import TypeKind, primitive_kind_from_value, PrimitiveKind
>>> TypeKind.RECORD.value
'record'
>>> primitive_kind_from_value("Integer") == PrimitiveKind.INTEGER
True
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Final

__all__ = [
    "TypeKind",
    "PrimitiveKind",
    "PRIMITIVE_KIND_NAMES",
    "is_lower_snake",
    "primitive_kind_from_value",
    "ensure_all_enum_values_lower_snake",
]

_LOWER_SNAKE: Final = re.compile(r"^[a-z][a-z0-9_]*$")


class TypeKind(Enum):
    """Dispatch tag for every descriptor variant."""

    PRIMITIVE = "primitive"
    NONE = "none"
    ALIAS = "alias"
    UNION = "union"
    ENUM = "enum"
    TUPLE = "tuple"
    RECORD = "record"
    LIST = "list"
    MAP = "map"


class PrimitiveKind(Enum):
    """Atomic scalar kinds a Primitive descriptor can stand for."""

    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    BOOLEAN = "boolean"

    @property
    def display_name(self) -> str:
        """Display name used in schema notation (e.g. 'Integer')."""
        return self.value.capitalize()


# Mapping from kind name strings to PrimitiveKind members
PRIMITIVE_KIND_NAMES: dict[str, PrimitiveKind] = {pk.value: pk for pk in PrimitiveKind}


def is_lower_snake(s: str) -> bool:
    """Return True if s is a lower_snake token."""
    return bool(_LOWER_SNAKE.match(s))


def primitive_kind_from_value(value: str | PrimitiveKind) -> PrimitiveKind:
    """
    Normalize a primitive kind name (any case, surrounding whitespace allowed).

    Args:
        value (str | PrimitiveKind): Kind name such as "integer" or "Float".

    Returns:
        PrimitiveKind: The matching enum member.

    Raises:
        ValueError: If the name does not denote a primitive kind.
    """
    if isinstance(value, PrimitiveKind):
        return value
    token = str(value).strip().lower()
    if not is_lower_snake(token):
        raise ValueError(f"primitive kind must be a lower_snake name (got {value!r})")
    kind = PRIMITIVE_KIND_NAMES.get(token)
    if kind is None:
        allowed = ", ".join(PRIMITIVE_KIND_NAMES)
        raise ValueError(f"unknown primitive kind {value!r} (expected one of: {allowed})")
    return kind


def ensure_all_enum_values_lower_snake(*enums: type[Enum]) -> None:
    """Raise ValueError if any member value of the given enums is not lower_snake."""
    for enum_cls in enums:
        for member in enum_cls:
            if not is_lower_snake(str(member.value)):
                raise ValueError(
                    f"{enum_cls.__name__}.{member.name} value {member.value!r} not lower_snake"
                )


ensure_all_enum_values_lower_snake(TypeKind, PrimitiveKind)
