from __future__ import annotations

from enum import Enum

import pytest

from alge.core.grammar import (
    PRIMITIVE_KIND_NAMES,
    PrimitiveKind,
    TypeKind,
    ensure_all_enum_values_lower_snake,
    is_lower_snake,
    primitive_kind_from_value,
)


def test_all_enum_values_are_lower_snake() -> None:
    ensure_all_enum_values_lower_snake(TypeKind, PrimitiveKind)


def test_lower_snake_check_raises_on_bad_value() -> None:
    class Bad(Enum):
        OK = "ok"
        BAD = "NotSnake"

    with pytest.raises(ValueError, match="Bad.BAD"):
        ensure_all_enum_values_lower_snake(Bad)


@pytest.mark.parametrize(
    "token, expected",
    [("record", True), ("two_bits", True), ("Record", False), ("1st", False), ("", False)],
)
def test_is_lower_snake(token: str, expected: bool) -> None:
    assert is_lower_snake(token) is expected


@pytest.mark.parametrize(
    "value, expected",
    [
        ("integer", PrimitiveKind.INTEGER),
        ("Float", PrimitiveKind.FLOAT),
        ("  STRING ", PrimitiveKind.STRING),
        (PrimitiveKind.BOOLEAN, PrimitiveKind.BOOLEAN),
    ],
)
def test_primitive_kind_from_value(value, expected) -> None:
    assert primitive_kind_from_value(value) is expected


def test_primitive_kind_from_value_rejects_unknown() -> None:
    with pytest.raises(ValueError, match="unknown primitive kind"):
        primitive_kind_from_value("decimal")
    with pytest.raises(ValueError, match="lower_snake"):
        primitive_kind_from_value("big int")


def test_display_names() -> None:
    assert [pk.display_name for pk in PrimitiveKind] == ["Integer", "Float", "String", "Boolean"]
    assert PRIMITIVE_KIND_NAMES["boolean"] is PrimitiveKind.BOOLEAN
