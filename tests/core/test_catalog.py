from __future__ import annotations

import pytest

from alge.core.catalog import (
    API_RESPONSE,
    CHARGE,
    CURRENCY,
    RESULT,
    SchemaName,
    get_schema,
    list_schemas,
)
from alge.core.descriptors import STRING, TypeDescriptor, Union
from alge.core.grammar import ensure_all_enum_values_lower_snake


def test_schema_names_are_lower_snake() -> None:
    ensure_all_enum_values_lower_snake(SchemaName)


def test_every_name_has_a_schema() -> None:
    listed = dict(list_schemas())
    assert set(listed) == set(SchemaName)
    for name in SchemaName:
        assert isinstance(get_schema(name), TypeDescriptor)
        assert get_schema(name.value) is listed[name]


def test_get_schema_normalizes_and_rejects() -> None:
    assert get_schema(" Result ") is RESULT
    with pytest.raises(KeyError):
        get_schema("invoice")


def test_charge_is_built_by_merge() -> None:
    # metadata fields come first (right operand of the merge)
    assert CHARGE.field_names == ("data", "status", "currency", "amount")
    assert CHARGE.fields["currency"] == CURRENCY
    assert CURRENCY.resolve() == STRING


def test_response_unions() -> None:
    assert isinstance(API_RESPONSE, Union)
    assert len(API_RESPONSE.members) == 2
    assert str(RESULT) == (
        "Record{code: Integer, message: String} | "
        "Record{object: String, data: Map[String, Integer | Float | String]}"
    )


def test_charge_contains_typed_value() -> None:
    value = {
        "data": {"order": "42"},
        "status": "paid",
        "currency": "usd",
        "amount": (1200, "usd"),
    }
    assert CHARGE.contains(value)
    assert API_RESPONSE.contains(value)
    assert not CHARGE.contains({**value, "status": "refunded"})
