"""
Frozen example schemas built from the alge descriptor constructors.

Notes:
    - Two small API vocabularies: a payments response (Charge | Error) and a
      generic acknowledgement result (Error | Success).
    - CHARGE is composed with record merge (``+``) from a base record and
      METADATA_OBJECT, exercising the construction-time merge path.
    - Core is zero-IO (stdlib only); the CLI (alge.cli) and tests consume these.

Examples:
    >>> from alge.core.catalog import SchemaName, get_schema
    >>> str(get_schema(SchemaName.TWO_BITS))
    'Tuple[Boolean, Boolean]'
"""

from __future__ import annotations

from enum import Enum

from .descriptors import (
    BOOLEAN,
    FLOAT,
    INTEGER,
    STRING,
    Alias,
    TypeDescriptor,
    enum_of,
    map_of,
    record_of,
    tuple_of,
    union_of,
)
from .grammar import ensure_all_enum_values_lower_snake

__all__ = [
    "SchemaName",
    "CHARGE_STATUS",
    "CURRENCY",
    "CHARGE_AMOUNT",
    "METADATA_OBJECT",
    "CHARGE",
    "ERROR",
    "API_RESPONSE",
    "BASIC_VALUE",
    "SUCCESS",
    "RESULT",
    "TWO_BITS",
    "get_schema",
    "list_schemas",
]


class SchemaName(Enum):
    """Canonical names of the catalog schemas (lower_snake values)."""

    CHARGE_STATUS = "charge_status"
    CURRENCY = "currency"
    CHARGE_AMOUNT = "charge_amount"
    METADATA_OBJECT = "metadata_object"
    CHARGE = "charge"
    ERROR = "error"
    API_RESPONSE = "api_response"
    BASIC_VALUE = "basic_value"
    SUCCESS = "success"
    RESULT = "result"
    TWO_BITS = "two_bits"


# -----------------------------------------------------------------------------
# Payments vocabulary
# -----------------------------------------------------------------------------

CHARGE_STATUS = enum_of("submitted", "pending", "paid", "rejected")
CURRENCY = Alias("Currency", STRING)
CHARGE_AMOUNT = tuple_of(INTEGER, CURRENCY)

METADATA_OBJECT = record_of(data=map_of(STRING, STRING))

CHARGE = (
    record_of(
        status=CHARGE_STATUS,
        currency=CURRENCY,
        amount=CHARGE_AMOUNT,
    )
    + METADATA_OBJECT
)

ERROR = record_of(code=INTEGER, message=STRING)

API_RESPONSE = CHARGE | ERROR

# -----------------------------------------------------------------------------
# Acknowledgement vocabulary
# -----------------------------------------------------------------------------

BASIC_VALUE = union_of(INTEGER, FLOAT, STRING)

SUCCESS = record_of(object=STRING, data=map_of(STRING, BASIC_VALUE))

RESULT = ERROR | SUCCESS

TWO_BITS = tuple_of(BOOLEAN, BOOLEAN)


_SCHEMAS: dict[SchemaName, TypeDescriptor] = {
    SchemaName.CHARGE_STATUS: CHARGE_STATUS,
    SchemaName.CURRENCY: CURRENCY,
    SchemaName.CHARGE_AMOUNT: CHARGE_AMOUNT,
    SchemaName.METADATA_OBJECT: METADATA_OBJECT,
    SchemaName.CHARGE: CHARGE,
    SchemaName.ERROR: ERROR,
    SchemaName.API_RESPONSE: API_RESPONSE,
    SchemaName.BASIC_VALUE: BASIC_VALUE,
    SchemaName.SUCCESS: SUCCESS,
    SchemaName.RESULT: RESULT,
    SchemaName.TWO_BITS: TWO_BITS,
}


ensure_all_enum_values_lower_snake(SchemaName)


def get_schema(name: SchemaName | str) -> TypeDescriptor:
    """
    Return the example descriptor for a schema name.

    Args:
        name (SchemaName | str): Enum member or its lower_snake value.

    Returns:
        TypeDescriptor: The frozen descriptor.

    Raises:
        KeyError: If the name is unknown.
    """
    if not isinstance(name, SchemaName):
        try:
            name = SchemaName(str(name).strip().lower())
        except ValueError as exc:
            raise KeyError(f"unknown schema {name!r}") from exc
    return _SCHEMAS[name]


def list_schemas() -> list[tuple[SchemaName, TypeDescriptor]]:
    """Return all catalog schemas in declaration order."""
    return list(_SCHEMAS.items())
