from __future__ import annotations

import pytest

from alge.core.descriptors import INTEGER, record_of
from alge.serde.errors import (
    DeserializationError,
    KeySetMismatch,
    SerdeError,
    TypeMismatch,
    format_path,
)


@pytest.mark.parametrize(
    "path, expected",
    [
        ((), ""),
        (("data",), "data"),
        (("data", "b", 0), "data.b[0]"),
        ((0, "name"), "[0].name"),
        (("meta", "content-type"), "meta['content-type']"),
    ],
)
def test_format_path(path: tuple, expected: str) -> None:
    assert format_path(path) == expected


def test_at_prepends_segments_in_place() -> None:
    err = TypeMismatch("Non-integer value: 'x' (str)", INTEGER)
    assert err.at(2) is err
    err.at("items").at("order")
    assert err.path == ("order", "items", 2)
    assert str(err) == "order.items[2]: Non-integer value: 'x' (str)"
    assert err.message == "Non-integer value: 'x' (str)"


def test_reframed_keeps_message() -> None:
    record = record_of(a=INTEGER)
    err = TypeMismatch("boom", INTEGER).reframed(record)
    assert err.descriptor == record
    assert err.describe() == "Could not deserialize to Record{a: Integer}: boom"


def test_hierarchy() -> None:
    err = KeySetMismatch("keys", expected={"a", "b"}, actual={"b", "c"})
    assert isinstance(err, DeserializationError)
    assert isinstance(err, SerdeError)
    assert isinstance(err, ValueError)
    assert err.missing == {"a"}
    assert err.extra == {"c"}


def test_reraise_keeps_class_and_traceback() -> None:
    def inner() -> None:
        raise TypeMismatch("inner", INTEGER)

    def outer() -> None:
        try:
            inner()
        except DeserializationError as exc:
            raise exc.at("field")

    with pytest.raises(TypeMismatch) as info:
        outer()
    assert info.value.path == ("field",)
    assert info.traceback[-1].name == "inner"
