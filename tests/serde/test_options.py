from __future__ import annotations

from types import SimpleNamespace

import pytest
from pydantic import ValidationError

from alge.core.constants import DEFAULT_MAX_DEPTH
from alge.serde.options import DeserializeOptions


def test_defaults() -> None:
    opts = DeserializeOptions()
    assert opts.target_factory is None
    assert opts.field_setter is None
    assert opts.max_depth == DEFAULT_MAX_DEPTH
    assert opts.parse_numeric_strings is True


def test_setter_defaults_to_setattr() -> None:
    opts = DeserializeOptions(target_factory=SimpleNamespace)
    assert opts.setter() is setattr


def test_setter_requires_factory() -> None:
    with pytest.raises(ValidationError):
        DeserializeOptions(field_setter=setattr)


@pytest.mark.parametrize("depth", [0, -1])
def test_max_depth_must_be_positive(depth: int) -> None:
    with pytest.raises(ValidationError):
        DeserializeOptions(max_depth=depth)


def test_unknown_options_are_rejected() -> None:
    with pytest.raises(ValidationError):
        DeserializeOptions(max_dept=3)  # type: ignore[call-arg]


def test_options_are_frozen() -> None:
    opts = DeserializeOptions()
    with pytest.raises(ValidationError):
        opts.max_depth = 3  # type: ignore[misc]
