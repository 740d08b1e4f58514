from __future__ import annotations

import importlib

import pytest

import alge.core.typing as alge_typing


@pytest.mark.parametrize(
    "module_name",
    [
        "alge.core.catalog",
        "alge.core.constants",
        "alge.core.descriptors",
        "alge.core.errors",
        "alge.core.grammar",
        "alge.core.ordering",
        "alge.core.typing",
    ],
)
def test_public_names_resolve(module_name: str) -> None:
    module = importlib.import_module(module_name)
    missing = [name for name in module.__all__ if not hasattr(module, name)]
    assert missing == []


def test_typing_exports_value_aliases() -> None:
    assert alge_typing.__all__ == ["GenericValue", "TypedValue", "PathSegment"]
