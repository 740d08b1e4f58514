"""
Lightweight typing aliases for the generic and typed value trees.

Provides minimal aliases to improve readability and static checks. This module
contains no runtime logic and is zero-IO.

Notes:
    - GenericValue is what an external parser (e.g. json.loads) hands the engine.
    - TypedValue is what a successful conversion returns; tuples appear for
      Tuple descriptors and caller objects for records built through a target hook.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, TypeAlias

__all__ = [
    "GenericValue",
    "TypedValue",
    "PathSegment",
]

Scalar: TypeAlias = bool | int | float | str | None

GenericValue: TypeAlias = Scalar | Sequence[Any] | Mapping[str, Any]

# Kept broad: record target hooks may return arbitrary caller objects.
TypedValue: TypeAlias = Any

# Breadcrumb element: a record field name or map key (str) or a sequence index (int).
PathSegment: TypeAlias = str | int
