"""
Pydantic v2 model for per-call deserialization options.

Responsibilities
- Carry the record target hook (``target_factory`` + ``field_setter``), the
  recursion depth limit, and numeric-string parsing policy.
- Reject inconsistent combinations at construction time (a setter without a
  factory) and out-of-range limits.

Style
- Frozen model with ``extra="forbid"`` so typos in option names fail loudly.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from alge.core.constants import DEFAULT_MAX_DEPTH, PARSE_NUMERIC_STRINGS

__all__ = [
    "DeserializeOptions",
    "FieldSetter",
    "TargetFactory",
]

TargetFactory = Callable[[], Any]
FieldSetter = Callable[[Any, str, Any], None]


class DeserializeOptions(BaseModel):
    """
    Options for a deserialize call.

    Attributes:
        target_factory (Callable[[], Any] | None): Zero-argument constructor for the
            root record's output object. When None, records convert to dicts.
        field_setter (Callable[[Any, str, Any], None] | None): Assigns one field on
            the target object; defaults to ``setattr``. Requires target_factory.
        max_depth (int): Maximum nesting depth before DepthExceeded (>= 1).
        parse_numeric_strings (bool): Accept "3" / "3.5" for Integer / Float.

    Raises:
        pydantic.ValidationError: On unknown options, max_depth < 1, or a
            field_setter without a target_factory.

    Examples:
        >>> from types import SimpleNamespace
        >>> from alge.serde.options import DeserializeOptions
        >>> opts = DeserializeOptions(target_factory=SimpleNamespace)
        >>> opts.setter() is setattr
        True
    """

    model_config = ConfigDict(extra="forbid", frozen=True, arbitrary_types_allowed=True)

    target_factory: TargetFactory | None = None
    field_setter: FieldSetter | None = None
    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=1)
    parse_numeric_strings: bool = PARSE_NUMERIC_STRINGS

    @model_validator(mode="after")
    def _setter_requires_factory(self) -> DeserializeOptions:
        if self.field_setter is not None and self.target_factory is None:
            raise ValueError("field_setter requires target_factory")
        return self

    def setter(self) -> FieldSetter:
        """Return the effective field setter (``setattr`` unless overridden)."""
        return self.field_setter or setattr
