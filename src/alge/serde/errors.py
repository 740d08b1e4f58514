"""
Custom exceptions for the alge.serde module.

Purpose
- Provide conversion-time error types that map cleanly to the engine's
  resolution steps.
- Keep alge.core as the source of truth for construction errors (see
  alge.core.errors).

Boundaries
- alge.core.errors.InvalidTypeConstructor / TypeMismatchInMerge are raised while
  building descriptors.
- alge.serde raises:
  - SerdeConfigError: invalid settings (env/TOML).
  - DeserializationError subclasses: a value failed conversion. Each carries the
    offending descriptor and a breadcrumb path (field names, indices, map keys)
    from the outermost aggregate to the innermost failure.

Notes
- Aggregates re-raise the innermost error with one more path segment, so the
  exception class and message of the innermost failure survive propagation.
- stdlib-only.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, TypeVar

from alge.core.typing import PathSegment

__all__ = [
    "SerdeError",
    "SerdeConfigError",
    "DeserializationError",
    "TypeMismatch",
    "ParseError",
    "NoUnionMatch",
    "NoEnumMatch",
    "KeySetMismatch",
    "NoConverterForKind",
    "DepthExceeded",
    "format_path",
]

_E = TypeVar("_E", bound="DeserializationError")


def format_path(path: Iterable[PathSegment]) -> str:
    """
    Render a breadcrumb path, e.g. ``("data", "b", 0)`` -> ``data.b[0]``.

    Indices render as ``[i]``; names that are not identifiers render as ``['k']``.
    """
    out = ""
    for segment in path:
        if isinstance(segment, int):
            out += f"[{segment}]"
        elif segment.isidentifier():
            out += f".{segment}" if out else segment
        else:
            out += f"[{segment!r}]"
    return out


class SerdeError(Exception):
    """
    Base class for alge.serde errors.

    Notes:
        Use this as a catch-all for engine-layer failures, distinct from alge.core errors.
    """


class SerdeConfigError(SerdeError):
    """
    Raised when serde settings are invalid.

    Examples:
        - ALGE_SERDE_MAX_DEPTH is not an integer
        - max_depth < 1 in alge.toml
    """


class DeserializationError(SerdeError, ValueError):
    """
    A value could not be converted to the requested descriptor.

    Attributes:
        message (str): Innermost human-readable reason.
        descriptor (Any): Descriptor the failing conversion targeted.
        path (tuple[str | int, ...]): Breadcrumb from the outermost aggregate.
    """

    def __init__(
        self, message: str, descriptor: Any = None, *, path: Iterable[PathSegment] = ()
    ) -> None:
        super().__init__(message)
        self.message = message
        self.descriptor = descriptor
        self.path: tuple[PathSegment, ...] = tuple(path)

    @property
    def breadcrumb(self) -> str:
        return format_path(self.path)

    def at(self: _E, segment: PathSegment) -> _E:
        """
        Nest this error one level deeper under ``segment`` and return it.

        Like ``with_traceback``, this updates the exception in place so that
        ``raise exc.at(key)`` keeps the traceback of the first raise.
        """
        self.path = (segment, *self.path)
        return self

    def reframed(self: _E, descriptor: Any) -> _E:
        """Attribute this error to ``descriptor`` (same message) and return it."""
        self.descriptor = descriptor
        return self

    def describe(self) -> str:
        """Long form including the target descriptor."""
        return f"Could not deserialize to {self.descriptor}: {self}"

    def __str__(self) -> str:
        if self.path:
            return f"{self.breadcrumb}: {self.message}"
        return self.message


class TypeMismatch(DeserializationError):
    """Input has the wrong shape or scalar type for the descriptor."""


class ParseError(DeserializationError):
    """A numeric string could not be parsed as the target numeric kind."""


class NoUnionMatch(DeserializationError):
    """
    No union member accepted the input.

    Attributes:
        members (tuple): The attempted members, in declaration order.
    """

    def __init__(
        self,
        message: str,
        descriptor: Any = None,
        *,
        path: Iterable[PathSegment] = (),
        members: Iterable[Any] = (),
    ) -> None:
        super().__init__(message, descriptor, path=path)
        self.members = tuple(members)


class NoEnumMatch(DeserializationError):
    """
    The input equals no enum literal and converts under no nested descriptor.

    Attributes:
        values (tuple): The enum values, in declaration order.
    """

    def __init__(
        self,
        message: str,
        descriptor: Any = None,
        *,
        path: Iterable[PathSegment] = (),
        values: Iterable[Any] = (),
    ) -> None:
        super().__init__(message, descriptor, path=path)
        self.values = tuple(values)


class KeySetMismatch(DeserializationError):
    """
    A record input's key set differs from the record's field-name set.

    Attributes:
        expected (frozenset[str]): Field names of the record.
        actual (frozenset[str]): Keys present in the input.
    """

    def __init__(
        self,
        message: str,
        descriptor: Any = None,
        *,
        path: Iterable[PathSegment] = (),
        expected: Iterable[str] = (),
        actual: Iterable[str] = (),
    ) -> None:
        super().__init__(message, descriptor, path=path)
        self.expected = frozenset(expected)
        self.actual = frozenset(actual)

    @property
    def missing(self) -> frozenset[str]:
        return self.expected - self.actual

    @property
    def extra(self) -> frozenset[str]:
        return self.actual - self.expected


class NoConverterForKind(DeserializationError):
    """The engine has no conversion strategy for the descriptor (a programming error)."""


class DepthExceeded(DeserializationError):
    """
    Input nesting exceeded the configured maximum depth.

    Attributes:
        limit (int): The max_depth in effect.
    """

    def __init__(
        self,
        message: str,
        descriptor: Any = None,
        *,
        path: Iterable[PathSegment] = (),
        limit: int = 0,
    ) -> None:
        super().__init__(message, descriptor, path=path)
        self.limit = limit
