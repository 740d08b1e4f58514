"""
Per-kind conversion strategies for the alge deserialization engine.

Each converter turns one generic value into a typed value for one descriptor
kind, recursing through the engine for children. The engine picks a converter
from CONVERTERS by the descriptor's TypeKind.

Resolution rules
- Primitives: exact native type, with int -> float widening and (optionally)
  numeric strings parsed by ``int()`` / ``float()``. bool is never a number.
- Alias: converts as its inner type; failures are attributed to the alias.
- Union / Enum: first success in declaration order wins and its converted value
  is returned. Member failures are swallowed (logged at DEBUG) except
  DepthExceeded and NoConverterForKind. A None input is accepted when NONE is a
  direct member.
- Tuple / Record / List / Map: all-or-nothing; the first failing element is
  re-raised with its index, field name or key added to the breadcrumb.

Notes
- Converters hold no state; everything per-call lives in the engine's options.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from alge.core.descriptors import (
    Alias,
    Enum,
    List,
    Map,
    Primitive,
    Record,
    Tuple,
    TypeDescriptor,
    Union,
    literal_matches,
)
from alge.core.grammar import PrimitiveKind, TypeKind

from .errors import (
    DepthExceeded,
    DeserializationError,
    KeySetMismatch,
    NoConverterForKind,
    NoEnumMatch,
    NoUnionMatch,
    ParseError,
    TypeMismatch,
)

if TYPE_CHECKING:
    from .engine import Deserializer

__all__ = [
    "Converter",
    "CONVERTERS",
    "convert_primitive",
    "convert_none",
    "convert_alias",
    "convert_union",
    "convert_enum",
    "convert_tuple",
    "convert_record",
    "convert_list",
    "convert_map",
]

logger = logging.getLogger(__name__)

# (engine, descriptor, value, depth, root) -> typed value
Converter = Callable[["Deserializer", Any, Any, int, bool], Any]

# Errors that signal a broken call rather than a non-matching member.
_FATAL = (DepthExceeded, NoConverterForKind)


def _type_name(value: Any) -> str:
    return "None" if value is None else type(value).__name__


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


# -----------------------------------------------------------------------------
# Primitives
# -----------------------------------------------------------------------------


def _to_integer(desc: Primitive, value: Any, parse_strings: bool) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str) and parse_strings:
        try:
            return int(value)
        except ValueError as exc:
            raise ParseError(f"Can't parse {value!r} as integer", desc) from exc
    raise TypeMismatch(f"Non-integer value: {value!r} ({_type_name(value)})", desc)


def _to_float(desc: Primitive, value: Any, parse_strings: bool) -> float:
    if isinstance(value, float):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        try:
            return float(value)
        except OverflowError as exc:
            raise TypeMismatch(f"Integer {value!r} is out of float range", desc) from exc
    if isinstance(value, str) and parse_strings:
        try:
            return float(value)
        except ValueError as exc:
            raise ParseError(f"Can't parse {value!r} as float", desc) from exc
    raise TypeMismatch(f"Non-numeric value: {value!r} ({_type_name(value)})", desc)


def _to_string(desc: Primitive, value: Any, parse_strings: bool) -> str:
    if not isinstance(value, str):
        raise TypeMismatch(f"Non-string value: {value!r} ({_type_name(value)})", desc)
    return value


def _to_boolean(desc: Primitive, value: Any, parse_strings: bool) -> bool:
    if not isinstance(value, bool):
        raise TypeMismatch(f"Non-boolean value: {value!r} ({_type_name(value)})", desc)
    return value


_PRIMITIVE_PARSERS: dict[PrimitiveKind, Callable[[Primitive, Any, bool], Any]] = {
    PrimitiveKind.INTEGER: _to_integer,
    PrimitiveKind.FLOAT: _to_float,
    PrimitiveKind.STRING: _to_string,
    PrimitiveKind.BOOLEAN: _to_boolean,
}


def convert_primitive(
    engine: Deserializer, desc: Primitive, value: Any, depth: int, root: bool
) -> Any:
    parse = _PRIMITIVE_PARSERS[desc.primitive]
    return parse(desc, value, engine.options.parse_numeric_strings)


def convert_none(
    engine: Deserializer, desc: TypeDescriptor, value: Any, depth: int, root: bool
) -> None:
    if value is not None:
        raise TypeMismatch(f"Value {value!r} was not None", desc)
    return None


# -----------------------------------------------------------------------------
# Wrappers and alternatives
# -----------------------------------------------------------------------------


def convert_alias(engine: Deserializer, desc: Alias, value: Any, depth: int, root: bool) -> Any:
    try:
        return engine.convert(desc.inner, value, depth + 1, root=root)
    except DeserializationError as exc:
        raise exc.reframed(desc)


def convert_union(engine: Deserializer, desc: Union, value: Any, depth: int, root: bool) -> Any:
    for member in desc.members:
        try:
            return engine.convert(member, value, depth + 1, root=root)
        except _FATAL:
            raise
        except DeserializationError as exc:
            logger.debug("union member %s rejected %s: %s", member, _type_name(value), exc)
    if value is None and desc.includes_none:
        return None
    attempted = ", ".join(str(m) for m in desc.members)
    raise NoUnionMatch(
        f"None of [{attempted}] matched value {value!r}",
        desc,
        members=desc.members,
    )


def convert_enum(engine: Deserializer, desc: Enum, value: Any, depth: int, root: bool) -> Any:
    for member in desc.values:
        if isinstance(member, TypeDescriptor):
            try:
                return engine.convert(member, value, depth + 1, root=root)
            except _FATAL:
                raise
            except DeserializationError as exc:
                logger.debug("enum member %s rejected %s: %s", member, _type_name(value), exc)
        elif literal_matches(member, value):
            return member
    if value is None and desc.includes_none:
        return None
    raise NoEnumMatch(f"Value {value!r} is not a member of {desc}", desc, values=desc.values)


# -----------------------------------------------------------------------------
# Aggregates
# -----------------------------------------------------------------------------


def convert_tuple(
    engine: Deserializer, desc: Tuple, value: Any, depth: int, root: bool
) -> tuple[Any, ...]:
    if not _is_sequence(value):
        raise TypeMismatch(
            f"Can only construct tuples from sequences, got {_type_name(value)}", desc
        )
    if len(value) < desc.arity:
        raise TypeMismatch(
            f"Expected at least {desc.arity} elements for {desc}, got {len(value)}",
            desc,
        )
    out: list[Any] = []
    for index, slot in enumerate(desc.slots):
        try:
            out.append(engine.convert(slot, value[index], depth + 1))
        except DeserializationError as exc:
            raise exc.at(index)
    return tuple(out)


def convert_record(engine: Deserializer, desc: Record, value: Any, depth: int, root: bool) -> Any:
    """
    Convert a mapping whose key set equals the record's field set exactly.

    The root record of a call is built through ``options.target_factory`` when
    one is configured; every other record converts to a dict in field order.
    """
    if not isinstance(value, Mapping):
        raise TypeMismatch(
            f"Can only construct records from mappings, got {_type_name(value)}", desc
        )

    expected = set(desc.fields)
    actual = set(value.keys())
    if actual != expected:
        raise KeySetMismatch(
            f"Invalid record keys: got {sorted(map(str, actual))}, expected {sorted(expected)}",
            desc,
            expected=expected,
            actual=actual,
        )

    options = engine.options
    if root and options.target_factory is not None:
        target = options.target_factory()
        assign = options.setter()
    else:
        target = {}
        assign = dict.__setitem__

    for name, field_type in desc.fields.items():
        try:
            converted = engine.convert(field_type, value[name], depth + 1)
        except DeserializationError as exc:
            raise exc.at(name)
        assign(target, name, converted)
    return target


def convert_list(
    engine: Deserializer, desc: List, value: Any, depth: int, root: bool
) -> list[Any]:
    if not _is_sequence(value):
        raise TypeMismatch(
            f"Can only construct lists from sequences, got {_type_name(value)}", desc
        )
    out: list[Any] = []
    for index, item in enumerate(value):
        try:
            out.append(engine.convert(desc.element_type, item, depth + 1))
        except DeserializationError as exc:
            raise exc.at(index)
    return out


def convert_map(
    engine: Deserializer, desc: Map, value: Any, depth: int, root: bool
) -> dict[str, Any]:
    if not isinstance(value, Mapping):
        raise TypeMismatch(
            f"Can only construct maps from mappings, got {_type_name(value)}", desc
        )
    out: dict[str, Any] = {}
    for key, item in value.items():
        if not isinstance(key, str) or not desc.key_type.contains(key):
            raise TypeMismatch(f"Map key {key!r} is not a {desc.key_type}", desc)
        try:
            out[key] = engine.convert(desc.value_type, item, depth + 1)
        except DeserializationError as exc:
            raise exc.at(key)
    return out


CONVERTERS: Mapping[TypeKind, Converter] = {
    TypeKind.PRIMITIVE: convert_primitive,
    TypeKind.NONE: convert_none,
    TypeKind.ALIAS: convert_alias,
    TypeKind.UNION: convert_union,
    TypeKind.ENUM: convert_enum,
    TypeKind.TUPLE: convert_tuple,
    TypeKind.RECORD: convert_record,
    TypeKind.LIST: convert_list,
    TypeKind.MAP: convert_map,
}
