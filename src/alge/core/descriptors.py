"""
Frozen type descriptors for the alge schema language.

A descriptor is an immutable value describing an accepted shape of data. The
closed variant set is Primitive, None, Alias, Union, Enum, Tuple, Record, List
and Map (see alge.core.grammar.TypeKind). Descriptors nest by value and form a
DAG; nothing is mutated after construction.

Responsibilities
- Enforce the validity invariant: construction runs valid() and raises
  InvalidTypeConstructor instead of producing an unusable descriptor.
- Provide structural membership (contains) over already-typed values.
- Provide the composition operators: ``a | b`` (Union, never flattened) and
  ``record + other`` (subtype-aware merge, see alge.core.ordering).

Notes:
    - Zero-IO, stdlib only.
    - Wherever a child descriptor is expected, the shorthands int, float, str,
      bool and None stand for INTEGER, FLOAT, STRING, BOOLEAN and NONE.
    - There is no registry of named types; descriptors are passed explicitly.

Examples:
    >>> from alge.core.descriptors import INTEGER, FLOAT, STRING, record_of, map_of
    >>> BasicValue = INTEGER | FLOAT | STRING
    >>> Success = record_of(object=STRING, data=map_of(str, BasicValue))
    >>> str(Success)
    'Record{object: String, data: Map[String, (Integer | Float) | String]}'
    >>> Success.contains({"object": "ack", "data": {"b": 1}})
    True
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, ClassVar

from .errors import InvalidTypeConstructor
from .grammar import PrimitiveKind, TypeKind, primitive_kind_from_value

if TYPE_CHECKING:
    from .ordering import SubtypeOrder

__all__ = [
    "TypeDescriptor",
    "Primitive",
    "NoneDescriptor",
    "Alias",
    "Union",
    "Enum",
    "Tuple",
    "Record",
    "List",
    "Map",
    "INTEGER",
    "FLOAT",
    "STRING",
    "BOOLEAN",
    "NONE",
    "as_descriptor",
    "literal_matches",
    "union_of",
    "enum_of",
    "tuple_of",
    "record_of",
    "list_of",
    "map_of",
]


@dataclass(frozen=True)
class TypeDescriptor:
    """
    Base class for all descriptors. Not instantiable on its own.

    Subclasses declare their dispatch tag in ``kind`` and implement valid() and
    contains(). Shorthand children are coerced in _normalize() before valid()
    runs, so valid() is the single gate for construction.
    """

    kind: ClassVar[TypeKind]

    def __post_init__(self) -> None:
        if type(self) is TypeDescriptor:
            raise InvalidTypeConstructor("cannot instantiate the TypeDescriptor base class")
        self._normalize()
        if not self.valid():
            raise InvalidTypeConstructor(f"invalid {self.kind.value} type constructor: {self!r}")

    def _normalize(self) -> None:
        """Coerce shorthand children in place (frozen-safe) before validation."""

    def valid(self) -> bool:
        """Return True if this descriptor is self-consistent."""
        raise NotImplementedError

    def contains(self, value: Any) -> bool:
        """Return True if an already-typed value has the shape this descriptor describes."""
        raise NotImplementedError

    @property
    def is_atomic(self) -> bool:
        """Whether this descriptor is non-composite (Primitive, Alias or None)."""
        return False

    def union_with(self, other: Any) -> Union:
        """Build ``Union(self, other)``; nested unions are kept as-is."""
        return Union((self, other))

    def __or__(self, other: Any) -> Union:
        return self.union_with(other)

    def __ror__(self, other: Any) -> Union:
        return Union((other, self))


def _coerce(obj: Any) -> Any:
    # Leaves unknown objects untouched so valid() reports them.
    if isinstance(obj, TypeDescriptor):
        return obj
    if obj is None:
        return NONE
    if obj is bool:
        return BOOLEAN
    if obj is int:
        return INTEGER
    if obj is float:
        return FLOAT
    if obj is str:
        return STRING
    return obj


def as_descriptor(obj: Any) -> TypeDescriptor:
    """
    Resolve a descriptor or one of its shorthands (int, float, str, bool, None).

    Raises:
        InvalidTypeConstructor: If obj does not denote a type.
    """
    resolved = _coerce(obj)
    if not isinstance(resolved, TypeDescriptor):
        raise InvalidTypeConstructor(f"not a type descriptor: {obj!r}")
    return resolved


def _is_type(obj: Any) -> bool:
    return isinstance(obj, TypeDescriptor)


def literal_matches(member: Any, value: Any) -> bool:
    """
    Enum literal equality: plain ``==``, so ``1`` matches ``1.0``.

    bool and int never match each other even though bool subclasses int.
    """
    if isinstance(member, bool) != isinstance(value, bool):
        return False
    return bool(value == member)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _render(desc: Any) -> str:
    # Nested unions are parenthesized so the two-level structure stays visible.
    if isinstance(desc, Union):
        return f"({desc})"
    return str(desc)


@dataclass(frozen=True)
class Primitive(TypeDescriptor):
    """
    Atomic scalar type.

    Attributes:
        primitive (PrimitiveKind): Integer, Float, String or Boolean. A kind name
            such as "integer" is normalized to the enum member.
    """

    primitive: PrimitiveKind
    kind: ClassVar[TypeKind] = TypeKind.PRIMITIVE

    def _normalize(self) -> None:
        if isinstance(self.primitive, str):
            try:
                kind = primitive_kind_from_value(self.primitive)
            except ValueError as exc:
                raise InvalidTypeConstructor(str(exc)) from exc
            object.__setattr__(self, "primitive", kind)

    def valid(self) -> bool:
        return isinstance(self.primitive, PrimitiveKind)

    def contains(self, value: Any) -> bool:
        if self.primitive is PrimitiveKind.INTEGER:
            return isinstance(value, int) and not isinstance(value, bool)
        if self.primitive is PrimitiveKind.FLOAT:
            return isinstance(value, float)
        if self.primitive is PrimitiveKind.STRING:
            return isinstance(value, str)
        return isinstance(value, bool)

    @property
    def is_atomic(self) -> bool:
        return True

    def __str__(self) -> str:
        return self.primitive.display_name


@dataclass(frozen=True)
class NoneDescriptor(TypeDescriptor):
    """The unit type; matches only ``None``."""

    kind: ClassVar[TypeKind] = TypeKind.NONE

    def valid(self) -> bool:
        return True

    def contains(self, value: Any) -> bool:
        return value is None

    @property
    def is_atomic(self) -> bool:
        return True

    def __str__(self) -> str:
        return "None"


@dataclass(frozen=True)
class Alias(TypeDescriptor):
    """
    Named wrapper around a single atomic type.

    Attributes:
        name (str): Schema-facing name, used in notation and error messages.
        inner (Primitive | Alias): Wrapped atomic type (shorthands accepted).

    Examples:
        >>> from alge.core.descriptors import Alias, STRING
        >>> Currency = Alias("Currency", STRING)
        >>> Currency.contains("usd"), Currency.resolve() == STRING
        (True, True)
    """

    name: str
    inner: TypeDescriptor
    kind: ClassVar[TypeKind] = TypeKind.ALIAS

    def _normalize(self) -> None:
        object.__setattr__(self, "inner", _coerce(self.inner))

    def valid(self) -> bool:
        return (
            isinstance(self.name, str)
            and bool(self.name.strip())
            and isinstance(self.inner, (Primitive, Alias))
        )

    def contains(self, value: Any) -> bool:
        return self.inner.contains(value)

    @property
    def is_atomic(self) -> bool:
        return True

    def resolve(self) -> TypeDescriptor:
        """Resolve through aliases to the underlying primitive."""
        inner = self.inner
        return inner.resolve() if isinstance(inner, Alias) else inner

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Union(TypeDescriptor):
    """
    Ordered alternatives; membership and conversion try members in declaration order.

    Attributes:
        members (tuple[TypeDescriptor, ...]): At least one member.
    """

    members: tuple[TypeDescriptor, ...]
    kind: ClassVar[TypeKind] = TypeKind.UNION

    def _normalize(self) -> None:
        members = self.members
        if not isinstance(members, Iterable) or isinstance(members, (str, TypeDescriptor)):
            members = (members,)
        object.__setattr__(self, "members", tuple(_coerce(m) for m in members))

    def valid(self) -> bool:
        return len(self.members) > 0 and all(_is_type(m) for m in self.members)

    def contains(self, value: Any) -> bool:
        return any(m.contains(value) for m in self.members)

    @property
    def includes_none(self) -> bool:
        """Whether NONE is a direct member (null input is then always accepted)."""
        return NONE in self.members

    def __str__(self) -> str:
        return " | ".join(_render(m) for m in self.members)


@dataclass(frozen=True)
class Enum(TypeDescriptor):
    """
    Closed set of literal values (or nested descriptors) of one concrete type.

    Attributes:
        values (tuple[Any, ...]): Ordered members; every value shares exactly one
            concrete ``type()``. Values are literals and are never coerced.
    """

    values: tuple[Any, ...]
    kind: ClassVar[TypeKind] = TypeKind.ENUM

    def _normalize(self) -> None:
        values = self.values
        if not isinstance(values, (list, tuple)):
            values = (values,)
        object.__setattr__(self, "values", tuple(values))

    def valid(self) -> bool:
        return len({type(v) for v in self.values}) == 1

    def contains(self, value: Any) -> bool:
        for member in self.values:
            if _is_type(member):
                if member.contains(value):
                    return True
            elif literal_matches(member, value):
                return True
        return False

    @property
    def includes_none(self) -> bool:
        return NONE in self.values

    def __str__(self) -> str:
        rendered = ", ".join(str(v) if _is_type(v) else repr(v) for v in self.values)
        return f"Enum[{rendered}]"


@dataclass(frozen=True)
class Tuple(TypeDescriptor):
    """
    Fixed-arity sequence with independently typed, positionally matched slots.

    Attributes:
        slots (tuple[TypeDescriptor, ...]): Slot types in order.
    """

    slots: tuple[TypeDescriptor, ...]
    kind: ClassVar[TypeKind] = TypeKind.TUPLE

    def _normalize(self) -> None:
        slots = self.slots
        if not isinstance(slots, Iterable) or isinstance(slots, (str, TypeDescriptor)):
            slots = (slots,)
        object.__setattr__(self, "slots", tuple(_coerce(s) for s in slots))

    def valid(self) -> bool:
        return all(_is_type(s) for s in self.slots)

    def contains(self, value: Any) -> bool:
        return (
            _is_sequence(value)
            and len(value) == len(self.slots)
            and all(s.contains(v) for s, v in zip(self.slots, value))
        )

    @property
    def arity(self) -> int:
        return len(self.slots)

    def __str__(self) -> str:
        return f"Tuple[{', '.join(str(s) for s in self.slots)}]"


@dataclass(frozen=True)
class Record(TypeDescriptor):
    """
    Named fields, each independently typed.

    Attributes:
        fields (Mapping[str, TypeDescriptor]): Read-only, insertion-ordered mapping
            of field name to type. Order matters only for merge tie-breaks and for
            the order of converted output.

    Notes:
        - contains() and the engine require the value's key set to equal the
          field-name set exactly (no extra, no missing keys).
        - ``a + b`` merges two records, keeping the more specific type of every
          shared field (see alge.core.ordering.merge_records).
    """

    fields: Mapping[str, TypeDescriptor]
    kind: ClassVar[TypeKind] = TypeKind.RECORD

    def _normalize(self) -> None:
        if isinstance(self.fields, Mapping):
            coerced = {name: _coerce(t) for name, t in self.fields.items()}
            object.__setattr__(self, "fields", MappingProxyType(coerced))

    def valid(self) -> bool:
        if not isinstance(self.fields, Mapping):
            return False
        return all(isinstance(name, str) and name for name in self.fields) and all(
            _is_type(t) for t in self.fields.values()
        )

    def contains(self, value: Any) -> bool:
        if not isinstance(value, Mapping) or set(value.keys()) != set(self.fields):
            return False
        return all(t.contains(value[name]) for name, t in self.fields.items())

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(self.fields)

    def merge(self, other: Record, order: SubtypeOrder | None = None) -> Record:
        """
        Merge with another record, narrowing shared fields to the more specific type.

        Args:
            other (Record): Record to merge with.
            order (SubtypeOrder | None): Declared subtype order; DEFAULT_ORDER when None.

        Returns:
            Record: New record over the union of both field sets.

        Raises:
            TypeMismatchInMerge: If a shared field's types are unrelated.
        """
        from .ordering import DEFAULT_ORDER, merge_records

        return merge_records(self, other, order or DEFAULT_ORDER)

    def __add__(self, other: Any) -> Record:
        if not isinstance(other, Record):
            return NotImplemented
        return self.merge(other)

    def __hash__(self) -> int:
        return hash((type(self), tuple(self.fields.items())))

    def __repr__(self) -> str:
        fields = dict(self.fields) if isinstance(self.fields, Mapping) else self.fields
        return f"Record(fields={fields!r})"

    def __str__(self) -> str:
        body = ", ".join(f"{name}: {t}" for name, t in self.fields.items())
        return f"Record{{{body}}}"


@dataclass(frozen=True)
class List(TypeDescriptor):
    """Homogeneous ordered sequence of ``element_type``."""

    element_type: TypeDescriptor
    kind: ClassVar[TypeKind] = TypeKind.LIST

    def _normalize(self) -> None:
        object.__setattr__(self, "element_type", _coerce(self.element_type))

    def valid(self) -> bool:
        return _is_type(self.element_type)

    def contains(self, value: Any) -> bool:
        return _is_sequence(value) and all(self.element_type.contains(v) for v in value)

    def __str__(self) -> str:
        return f"List[{self.element_type}]"


@dataclass(frozen=True)
class Map(TypeDescriptor):
    """
    Mapping with independently typed keys and values.

    Notes:
        Generic input maps always have string keys, so the key type is checked
        but keys are passed through unconverted.
    """

    key_type: TypeDescriptor
    value_type: TypeDescriptor
    kind: ClassVar[TypeKind] = TypeKind.MAP

    def _normalize(self) -> None:
        object.__setattr__(self, "key_type", _coerce(self.key_type))
        object.__setattr__(self, "value_type", _coerce(self.value_type))

    def valid(self) -> bool:
        return _is_type(self.key_type) and _is_type(self.value_type)

    def contains(self, value: Any) -> bool:
        if not isinstance(value, Mapping):
            return False
        return all(
            self.key_type.contains(k) and self.value_type.contains(v) for k, v in value.items()
        )

    def __str__(self) -> str:
        return f"Map[{self.key_type}, {self.value_type}]"


INTEGER = Primitive(PrimitiveKind.INTEGER)
FLOAT = Primitive(PrimitiveKind.FLOAT)
STRING = Primitive(PrimitiveKind.STRING)
BOOLEAN = Primitive(PrimitiveKind.BOOLEAN)
NONE = NoneDescriptor()


def union_of(*members: Any) -> Union:
    """Build a Union from members in declaration order."""
    return Union(members)


def enum_of(*values: Any) -> Enum:
    """Build an Enum from literal values (or nested descriptors) of one type."""
    return Enum(values)


def tuple_of(*slots: Any) -> Tuple:
    """Build a Tuple from slot types in order."""
    return Tuple(slots)


def record_of(**fields: Any) -> Record:
    """Build a Record from keyword field types (keyword order is field order)."""
    return Record(fields)


def list_of(element_type: Any) -> List:
    return List(element_type)


def map_of(key_type: Any, value_type: Any) -> Map:
    return Map(key_type, value_type)
