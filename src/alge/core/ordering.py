"""
Explicit subtype ordering over atomic descriptors, and record merge.

Record merge needs to know which of two field types is more specific. Rather
than leaning on Python class inheritance, the schema author declares a partial
order over atomic descriptors (Primitive, Alias, None):

- every descriptor is a subtype of itself;
- every Alias is a subtype of the type it wraps;
- declared edges ``order.declare(sub, sup)`` add further relations, closed
  transitively.

Composite descriptors (records, lists, ...) are only related to equal descriptors.

Notes:
    - SubtypeOrder is immutable; declare() returns a new order.
    - Declaring an edge that closes a cycle raises InvalidTypeConstructor.
    - Zero-IO, stdlib only.

Examples:
    >>> from alge.core.descriptors import Alias, FLOAT, INTEGER, record_of
    >>> Number = Alias("Number", FLOAT)
    >>> Count = Alias("Count", INTEGER)
    >>> order = SubtypeOrder().declare(Count, Number)
    >>> merged = record_of(x=Count).merge(record_of(x=Number), order)
    >>> str(merged)
    'Record{x: Count}'
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from .descriptors import Alias, Record, TypeDescriptor, as_descriptor
from .errors import InvalidTypeConstructor, TypeMismatchInMerge

__all__ = [
    "SubtypeOrder",
    "DEFAULT_ORDER",
    "merge_records",
]

Edge = tuple[TypeDescriptor, TypeDescriptor]


@dataclass(frozen=True)
class SubtypeOrder:
    """
    Declared partial order over atomic descriptors.

    Attributes:
        edges (frozenset[tuple[TypeDescriptor, TypeDescriptor]]): Declared
            ``(sub, sup)`` pairs. Implicit alias edges are not stored here.

    Raises:
        InvalidTypeConstructor: If an edge touches a non-atomic descriptor or the
            declared edges contain a cycle.
    """

    edges: frozenset[Edge] = frozenset()

    def __post_init__(self) -> None:
        object.__setattr__(self, "edges", frozenset(self.edges))
        for sub, sup in self.edges:
            for desc in (sub, sup):
                if not isinstance(desc, TypeDescriptor) or not desc.is_atomic:
                    raise InvalidTypeConstructor(
                        f"subtype order relates atomic descriptors only, got {desc!r}"
                    )
            if sub == sup or self.is_subtype(sup, sub):
                raise InvalidTypeConstructor(f"subtype cycle between {sub} and {sup}")

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[object, object]]) -> SubtypeOrder:
        """Build an order from ``(sub, sup)`` pairs; shorthands such as int are accepted."""
        order = cls()
        for sub, sup in pairs:
            order = order.declare(sub, sup)
        return order

    def declare(self, sub: object, sup: object) -> SubtypeOrder:
        """Return a new order that additionally holds ``sub <= sup``."""
        sub_d, sup_d = as_descriptor(sub), as_descriptor(sup)
        if sub_d == sup_d:
            return self
        return SubtypeOrder(self.edges | {(sub_d, sup_d)})

    def _parents(self, desc: TypeDescriptor) -> Iterator[TypeDescriptor]:
        if isinstance(desc, Alias):
            yield desc.inner
        for sub, sup in self.edges:
            if sub == desc:
                yield sup

    def is_subtype(self, sub: TypeDescriptor, sup: TypeDescriptor) -> bool:
        """Return True if ``sub <= sup`` (reflexive, transitive)."""
        if sub == sup:
            return True
        seen: set[TypeDescriptor] = {sub}
        queue: deque[TypeDescriptor] = deque([sub])
        while queue:
            for parent in self._parents(queue.popleft()):
                if parent == sup:
                    return True
                if parent not in seen:
                    seen.add(parent)
                    queue.append(parent)
        return False

    def is_strict_subtype(self, sub: TypeDescriptor, sup: TypeDescriptor) -> bool:
        """Return True if ``sub < sup``."""
        return sub != sup and self.is_subtype(sub, sup)


DEFAULT_ORDER = SubtypeOrder()


def merge_records(left: Record, right: Record, order: SubtypeOrder = DEFAULT_ORDER) -> Record:
    """
    Merge two records field-wise, keeping the more specific type of shared fields.

    Args:
        left (Record): Receiver of the merge (``left + right``).
        right (Record): Other operand.
        order (SubtypeOrder): Subtype relation used to compare shared field types.

    Returns:
        Record: Fields of ``right`` first, then fields only present in ``left``.

    Raises:
        TypeMismatchInMerge: If a shared field's types are unrelated under ``order``.

    Notes:
        For a shared field, ``left``'s type wins only when it is strictly more
        specific; equal types resolve to ``right``'s.
    """
    merged: dict[str, TypeDescriptor] = {}
    names = [*right.fields, *(name for name in left.fields if name not in right.fields)]
    for name in names:
        mine = left.fields.get(name)
        theirs = right.fields.get(name)
        if mine is None:
            merged[name] = theirs  # type: ignore[assignment]
        elif theirs is None:
            merged[name] = mine
        elif order.is_strict_subtype(mine, theirs):
            merged[name] = mine
        elif order.is_subtype(theirs, mine):
            merged[name] = theirs
        else:
            raise TypeMismatchInMerge(
                name, f"type mismatch in Record.merge: {name} ({mine} vs {theirs})"
            )
    return Record(merged)
