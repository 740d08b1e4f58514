"""
Deserialization engine for alge descriptors.

Purpose
- Convert generic values (None/bool/int/float/str, lists, string-keyed mappings)
  into values validated against a descriptor, or fail with a single
  DeserializationError carrying a breadcrumb to the innermost failure.
- Dispatch by descriptor kind through an explicit strategy table
  (alge.serde.converters.CONVERTERS); a descriptor with no strategy is a
  programming error reported as NoConverterForKind.

Checks performed
- Depth: every nested conversion counts one level; past ``options.max_depth``
  the call fails with DepthExceeded. A max_depth set above what the interpreter
  stack allows still ends in DepthExceeded, raised once the RecursionError has
  unwound to the top-level call.
- Everything else is per-kind (see alge.serde.converters).

Notes
- Deserializer instances are immutable and hold no per-call state, so one
  instance can serve concurrent callers.
- Validator answers yes/no without raising: valid(value).

Examples:
    >>> from alge.core.catalog import RESULT
    >>> from alge.serde.engine import deserialize
    >>> deserialize(RESULT, {"object": "ack", "data": {"b": 1}})
    {'object': 'ack', 'data': {'b': 1}}
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from alge.core.descriptors import TypeDescriptor
from alge.core.grammar import TypeKind
from alge.core.typing import GenericValue, TypedValue

from .converters import CONVERTERS, Converter
from .errors import DepthExceeded, DeserializationError, NoConverterForKind
from .options import DeserializeOptions

__all__ = [
    "Deserializer",
    "Validator",
    "converter_for",
    "deserialize",
]

logger = logging.getLogger(__name__)


def converter_for(
    descriptor: Any, converters: Mapping[TypeKind, Converter] = CONVERTERS
) -> Converter:
    """
    Look up the conversion strategy for a descriptor.

    Args:
        descriptor (Any): Descriptor to convert to.
        converters (Mapping[TypeKind, Converter]): Strategy table (defaults to CONVERTERS).

    Returns:
        Converter: The strategy registered for ``descriptor.kind``.

    Raises:
        NoConverterForKind: If descriptor is not a TypeDescriptor or its kind has
            no strategy in the table.
    """
    if not isinstance(descriptor, TypeDescriptor):
        raise NoConverterForKind(
            f"No converter known for {type(descriptor).__name__} (not a type descriptor)",
            descriptor,
        )
    converter = converters.get(descriptor.kind)
    if converter is None:
        raise NoConverterForKind(
            f"No converter known for kind {descriptor.kind.value!r}", descriptor
        )
    return converter


class Deserializer:
    """
    Converts generic values against descriptors.

    Attributes:
        options (DeserializeOptions): Per-call policy (target hook, depth limit,
            numeric-string parsing).
        converters (Mapping[TypeKind, Converter]): Read-only strategy table. Pass an
            extended mapping to override or add strategies.

    Examples:
        >>> from alge.core.descriptors import list_of, INTEGER
        >>> Deserializer().deserialize(list_of(INTEGER), ["1", 2])
        [1, 2]
    """

    def __init__(
        self,
        options: DeserializeOptions | None = None,
        converters: Mapping[TypeKind, Converter] | None = None,
    ) -> None:
        self.options = options or DeserializeOptions()
        table = dict(CONVERTERS)
        if converters:
            table.update(converters)
        self.converters: Mapping[TypeKind, Converter] = MappingProxyType(table)

    def deserialize(self, descriptor: TypeDescriptor, value: GenericValue) -> TypedValue:
        """
        Convert one top-level value.

        Args:
            descriptor (TypeDescriptor): Target descriptor.
            value (GenericValue): Untyped input tree.

        Returns:
            TypedValue: The validated value (dicts for records unless the target
            hook is configured, tuples for Tuple descriptors, lists for List).

        Raises:
            DeserializationError: The first failure, innermost message preserved,
                with its breadcrumb path. DepthExceeded also covers input that
                outruns the interpreter recursion limit before max_depth.
        """
        try:
            return self.convert(descriptor, value, 0, root=True)
        except DeserializationError as exc:
            logger.debug("deserialization to %s failed: %s", descriptor, exc)
            raise
        except RecursionError as exc:
            limit = self.options.max_depth
            logger.debug("deserialization to %s hit the recursion limit", descriptor.kind)
            raise DepthExceeded(
                f"nesting exceeded the interpreter recursion limit "
                f"({sys.getrecursionlimit()}) before max_depth {limit}",
                descriptor,
                limit=limit,
            ) from exc

    def convert(self, descriptor: Any, value: Any, depth: int, *, root: bool = False) -> Any:
        """
        Convert a nested value at ``depth``; used by converters to recurse.

        Args:
            descriptor (Any): Child descriptor.
            value (Any): Child value.
            depth (int): Nesting depth of this conversion (0 for the top level).
            root (bool): Whether this conversion still targets the call's root
                value (true through Alias/Union/Enum, false inside aggregates).
        """
        limit = self.options.max_depth
        if depth > limit:
            raise DepthExceeded(f"maximum nesting depth {limit} exceeded", descriptor, limit=limit)
        converter = converter_for(descriptor, self.converters)
        return converter(self, descriptor, value, depth, root)


def deserialize(
    descriptor: TypeDescriptor,
    value: GenericValue,
    options: DeserializeOptions | None = None,
) -> TypedValue:
    """
    Convert ``value`` against ``descriptor`` with a one-off Deserializer.

    Raises:
        DeserializationError: See Deserializer.deserialize.
    """
    return Deserializer(options).deserialize(descriptor, value)


class Validator:
    """
    Yes/no validity check for one descriptor.

    Examples:
        >>> from alge.core.catalog import TWO_BITS
        >>> Validator(TWO_BITS).valid([True, False])
        True
        >>> Validator(TWO_BITS).valid([1, 0])
        False
    """

    def __init__(
        self, descriptor: TypeDescriptor, options: DeserializeOptions | None = None
    ) -> None:
        self.descriptor = descriptor
        self._deserializer = Deserializer(options)
        # Fail at construction rather than on first use.
        converter_for(descriptor, self._deserializer.converters)

    def validate(self, value: GenericValue) -> TypedValue:
        """Return the converted value or raise DeserializationError."""
        return self._deserializer.deserialize(self.descriptor, value)

    def valid(self, value: GenericValue) -> bool:
        """Return True if value converts under the descriptor."""
        try:
            self.validate(value)
        except DeserializationError:
            return False
        return True
