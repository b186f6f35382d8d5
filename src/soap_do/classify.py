"""
Type classification for the SOAP wire convention.

Every type met while walking a value is one of three kinds:

- SIMPLE: written as element text (numbers, text, timestamps, enums, ...)
- ARRAY: an ordered sequence whose items are tagged one by one
- COMPLEX: a record whose fields become child elements

Both runtime classes and typing annotations (``list[int]``, ``Optional[User]``)
are accepted, so the same rules drive serialization of values and
materialization of requested result types.
"""

from __future__ import annotations

import collections.abc
import types
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Union, get_args, get_origin
from uuid import UUID

from .types import Byte, Kind, TypeDescriptor

__all__ = [
    "SIMPLE_TYPES",
    "classify",
    "describe",
    "element_type",
    "is_anonymous",
    "is_named_tuple",
    "is_optional",
    "unwrap_optional",
    "wire_name",
]

SIMPLE_TYPES: tuple[type, ...] = (
    bool,
    int,
    float,
    Decimal,
    str,
    datetime,
    date,
    UUID,
    Enum,
)

_NONE_TYPE = type(None)


def _is_union(tp: Any) -> bool:
    origin = get_origin(tp)
    return origin is Union or origin is types.UnionType


def is_optional(tp: Any) -> bool:
    """Whether ``tp`` is ``Optional[X]`` / ``X | None``."""
    return _is_union(tp) and _NONE_TYPE in get_args(tp)


def unwrap_optional(tp: Any) -> Any:
    """Strip a nullable wrapper: ``Optional[X]`` becomes ``X``."""
    if _is_union(tp):
        args = [arg for arg in get_args(tp) if arg is not _NONE_TYPE]
        if len(args) == 1:
            return args[0]
    return tp


def is_named_tuple(tp: Any) -> bool:
    return isinstance(tp, type) and issubclass(tp, tuple) and hasattr(tp, "_fields")


def is_anonymous(tp: Any) -> bool:
    """Whether values of ``tp`` carry no type name of their own."""
    tp = get_origin(tp) or tp
    return tp is dict or tp is types.SimpleNamespace or (
        isinstance(tp, type) and issubclass(tp, collections.abc.Mapping)
    )


def _is_sequence_class(tp: Any) -> bool:
    return (
        isinstance(tp, type)
        and issubclass(tp, collections.abc.Sequence)
        and not issubclass(tp, str)
        and not is_named_tuple(tp)
    )


def classify(tp: Any) -> Kind:
    """
    Classify a type as SIMPLE, ARRAY or COMPLEX.

    Nullable wrappers are unwrapped first. ``bytes`` counts as an array of
    ``Byte`` items; named tuples are records, not arrays.
    """
    tp = unwrap_optional(tp)

    origin = get_origin(tp)
    if origin is not None:
        return Kind.ARRAY if _is_sequence_class(origin) else Kind.COMPLEX

    if isinstance(tp, type):
        if issubclass(tp, SIMPLE_TYPES):
            return Kind.SIMPLE
        if _is_sequence_class(tp):
            return Kind.ARRAY

    return Kind.COMPLEX


def wire_name(tp: Any) -> str:
    """
    Name a type the way SOAP services expect for array items.

    boolean, int, byte, dateTime, double and string cover the built-in
    scalars; everything else goes by its own class name.
    """
    tp = unwrap_optional(tp)
    if isinstance(tp, type):
        if issubclass(tp, Enum):
            return tp.__name__
        if issubclass(tp, bool):
            return "boolean"
        if issubclass(tp, Byte):
            return "byte"
        if issubclass(tp, int):
            return "int"
        if issubclass(tp, datetime):
            return "dateTime"
        if issubclass(tp, (float, Decimal)):
            return "double"
        if issubclass(tp, str):
            return "string"
    origin = get_origin(tp)
    if origin is not None:
        return getattr(origin, "__name__", str(origin))
    return getattr(tp, "__name__", str(tp))


def describe(tp: Any) -> TypeDescriptor:
    return TypeDescriptor(kind=classify(tp), wire_name=wire_name(tp))


def element_type(tp: Any) -> Any:
    """
    Item type of an array type, ``Any`` when the annotation does not say.

    >>> element_type(list[int])
    <class 'int'>
    """
    tp = unwrap_optional(tp)
    if isinstance(tp, type) and issubclass(tp, (bytes, bytearray)):
        return Byte

    args = get_args(tp)
    if not args:
        return Any
    if get_origin(tp) is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return args[0]
        return args[0] if len(set(args)) == 1 else Any
    return args[0]
