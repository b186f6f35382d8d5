"""
Serializer - native Python values to XML element trees.

The element layout follows the convention ASP.NET web services expect:

    @dataclass
    class Order:
        Id: int
        Tags: list[str]

    serialize(Order(1, ["a", "b"]))
    # <Order><Id>1</Id><Tags><string>a</string><string>b</string></Tags></Order>

Records become an element named after their type with one child per field,
in declaration order. Array items are tagged by their own wire type name.
Anonymous shapes (dicts, SimpleNamespace) and unnamed arrays use a default
root name, ``Object``.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterator, Mapping
from typing import Any

from lxml import etree
from pydantic import BaseModel

from .classify import classify, is_anonymous, is_named_tuple, wire_name
from .errors import SerializationError
from .names import encode_name, qualify
from .types import Byte, Kind
from .values import format_simple

__all__ = ["Serializer", "serialize", "field_wire_name"]

XML_NAME_METADATA = "xml_name"


def field_wire_name(field: dataclasses.Field) -> str:  # type: ignore[type-arg]
    """Wire name of a dataclass field, overridable via ``metadata={"xml_name": ...}``."""
    return field.metadata.get(XML_NAME_METADATA, field.name)


def _model_field_wire_name(name: str, info: Any) -> str:
    return info.serialization_alias or info.alias or name


def _slot_names(cls: type) -> tuple[str, ...]:
    slots = cls.__dict__.get("__slots__", ())
    if isinstance(slots, str):
        return (slots,)
    return tuple(slots)


class Serializer:
    """
    Converts values into lxml element trees.

    Args:
        default_name: Root name for anonymous values and unnamed arrays
    """

    __slots__ = ("_default_name",)

    def __init__(self, default_name: str = "Object") -> None:
        self._default_name = default_name

    @property
    def default_name(self) -> str:
        return self._default_name

    def serialize(
        self,
        value: Any,
        element_name: str | None = None,
        namespace: str | None = None,
    ) -> etree._Element | None:
        """
        Serialize ``value`` into a new element.

        Args:
            value: The value to convert; None yields None
            element_name: Root element name, derived from the value's type if empty
            namespace: Namespace applied to every element of the tree

        Returns:
            The root element, or None for a None value

        Raises:
            SerializationError: If a record's fields cannot be enumerated or a
                text value is not representable in XML
        """
        return self._build(value, element_name, namespace, None)

    def _element(
        self,
        parent: etree._Element | None,
        name: str,
        namespace: str | None,
        text: str | None = None,
    ) -> etree._Element:
        tag = qualify(name, namespace)
        if parent is None:
            element = etree.Element(tag, nsmap={None: namespace} if namespace else None)
        else:
            element = etree.SubElement(parent, tag)
        if text is not None:
            try:
                element.text = text
            except ValueError as e:
                raise SerializationError(f"Cannot write <{name}>: {e}") from e
        return element

    def _build(
        self,
        value: Any,
        name: str | None,
        namespace: str | None,
        parent: etree._Element | None,
    ) -> etree._Element | None:
        if value is None:
            return None

        value_type = type(value)
        kind = classify(value_type)
        if not name:
            if kind is Kind.ARRAY or is_anonymous(value_type):
                name = self._default_name
            else:
                name = value_type.__name__
        name = encode_name(name)

        if kind is Kind.SIMPLE:
            return self._element(parent, name, namespace, format_simple(value))
        if kind is Kind.ARRAY:
            return self._build_array(value, name, namespace, parent)

        element = self._element(parent, name, namespace)
        for field_name, field_value in self._fields(value):
            self._build(field_value, field_name, namespace, element)
        return element

    def _build_array(
        self,
        items: Any,
        name: str,
        namespace: str | None,
        parent: etree._Element | None,
    ) -> etree._Element:
        element = self._element(parent, name, namespace)
        if isinstance(items, (bytes, bytearray)):
            items = [Byte(item) for item in items]
        for item in items:
            if item is None:
                continue
            # Each item is tagged by its own type, mixed arrays included
            self._build(item, wire_name(type(item)), namespace, element)
        return element

    def _fields(self, value: Any) -> Iterator[tuple[str, Any]]:
        """Yield (wire name, value) for each field of a record, in declaration order."""
        if dataclasses.is_dataclass(value):
            for field in dataclasses.fields(value):
                yield field_wire_name(field), getattr(value, field.name)
            return

        if isinstance(value, BaseModel):
            for name, info in type(value).model_fields.items():
                yield _model_field_wire_name(name, info), getattr(value, name)
            return

        if is_named_tuple(type(value)):
            yield from zip(value._fields, value)
            return

        if isinstance(value, Mapping):
            for key, item in value.items():
                yield str(key), item
            return

        attributes = getattr(value, "__dict__", None)
        if attributes is not None:
            for name, item in attributes.items():
                if not name.startswith("_"):
                    yield name, item
            return

        slots = [
            slot
            for cls in type(value).__mro__
            for slot in _slot_names(cls)
            if not slot.startswith("_")
        ]
        if slots:
            for slot in slots:
                if hasattr(value, slot):
                    yield slot, getattr(value, slot)
            return

        raise SerializationError(
            f"Cannot enumerate the fields of {type(value).__name__!r}"
        )


def serialize(
    value: Any,
    element_name: str | None = None,
    namespace: str | None = None,
    *,
    default_name: str = "Object",
) -> etree._Element | None:
    """
    Serialize ``value`` into an element tree.

    Example:
        >>> etree.tostring(serialize({"array": [1, 2]}), encoding="unicode")
        '<Object><array><int>1</int><int>2</int></array></Object>'
    """
    return Serializer(default_name).serialize(value, element_name, namespace)
