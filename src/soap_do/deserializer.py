"""
Deserializer - XML element trees to native Python values.

A named element is located among the descendants of a tree (exact local name
and exact namespace) and materialized into the requested type:

- simple types parse the element text
- ``list[X]`` / ``tuple[X, ...]`` / ``bytes`` read every child element as X
- dataclasses, pydantic models, named tuples and annotated classes bind
  child elements by field name
- ``dict`` and ``Any`` produce nested mappings of element names to text

A missing element is reported as ``Missing``, never as an exception.
"""

from __future__ import annotations

import dataclasses
import logging
import types
import typing
from typing import Any, TypeVar, get_origin

from lxml import etree
from pydantic import BaseModel, ValidationError

from .classify import (
    classify,
    element_type,
    is_anonymous,
    is_named_tuple,
    unwrap_optional,
)
from .errors import SerializationError
from .names import decode_name, encode_name, qualify
from .serializer import field_wire_name
from .types import Found, Kind, Lookup, Missing
from .values import parse_simple

__all__ = ["Deserializer", "deserialize", "parse_document"]

logger = logging.getLogger(__name__)

T = TypeVar("T")

XSI_NIL = "{http://www.w3.org/2001/XMLSchema-instance}nil"


def parse_document(text: str | bytes) -> etree._Element:
    """
    Parse a response document.

    Entity resolution and network access are disabled.

    Raises:
        SerializationError: If the text is not well-formed XML
    """
    data = text.encode("utf-8") if isinstance(text, str) else text
    parser = etree.XMLParser(resolve_entities=False, no_network=True)
    try:
        return etree.fromstring(data, parser)
    except etree.XMLSyntaxError as e:
        raise SerializationError(
            f"Response is not well-formed XML: {e}", is_deserialize=True
        ) from e


def _child_elements(element: etree._Element) -> list[etree._Element]:
    # Comments and processing instructions have non-string tags
    return [child for child in element if isinstance(child.tag, str)]


def _is_nil(element: etree._Element) -> bool:
    return element.get(XSI_NIL) in ("true", "1")


def _type_hints(tp: Any) -> dict[str, Any]:
    try:
        return typing.get_type_hints(tp)
    except (NameError, TypeError):
        # Annotations naming types that are not importable from the module
        return dict(getattr(tp, "__annotations__", {}))


def _to_mapping(element: etree._Element) -> Any:
    children = _child_elements(element)
    if not children:
        return element.text

    result: dict[str, Any] = {}
    repeated: set[str] = set()
    for child in children:
        key = decode_name(etree.QName(child).localname)
        value = _to_mapping(child)
        if key not in result:
            result[key] = value
        elif key in repeated:
            result[key].append(value)
        else:
            result[key] = [result[key], value]
            repeated.add(key)
    return result


class Deserializer:
    """Materializes elements into requested Python types."""

    def deserialize(
        self,
        root: etree._Element,
        result_type: Any,
        element_name: str | None = None,
        namespace: str | None = None,
    ) -> Lookup[Any]:
        """
        Locate ``element_name`` under ``root`` and materialize it.

        Args:
            root: Tree to search
            result_type: Requested type; None discards the value
            element_name: Element to look for; if empty, ``root`` itself is used
            namespace: Namespace the element (and its fields) must be in

        Returns:
            Found with the materialized value, or Missing

        Raises:
            SerializationError: If the element text cannot be read as the
                requested type
        """
        if not element_name:
            target = root
            qname = etree.QName(root)
            if namespace and qname.namespace != namespace:
                logger.debug("Root <%s> is not in namespace %s", qname.localname, namespace)
                return Missing(qname.localname, namespace)
            namespace = namespace or qname.namespace
        else:
            tag = qualify(encode_name(element_name), namespace)
            target = next(root.iterdescendants(tag), None)
            if target is None:
                logger.debug("No <%s> element in response", tag)
                return Missing(element_name, namespace)

        return Found(self.materialize(target, result_type, namespace))

    def materialize(
        self,
        element: etree._Element,
        tp: Any,
        namespace: str | None = None,
    ) -> Any:
        """Convert ``element`` into an instance of ``tp``."""
        if tp is None or tp is type(None):
            return None
        if _is_nil(element):
            return None

        target = unwrap_optional(tp)
        if target is Any or target is object:
            return _to_mapping(element)
        if target is types.SimpleNamespace:
            mapping = _to_mapping(element)
            return types.SimpleNamespace(**mapping) if isinstance(mapping, dict) else types.SimpleNamespace()
        if is_anonymous(target):
            mapping = _to_mapping(element)
            return mapping if isinstance(mapping, dict) else {}

        kind = classify(target)
        if kind is Kind.SIMPLE:
            return parse_simple(element.text, target)
        if kind is Kind.ARRAY:
            return self._materialize_array(element, target, namespace)
        return self._materialize_record(element, target, namespace)

    def _materialize_array(
        self,
        element: etree._Element,
        tp: Any,
        namespace: str | None,
    ) -> Any:
        item_type = element_type(tp)
        items = [
            self.materialize(child, item_type, namespace)
            for child in _child_elements(element)
        ]
        container = get_origin(tp) or tp
        if isinstance(container, type):
            if issubclass(container, (bytes, bytearray)):
                return container(items)
            if issubclass(container, tuple):
                return tuple(items)
        return items

    def _field(
        self,
        element: etree._Element,
        name: str,
        namespace: str | None,
    ) -> etree._Element | None:
        return element.find(qualify(encode_name(name), namespace))

    def _materialize_record(
        self,
        element: etree._Element,
        tp: Any,
        namespace: str | None,
    ) -> Any:
        if dataclasses.is_dataclass(tp) and isinstance(tp, type):
            hints = _type_hints(tp)
            kwargs: dict[str, Any] = {}
            for field in dataclasses.fields(tp):
                if not field.init:
                    continue
                child = self._field(element, field_wire_name(field), namespace)
                if child is not None:
                    kwargs[field.name] = self.materialize(
                        child, hints.get(field.name, field.type), namespace
                    )
                elif (
                    field.default is dataclasses.MISSING
                    and field.default_factory is dataclasses.MISSING
                ):
                    kwargs[field.name] = None
            return tp(**kwargs)

        if isinstance(tp, type) and issubclass(tp, BaseModel):
            data: dict[str, Any] = {}
            for name, info in tp.model_fields.items():
                wire = info.serialization_alias or info.alias or name
                child = self._field(element, wire, namespace)
                if child is not None:
                    data[info.alias or name] = self.materialize(child, info.annotation, namespace)
            try:
                return tp.model_validate(data)
            except ValidationError as e:
                raise SerializationError(
                    f"Cannot build {tp.__name__} from <{etree.QName(element).localname}>: {e}",
                    is_deserialize=True,
                ) from e

        if is_named_tuple(tp):
            hints = _type_hints(tp)
            defaults = getattr(tp, "_field_defaults", {})
            values = []
            for name in tp._fields:
                child = self._field(element, name, namespace)
                if child is None:
                    values.append(defaults.get(name))
                else:
                    values.append(self.materialize(child, hints.get(name, Any), namespace))
            return tp(*values)

        if not isinstance(tp, type):
            raise SerializationError(f"Cannot materialize {tp!r}", is_deserialize=True)

        try:
            instance = tp()
        except TypeError as e:
            raise SerializationError(
                f"{tp.__name__} needs a no-argument constructor to be deserialized",
                is_deserialize=True,
            ) from e
        for name, annotation in _type_hints(tp).items():
            if name.startswith("_") or get_origin(annotation) is typing.ClassVar:
                continue
            child = self._field(element, name, namespace)
            if child is not None:
                setattr(instance, name, self.materialize(child, annotation, namespace))
        return instance


def deserialize(
    root: etree._Element,
    result_type: type[T] | Any,
    element_name: str | None = None,
    namespace: str | None = None,
) -> Lookup[T]:
    """
    Locate and materialize ``element_name`` under ``root``.

    Example:
        >>> root = etree.fromstring("<data><model><Id>1</Id></model></data>")
        >>> deserialize(root, dict, "model")
        Found(value={'Id': '1'})
    """
    return Deserializer().deserialize(root, result_type, element_name, namespace)
