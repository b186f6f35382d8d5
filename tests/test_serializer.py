"""
Unit tests for the Serializer.

Tests cover:
- Root naming for typed and anonymous values
- Field order, nesting and dropped None fields
- Array item tagging
- Namespace propagation
- Simple value rendering
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from types import SimpleNamespace
from uuid import UUID

import pytest
from lxml import etree

from soap_do import Byte, SerializationError, Serializer, serialize

from .models import Address, Color, Customer, DataTestModel, Point, Product, Renamed

TEMPURI = "http://tempuri.org"


def xml(element: etree._Element | None) -> str:
    assert element is not None
    return etree.tostring(element, encoding="unicode")


def john() -> DataTestModel:
    return DataTestModel(Id=1, Name="John Smith", Date=datetime(2005, 10, 23, 12, 0, 0))


class TestRootNaming:
    """Tests for the name of the root element."""

    def test_anonymous_dict_uses_object(self):
        """A dict has no type name of its own and becomes <Object>."""
        assert xml(serialize({"value": "asdf"})) == "<Object><value>asdf</value></Object>"

    def test_simple_namespace_uses_object(self):
        assert xml(serialize(SimpleNamespace(value="asdf"))) == "<Object><value>asdf</value></Object>"

    def test_dataclass_uses_type_name(self):
        assert xml(serialize(john())) == (
            "<DataTestModel><Id>1</Id><Name>John Smith</Name>"
            "<Date>2005-10-23T12:00:00.0000000</Date></DataTestModel>"
        )

    def test_explicit_element_name(self):
        assert xml(serialize(john(), "model")).startswith("<model><Id>1</Id>")

    def test_custom_default_name(self):
        serializer = Serializer(default_name="Request")
        assert serializer.default_name == "Request"
        assert xml(serializer.serialize({"a": 1})) == "<Request><a>1</a></Request>"

    def test_unnamed_array_uses_default_name(self):
        assert xml(serialize([1, 2])) == "<Object><int>1</int><int>2</int></Object>"

    def test_simple_value_is_a_leaf(self):
        assert xml(serialize(5, "count")) == "<count>5</count>"

    def test_none_yields_none(self):
        assert serialize(None) is None


class TestFields:
    """Tests for record fields."""

    def test_field_order_follows_declaration(self):
        element = serialize(john())
        assert [child.tag for child in element] == ["Id", "Name", "Date"]

    def test_none_fields_are_dropped(self):
        element = serialize(DataTestModel(Id=3))
        assert xml(element) == "<DataTestModel><Id>3</Id></DataTestModel>"

    def test_nested_record(self):
        element = serialize({"home": Address("Main St", "Springfield")})
        assert xml(element) == (
            "<Object><home><Street>Main St</Street><City>Springfield</City></home></Object>"
        )

    def test_xml_name_metadata(self):
        assert xml(serialize(Renamed(7, "n"))) == "<Renamed><OrderID>7</OrderID><note>n</note></Renamed>"

    def test_pydantic_alias(self):
        product = Product(SKU="A1", Price=9.5, Quantities=[1, 2])
        assert xml(serialize(product)) == (
            "<Product><SKU>A1</SKU><Price>9.5</Price>"
            "<Quantities><int>1</int><int>2</int></Quantities></Product>"
        )

    def test_named_tuple_is_a_record(self):
        assert xml(serialize(Point(1, 2))) == "<Point><X>1</X><Y>2</Y></Point>"

    def test_plain_object_attributes(self):
        class Plain:
            def __init__(self):
                self.a = 1
                self._hidden = 2

        assert xml(serialize(Plain(), "Plain")) == "<Plain><a>1</a></Plain>"

    def test_slots_object(self):
        class Slotted:
            __slots__ = ("a", "b")

            def __init__(self):
                self.a = 1

        assert xml(serialize(Slotted(), "Slotted")) == "<Slotted><a>1</a></Slotted>"

    def test_unenumerable_value_raises(self):
        with pytest.raises(SerializationError):
            serialize(object())


class TestArrays:
    """Tests for array encoding."""

    def test_int_array(self):
        element = serialize({"array": [1, 2, 3, 4]})
        assert xml(element) == (
            "<Object><array><int>1</int><int>2</int><int>3</int><int>4</int></array></Object>"
        )

    def test_record_items_are_named_by_type(self):
        customer = Customer(Id=1, Name="Ann", Addresses=[Address("a", "b")])
        addresses = serialize(customer).find("Addresses")
        assert xml(addresses) == (
            "<Addresses><Address><Street>a</Street><City>b</City></Address></Addresses>"
        )

    def test_wire_names_of_scalars(self):
        element = serialize(
            {"items": [True, 1, Byte(2), 1.5, Decimal("2.5"), "s", datetime(2020, 1, 2)]}
        )
        assert [child.tag for child in element.find("items")] == [
            "boolean", "int", "byte", "double", "double", "string", "dateTime",
        ]

    def test_tuple_is_an_array(self):
        assert xml(serialize({"t": (1, 2)})) == "<Object><t><int>1</int><int>2</int></t></Object>"

    def test_bytes_are_byte_items(self):
        assert xml(serialize({"data": b"\x01\x02"})) == (
            "<Object><data><byte>1</byte><byte>2</byte></data></Object>"
        )

    def test_none_items_are_skipped(self):
        assert xml(serialize({"a": [1, None, 2]})) == "<Object><a><int>1</int><int>2</int></a></Object>"

    def test_nested_array_items(self):
        assert xml(serialize({"m": [[1], [2]]})) == (
            "<Object><m><list><int>1</int></list><list><int>2</int></list></m></Object>"
        )


class TestNamespace:
    """Tests for namespace propagation."""

    def test_namespace_on_root_only_declared_once(self):
        assert xml(serialize(john(), namespace=TEMPURI)) == (
            '<DataTestModel xmlns="http://tempuri.org"><Id>1</Id><Name>John Smith</Name>'
            "<Date>2005-10-23T12:00:00.0000000</Date></DataTestModel>"
        )

    def test_every_element_is_qualified(self):
        customer = Customer(Id=1, Name="Ann", Tags=["x"], Addresses=[Address("a", "b")])
        element = serialize(customer, namespace=TEMPURI)
        assert all(
            etree.QName(node).namespace == TEMPURI for node in element.iter()
        )

    def test_namespace_does_not_alter_content(self):
        plain = serialize(john())
        qualified = serialize(john(), namespace=TEMPURI)
        assert [node.text for node in plain.iter()] == [node.text for node in qualified.iter()]


class TestSimpleValues:
    """Tests for simple value text."""

    def test_boolean(self):
        assert xml(serialize({"ok": False})) == "<Object><ok>false</ok></Object>"

    def test_enum_uses_member_name(self):
        assert xml(serialize({"c": Color.Green})) == "<Object><c>Green</c></Object>"

    def test_utc_timestamp(self):
        value = datetime(2005, 10, 23, 12, 0, 0, 500, tzinfo=timezone.utc)
        assert serialize(value, "d").text == "2005-10-23T12:00:00.0005000Z"

    def test_offset_timestamp(self):
        value = datetime(2005, 10, 23, 12, 0, 0, tzinfo=timezone(timedelta(hours=-5, minutes=-30)))
        assert serialize(value, "d").text == "2005-10-23T12:00:00.0000000-05:30"

    def test_uuid(self):
        key = UUID("12345678-1234-5678-1234-567812345678")
        assert serialize(key, "k").text == "12345678-1234-5678-1234-567812345678"

    def test_text_not_representable_in_xml_raises(self):
        with pytest.raises(SerializationError):
            serialize({"bad": "\x00"})
