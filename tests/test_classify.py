"""
Unit tests for type classification.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from types import SimpleNamespace
from typing import Any, Optional
from uuid import UUID

import pytest

from soap_do import Byte, Kind, TypeDescriptor, classify, describe, wire_name
from soap_do.classify import element_type, is_anonymous, is_optional, unwrap_optional

from .models import Address, Color, Customer, Point, Product


class TestClassify:
    """Tests for classify()."""

    @pytest.mark.parametrize(
        "tp",
        [bool, int, Byte, float, Decimal, str, datetime, date, UUID, Color, Optional[int], int | None],
    )
    def test_simple(self, tp: Any):
        assert classify(tp) is Kind.SIMPLE

    @pytest.mark.parametrize(
        "tp",
        [list, list[int], tuple[int, ...], bytes, list[Address], Optional[list[str]]],
    )
    def test_array(self, tp: Any):
        assert classify(tp) is Kind.ARRAY

    @pytest.mark.parametrize(
        "tp",
        [Address, Customer, Product, Point, dict, dict[str, int], SimpleNamespace, object],
    )
    def test_complex(self, tp: Any):
        assert classify(tp) is Kind.COMPLEX


class TestWireName:
    """Tests for wire_name()."""

    @pytest.mark.parametrize(
        ("tp", "expected"),
        [
            (bool, "boolean"),
            (int, "int"),
            (Byte, "byte"),
            (float, "double"),
            (Decimal, "double"),
            (str, "string"),
            (datetime, "dateTime"),
            (Color, "Color"),
            (Address, "Address"),
            (Optional[int], "int"),
            (list[int], "list"),
        ],
    )
    def test_names(self, tp: Any, expected: str):
        assert wire_name(tp) == expected

    def test_describe(self):
        assert describe(Address) == TypeDescriptor(kind=Kind.COMPLEX, wire_name="Address")
        assert describe(bool) == TypeDescriptor(kind=Kind.SIMPLE, wire_name="boolean")


class TestHelpers:
    def test_optional(self):
        assert is_optional(Optional[int])
        assert is_optional(str | None)
        assert not is_optional(int)
        assert unwrap_optional(Optional[Address]) is Address
        assert unwrap_optional(int) is int

    def test_anonymous(self):
        assert is_anonymous(dict)
        assert is_anonymous(dict[str, int])
        assert is_anonymous(SimpleNamespace)
        assert not is_anonymous(Address)

    def test_element_type(self):
        assert element_type(list[int]) is int
        assert element_type(tuple[str, ...]) is str
        assert element_type(bytes) is Byte
        assert element_type(list) is Any
        assert element_type(tuple[int, str]) is Any


class TestByte:
    def test_range(self):
        assert Byte(255) == 255
        with pytest.raises(ValueError):
            Byte(256)
        with pytest.raises(ValueError):
            Byte(-1)
