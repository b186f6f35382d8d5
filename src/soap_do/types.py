"""
Type definitions for soap-do

This module contains the value types shared across the soap-do package.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Generic, TypeAlias, TypeVar, Union

from .errors import SoapFault

if TYPE_CHECKING:
    from lxml.etree import _Element


T = TypeVar("T")


class Kind(str, Enum):
    """How a type is laid out on the wire."""
    SIMPLE = "simple"
    ARRAY = "array"
    COMPLEX = "complex"


@dataclass(frozen=True)
class TypeDescriptor:
    """Classification of a single type met during traversal."""
    kind: Kind
    wire_name: str


class Byte(int):
    """An unsigned 8-bit integer, sent on the wire as ``byte``."""

    def __new__(cls, value: Any = 0) -> "Byte":
        number = int(value)
        if not 0 <= number <= 255:
            raise ValueError(f"Byte value out of range: {number}")
        return super().__new__(cls, number)


@dataclass(frozen=True)
class FaultInfo:
    """Fault reported by the service in place of a result."""
    code: str | None = None
    message: str | None = None
    detail: str | None = None


@dataclass(frozen=True)
class Envelope:
    """A request document, built once per call."""
    namespace: str
    action_name: str
    body: "_Element"
    """The ``{method}`` element holding the serialized parameters."""
    document: "_Element"
    """The root ``Envelope`` element."""


@dataclass(frozen=True)
class Found(Generic[T]):
    """A located and materialized element."""
    value: T

    def __bool__(self) -> bool:
        return True

    def get(self, default: Any = None) -> T:
        return self.value


@dataclass(frozen=True)
class Missing:
    """No element with the requested name exists in the requested namespace."""
    name: str
    namespace: str | None = None

    def __bool__(self) -> bool:
        return False

    def get(self, default: Any = None) -> Any:
        return default


Lookup: TypeAlias = Union[Found[T], Missing]


@dataclass(frozen=True)
class Success(Generic[T]):
    """A call that completed without a fault."""
    method: str
    result: Lookup[T]

    @property
    def ok(self) -> bool:
        return True

    @property
    def value(self) -> T | None:
        """The deserialized result, or None when the result node was absent."""
        return self.result.get(None)

    def unwrap(self) -> T | None:
        return self.value


@dataclass(frozen=True)
class Failure:
    """A call the service answered with a fault."""
    method: str
    fault: FaultInfo

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self) -> Any:
        raise SoapFault(self.fault, method=self.method)


CallOutcome: TypeAlias = Union[Success[T], Failure]


@dataclass
class SoapConfig:
    """soap-do configuration options."""
    timeout: float = 30.0
    user_agent: str | None = None
    default_root_name: str = "Object"
    pretty_print: bool = False
    debug: bool = False
