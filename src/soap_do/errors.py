"""
Error types for soap-do.

Error Code Ranges:
- 1xxx: Transport errors
- 2xxx: Protocol faults reported by the service
- 5xxx: Serialization errors
"""

from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .types import FaultInfo


class ErrorCode(IntEnum):
    """Numeric codes carried by every SoapError."""

    # Network failures, connection refused, timeouts, unreadable error pages
    TRANSPORT_ERROR = 1001

    # Fault element returned by the remote service
    SOAP_FAULT = 2001

    # XML that cannot be produced or read back
    SERIALIZATION_ERROR = 5001


class SoapError(Exception):
    """
    Base error class for all soap-do errors.

    Error Hierarchy:
    - SoapError (base)
      - TransportError: the transport could not deliver the request
      - SoapFault: the service answered with a Fault element
      - SerializationError: encoding/decoding failures

    Example:
        ```python
        try:
            await client.post("GetUser", {"id": 1}, User)
        except SoapError as error:
            print(f"SOAP call failed [{error.code_name}]: {error.message}")
        ```
    """

    code: ErrorCode

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def code_name(self) -> str:
        return self.code.name

    def __str__(self) -> str:
        return f"{self.code_name}({self.code}): {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Return a dictionary representation of the error."""
        return {
            "name": self.__class__.__name__,
            "message": self.message,
            "code": int(self.code),
            "code_name": self.code_name,
        }


class TransportError(SoapError):
    """
    Error raised when the request cannot be delivered or the response read.

    Attributes:
        url: The endpoint the request was sent to, when known.
        status_code: HTTP status of a response that carried no SOAP document.
    """

    code = ErrorCode.TRANSPORT_ERROR

    def __init__(
        self,
        message: str,
        url: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        if self.status_code is not None:
            data["status_code"] = self.status_code
        return data


class SoapFault(SoapError):
    """
    Error raised when the service answers with a Fault element.

    The fault string is the error message; the fault code and detail stay
    available on ``fault`` for diagnostics.

    Example:
        ```python
        try:
            await client.post("Divide", {"a": 1, "b": 0}, float)
        except SoapFault as error:
            print(error.message, error.fault.code, error.fault.detail)
        ```
    """

    code = ErrorCode.SOAP_FAULT

    def __init__(self, fault: FaultInfo, method: str | None = None) -> None:
        super().__init__(fault.message or "SOAP fault")
        self.fault = fault
        self.method = method

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["fault"] = {
            "code": self.fault.code,
            "message": self.fault.message,
            "detail": self.fault.detail,
        }
        return data


class SerializationError(SoapError):
    """
    Error raised when serialization or deserialization fails.

    Common causes:
    - Response body that is not well-formed XML
    - Element text that does not parse as the requested simple type
    - A value whose fields cannot be enumerated, or a simple value passed
      as the parameters of a call
    """

    code = ErrorCode.SERIALIZATION_ERROR

    def __init__(self, message: str, is_deserialize: bool = False) -> None:
        super().__init__(message)
        self.is_deserialize = is_deserialize


def is_error_code(error: BaseException, code: ErrorCode) -> bool:
    """
    Check if an error is a SoapError with a specific error code.

    Example:
        ```python
        try:
            await client.post("Ping")
        except Exception as error:
            if is_error_code(error, ErrorCode.TRANSPORT_ERROR):
                ...
        ```
    """
    return isinstance(error, SoapError) and error.code == code


def wrap_error(error: BaseException) -> SoapError:
    """
    Wrap an unknown error into a SoapError.

    SoapErrors pass through unchanged; anything else becomes a
    TransportError, since the transport is the only collaborator that raises
    foreign exceptions into a call.
    """
    if isinstance(error, SoapError):
        return error
    return TransportError(str(error) or error.__class__.__name__)
