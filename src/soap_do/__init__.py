"""
soap-do - SOAP client for Python.

This package calls web methods of SOAP services with plain Python values:
- Dataclasses, pydantic models, dicts and named tuples as parameters
- Typed results materialized from ``{method}Result``
- SOAP 1.1 and SOAP 1.2 fault extraction
- Async/await native API over httpx

Example usage:
    from dataclasses import dataclass
    from soap_do import SoapClient

    @dataclass
    class AddRequest:
        intA: int
        intB: int

    async def main():
        async with SoapClient(
            "http://www.dneonline.com/calculator.asmx",
            "http://tempuri.org/",
        ) as client:
            total = await client.post("Add", AddRequest(1, 2), int)
            print(total)  # 3

            outcome = await client.invoke("Divide", {"intA": 1, "intB": 0}, int)
            if not outcome.ok:
                print(outcome.fault.message)

    import asyncio
    asyncio.run(main())
"""

from __future__ import annotations

__version__ = "0.1.0"

from .classify import classify, describe, wire_name
from .client import SoapClient, SoapRequest
from .config import configure, configure_from_env, get_config
from .deserializer import Deserializer, deserialize, parse_document
from .envelope import build_envelope, render_envelope, soap_action
from .errors import (
    ErrorCode,
    SerializationError,
    SoapError,
    SoapFault,
    TransportError,
    is_error_code,
    wrap_error,
)
from .fault import SOAP11_NAMESPACE, SOAP12_NAMESPACE, extract_fault
from .names import decode_name, encode_name
from .serializer import Serializer, serialize
from .transport import HttpxTransport, Transport
from .types import (
    Byte,
    CallOutcome,
    Envelope,
    Failure,
    FaultInfo,
    Found,
    Kind,
    Lookup,
    Missing,
    SoapConfig,
    Success,
    TypeDescriptor,
)

__all__ = [
    # Main API
    "SoapClient",
    "SoapRequest",
    "HttpxTransport",
    "Transport",
    # Serialization
    "Serializer",
    "serialize",
    "Deserializer",
    "deserialize",
    "parse_document",
    "classify",
    "describe",
    "wire_name",
    "encode_name",
    "decode_name",
    # Protocol
    "build_envelope",
    "render_envelope",
    "soap_action",
    "extract_fault",
    "SOAP11_NAMESPACE",
    "SOAP12_NAMESPACE",
    # Types
    "Byte",
    "CallOutcome",
    "Envelope",
    "Failure",
    "FaultInfo",
    "Found",
    "Kind",
    "Lookup",
    "Missing",
    "Success",
    "TypeDescriptor",
    # Configuration
    "SoapConfig",
    "configure",
    "configure_from_env",
    "get_config",
    # Errors
    "ErrorCode",
    "SoapError",
    "SoapFault",
    "TransportError",
    "SerializationError",
    "is_error_code",
    "wrap_error",
    # Version
    "__version__",
]
