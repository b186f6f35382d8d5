"""
Fault extraction for SOAP 1.1 and SOAP 1.2 responses.

SOAP 1.1 faults carry ``faultcode``/``faultstring``/``detail`` children.
ASP.NET leaves those children unqualified even inside a namespaced Fault, so
they are looked up with and without the envelope namespace. SOAP 1.2 faults
carry namespace-qualified ``Code``/``Reason``/``Detail`` children.
"""

from __future__ import annotations

import logging

from lxml import etree

from .deserializer import parse_document
from .names import qualify
from .types import FaultInfo

__all__ = ["SOAP11_NAMESPACE", "SOAP12_NAMESPACE", "extract_fault", "find_fault"]

logger = logging.getLogger(__name__)

SOAP11_NAMESPACE = "http://schemas.xmlsoap.org/soap/envelope/"
SOAP12_NAMESPACE = "http://www.w3.org/2003/05/soap-envelope"


def _text(element: etree._Element | None) -> str | None:
    if element is None:
        return None
    return "".join(element.itertext()).strip()


def _child_text(fault: etree._Element, name: str, namespace: str, qualified_only: bool) -> str | None:
    child = fault.find(qualify(name, namespace))
    if child is None and not qualified_only:
        child = fault.find(name)
    return _text(child)


def find_fault(document: etree._Element) -> FaultInfo | None:
    """Extract the first Fault of a parsed document, SOAP 1.1 taking precedence."""
    fault = next(document.iter(qualify("Fault", SOAP11_NAMESPACE)), None)
    if fault is not None:
        return FaultInfo(
            code=_child_text(fault, "faultcode", SOAP11_NAMESPACE, False),
            message=_child_text(fault, "faultstring", SOAP11_NAMESPACE, False),
            detail=_child_text(fault, "detail", SOAP11_NAMESPACE, False),
        )

    fault = next(document.iter(qualify("Fault", SOAP12_NAMESPACE)), None)
    if fault is not None:
        return FaultInfo(
            code=_child_text(fault, "Code", SOAP12_NAMESPACE, True),
            message=_child_text(fault, "Reason", SOAP12_NAMESPACE, True),
            detail=_child_text(fault, "Detail", SOAP12_NAMESPACE, True),
        )

    return None


def extract_fault(response_text: str | bytes) -> FaultInfo | None:
    """
    Look for a Fault element in a response.

    Args:
        response_text: The raw response document

    Returns:
        The fault, or None if the response carries none

    Raises:
        SerializationError: If the response is not well-formed XML

    Example:
        >>> extract_fault(
        ...     '<s:Envelope xmlns:s="http://schemas.xmlsoap.org/soap/envelope/">'
        ...     "<s:Body><s:Fault><faultstring>X</faultstring></s:Fault></s:Body>"
        ...     "</s:Envelope>"
        ... ).message
        'X'
    """
    fault = find_fault(parse_document(response_text))
    if fault is not None:
        logger.debug("Fault in response: code=%s message=%s", fault.code, fault.message)
    return fault
