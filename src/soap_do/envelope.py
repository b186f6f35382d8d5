"""
Request envelopes.

    <?xml version='1.0' encoding='utf-8'?>
    <soap:Envelope xmlns:soap="http://www.w3.org/2003/05/soap-envelope">
      <soap:Body>
        <{method} xmlns="{service namespace}">...parameters...</{method}>
      </soap:Body>
    </soap:Envelope>
"""

from __future__ import annotations

import logging
from typing import Any

from lxml import etree

from .classify import classify
from .errors import SerializationError
from .fault import SOAP12_NAMESPACE
from .names import qualify
from .serializer import Serializer
from .types import Envelope, Kind

__all__ = ["build_envelope", "render_envelope", "soap_action"]

logger = logging.getLogger(__name__)


def soap_action(namespace: str, method: str) -> str:
    """
    Action identifier for ``method``: the namespace and method joined by one slash.

    >>> soap_action("http://tempuri.org/", "Add")
    'http://tempuri.org/Add'
    >>> soap_action("http://tempuri.org", "Add")
    'http://tempuri.org/Add'
    """
    separator = "" if namespace.endswith("/") else "/"
    return f"{namespace}{separator}{method}"


def build_envelope(
    method: str,
    data: Any = None,
    namespace: str = "",
    serializer: Serializer | None = None,
) -> Envelope:
    """
    Wrap the serialized ``data`` in an envelope addressed to ``method``.

    The fields of ``data`` become the children of the ``{method}`` element.

    Raises:
        SerializationError: If the method name is not a legal element name,
            ``data`` is a simple value, or the payload cannot be serialized
    """
    if data is not None and classify(type(data)) is Kind.SIMPLE:
        raise SerializationError(
            f"Parameters of {method!r} must be a record, mapping or sequence, "
            f"not {type(data).__name__}"
        )
    serializer = serializer or Serializer()

    document = etree.Element(qualify("Envelope", SOAP12_NAMESPACE), nsmap={"soap": SOAP12_NAMESPACE})
    body = etree.SubElement(document, qualify("Body", SOAP12_NAMESPACE))
    try:
        call = etree.SubElement(
            body,
            qualify(method, namespace),
            nsmap={None: namespace} if namespace else None,
        )
    except ValueError as e:
        raise SerializationError(f"Invalid method name {method!r}: {e}") from e

    payload = serializer.serialize(data, namespace=namespace or None)
    if payload is not None:
        call.extend(list(payload))
    logger.debug("Built envelope for %s with %d parameter(s)", method, len(call))

    return Envelope(
        namespace=namespace,
        action_name=soap_action(namespace, method),
        body=call,
        document=document,
    )


def render_envelope(envelope: Envelope, pretty_print: bool = False) -> str:
    """Render the envelope document as UTF-8 XML text with its declaration."""
    return etree.tostring(
        envelope.document,
        xml_declaration=True,
        encoding="utf-8",
        pretty_print=pretty_print,
    ).decode("utf-8")
