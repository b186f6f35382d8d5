"""
SoapClient - calls web methods of a SOAP service.

Each call runs build -> send -> fault check -> extract:

    async with SoapClient("http://example.com/Service.asmx", "http://tempuri.org/") as client:
        total = await client.post("Add", {"a": 1, "b": 2}, int)

``post`` returns the value and raises SoapFault on a fault; ``invoke``
returns a Success or Failure outcome instead of raising.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from types import TracebackType
from typing import Any, TypeVar, overload

from .config import get_config
from .deserializer import Deserializer, parse_document
from .envelope import build_envelope, render_envelope
from .errors import SoapError, TransportError, wrap_error
from .fault import find_fault
from .serializer import Serializer
from .transport import HttpxTransport, Transport
from .types import CallOutcome, Envelope, Failure, Success

__all__ = ["SoapClient", "SoapRequest", "CONTENT_TYPE"]

logger = logging.getLogger(__name__)

T = TypeVar("T")

CONTENT_TYPE = "text/xml; charset=utf-8"


@dataclass(frozen=True)
class SoapRequest:
    """A request ready to hand to a transport."""
    envelope: Envelope
    payload: str
    headers: dict[str, str]


class SoapClient:
    """
    Client for the web methods of one SOAP service.

    The action header travels with each request; the client holds no
    per-call state, so concurrent calls on one instance do not interfere.

    Args:
        url: Endpoint of the web service
        namespace: Service namespace qualifying methods and parameters
        transport: Transport to send requests with (default: HttpxTransport)
        timeout: Request timeout in seconds for the default transport
        user_agent: User-Agent header for the default transport
        default_root_name: Element name for anonymous payload values
        pretty_print: Indent request documents

    Example:
        client = SoapClient("http://www.dneonline.com/calculator.asmx", "http://tempuri.org/")
        outcome = await client.invoke("Add", {"intA": 1, "intB": 2}, int)
        if outcome.ok:
            print(outcome.value)
        await client.close()
    """

    __slots__ = (
        "_url",
        "_namespace",
        "_transport",
        "_owns_transport",
        "_timeout",
        "_user_agent",
        "_serializer",
        "_deserializer",
        "_pretty_print",
        "_closed",
    )

    def __init__(
        self,
        url: str,
        namespace: str,
        *,
        transport: Transport | None = None,
        timeout: float | None = None,
        user_agent: str | None = None,
        default_root_name: str | None = None,
        pretty_print: bool | None = None,
    ) -> None:
        config = get_config()
        self._url = url
        self._namespace = namespace
        self._timeout = timeout if timeout is not None else config.timeout
        self._user_agent = user_agent or config.user_agent
        self._serializer = Serializer(default_root_name or config.default_root_name)
        self._deserializer = Deserializer()
        self._pretty_print = config.pretty_print if pretty_print is None else pretty_print
        self._closed = False

        if transport is None:
            self._transport: Transport = self._default_transport()
            self._owns_transport = True
        else:
            self._transport = transport
            self._owns_transport = False

    @property
    def url(self) -> str:
        return self._url

    @property
    def namespace(self) -> str:
        return self._namespace

    @property
    def transport(self) -> Transport:
        return self._transport

    @property
    def closed(self) -> bool:
        return self._closed

    def _default_transport(self) -> HttpxTransport:
        return HttpxTransport(timeout=self._timeout, user_agent=self._user_agent)

    def build_request(self, method: str, data: Any = None) -> SoapRequest:
        """
        Build the request document and headers for ``method``.

        Raises:
            SerializationError: If ``data`` cannot be serialized
        """
        envelope = build_envelope(method, data, self._namespace, self._serializer)
        return SoapRequest(
            envelope=envelope,
            payload=render_envelope(envelope, self._pretty_print),
            headers={
                "SOAPAction": envelope.action_name,
                "Content-Type": CONTENT_TYPE,
                "Accept": "text/xml",
            },
        )

    async def _invoke(
        self,
        transport: Transport,
        method: str,
        data: Any,
        result_type: Any,
    ) -> CallOutcome[Any]:
        request = self.build_request(method, data)
        logger.debug("POST %s SOAPAction=%s", self._url, request.envelope.action_name)

        try:
            response_text = await transport.send(self._url, request.payload, request.headers)
        except SoapError:
            raise
        except Exception as e:
            raise wrap_error(e) from e

        document = parse_document(response_text)
        fault = find_fault(document)
        if fault is not None:
            logger.warning("%s returned a fault: [%s] %s", method, fault.code, fault.message)
            return Failure(method=method, fault=fault)

        result = self._deserializer.deserialize(
            document, result_type, f"{method}Result", self._namespace or None
        )
        if not result:
            logger.debug("%s returned no %sResult element", method, method)
        return Success(method=method, result=result)

    @overload
    async def invoke(self, method: str, data: Any = ..., result_type: None = ...) -> CallOutcome[None]: ...

    @overload
    async def invoke(self, method: str, data: Any, result_type: type[T]) -> CallOutcome[T]: ...

    async def invoke(
        self,
        method: str,
        data: Any = None,
        result_type: Any = None,
    ) -> CallOutcome[Any]:
        """
        Call ``method`` and report the outcome without raising on faults.

        Args:
            method: Name of the web method
            data: Parameters; the fields of this value become the method's children
            result_type: Type to materialize ``{method}Result`` into; None discards it

        Returns:
            Success holding Found/Missing, or Failure holding the FaultInfo

        Raises:
            TransportError: If the transport fails or the client is closed
            SerializationError: If the request or response cannot be (de)serialized
        """
        if self._closed:
            raise TransportError("Client is closed", url=self._url)
        return await self._invoke(self._transport, method, data, result_type)

    async def post(self, method: str, data: Any = None, result_type: Any = None) -> Any:
        """
        Call ``method`` and return its result.

        Returns:
            The materialized result, or None when the response has no result element

        Raises:
            SoapFault: If the service answered with a fault
            TransportError: If the transport fails or the client is closed
            SerializationError: If the request or response cannot be (de)serialized
        """
        outcome = await self.invoke(method, data, result_type)
        return outcome.unwrap()

    def post_sync(self, method: str, data: Any = None, result_type: Any = None) -> Any:
        """
        Blocking variant of post() for code without a running event loop.

        Raises:
            RuntimeError: If called from a running event loop
        """
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return asyncio.run(self._post_once(method, data, result_type))
        raise RuntimeError("post_sync() cannot run inside an event loop; await post() instead")

    async def _post_once(self, method: str, data: Any, result_type: Any) -> Any:
        if self._closed:
            raise TransportError("Client is closed", url=self._url)
        if not self._owns_transport:
            outcome = await self._invoke(self._transport, method, data, result_type)
            return outcome.unwrap()

        # Pooled connections of the shared client belong to another event loop
        transport = self._default_transport()
        try:
            outcome = await self._invoke(transport, method, data, result_type)
        finally:
            await transport.close()
        return outcome.unwrap()

    async def close(self) -> None:
        """Close the client and the transport it created."""
        if self._closed:
            return
        self._closed = True
        if self._owns_transport and isinstance(self._transport, HttpxTransport):
            await self._transport.close()

    async def __aenter__(self) -> SoapClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()
