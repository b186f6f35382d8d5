"""
Transports deliver a request document to an endpoint and return the response text.

SoapClient only needs an object with a ``send`` coroutine; HttpxTransport is
the default, built on ``httpx.AsyncClient``. Faults arrive with HTTP 500, so
the body of an error status is returned and left for the fault check, unless it
is not a SOAP envelope at all (a gateway error page), which raises TransportError.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Protocol, runtime_checkable

import httpx
from lxml import etree

from .deserializer import parse_document
from .errors import SerializationError, TransportError

__all__ = ["Transport", "HttpxTransport"]

logger = logging.getLogger(__name__)


def _check_error_body(url: str, response: httpx.Response) -> None:
    # Faults arrive in an Envelope with an error status; anything else is a gateway or server page
    message = f"{url} answered {response.status_code} {response.reason_phrase} without a SOAP envelope"
    try:
        document = parse_document(response.content)
    except SerializationError as e:
        raise TransportError(message, url=url, status_code=response.status_code) from e
    if etree.QName(document).localname != "Envelope":
        raise TransportError(message, url=url, status_code=response.status_code)


@runtime_checkable
class Transport(Protocol):
    """Anything able to POST a text payload and return the response text."""

    async def send(self, url: str, payload: str, headers: Mapping[str, str]) -> str:
        """
        Send ``payload`` to ``url``.

        Raises:
            TransportError: If the request cannot be completed
        """
        ...


class HttpxTransport:
    """
    Transport over ``httpx.AsyncClient``.

    Headers are passed per request; the transport keeps no per-call state, so
    one instance can serve concurrent calls.

    Args:
        client: An existing AsyncClient to use (not closed by this transport)
        timeout: Request timeout in seconds when the client is created here
        user_agent: User-Agent header when the client is created here
        transport: Low-level httpx transport, e.g. ``httpx.MockTransport`` in tests
    """

    __slots__ = ("_client", "_owns_client")

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        timeout: float = 30.0,
        user_agent: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if client is None:
            headers = {"Accept": "text/xml"}
            if user_agent:
                headers["User-Agent"] = user_agent
            client = httpx.AsyncClient(timeout=timeout, headers=headers, transport=transport)
            self._owns_client = True
        else:
            self._owns_client = False
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client

    async def send(self, url: str, payload: str, headers: Mapping[str, str]) -> str:
        try:
            response = await self._client.post(
                url,
                content=payload.encode("utf-8"),
                headers=dict(headers),
            )
        except httpx.RequestError as e:
            raise TransportError(f"Request to {url} failed: {e}", url=url) from e

        if not response.is_success:
            logger.warning(
                "%s answered %s %s", url, response.status_code, response.reason_phrase
            )
            _check_error_body(url, response)
        return response.text

    async def close(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._owns_client:
            await self._client.aclose()
