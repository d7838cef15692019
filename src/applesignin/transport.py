"""HTTP transport used to reach Apple's endpoints.

The token manager only depends on the ``HTTPTransport`` protocol, so
callers can plug in their own client (with retries, proxies, tracing...).
``HttpxTransport`` is the default.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol

import httpx

from applesignin.models.errors import TransportError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HTTPRequest:
    """A fully built, ready-to-send HTTP request."""

    url: str
    body: str = field(repr=False)
    method: str = "POST"
    headers: dict[str, str] = field(
        default_factory=lambda: {
            "Content-Type": "application/x-www-form-urlencoded",
            "Accept": "application/json",
        }
    )


@dataclass(frozen=True)
class HTTPResponse:
    """Status code and raw body of an HTTP response."""

    status_code: int
    body: bytes = field(repr=False)

    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


class HTTPTransport(Protocol):
    """Protocol for sending a request and returning the raw response.

    Implementations should raise ``TransportError`` when no response could
    be obtained. Timeouts and cancellation are theirs to configure.
    """

    async def send(self, request: HTTPRequest) -> HTTPResponse:
        ...


class HttpxTransport:
    """Transport backed by a shared ``httpx.AsyncClient``."""

    def __init__(
        self, timeout: float = 30.0, http_client: httpx.AsyncClient | None = None
    ):
        """Initialize the transport.

        Args:
            timeout: HTTP request timeout in seconds, used when no client is given
            http_client: Preconfigured client to send requests with
        """
        self.timeout = timeout
        self._http_client = http_client or httpx.AsyncClient(timeout=timeout)

    async def send(self, request: HTTPRequest) -> HTTPResponse:
        """Send ``request`` and return the status code and body.

        Raises:
            TransportError: On connection failures and timeouts
        """
        try:
            response = await self._http_client.request(
                request.method,
                request.url,
                content=request.body,
                headers=request.headers,
            )
        except httpx.HTTPError as e:
            raise TransportError(f"HTTP error calling {request.url}: {e}") from e

        logger.debug(f"{request.method} {request.url} -> {response.status_code}")
        return HTTPResponse(status_code=response.status_code, body=response.content)

    async def close(self) -> None:
        """Close the HTTP client and clean up resources."""
        await self._http_client.aclose()
