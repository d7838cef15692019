"""Sign in with Apple token exchange and revocation service.

Implements the calls to Apple's token endpoint (authorization code and
refresh token validation) and revoke endpoint.
"""

from __future__ import annotations

import logging
from typing import TypeVar

from applesignin.config import AppleEndpoints
from applesignin.models.errors import DecodeError, TransportError
from applesignin.models.requests import (
    AppValidationTokenRequest,
    RevokeAccessTokenRequest,
    RevokeRefreshTokenRequest,
    ValidationRefreshRequest,
    ValidationRequest,
    WebValidationTokenRequest,
)
from applesignin.models.responses import (
    RefreshResponse,
    RevokeResponse,
    ValidationResponse,
)
from applesignin.primitives.requests import RequestBuilder
from applesignin.primitives.responses import ResponseDecoder
from applesignin.transport import HTTPResponse, HTTPTransport, HttpxTransport

logger = logging.getLogger(__name__)

ResponseT = TypeVar("ResponseT", ValidationResponse, RefreshResponse, RevokeResponse)


class AppleTokenManager:
    """Exchanges and revokes Sign in with Apple tokens.

    Every call is a single request/response exchange with no retries and
    no state carried between calls. Three outcomes are kept apart:

    - ``TransportError``: no usable response (network failure, or a
      non-2xx status with an undecodable body)
    - ``DecodeError``: a 2xx response whose body is not a valid payload
    - a returned response with ``error`` set: Apple rejected the request

    Always check ``response.error`` before trusting the tokens.
    """

    def __init__(
        self,
        transport: HTTPTransport | None = None,
        endpoints: AppleEndpoints | None = None,
        timeout: float = 30.0,
    ):
        """Initialize the token manager.

        Args:
            transport: HTTP transport to use. Defaults to an httpx transport
                owned (and closed) by this manager.
            endpoints: Apple endpoint configuration
            timeout: HTTP request timeout in seconds for the default transport
        """
        self._owned_transport: HttpxTransport | None = None
        if transport is None:
            self._owned_transport = HttpxTransport(timeout=timeout)
            transport = self._owned_transport
        self._transport: HTTPTransport = transport
        self._builder = RequestBuilder(endpoints)
        self._decoder = ResponseDecoder()

    async def __aenter__(self) -> AppleTokenManager:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def validate_web_code(
        self, request: WebValidationTokenRequest
    ) -> ValidationResponse:
        """Exchange an authorization code received by a web client.

        Raises:
            TransportError: If the exchange with Apple fails
            DecodeError: If Apple's response cannot be decoded
        """
        return await self._exchange(request, ValidationResponse)

    async def validate_app_code(
        self, request: AppValidationTokenRequest
    ) -> ValidationResponse:
        """Exchange an authorization code received by a native app.

        Raises:
            TransportError: If the exchange with Apple fails
            DecodeError: If Apple's response cannot be decoded
        """
        return await self._exchange(request, ValidationResponse)

    async def refresh_tokens(self, request: ValidationRefreshRequest) -> RefreshResponse:
        """Validate a refresh token and obtain a new access token.

        Raises:
            TransportError: If the exchange with Apple fails
            DecodeError: If Apple's response cannot be decoded
        """
        return await self._exchange(request, RefreshResponse)

    async def revoke_access_token(
        self, request: RevokeAccessTokenRequest
    ) -> RevokeResponse:
        """Revoke an access token.

        Raises:
            TransportError: If the exchange with Apple fails
            DecodeError: If Apple's response cannot be decoded
        """
        return await self._exchange(request, RevokeResponse)

    async def revoke_refresh_token(
        self, request: RevokeRefreshTokenRequest
    ) -> RevokeResponse:
        """Revoke a refresh token.

        Raises:
            TransportError: If the exchange with Apple fails
            DecodeError: If Apple's response cannot be decoded
        """
        return await self._exchange(request, RevokeResponse)

    async def _exchange(
        self, request: ValidationRequest, response_type: type[ResponseT]
    ) -> ResponseT:
        """Build, send and decode a single request."""
        http_request = self._builder.build(request)

        logger.debug(
            f"Sending {type(request).__name__} to {http_request.url} "
            f"(client_id={request.client_id})"
        )

        try:
            http_response = await self._transport.send(http_request)
        except TransportError:
            raise
        except Exception as e:
            raise TransportError(
                f"Unexpected error calling {http_request.url}: {e}"
            ) from e

        response = self._parse_response(http_response, response_type)

        if response.is_error():
            logger.warning(
                f"Apple rejected {type(request).__name__} with "
                f"{http_response.status_code}: {response.provider_error}"
            )
        else:
            logger.info(f"{type(request).__name__} succeeded")

        return response

    def _parse_response(
        self, http_response: HTTPResponse, response_type: type[ResponseT]
    ) -> ResponseT:
        """Decode the response body, telling transport and decode failures apart.

        Raises:
            TransportError: If a non-2xx response has an undecodable body
            DecodeError: If a 2xx response has an undecodable body
        """
        if http_response.is_success():
            return self._decoder.decode(http_response.body, response_type)

        message = (
            f"Apple returned HTTP {http_response.status_code}: "
            f"{http_response.body[:200]!r}"
        )
        # An empty body is only a valid answer on success
        if not http_response.body.strip():
            raise TransportError(message)

        try:
            response = self._decoder.decode(http_response.body, response_type)
        except DecodeError as e:
            logger.warning(
                f"Undecodable error response with status {http_response.status_code}"
            )
            raise TransportError(message) from e

        # A failed status without an error payload is not a provider report
        if not response.is_error():
            raise TransportError(message)
        return response

    async def close(self) -> None:
        """Close the default transport, if this manager created it."""
        if self._owned_transport is not None:
            await self._owned_transport.close()
