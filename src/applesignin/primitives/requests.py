"""Request building for Apple's token and revoke endpoints.

Turns a ``ValidationRequest`` into a ready-to-send ``HTTPRequest``. Pure
data transformation: no network I/O, so the output can be asserted on
directly in tests.
"""

from __future__ import annotations

from urllib.parse import urlencode

from applesignin.config import AppleEndpoints
from applesignin.models.requests import (
    AppValidationTokenRequest,
    RevokeAccessTokenRequest,
    RevokeRefreshTokenRequest,
    ValidationRefreshRequest,
    ValidationRequest,
    WebValidationTokenRequest,
)
from applesignin.transport import HTTPRequest

_TOKEN = "token"
_REVOKE = "revoke"

# Which endpoint each request kind is sent to
_ENDPOINT_BY_REQUEST: dict[type, str] = {
    WebValidationTokenRequest: _TOKEN,
    AppValidationTokenRequest: _TOKEN,
    ValidationRefreshRequest: _TOKEN,
    RevokeAccessTokenRequest: _REVOKE,
    RevokeRefreshTokenRequest: _REVOKE,
}


class RequestBuilder:
    """Builds form-encoded POST requests for every request kind."""

    def __init__(self, endpoints: AppleEndpoints | None = None):
        self.endpoints = endpoints or AppleEndpoints()

    def build(self, request: ValidationRequest) -> HTTPRequest:
        """Build the HTTP request for ``request``.

        Form values are percent-encoded with standard form encoding and
        emitted in a fixed order.

        Raises:
            TypeError: If ``request`` is not one of the known request kinds
        """
        endpoint = _ENDPOINT_BY_REQUEST.get(type(request))
        if endpoint is None:
            raise TypeError(f"Unsupported request type: {type(request).__name__}")

        if endpoint == _TOKEN:
            url = self.endpoints.token_url
        else:
            url = self.endpoints.revoke_url

        return HTTPRequest(url=url, body=urlencode(request.to_form_data()))
