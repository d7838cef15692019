"""Response decoding for Apple's token and revoke endpoints."""

from __future__ import annotations

from typing import TypeVar

from pydantic import ValidationError

from applesignin.models.errors import DecodeError
from applesignin.models.responses import (
    RefreshResponse,
    RevokeResponse,
    ValidationResponse,
)

ResponseT = TypeVar("ResponseT", ValidationResponse, RefreshResponse, RevokeResponse)


class ResponseDecoder:
    """Decodes raw response bodies into typed responses.

    Decoding is tolerant: missing fields become ``None`` and a populated
    ``error`` is a perfectly valid response. Only a body that is not a JSON
    object, or whose fields have impossible types, fails to decode. The
    HTTP status code is never looked at.
    """

    def decode(self, body: bytes | str, response_type: type[ResponseT]) -> ResponseT:
        """Decode ``body`` into ``response_type``.

        Args:
            body: Raw response body
            response_type: ValidationResponse, RefreshResponse or RevokeResponse

        Returns:
            The decoded response, possibly carrying a provider error

        Raises:
            DecodeError: If the body is not a well-formed JSON object
        """
        if not body.strip():
            if response_type.allow_empty_body:
                return response_type()
            raise DecodeError(f"Empty body for {response_type.__name__}")

        try:
            return response_type.model_validate_json(body)
        except ValidationError as e:
            raise DecodeError(
                f"Invalid {response_type.__name__} format: {e}"
            ) from e
