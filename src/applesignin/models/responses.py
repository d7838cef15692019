"""Token endpoint response models for Sign in with Apple.

Apple answers every request with a JSON object whose fields depend on the
request kind. Any field may be missing, so every field is optional and
absent fields decode to ``None``.

Always check ``error`` before trusting anything else. Apple may report a
rejected request with a 400 or a 200 status; the payload is the only
reliable signal.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from pydantic import BaseModel, ConfigDict


@dataclass(frozen=True)
class ProviderError:
    """A request rejection reported by Apple inside a decoded response."""

    error: str
    error_description: str | None = None

    def __str__(self) -> str:
        if self.error_description:
            return f"{self.error}: {self.error_description}"
        return self.error


class _AppleResponse(BaseModel):
    """Fields shared by every Apple token endpoint response."""

    model_config = ConfigDict(frozen=True)

    # Do not trust the rest of the response if this is set
    error: str | None = None
    error_description: str | None = None

    # Apple signals success on the revoke endpoint with an empty body
    allow_empty_body: ClassVar[bool] = False

    def is_error(self) -> bool:
        """Check if Apple rejected the request."""
        return self.error is not None

    @property
    def provider_error(self) -> ProviderError | None:
        """The rejection reported by Apple, or None when the request succeeded."""
        if self.error is None:
            return None
        return ProviderError(self.error, self.error_description)


class ValidationResponse(_AppleResponse):
    """Response to an authorization code validation.

    See https://developer.apple.com/documentation/sign_in_with_apple/tokenresponse
    """

    # Reserved for future use; no data set is defined for access yet
    access_token: str | None = None
    token_type: str | None = None  # always "bearer"
    expires_in: int | None = None  # seconds
    refresh_token: str | None = None  # store securely on your server
    id_token: str | None = None  # JWT with the user's identity claims

    def is_success(self) -> bool:
        """Check if the response carries usable tokens."""
        return (
            self.error is None
            and self.access_token is not None
            and self.id_token is not None
        )


class RefreshResponse(_AppleResponse):
    """Response to a refresh token validation.

    Refreshing never returns a new refresh token or identity token.
    """

    access_token: str | None = None
    token_type: str | None = None
    expires_in: int | None = None

    def is_success(self) -> bool:
        """Check if the response carries a new access token."""
        return self.error is None and self.access_token is not None


class RevokeResponse(_AppleResponse):
    """Response to a token revocation. Success is the absence of ``error``."""

    allow_empty_body: ClassVar[bool] = True

    def is_success(self) -> bool:
        return self.error is None
