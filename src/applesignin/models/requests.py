"""Token and revocation request models for Sign in with Apple.

Each request kind is its own immutable dataclass carrying only the fields
that kind needs. ``ValidationRequest`` is the union of all five.

See https://developer.apple.com/documentation/sign_in_with_apple/generate_and_validate_tokens
and https://developer.apple.com/documentation/sign_in_with_apple/revoke_tokens
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


def _require(request: object, *names: str) -> None:
    for name in names:
        if not getattr(request, name):
            raise ValueError(f"{type(request).__name__}.{name} must not be empty")


@dataclass(frozen=True)
class WebValidationTokenRequest:
    """Authorization code validation for a web (Services ID) client."""

    client_id: str
    client_secret: str = field(repr=False)
    code: str = field(repr=False)  # single use, valid for five minutes
    redirect_uri: str  # must match the URI the code was sent to

    def __post_init__(self) -> None:
        _require(self, "client_id", "client_secret", "code", "redirect_uri")

    def to_form_data(self) -> dict[str, str]:
        """Convert to form data for application/x-www-form-urlencoded request."""
        return {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "code": self.code,
            "grant_type": "authorization_code",
            "redirect_uri": self.redirect_uri,
        }


@dataclass(frozen=True)
class AppValidationTokenRequest:
    """Authorization code validation for a native app (bundle ID) client."""

    client_id: str
    client_secret: str = field(repr=False)
    code: str = field(repr=False)

    def __post_init__(self) -> None:
        _require(self, "client_id", "client_secret", "code")

    def to_form_data(self) -> dict[str, str]:
        """Convert to form data for application/x-www-form-urlencoded request."""
        return {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "code": self.code,
            "grant_type": "authorization_code",
        }


@dataclass(frozen=True)
class ValidationRefreshRequest:
    """Refresh token validation."""

    client_id: str
    client_secret: str = field(repr=False)
    refresh_token: str = field(repr=False)

    def __post_init__(self) -> None:
        _require(self, "client_id", "client_secret", "refresh_token")

    def to_form_data(self) -> dict[str, str]:
        """Convert to form data for application/x-www-form-urlencoded request."""
        return {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "grant_type": "refresh_token",
            "refresh_token": self.refresh_token,
        }


@dataclass(frozen=True)
class RevokeAccessTokenRequest:
    """Access token revocation.

    Unlike every other request, ``client_id`` is optional here and is left
    out of the form body when unset. Apple's revoke endpoint tolerates the
    omission for access tokens; the asymmetry is kept deliberately.
    """

    client_secret: str = field(repr=False)
    access_token: str = field(repr=False)
    client_id: str | None = None

    def __post_init__(self) -> None:
        _require(self, "client_secret", "access_token")

    def to_form_data(self) -> dict[str, str]:
        """Convert to form data for application/x-www-form-urlencoded request."""
        data = {}
        if self.client_id:
            data["client_id"] = self.client_id
        data["client_secret"] = self.client_secret
        data["token"] = self.access_token
        data["token_type_hint"] = "access_token"
        return data


@dataclass(frozen=True)
class RevokeRefreshTokenRequest:
    """Refresh token revocation."""

    client_id: str
    client_secret: str = field(repr=False)
    refresh_token: str = field(repr=False)

    def __post_init__(self) -> None:
        _require(self, "client_id", "client_secret", "refresh_token")

    def to_form_data(self) -> dict[str, str]:
        """Convert to form data for application/x-www-form-urlencoded request."""
        return {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "token": self.refresh_token,
            "token_type_hint": "refresh_token",
        }


ValidationRequest = Union[
    WebValidationTokenRequest,
    AppValidationTokenRequest,
    ValidationRefreshRequest,
    RevokeAccessTokenRequest,
    RevokeRefreshTokenRequest,
]
