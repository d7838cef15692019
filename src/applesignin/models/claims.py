"""Identity token claims issued by Apple.

See https://developer.apple.com/documentation/sign_in_with_apple/authenticating_users_with_sign_in_with_apple
"""

from __future__ import annotations

from datetime import datetime
from enum import IntEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RealUserStatus(IntEnum):
    """Apple's estimate of whether the user is a real person."""

    UNSUPPORTED = 0
    UNKNOWN = 1
    LIKELY_REAL = 2


def parse_flag(value: bool | str | None) -> bool | None:
    """Normalize a claim Apple sends either as a JSON boolean or as a string.

    Tries the boolean form first, then the "true"/"false" string form.

    Raises:
        ValueError: If the value is neither
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
    raise ValueError(f"Expected a boolean or 'true'/'false', got {value!r}")


class IdentityClaims(BaseModel):
    """Decoded payload of an Apple identity token.

    ``email_verified`` and ``is_private_email`` keep the raw wire value so
    ``model_dump(by_alias=True)`` reproduces the original payload. Use the
    ``email_verified`` and ``is_private_email`` properties for the
    normalized booleans.

    Decoding checks shape only. Callers still have to confirm the issuer,
    the audience and the expiry, see ``check_trust``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    issuer: str = Field(alias="iss")  # always https://appleid.apple.com
    subject: str = Field(alias="sub")  # stable unique identifier of the user
    audience: str = Field(alias="aud")  # your client_id
    issued_at: datetime = Field(alias="iat")
    expires_at: datetime = Field(alias="exp")

    # Present only when a nonce was passed in the authorization request
    nonce: str | None = None
    # If true and nonce is missing, fail the transaction
    nonce_supported: bool | None = None

    # May be a private relay address, or missing for some managed accounts
    email: str | None = None
    email_verified_raw: bool | str | None = Field(default=None, alias="email_verified")
    is_private_email_raw: bool | str | None = Field(
        default=None, alias="is_private_email"
    )

    real_user_status: int | None = None
    # Only present during the 60-day window after an app transfer
    transfer_sub: str | None = None

    @field_validator("email_verified_raw", "is_private_email_raw", mode="before")
    @classmethod
    def validate_flag(cls, v: object) -> object:
        """Accept only booleans and the strings "true"/"false"."""
        parse_flag(v)
        return v

    @property
    def email_verified(self) -> bool | None:
        return parse_flag(self.email_verified_raw)

    @property
    def is_private_email(self) -> bool | None:
        return parse_flag(self.is_private_email_raw)

    @property
    def user_status(self) -> RealUserStatus | None:
        """``real_user_status`` as an enum, or None if absent or unrecognized."""
        if self.real_user_status is None:
            return None
        try:
            return RealUserStatus(self.real_user_status)
        except ValueError:
            return None
