"""Identity token decoding for Sign in with Apple.

Decoding here only covers claim shape and value normalization.
Cryptographic trust is delegated to an ``IdentityTokenVerifier`` supplied
by the caller; fetching and caching Apple's public keys
(https://appleid.apple.com/auth/keys) is left to the caller as well.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Any, Protocol

import jwt
from pydantic import ValidationError

from applesignin.config import APPLE_ISSUER
from applesignin.models.claims import IdentityClaims
from applesignin.models.errors import DecodeError, VerificationError

logger = logging.getLogger(__name__)


class IdentityTokenVerifier(Protocol):
    """Protocol for checking an identity token's signature.

    ``verify`` must raise when the signature cannot be trusted.
    """

    def verify(self, token: str) -> None:
        ...


class PublicKeyVerifier:
    """Verifies identity tokens against a public key the caller already holds.

    Only the signature is checked. Expiry, issuer and audience are checked
    separately by ``check_trust`` so that decoding and trust stay distinct
    steps.
    """

    def __init__(self, key: Any, algorithms: Sequence[str] = ("RS256",)):
        """Initialize the verifier.

        Args:
            key: Apple public key (PEM or a cryptography key object)
            algorithms: Accepted signing algorithms
        """
        self.key = key
        self.algorithms = list(algorithms)

    def verify(self, token: str) -> None:
        try:
            jwt.decode(
                token,
                self.key,
                algorithms=self.algorithms,
                options={
                    "verify_exp": False,
                    "verify_iat": False,
                    "verify_nbf": False,
                    "verify_aud": False,
                    "verify_iss": False,
                },
            )
        except jwt.PyJWTError as e:
            raise VerificationError(f"Identity token signature is invalid: {e}") from e


def decode_identity_token(
    token: str, verifier: IdentityTokenVerifier
) -> IdentityClaims:
    """Verify ``token`` with ``verifier`` and decode its claims.

    Args:
        token: Compact serialized identity token (``id_token``)
        verifier: Signature verification capability

    Returns:
        Decoded identity claims

    Raises:
        VerificationError: If the verifier rejects the token
        DecodeError: If the token or its claim set is malformed
    """
    try:
        verifier.verify(token)
    except VerificationError:
        raise
    except Exception as e:
        raise VerificationError(f"Identity token verification failed: {e}") from e

    try:
        # Signature was checked by the verifier above
        payload = jwt.decode(token, options={"verify_signature": False})
    except jwt.PyJWTError as e:
        raise DecodeError(f"Malformed identity token: {e}") from e

    try:
        return IdentityClaims.model_validate(payload)
    except ValidationError as e:
        raise DecodeError(f"Invalid identity token claims: {e}") from e


def check_trust(
    claims: IdentityClaims, client_id: str, now: datetime | None = None
) -> None:
    """Check the protocol-level claims every caller must confirm.

    Args:
        claims: Decoded identity claims
        client_id: Your Services ID or bundle ID
        now: Reference time, defaults to the current UTC time. Naive
            values are taken as UTC.

    Raises:
        VerificationError: If the issuer, audience or expiry is wrong
    """
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        # Claims are decoded as UTC
        now = now.replace(tzinfo=timezone.utc)

    if claims.issuer != APPLE_ISSUER:
        raise VerificationError(f"Unexpected issuer: {claims.issuer}")
    if claims.audience != client_id:
        raise VerificationError(
            f"Identity token audience {claims.audience} does not match {client_id}"
        )
    if claims.expires_at <= now:
        raise VerificationError(f"Identity token expired at {claims.expires_at}")

    logger.debug(f"Identity token for {claims.subject} passed trust checks")
