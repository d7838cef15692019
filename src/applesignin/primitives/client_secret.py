"""Client secret signing for Sign in with Apple.

Apple authenticates confidential clients with a short JWT signed using
ES256 (ECDSA on P-256 with SHA-256) and the private key downloaded from
the developer portal, instead of a static client secret.

See https://developer.apple.com/documentation/accountorganizationaldatasharing/creating-a-client-secret
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any

import jwt
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from applesignin.config import APPLE_ISSUER, MAX_CLIENT_SECRET_LIFETIME
from applesignin.models.errors import SigningError
from applesignin.models.secret import ClientSecretParams

logger = logging.getLogger(__name__)

SIGNING_ALGORITHM = "ES256"


class ClientSecretSigner:
    """Signs client secret JWTs.

    The produced token has the header ``{"alg": "ES256", "kid": key_id}``
    and the claims ``iss``, ``iat``, ``exp``, ``aud`` and ``sub``. The
    signer keeps no state between calls and never verifies its own output.
    """

    def sign(self, params: ClientSecretParams) -> str:
        """Sign a client secret.

        Args:
            params: Issuer, subject, key and validity window

        Returns:
            Compact serialized JWT

        Raises:
            SigningError: If the key is unusable or signing fails
        """
        private_key = self._load_private_key(params.private_key)

        payload = {
            "iss": params.team_id,
            "iat": int(params.issued_at.timestamp()),
            "exp": int(params.expiry.timestamp()),
            "aud": APPLE_ISSUER,
            "sub": params.client_id,
        }

        try:
            token = jwt.encode(
                payload,
                private_key,
                algorithm=SIGNING_ALGORITHM,
                headers={"kid": params.key_id},
            )
        except Exception as e:
            raise SigningError(f"Failed to sign client secret: {e}") from e

        logger.debug(
            f"Signed client secret for {params.client_id} "
            f"(kid={params.key_id}, exp={payload['exp']})"
        )
        return token

    def _load_private_key(self, key: Any) -> ec.EllipticCurvePrivateKey:
        """Load and check the signing key.

        Accepts PEM text, PEM bytes or an already loaded key object.

        Raises:
            SigningError: If the key is malformed, not EC, or not P-256
        """
        if isinstance(key, str):
            key = key.encode("utf-8")

        if isinstance(key, bytes):
            try:
                key = serialization.load_pem_private_key(key, password=None)
            except (ValueError, TypeError, UnsupportedAlgorithm) as e:
                raise SigningError(f"Malformed private key: {e}") from e

        if not isinstance(key, ec.EllipticCurvePrivateKey):
            raise SigningError(
                f"Expected an EC private key, got {type(key).__name__}"
            )
        if not isinstance(key.curve, ec.SECP256R1):
            raise SigningError(
                f"ES256 requires a P-256 key, got curve {key.curve.name}"
            )
        return key


def generate_client_secret(
    team_id: str,
    client_id: str,
    key_id: str,
    private_key: Any,
    lifetime: timedelta = timedelta(seconds=MAX_CLIENT_SECRET_LIFETIME),
) -> str:
    """Sign a client secret valid from now for ``lifetime``.

    Raises:
        SigningError: If the key is unusable or signing fails
    """
    params = ClientSecretParams.with_lifetime(
        team_id=team_id,
        client_id=client_id,
        key_id=key_id,
        private_key=private_key,
        lifetime=lifetime,
    )
    return ClientSecretSigner().sign(params)
