"""Endpoint configuration and key loading for Sign in with Apple."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

APPLE_ISSUER = "https://appleid.apple.com"

# Apple rejects client secrets whose exp is more than 15777000 seconds
# (six months) after iat.
MAX_CLIENT_SECRET_LIFETIME = 15777000


@dataclass(frozen=True)
class AppleEndpoints:
    """Base URL and paths of Apple's token and revoke endpoints.

    The defaults point at production. Override ``base_url`` to aim the
    client at a stub server in integration tests.
    """

    base_url: str = APPLE_ISSUER
    token_path: str = "/auth/token"
    revoke_path: str = "/auth/revoke"

    @property
    def token_url(self) -> str:
        return f"{self.base_url.rstrip('/')}{self.token_path}"

    @property
    def revoke_url(self) -> str:
        return f"{self.base_url.rstrip('/')}{self.revoke_path}"


def load_private_key(path: str | Path) -> bytes:
    """Read a ``.p8`` private key downloaded from the developer portal.

    Args:
        path: Location of the PEM-encoded key file

    Returns:
        Raw PEM bytes, suitable for ``ClientSecretParams.private_key``
    """
    return Path(path).read_bytes()
