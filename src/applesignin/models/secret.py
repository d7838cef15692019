"""Client secret parameters for Sign in with Apple.

The client secret is an ES256-signed JWT that Apple accepts in place of a
static OAuth client secret.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any

from applesignin.config import MAX_CLIENT_SECRET_LIFETIME


@dataclass(frozen=True)
class ClientSecretParams:
    """Immutable inputs for signing a client secret.

    Apple refuses secrets that live longer than six months
    (``MAX_CLIENT_SECRET_LIFETIME``). That cap is not enforced here; keep
    ``expiry - issued_at`` within it.

    ``issued_at`` and ``expiry`` should be timezone-aware. Naive values are
    interpreted as local time by ``datetime.timestamp``, and the two may not
    mix.
    """

    team_id: str  # iss: 10-character Team ID from the developer portal
    client_id: str  # sub: Services ID or bundle ID
    key_id: str  # kid: identifier of the Sign in with Apple key
    private_key: Any = field(repr=False)  # PEM str/bytes or EllipticCurvePrivateKey
    issued_at: datetime
    expiry: datetime

    def __post_init__(self) -> None:
        for name in ("team_id", "client_id", "key_id"):
            if not getattr(self, name):
                raise ValueError(f"{name} must not be empty")
        if (self.issued_at.tzinfo is None) != (self.expiry.tzinfo is None):
            raise ValueError("issued_at and expiry must both be naive or both be aware")
        if self.expiry <= self.issued_at:
            raise ValueError("expiry must be later than issued_at")

    @classmethod
    def with_lifetime(
        cls,
        team_id: str,
        client_id: str,
        key_id: str,
        private_key: Any,
        lifetime: timedelta = timedelta(seconds=MAX_CLIENT_SECRET_LIFETIME),
        now: datetime | None = None,
    ) -> ClientSecretParams:
        """Build parameters for a secret valid from ``now`` for ``lifetime``."""
        issued_at = now or datetime.now(timezone.utc)
        return cls(
            team_id=team_id,
            client_id=client_id,
            key_id=key_id,
            private_key=private_key,
            issued_at=issued_at,
            expiry=issued_at + lifetime,
        )
