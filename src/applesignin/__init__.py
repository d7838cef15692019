"""Sign in with Apple token client.

Signs client secrets, exchanges and refreshes tokens, revokes tokens, and
decodes identity token claims.
"""

from applesignin.config import AppleEndpoints, load_private_key
from applesignin.models.claims import IdentityClaims, RealUserStatus
from applesignin.models.errors import (
    DecodeError,
    SignInWithAppleError,
    SigningError,
    TransportError,
    VerificationError,
)
from applesignin.models.requests import (
    AppValidationTokenRequest,
    RevokeAccessTokenRequest,
    RevokeRefreshTokenRequest,
    ValidationRefreshRequest,
    ValidationRequest,
    WebValidationTokenRequest,
)
from applesignin.models.responses import (
    ProviderError,
    RefreshResponse,
    RevokeResponse,
    ValidationResponse,
)
from applesignin.models.secret import ClientSecretParams
from applesignin.primitives.client_secret import (
    ClientSecretSigner,
    generate_client_secret,
)
from applesignin.primitives.identity_token import (
    IdentityTokenVerifier,
    PublicKeyVerifier,
    check_trust,
    decode_identity_token,
)
from applesignin.services.tokens import AppleTokenManager
from applesignin.transport import HTTPRequest, HTTPResponse, HttpxTransport

__all__ = [
    "AppValidationTokenRequest",
    "AppleEndpoints",
    "AppleTokenManager",
    "ClientSecretParams",
    "ClientSecretSigner",
    "DecodeError",
    "HTTPRequest",
    "HTTPResponse",
    "HttpxTransport",
    "IdentityClaims",
    "IdentityTokenVerifier",
    "ProviderError",
    "PublicKeyVerifier",
    "RealUserStatus",
    "RefreshResponse",
    "RevokeAccessTokenRequest",
    "RevokeRefreshTokenRequest",
    "RevokeResponse",
    "SignInWithAppleError",
    "SigningError",
    "TransportError",
    "ValidationRefreshRequest",
    "ValidationRequest",
    "ValidationResponse",
    "VerificationError",
    "WebValidationTokenRequest",
    "check_trust",
    "decode_identity_token",
    "generate_client_secret",
    "load_private_key",
]
