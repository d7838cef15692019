"""Exception hierarchy for Sign in with Apple token operations.

Provides specific exception types for each failure mode so callers can
tell a bad key apart from a network failure or a garbled response.

Provider-reported failures (``invalid_grant`` and friends) are not
exceptions. They come back as a decoded response whose ``error`` field is
set; see ``applesignin.models.responses.ProviderError``.
"""

from __future__ import annotations


class SignInWithAppleError(Exception):
    """Base exception for all Sign in with Apple related errors."""

    pass


class SigningError(SignInWithAppleError):
    """Raised when the client secret cannot be signed.

    Usually means the private key is malformed, is not an EC key, or is
    not on the P-256 curve.
    """

    pass


class TransportError(SignInWithAppleError):
    """Raised when the HTTP exchange with Apple fails.

    Covers connection failures, timeouts, and non-2xx responses whose
    body cannot be decoded.
    """

    pass


class DecodeError(SignInWithAppleError):
    """Raised when a response body or identity token is structurally malformed."""

    pass


class VerificationError(SignInWithAppleError):
    """Raised when an identity token fails signature or trust checks."""

    pass
