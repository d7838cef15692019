from datetime import datetime, timedelta, timezone

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa


@pytest.fixture(scope="session")
def ec_private_key():
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture(scope="session")
def ec_private_key_pem(ec_private_key) -> bytes:
    return ec_private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )


@pytest.fixture(scope="session")
def rsa_private_key():
    # Apple signs identity tokens with RS256
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture
def now() -> datetime:
    return datetime.now(timezone.utc).replace(microsecond=0)


@pytest.fixture
def identity_payload(now) -> dict:
    return {
        "iss": "https://appleid.apple.com",
        "aud": "com.example.app",
        "exp": int((now + timedelta(minutes=10)).timestamp()),
        "iat": int(now.timestamp()),
        "sub": "001234.abcdef0123456789.0123",
        "nonce": "n-0S6_WzA2Mj",
        "nonce_supported": True,
        "email": "x7k2@privaterelay.appleid.com",
        "email_verified": "true",
        "is_private_email": True,
        "real_user_status": 2,
    }
