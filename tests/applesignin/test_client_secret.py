"""Tests for client secret signing.

Covers the JWT shape Apple expects and rejection of unusable keys.
"""

from datetime import datetime, timedelta, timezone

import jwt
import pytest
from cryptography.hazmat.primitives.asymmetric import ec

from applesignin.models.errors import SigningError
from applesignin.models.secret import ClientSecretParams
from applesignin.primitives.client_secret import (
    ClientSecretSigner,
    generate_client_secret,
)


class TestClientSecretParams:
    """Test validation of client secret parameters."""

    def test_expiry_must_follow_issued_at(self, ec_private_key_pem, now):
        with pytest.raises(ValueError, match="expiry"):
            ClientSecretParams(
                team_id="TEAM123456",
                client_id="com.example.app",
                key_id="KEY1234567",
                private_key=ec_private_key_pem,
                issued_at=now,
                expiry=now,
            )

    def test_empty_identifiers_rejected(self, ec_private_key_pem, now):
        with pytest.raises(ValueError, match="team_id"):
            ClientSecretParams(
                team_id="",
                client_id="com.example.app",
                key_id="KEY1234567",
                private_key=ec_private_key_pem,
                issued_at=now,
                expiry=now + timedelta(hours=1),
            )

    def test_mixed_timezone_awareness_rejected(self, ec_private_key_pem):
        """Naive and aware bounds cannot be compared, so they are refused."""
        with pytest.raises(ValueError, match="naive"):
            ClientSecretParams(
                team_id="TEAM123456",
                client_id="com.example.app",
                key_id="KEY1234567",
                private_key=ec_private_key_pem,
                issued_at=datetime(2024, 1, 1),
                expiry=datetime(2024, 1, 2, tzinfo=timezone.utc),
            )

    def test_naive_bounds_accepted(self, ec_private_key_pem):
        params = ClientSecretParams(
            team_id="TEAM123456",
            client_id="com.example.app",
            key_id="KEY1234567",
            private_key=ec_private_key_pem,
            issued_at=datetime(2024, 1, 1),
            expiry=datetime(2024, 1, 2),
        )

        assert params.expiry > params.issued_at

    def test_private_key_not_in_repr(self, ec_private_key_pem, now):
        params = ClientSecretParams(
            team_id="TEAM123456",
            client_id="com.example.app",
            key_id="KEY1234567",
            private_key=ec_private_key_pem,
            issued_at=now,
            expiry=now + timedelta(hours=1),
        )

        assert "PRIVATE KEY" not in repr(params)

    def test_with_lifetime(self, ec_private_key_pem, now):
        params = ClientSecretParams.with_lifetime(
            team_id="TEAM123456",
            client_id="com.example.app",
            key_id="KEY1234567",
            private_key=ec_private_key_pem,
            lifetime=timedelta(days=1),
            now=now,
        )

        assert params.issued_at == now
        assert params.expiry == now + timedelta(days=1)


class TestClientSecretSigner:
    """Test signing of client secret JWTs."""

    def setup_method(self):
        # Arrange
        self.signer = ClientSecretSigner()

    def test_header_and_claims(self, ec_private_key, ec_private_key_pem, now):
        """The signed secret reproduces the inputs and verifies with the public key."""
        # Arrange
        params = ClientSecretParams(
            team_id="TEAM123456",
            client_id="com.example.app",
            key_id="KEY1234567",
            private_key=ec_private_key_pem,
            issued_at=now,
            expiry=now + timedelta(days=30),
        )

        # Act
        token = self.signer.sign(params)

        # Assert
        header = jwt.get_unverified_header(token)
        assert header["alg"] == "ES256"
        assert header["kid"] == "KEY1234567"

        claims = jwt.decode(
            token,
            ec_private_key.public_key(),
            algorithms=["ES256"],
            audience="https://appleid.apple.com",
        )
        assert claims == {
            "iss": "TEAM123456",
            "sub": "com.example.app",
            "aud": "https://appleid.apple.com",
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(days=30)).timestamp()),
        }

    def test_accepts_pem_text_and_key_objects(
        self, ec_private_key, ec_private_key_pem, now
    ):
        for key in (ec_private_key_pem.decode("ascii"), ec_private_key):
            params = ClientSecretParams(
                team_id="TEAM123456",
                client_id="com.example.app",
                key_id="KEY1234567",
                private_key=key,
                issued_at=now,
                expiry=now + timedelta(hours=1),
            )

            token = self.signer.sign(params)

            assert jwt.get_unverified_header(token)["kid"] == "KEY1234567"

    def test_epoch_seconds_are_integers(self, ec_private_key_pem):
        issued_at = datetime(2024, 1, 1, 12, 0, 0, 500000, tzinfo=timezone.utc)
        params = ClientSecretParams(
            team_id="TEAM123456",
            client_id="com.example.app",
            key_id="KEY1234567",
            private_key=ec_private_key_pem,
            issued_at=issued_at,
            expiry=issued_at + timedelta(hours=1),
        )

        token = self.signer.sign(params)
        claims = jwt.decode(token, options={"verify_signature": False})

        assert claims["iat"] == 1704110400
        assert claims["exp"] == 1704114000

    @pytest.mark.parametrize("bad_key", ["not-a-key", b"", 12345])
    def test_malformed_key_raises_signing_error(self, bad_key, now):
        params = ClientSecretParams(
            team_id="TEAM123456",
            client_id="com.example.app",
            key_id="KEY1234567",
            private_key=bad_key,
            issued_at=now,
            expiry=now + timedelta(hours=1),
        )

        with pytest.raises(SigningError):
            self.signer.sign(params)

    def test_rsa_key_rejected(self, rsa_private_key, now):
        params = ClientSecretParams(
            team_id="TEAM123456",
            client_id="com.example.app",
            key_id="KEY1234567",
            private_key=rsa_private_key,
            issued_at=now,
            expiry=now + timedelta(hours=1),
        )

        with pytest.raises(SigningError, match="EC private key"):
            self.signer.sign(params)

    def test_wrong_curve_rejected(self, now):
        params = ClientSecretParams(
            team_id="TEAM123456",
            client_id="com.example.app",
            key_id="KEY1234567",
            private_key=ec.generate_private_key(ec.SECP384R1()),
            issued_at=now,
            expiry=now + timedelta(hours=1),
        )

        with pytest.raises(SigningError, match="P-256"):
            self.signer.sign(params)


def test_generate_client_secret(ec_private_key, ec_private_key_pem):
    token = generate_client_secret(
        team_id="TEAM123456",
        client_id="com.example.service",
        key_id="KEY1234567",
        private_key=ec_private_key_pem,
        lifetime=timedelta(minutes=5),
    )

    claims = jwt.decode(
        token,
        ec_private_key.public_key(),
        algorithms=["ES256"],
        audience="https://appleid.apple.com",
    )
    assert claims["sub"] == "com.example.service"
    assert claims["exp"] - claims["iat"] == 300

