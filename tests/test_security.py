# tests/test_security.py
"""Tests for access token issuance and verification."""

from datetime import UTC, datetime, timedelta

import pytest
from jose import jwt

from peoples_forum.core.errors import Unauthorized
from peoples_forum.core.security import create_access_token, decode_access_token
from peoples_forum.core.settings import settings


class TestCreateAccessToken:
    """Claims written into freshly issued tokens."""

    def test_claims_carry_identity_and_one_hour_expiry(self):
        issued = datetime(2030, 1, 1, 12, 0, tzinfo=UTC)
        token = create_access_token("alice@example.com", name="Alice", issued_at=issued)

        payload = jwt.get_unverified_claims(token)
        assert payload["sub"] == "alice@example.com"
        assert payload["email"] == "alice@example.com"
        assert payload["name"] == "Alice"
        assert payload["exp"] - payload["iat"] == 60 * 60

    def test_name_is_optional(self):
        token = create_access_token("bob@example.com")
        assert "name" not in jwt.get_unverified_claims(token)


class TestDecodeAccessToken:
    """Verification of signature, expiry and required claims."""

    def test_decode_fresh_token(self):
        claims = decode_access_token(create_access_token("alice@example.com", name="Alice"))
        assert claims.email == "alice@example.com"
        assert claims.name == "Alice"

    def test_token_issued_59_minutes_ago_is_accepted(self):
        issued = datetime.now(UTC) - timedelta(minutes=59)
        claims = decode_access_token(create_access_token("alice@example.com", issued_at=issued))
        assert claims.email == "alice@example.com"

    def test_token_issued_61_minutes_ago_is_rejected(self):
        issued = datetime.now(UTC) - timedelta(minutes=61)
        token = create_access_token("alice@example.com", issued_at=issued)
        with pytest.raises(Unauthorized):
            decode_access_token(token)

    def test_wrong_signing_key_is_rejected(self):
        now = datetime.now(UTC)
        token = jwt.encode(
            {"sub": "alice@example.com", "iat": now, "exp": now + timedelta(minutes=5)},
            "some-other-key",
            algorithm=settings.jwt_algorithm,
        )
        with pytest.raises(Unauthorized):
            decode_access_token(token)

    def test_garbage_is_rejected(self):
        with pytest.raises(Unauthorized):
            decode_access_token("not.a.jwt")

    def test_email_falls_back_to_subject(self):
        now = datetime.now(UTC)
        token = jwt.encode(
            {"sub": "carol@example.com", "iat": now, "exp": now + timedelta(minutes=5)},
            settings.secret_key,
            algorithm=settings.jwt_algorithm,
        )
        assert decode_access_token(token).email == "carol@example.com"

    def test_token_without_identity_is_rejected(self):
        now = datetime.now(UTC)
        token = jwt.encode(
            {"iat": now, "exp": now + timedelta(minutes=5)},
            settings.secret_key,
            algorithm=settings.jwt_algorithm,
        )
        with pytest.raises(Unauthorized) as exc_info:
            decode_access_token(token)
        assert exc_info.value.message == "Could not validate credentials"
