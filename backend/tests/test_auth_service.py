"""
Noteful Backend — Auth Service Tests
=====================================

What:  Password hashing, token issue/verify, and credential checks.
How:   Token tests need no database; credential tests use the SQLite fixture.

What we test:
    ✅ bcrypt hash verifies only the original password
    ✅ Token round trip preserves the identity
    ✅ Expired, tampered and foreign-secret tokens are rejected
    ✅ Missing credentials → ValidationError, wrong ones → AuthenticationError
    ✅ Refresh re-signs the same identity
"""

from datetime import timedelta
from unittest.mock import patch

import pytest
from jose import jwt

from app.config import settings
from app.exceptions import AuthenticationError, ValidationError
from app.schemas.auth import AuthUser, LoginRequest
from app.services.auth_service import AuthService

from conftest import TEST_PASSWORD


class TestPasswordHashing:

    def test_hash_verifies_original(self):
        hashed = AuthService.hash_password("s3cret-password")
        assert hashed != "s3cret-password"
        assert AuthService.verify_password("s3cret-password", hashed)

    def test_wrong_password_fails(self):
        hashed = AuthService.hash_password("s3cret-password")
        assert not AuthService.verify_password("other-password", hashed)

    def test_non_bcrypt_hash_fails_cleanly(self):
        assert not AuthService.verify_password("whatever", "plaintext-in-db")


class TestTokens:

    def setup_method(self):
        self.service = AuthService()
        self.user = AuthUser(id="5c3cf6a06b6a9f2f2c9c5a01", username="alice")

    def test_round_trip(self):
        token = self.service.create_auth_token(self.user)
        assert self.service.decode_auth_token(token) == self.user

    def test_claims(self):
        token = self.service.create_auth_token(self.user)
        claims = jwt.get_unverified_claims(token)
        assert claims["user"] == {"id": self.user.id, "username": "alice"}
        assert claims["sub"] == "alice"
        assert claims["exp"] - claims["iat"] == int(settings.jwt_expiry.total_seconds())

    def test_expired_token_rejected(self):
        token = self.service.create_auth_token(self.user, expires_in=timedelta(seconds=-10))
        with pytest.raises(AuthenticationError) as exc_info:
            self.service.decode_auth_token(token)
        assert exc_info.value.reason == "invalid_token"
        assert exc_info.value.message == "Unauthorized"

    def test_foreign_secret_rejected(self):
        token = self.service.create_auth_token(self.user)
        with patch.object(settings, "jwt_secret", "a-different-secret"):
            with pytest.raises(AuthenticationError):
                self.service.decode_auth_token(token)

    def test_tampered_payload_rejected(self):
        header, payload, signature = self.service.create_auth_token(self.user).split(".")
        forged = jwt.encode(
            {"user": {"id": "ffffffffffffffffffffffff", "username": "mallory"}, "sub": "mallory"},
            "guessed-secret",
            algorithm="HS256",
        )
        forged_payload = forged.split(".")[1]
        with pytest.raises(AuthenticationError):
            self.service.decode_auth_token(f"{header}.{forged_payload}.{signature}")

    def test_token_without_user_claim_rejected(self):
        token = jwt.encode({"sub": "alice"}, settings.jwt_secret, algorithm=settings.jwt_algorithm)
        with pytest.raises(AuthenticationError) as exc_info:
            self.service.decode_auth_token(token)
        assert exc_info.value.reason == "malformed_claims"

    def test_refresh_keeps_identity(self):
        token = self.service.refresh_token(self.user)
        assert self.service.decode_auth_token(token) == self.user


class TestAuthenticate:

    def setup_method(self):
        self.service = AuthService()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("username,password", [
        ("", TEST_PASSWORD),
        ("alice", ""),
        ("", ""),
    ])
    async def test_missing_credentials(self, mock_db_session, username, password):
        """Empty fields are rejected before the user table is queried."""
        with pytest.raises(ValidationError) as exc_info:
            await self.service.authenticate(mock_db_session, username, password)
        assert exc_info.value.message == "Missing credentials"
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_valid_credentials(self, db_session, make_user):
        user = await make_user("alice")
        found = await self.service.authenticate(db_session, "alice", TEST_PASSWORD)
        assert found.id == user.id

    @pytest.mark.asyncio
    async def test_unknown_user(self, db_session, make_user):
        await make_user("alice")
        with pytest.raises(AuthenticationError) as exc_info:
            await self.service.authenticate(db_session, "bob", TEST_PASSWORD)
        assert exc_info.value.reason == "unknown_user"

    @pytest.mark.asyncio
    async def test_wrong_password(self, db_session, make_user):
        await make_user("alice")
        with pytest.raises(AuthenticationError) as exc_info:
            await self.service.authenticate(db_session, "alice", "not-the-password")
        assert exc_info.value.reason == "wrong_password"

    @pytest.mark.asyncio
    async def test_issue_token_encodes_user(self, db_session, make_user):
        user = await make_user("alice")
        token = await self.service.issue_token(
            db_session, LoginRequest(username="alice", password=TEST_PASSWORD)
        )
        assert self.service.decode_auth_token(token) == AuthUser(id=user.id, username="alice")
