"""
Noteful Backend — Auth Service
===============================

What:  Credential checks, password hashing, and session token issue/verify.
Why:   One place owns the token format so the verifier and the issuer can
       never disagree about claims, secret or algorithm.
How:   bcrypt for hashes (run in a worker thread, it is deliberately slow),
       python-jose for HS256 JWTs signed with settings.jwt_secret.
Who:   POST /auth, POST /auth/refresh, POST /users and the token verifier
       dependency (app.dependencies.get_current_user).

Token claims:
    user  {"id": <user id>, "username": <username>}
    sub   username
    iat   issue time (epoch seconds)
    exp   issue time + settings.jwt_expiry

Tokens are stateless. Nothing is stored server-side; a token is valid while
its signature checks out and `exp` is in the future. There is no logout.
"""

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import bcrypt
from jose import JWTError, jwt
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.exceptions import AuthenticationError, DatabaseError, ValidationError
from app.models import User
from app.schemas.auth import AuthUser, LoginRequest

logger = logging.getLogger(__name__)


class AuthService:
    """
    Stateless authentication helper.

    Error Handling Strategy:
        Missing credential fields → ValidationError (400, client can fix)
        Unknown user / wrong password / bad token → AuthenticationError (401)
        The 401 never says which check failed.
    """

    # ── Password hashing ──────────────────────────────────────────────────

    @staticmethod
    def hash_password(password: str) -> str:
        return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")

    @staticmethod
    def verify_password(password: str, hashed: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
        except ValueError:
            # Stored value is not a bcrypt hash
            return False

    # ── Tokens ────────────────────────────────────────────────────────────

    def create_auth_token(
        self,
        user: AuthUser,
        expires_in: Optional[timedelta] = None,
    ) -> str:
        """
        Sign a session token for `user`.

        Args:
            user: Identity to encode
            expires_in: Lifetime override; defaults to settings.jwt_expiry

        Returns:
            Compact JWT string
        """
        now = datetime.now(timezone.utc)
        lifetime = expires_in if expires_in is not None else settings.jwt_expiry
        claims: Dict[str, Any] = {
            "user": {"id": user.id, "username": user.username},
            "sub": user.username,
            "iat": int(now.timestamp()),
            "exp": int((now + lifetime).timestamp()),
        }
        return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)

    def decode_auth_token(self, token: str) -> AuthUser:
        """
        Verify signature and expiry, then extract the encoded identity.

        Raises:
            AuthenticationError: bad signature, expired, or missing user claim
        """
        try:
            claims = jwt.decode(
                token,
                settings.jwt_secret,
                algorithms=[settings.jwt_algorithm],
            )
        except JWTError as e:
            raise AuthenticationError(
                reason="invalid_token",
                context={"error_type": type(e).__name__},
            ) from e

        user = claims.get("user")
        if not isinstance(user, dict) or not user.get("id") or not user.get("username"):
            raise AuthenticationError(reason="malformed_claims")
        if claims.get("sub") != user["username"]:
            raise AuthenticationError(reason="subject_mismatch")

        return AuthUser(id=str(user["id"]), username=str(user["username"]))

    # ── Credential check ──────────────────────────────────────────────────

    async def authenticate(self, db: AsyncSession, username: str, password: str) -> User:
        """
        Look up `username` and check `password` against the stored hash.

        Raises:
            ValidationError: username or password missing/empty
            AuthenticationError: unknown username or wrong password
            DatabaseError: lookup failed
        """
        if not username or not password:
            raise ValidationError(message="Missing credentials")

        try:
            result = await db.execute(select(User).where(User.username == username))
            user = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error during authentication: %s", str(e))
            raise DatabaseError(context={"operation": "authenticate"}) from e

        if user is None:
            logger.warning("Rejected login: unknown username")
            raise AuthenticationError(reason="unknown_user")

        is_valid = await asyncio.to_thread(self.verify_password, password, user.password)
        if not is_valid:
            logger.warning("Rejected login for user %s: wrong password", user.id)
            raise AuthenticationError(reason="wrong_password")

        return user

    async def issue_token(self, db: AsyncSession, credentials: LoginRequest) -> str:
        """Authenticate a username/password pair and return a fresh token."""
        user = await self.authenticate(db, credentials.username or "", credentials.password or "")
        logger.info("Issued token for user %s", user.id)
        return self.create_auth_token(AuthUser(id=user.id, username=user.username))

    def refresh_token(self, current_user: AuthUser) -> str:
        """Re-sign the already-verified identity with a fresh expiry."""
        logger.info("Refreshed token for user %s", current_user.id)
        return self.create_auth_token(current_user)


# Built once at import and shared by every request
auth_service = AuthService()
