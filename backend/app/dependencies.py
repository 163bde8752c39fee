"""
Noteful Backend — Request Dependencies
=======================================

What:  The token verifier guarding every protected route.
Why:   Protected routers declare `Depends(get_current_user)` once; FastAPI
       resolves it before the handler body runs, so a request without a
       valid token is rejected with 401 and no handler code executes.
How:   HTTPBearer extracts `Authorization: Bearer <token>` (auto_error=False
       so we raise our own AuthenticationError and get the standard error
       body), AuthService.decode_auth_token checks signature and expiry.

The bearer scheme object is built once at import and shared by every
request; there is no per-request authentication state.
"""

import logging
from typing import Optional

from fastapi import Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.exceptions import AuthenticationError
from app.schemas.auth import AuthUser
from app.services.auth_service import auth_service

logger = logging.getLogger(__name__)

http_bearer = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(http_bearer),
) -> AuthUser:
    """Resolve the caller from the bearer token or raise AuthenticationError."""
    if credentials is None:
        raise AuthenticationError(reason="missing_token")

    token = credentials.credentials
    if not token or len(token.split(".")) != 3:
        raise AuthenticationError(reason="malformed_token")

    try:
        return auth_service.decode_auth_token(token)
    except AuthenticationError as e:
        logger.warning("Rejected bearer token: %s", e.reason)
        raise
