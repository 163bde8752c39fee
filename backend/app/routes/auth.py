"""
Noteful Backend — Auth Route Handlers
======================================

What:  Login (POST /auth) and token refresh (POST /auth/refresh).
How:   Login checks username/password through AuthService and returns a
       signed token. Refresh requires an already-valid bearer token and
       returns a new one for the same user with a fresh expiry.

There is no logout endpoint: tokens are stateless and simply expire.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.dependencies import get_current_user
from app.schemas.auth import AuthUser, LoginRequest, TokenResponse
from app.schemas.common import ErrorResponse
from app.services.auth_service import auth_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post(
    "",
    response_model=TokenResponse,
    responses={
        400: {"description": "Missing credentials", "model": ErrorResponse},
        401: {"description": "Wrong username or password", "model": ErrorResponse},
    },
    summary="Exchange username and password for a session token",
)
async def login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db_session),
) -> TokenResponse:
    token = await auth_service.issue_token(db, payload)
    return TokenResponse(auth_token=token)


@router.post(
    "/refresh",
    response_model=TokenResponse,
    responses={
        401: {"description": "Missing, invalid or expired token", "model": ErrorResponse},
    },
    summary="Exchange a valid session token for a fresh one",
)
async def refresh(
    current_user: AuthUser = Depends(get_current_user),
) -> TokenResponse:
    return TokenResponse(auth_token=auth_service.refresh_token(current_user))
