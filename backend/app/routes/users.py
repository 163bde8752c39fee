"""
Noteful Backend — User Registration Route
==========================================

What:  POST /users creates an account that can then log in via POST /auth.
"""

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.auth import UserCreate, UserResponse
from app.schemas.common import ErrorResponse
from app.services.user_service import user_service

router = APIRouter(prefix="/users", tags=["Users"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=UserResponse,
    responses={
        400: {"description": "Invalid field or username taken", "model": ErrorResponse},
    },
    summary="Register a new user",
)
async def create_user(
    payload: UserCreate,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    user = await user_service.create_user(db, payload)
    response.headers["Location"] = f"{request.url.path.rstrip('/')}/{user.id}"
    return user
