"""
Noteful Backend — User Service
===============================

What:  Registration of new users.
Why:   Every note, folder and tag hangs off a user; POST /auth needs a stored
       bcrypt hash to check against.

Field rules:
    username  required, no surrounding whitespace, 1 to 72 characters
    password  required, no surrounding whitespace, at least 8 characters
              and at most 72 bytes UTF-8 (bcrypt ignores anything past that)
    fullname  optional, trimmed, at most 255 characters
"""

import asyncio
import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError, NotefulError, ValidationError
from app.models import User
from app.schemas.auth import UserCreate, UserResponse
from app.services.auth_service import auth_service

logger = logging.getLogger(__name__)

USERNAME_MIN_LENGTH = 1
PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_BYTES = 72
USERNAME_MAX_LENGTH = User.username.type.length
FULLNAME_MAX_LENGTH = User.fullname.type.length


class UserService:

    @staticmethod
    def _validate(payload: UserCreate) -> None:
        for field in ("username", "password"):
            if getattr(payload, field) is None:
                raise ValidationError(message=f"Missing `{field}` in request body", field=field)

        for field in ("username", "password"):
            value = getattr(payload, field)
            if value != value.strip():
                raise ValidationError(
                    message=f"Field: `{field}` cannot start or end with whitespace",
                    field=field,
                )

        if len(payload.username) < USERNAME_MIN_LENGTH:
            raise ValidationError(
                message=f"Field: `username` must be at least {USERNAME_MIN_LENGTH} characters long",
                field="username",
            )
        if len(payload.username) > USERNAME_MAX_LENGTH:
            raise ValidationError(
                message=f"Field: `username` must be at most {USERNAME_MAX_LENGTH} characters long",
                field="username",
            )
        if len(payload.password) < PASSWORD_MIN_LENGTH:
            raise ValidationError(
                message=f"Field: `password` must be at least {PASSWORD_MIN_LENGTH} characters long",
                field="password",
            )
        if len(payload.password.encode("utf-8")) > PASSWORD_MAX_BYTES:
            raise ValidationError(
                message=f"Field: `password` must be at most {PASSWORD_MAX_BYTES} bytes long",
                field="password",
            )
        if payload.fullname and len(payload.fullname.strip()) > FULLNAME_MAX_LENGTH:
            raise ValidationError(
                message=f"Field: `fullname` must be at most {FULLNAME_MAX_LENGTH} characters long",
                field="fullname",
            )

    async def create_user(self, db: AsyncSession, payload: UserCreate) -> UserResponse:
        """
        Register a user and return its public view.

        Raises:
            ValidationError: field rules violated or username taken
        """
        self._validate(payload)
        fullname = (payload.fullname or "").strip() or None

        try:
            existing = await db.execute(
                select(User.id).where(User.username == payload.username)
            )
            if existing.scalar_one_or_none() is not None:
                raise ValidationError(message="The username already exists", field="username")

            hashed = await asyncio.to_thread(auth_service.hash_password, payload.password)
            user = User(username=payload.username, password=hashed, fullname=fullname)
            db.add(user)
            await db.flush()
        except NotefulError:
            raise
        except IntegrityError as e:
            # A concurrent registration took the username after our check
            raise ValidationError(message="The username already exists", field="username") from e
        except SQLAlchemyError as e:
            logger.error("Database error creating user: %s", str(e))
            raise DatabaseError(context={"operation": "create_user"}) from e

        logger.info("User %s registered", user.id)
        return UserResponse(id=user.id, fullname=user.fullname, username=user.username)


user_service = UserService()
