"""
Noteful Backend — Auth and User Schemas
========================================

What:  Login/registration bodies, token response, and the verified identity
       that the token verifier hands to route handlers.
"""

from typing import Optional

from pydantic import BaseModel, Field

from app.schemas.common import CamelModel


class AuthUser(BaseModel):
    """Identity resolved from a verified session token."""
    id: str
    username: str


class LoginRequest(CamelModel):
    """Body of POST /auth. Missing fields are reported by AuthService as 400."""
    username: Optional[str] = None
    password: Optional[str] = None


class TokenResponse(CamelModel):
    """Body returned by POST /auth and POST /auth/refresh."""
    auth_token: str = Field(description="Signed session token; send as `Authorization: Bearer <token>`")


class UserCreate(CamelModel):
    """Body of POST /users."""
    fullname: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None


class UserResponse(CamelModel):
    """Public view of a user. The credential hash is never part of it."""
    id: str
    fullname: Optional[str] = None
    username: str
