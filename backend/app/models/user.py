"""
Noteful Backend — User SQLAlchemy Model
========================================

What:  ORM model for the `users` table.
Why:   Owns notes, folders and tags; holds the bcrypt credential hash that
       POST /auth checks against.

The `password` column only ever holds a bcrypt hash. Response schemas do not
declare it, so it cannot leak through serialization.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base
from app.identifiers import OBJECT_ID_LENGTH, new_object_id
from app.models.note import utcnow


class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(OBJECT_ID_LENGTH),
        primary_key=True,
        default=new_object_id,
    )
    fullname: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    username: Mapped[str] = mapped_column(String(72), nullable=False, unique=True)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username!r})>"
