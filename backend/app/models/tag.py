"""
Noteful Backend — Tag SQLAlchemy Model
=======================================

What:  ORM model for the `tags` table.
Why:   Notes reference tags many-to-many; a tag belongs to exactly one user
       and may only be attached to that user's notes.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base
from app.identifiers import OBJECT_ID_LENGTH, new_object_id
from app.models.note import utcnow


class Tag(Base):
    """A user-owned label. Names are unique per user."""

    __tablename__ = "tags"

    id: Mapped[str] = mapped_column(
        String(OBJECT_ID_LENGTH),
        primary_key=True,
        default=new_object_id,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    user_id: Mapped[str] = mapped_column(
        String(OBJECT_ID_LENGTH),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    __table_args__ = (
        UniqueConstraint("name", "user_id", name="uq_tags_name_user"),
    )

    def __repr__(self) -> str:
        return f"<Tag(id={self.id}, name={self.name!r})>"
