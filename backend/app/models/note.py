"""
Noteful Backend — Note SQLAlchemy Model
========================================

What:  ORM models for the `notes` table and the `note_tags` association.
Why:   Maps Python objects to database rows for type-safe database operations.
Who:   Used by NoteService for CRUD operations and by Alembic for schema management.

Table Design Rationale:
    - id: 24-char hex string (see app.identifiers), generated in Python
    - title: required; the API rejects empty titles before insert
    - content: optional free text
    - user_id: owning user; every query on this table filters by it
    - folder_id: optional; NULL means "no folder" (an empty string is never stored)
    - tags: many-to-many through note_tags, loaded eagerly with selectin so
      async code never triggers a lazy load
    - updated_at: the list endpoint sorts on it, hence the composite index
      (user_id, updated_at)
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import Column, DateTime, ForeignKey, Index, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.identifiers import OBJECT_ID_LENGTH, new_object_id

if TYPE_CHECKING:
    from app.models.tag import Tag


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


note_tags = Table(
    "note_tags",
    Base.metadata,
    Column(
        "note_id",
        String(OBJECT_ID_LENGTH),
        ForeignKey("notes.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "tag_id",
        String(OBJECT_ID_LENGTH),
        ForeignKey("tags.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class Note(Base):
    """
    A user's note, optionally filed in a folder and labelled with tags.

    Query Patterns:
        - List: WHERE user_id = :uid [AND filters] ORDER BY updated_at DESC
          → idx_notes_user_updated
        - Get/update/delete: WHERE id = :id AND user_id = :uid
          → primary key lookup, ownership re-checked in the same predicate
    """

    __tablename__ = "notes"

    id: Mapped[str] = mapped_column(
        String(OBJECT_ID_LENGTH),
        primary_key=True,
        default=new_object_id,
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)

    content: Mapped[Optional[str]] = mapped_column(Text, nullable=True, default=None)

    user_id: Mapped[str] = mapped_column(
        String(OBJECT_ID_LENGTH),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    folder_id: Mapped[Optional[str]] = mapped_column(
        String(OBJECT_ID_LENGTH),
        ForeignKey("folders.id", ondelete="SET NULL"),
        nullable=True,
        default=None,
    )

    tags: Mapped[List["Tag"]] = relationship(
        secondary=note_tags,
        lazy="selectin",
        order_by="Tag.name",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    __table_args__ = (
        Index("idx_notes_user_updated", "user_id", "updated_at"),
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, user_id={self.user_id}, title={self.title!r})>"
