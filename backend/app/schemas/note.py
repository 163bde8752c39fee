"""
Noteful Backend — Note, Folder and Tag Schemas
===============================================

What:  Pydantic models defining the note API contract.
Why:   Request bodies are deliberately permissive (every field optional,
       tag ids untyped) so that business validation happens in NoteService
       and produces the documented 400 messages instead of a generic schema
       error. Responses are strict and never expose internal columns.

Partial updates:
    NoteUpdate is read with model_dump(exclude_unset=True). A key the client
    did not send is absent from the dump and leaves the stored value alone;
    a key sent as "" or null is present and means "clear" where that is
    allowed (content, folderId).
"""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import Field

from app.schemas.common import CamelModel


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class FolderResponse(CamelModel):
    id: str = Field(description="Folder id (24 hex chars)")
    name: str
    user_id: str
    created_at: datetime
    updated_at: datetime


class TagResponse(CamelModel):
    id: str = Field(description="Tag id (24 hex chars)")
    name: str = Field(description="Tag label")
    user_id: str
    created_at: datetime
    updated_at: datetime


class NoteResponse(CamelModel):
    """
    What:  Full representation of a note with its tags expanded.
    Who:   Returned by every /notes endpoint except DELETE.
    """
    id: str = Field(description="Note id (24 hex chars)")
    title: str
    content: Optional[str] = None
    folder_id: Optional[str] = Field(default=None, description="Null when the note has no folder")
    user_id: str = Field(description="Owning user id")
    tags: List[TagResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class NoteCreate(CamelModel):
    """Body of POST /notes. `title` is required, checked by NoteService."""
    title: Optional[str] = None
    content: Optional[str] = None
    folder_id: Optional[str] = Field(default=None, description="Empty string means no folder")
    tags: Optional[List[Any]] = Field(default=None, description="Tag ids owned by the caller")


class NoteUpdate(CamelModel):
    """Body of PUT /notes/{id}. Any subset of the fields may be sent."""
    title: Optional[str] = None
    content: Optional[str] = None
    folder_id: Optional[str] = Field(default=None, description="Empty string clears the folder")
    tags: Optional[List[Any]] = None


class FolderCreate(CamelModel):
    name: Optional[str] = None


class TagCreate(CamelModel):
    name: Optional[str] = None
