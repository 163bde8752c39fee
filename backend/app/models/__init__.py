# Models package init
"""
Noteful Backend — ORM Models
=============================

Importing this package registers every table with Base.metadata, which
Alembic autogenerate and the test fixtures rely on.
"""

from app.models.folder import Folder
from app.models.note import Note, note_tags
from app.models.tag import Tag
from app.models.user import User

__all__ = ["Folder", "Note", "Tag", "User", "note_tags"]
