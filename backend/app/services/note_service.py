"""
Noteful Backend — Note Service (Business Logic)
================================================

What:  Ownership-scoped CRUD for notes, with folder and tag references.
Why:   Keeps every validation rule and every ownership filter in one place,
       independent of HTTP concerns.
Who:   Called by the /notes route handlers with the caller's user id taken
       from the verified session token.

Validation order (every write):
    1. Path id well-formed                 → ValidationError, no query
    2. Field rules (title non-empty, fits) → ValidationError, no query
    3. folderId well-formed                → ValidationError, no query
    4. tag ids well-formed                 → ValidationError, no query
    5. folder owned by caller              → ValidationError
    6. every tag owned by caller           → ValidationError
    7. note lookup by id AND user_id       → NotFoundError
    8. write

    Nothing is written until every check passed, and the request session
    rolls back on any exception, so a rejected request leaves no trace.

Ownership:
    Every statement touching `notes` carries `Note.user_id == user_id` in
    its WHERE clause. A note owned by someone else is indistinguishable from
    a missing one (NotFoundError). Folder and tag references are checked for
    ownership on create as well as on update.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError, NotFoundError, NotefulError, ValidationError
from app.identifiers import is_valid_object_id, normalize_object_id
from app.models import Folder, Note, Tag
from app.schemas.note import NoteCreate, NoteResponse, NoteUpdate, TagResponse

logger = logging.getLogger(__name__)

# Fields a PUT may change; anything else in the body is ignored
UPDATABLE_FIELDS = ("title", "content", "folder_id", "tags")

# Width of the notes.title column
TITLE_MAX_LENGTH = Note.title.type.length


def _escape_like(term: str) -> str:
    """Escape LIKE wildcards so the search term matches literally."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def tag_response(tag: Tag) -> TagResponse:
    return TagResponse(
        id=tag.id,
        name=tag.name,
        user_id=tag.user_id,
        created_at=tag.created_at,
        updated_at=tag.updated_at,
    )


def _to_response(note: Note) -> NoteResponse:
    return NoteResponse(
        id=note.id,
        title=note.title,
        content=note.content,
        folder_id=note.folder_id,
        user_id=note.user_id,
        tags=[tag_response(tag) for tag in note.tags],
        created_at=note.created_at,
        updated_at=note.updated_at,
    )


class NoteService:
    """
    Business logic layer for note operations.

    Responsibilities:
        - list_notes():  filtered, ownership-scoped listing
        - get_note():    single owned note
        - create_note(): validated insert
        - update_note(): validated partial update
        - delete_note(): ownership-scoped delete

    Error Handling Strategy:
        Validation problems raise ValidationError before the database is
        touched. SQLAlchemy failures are wrapped in DatabaseError so internal
        details stay in the logs.
    """

    # ── Field and reference checks ────────────────────────────────────────

    @staticmethod
    def _check_title_length(title: str) -> None:
        if len(title) > TITLE_MAX_LENGTH:
            raise ValidationError(
                message=f"Field: `title` must be at most {TITLE_MAX_LENGTH} characters long",
                field="title",
            )

    @staticmethod
    def _require_valid_id(note_id: str) -> str:
        if not is_valid_object_id(note_id):
            raise ValidationError(message="The `id` is not valid", field="id")
        return normalize_object_id(note_id)

    @staticmethod
    def _parse_folder_id(folder_id: Optional[str]) -> Optional[str]:
        """Empty string or None means "no folder"; anything else must be an id."""
        if folder_id is None or folder_id == "":
            return None
        if not is_valid_object_id(folder_id):
            raise ValidationError(message="The `folderId` is not valid", field="folderId")
        return normalize_object_id(folder_id)

    @staticmethod
    def _parse_tag_ids(tags: Optional[List[Any]]) -> List[str]:
        """Validate tag id shapes; duplicates collapse, order is kept."""
        if tags is None:
            return []
        tag_ids: List[str] = []
        for tag_id in tags:
            if not is_valid_object_id(tag_id):
                raise ValidationError(
                    message="The `tags` array contains an invalid `id`",
                    field="tags",
                )
            normalized = normalize_object_id(tag_id)
            if normalized not in tag_ids:
                tag_ids.append(normalized)
        return tag_ids

    async def _check_folder_owned(
        self, db: AsyncSession, folder_id: str, user_id: str
    ) -> None:
        result = await db.execute(
            select(Folder.id).where(Folder.id == folder_id, Folder.user_id == user_id)
        )
        if result.scalar_one_or_none() is None:
            raise ValidationError(
                message="The `folderId` is not valid",
                field="folderId",
                context={"reason": "not_owned"},
            )

    async def _load_owned_tags(
        self, db: AsyncSession, tag_ids: List[str], user_id: str
    ) -> List[Tag]:
        if not tag_ids:
            return []
        result = await db.execute(
            select(Tag).where(Tag.id.in_(tag_ids), Tag.user_id == user_id)
        )
        found = {tag.id: tag for tag in result.scalars().all()}
        if len(found) != len(tag_ids):
            raise ValidationError(
                message="A tag is not owned by current user",
                field="tags",
                context={"reason": "not_owned"},
            )
        return [found[tag_id] for tag_id in tag_ids]

    # ── Queries ───────────────────────────────────────────────────────────

    async def list_notes(
        self,
        db: AsyncSession,
        user_id: str,
        search_term: Optional[str] = None,
        folder_id: Optional[str] = None,
        tag_id: Optional[str] = None,
    ) -> List[NoteResponse]:
        """
        List the caller's notes, most recently updated first.

        Args:
            db: Async database session
            user_id: Caller (from the verified token)
            search_term: Case-insensitive substring matched against title OR content
            folder_id: Only notes in this folder
            tag_id: Only notes carrying this tag

        Returns:
            NoteResponse list with tags expanded. No pagination.

        Raises:
            ValidationError: folder_id or tag_id filter is malformed
        """
        if folder_id and not is_valid_object_id(folder_id):
            raise ValidationError(message="The `folderId` is not valid", field="folderId")
        if tag_id and not is_valid_object_id(tag_id):
            raise ValidationError(message="The `tagId` is not valid", field="tagId")

        query = select(Note).where(Note.user_id == user_id)

        if search_term:
            pattern = f"%{_escape_like(search_term)}%"
            query = query.where(
                or_(
                    Note.title.ilike(pattern, escape="\\"),
                    Note.content.ilike(pattern, escape="\\"),
                )
            )

        if folder_id:
            query = query.where(Note.folder_id == normalize_object_id(folder_id))

        if tag_id:
            query = query.where(Note.tags.any(Tag.id == normalize_object_id(tag_id)))

        query = query.order_by(Note.updated_at.desc(), Note.id.desc())

        try:
            result = await db.execute(query)
            notes: Sequence[Note] = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing notes: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve notes. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

        return [_to_response(note) for note in notes]

    async def _get_owned(self, db: AsyncSession, note_id: str, user_id: str) -> Note:
        result = await db.execute(
            select(Note).where(Note.id == note_id, Note.user_id == user_id)
        )
        note = result.scalar_one_or_none()
        if note is None:
            raise NotFoundError(resource="note", resource_id=note_id)
        return note

    async def get_note(self, db: AsyncSession, note_id: str, user_id: str) -> NoteResponse:
        """
        Retrieve a single note owned by the caller.

        Raises:
            ValidationError: note_id is not a well-formed id (store not queried)
            NotFoundError: no such note, or it belongs to another user
        """
        note_id = self._require_valid_id(note_id)
        try:
            note = await self._get_owned(db, note_id, user_id)
        except NotefulError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error fetching note %s: %s", note_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the note. Please try again.",
                context={"note_id": note_id},
            ) from e
        return _to_response(note)

    # ── Writes ────────────────────────────────────────────────────────────

    async def create_note(
        self, db: AsyncSession, payload: NoteCreate, user_id: str
    ) -> NoteResponse:
        """
        Create a note for the caller.

        Raises:
            ValidationError: missing title, malformed/unowned folder or tag
        """
        if not payload.title:
            raise ValidationError(message="Missing `title` in request body", field="title")
        self._check_title_length(payload.title)

        folder_id = self._parse_folder_id(payload.folder_id)
        tag_ids = self._parse_tag_ids(payload.tags)

        try:
            if folder_id:
                await self._check_folder_owned(db, folder_id, user_id)
            tags = await self._load_owned_tags(db, tag_ids, user_id)

            note = Note(
                title=payload.title,
                content=payload.content,
                folder_id=folder_id,
                user_id=user_id,
                tags=tags,
            )
            db.add(note)
            await db.flush()
        except NotefulError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error creating note: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save the note. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

        logger.info("Note %s created by user %s", note.id, user_id)
        return _to_response(note)

    async def update_note(
        self, db: AsyncSession, note_id: str, payload: NoteUpdate, user_id: str
    ) -> NoteResponse:
        """
        Apply a partial update to a note owned by the caller.

        Only keys present in the request body are touched. `folderId` sent
        as "" or null removes the note from its folder; `content` sent as
        null clears it; `tags` replaces the whole tag set.

        Raises:
            ValidationError: malformed id, empty title, bad folder or tag reference
            NotFoundError: no such note owned by the caller
        """
        note_id = self._require_valid_id(note_id)

        sent = payload.model_dump(exclude_unset=True)
        changes: Dict[str, Any] = {
            field: sent[field] for field in UPDATABLE_FIELDS if field in sent
        }

        if "title" in changes and not changes["title"]:
            raise ValidationError(
                message="The `title` may not be an empty string", field="title"
            )
        if "title" in changes:
            self._check_title_length(changes["title"])
        if "folder_id" in changes:
            changes["folder_id"] = self._parse_folder_id(changes["folder_id"])
        tag_ids: Optional[List[str]] = None
        if "tags" in changes:
            tag_ids = self._parse_tag_ids(changes.pop("tags"))

        try:
            if changes.get("folder_id"):
                await self._check_folder_owned(db, changes["folder_id"], user_id)
            tags = await self._load_owned_tags(db, tag_ids, user_id) if tag_ids is not None else None

            note = await self._get_owned(db, note_id, user_id)
            for field, value in changes.items():
                setattr(note, field, value)
            if tags is not None:
                note.tags = tags
            note.updated_at = datetime.now(timezone.utc)
            await db.flush()
        except NotefulError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error updating note %s: %s", note_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the note. Please try again.",
                context={"note_id": note_id},
            ) from e

        logger.info("Note %s updated by user %s (%s)", note_id, user_id, ", ".join(sent) or "no fields")
        return _to_response(note)

    async def delete_note(self, db: AsyncSession, note_id: str, user_id: str) -> None:
        """
        Delete a note owned by the caller.

        Raises:
            ValidationError: malformed id (store not queried)
            NotFoundError: no such note owned by the caller
        """
        note_id = self._require_valid_id(note_id)
        try:
            note = await self._get_owned(db, note_id, user_id)
            await db.delete(note)
            await db.flush()
        except NotefulError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error deleting note %s: %s", note_id, str(e))
            raise DatabaseError(
                message="Could not delete the note. Please try again.",
                context={"note_id": note_id},
            ) from e
        logger.info("Note %s deleted by user %s", note_id, user_id)


# ── Singleton Instance ────────────────────────────────────────────────────
note_service = NoteService()
