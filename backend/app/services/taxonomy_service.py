"""
Noteful Backend — Folder and Tag Service
=========================================

What:  Create and list the folders and tags a user files notes under.
Why:   Notes may only reference folders and tags owned by the same user, so
       users need a way to create them. Both behave identically apart from
       the model and the wording of the duplicate-name error.
"""

import logging
from typing import Generic, List, Optional, Type, TypeVar, Union

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError, NotefulError, ValidationError
from app.models import Folder, Tag
from app.schemas.note import FolderResponse, TagResponse

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", Folder, Tag)
ResponseT = TypeVar("ResponseT", FolderResponse, TagResponse)


class _OwnedNameService(Generic[ModelT, ResponseT]):
    """Shared create/list logic for user-owned, uniquely named records."""

    model: Type[ModelT]
    response: Type[ResponseT]
    label: str

    def _to_response(self, record: Union[Folder, Tag]) -> ResponseT:
        return self.response(
            id=record.id,
            name=record.name,
            user_id=record.user_id,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

    async def list_for_user(self, db: AsyncSession, user_id: str) -> List[ResponseT]:
        """The caller's records sorted by name."""
        try:
            result = await db.execute(
                select(self.model)
                .where(self.model.user_id == user_id)
                .order_by(self.model.name)
            )
            records = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing %ss: %s", self.label.lower(), str(e))
            raise DatabaseError(context={"operation": f"list_{self.label.lower()}s"}) from e
        return [self._to_response(record) for record in records]

    async def create(self, db: AsyncSession, name: Optional[str], user_id: str) -> ResponseT:
        """
        Create a record named `name` for the caller.

        Raises:
            ValidationError: missing or over-long name, or the caller already has one by that name
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError(message="Missing `name` in request body", field="name")
        max_length = self.model.name.type.length
        if len(name) > max_length:
            raise ValidationError(
                message=f"Field: `name` must be at most {max_length} characters long",
                field="name",
            )

        try:
            existing = await db.execute(
                select(self.model.id).where(
                    self.model.name == name, self.model.user_id == user_id
                )
            )
            if existing.scalar_one_or_none() is not None:
                raise ValidationError(message=f"{self.label} name already exists", field="name")

            record = self.model(name=name, user_id=user_id)
            db.add(record)
            await db.flush()
        except NotefulError:
            raise
        except IntegrityError as e:
            # A concurrent request inserted the same name after our check
            raise ValidationError(message=f"{self.label} name already exists", field="name") from e
        except SQLAlchemyError as e:
            logger.error("Database error creating %s: %s", self.label.lower(), str(e))
            raise DatabaseError(context={"operation": f"create_{self.label.lower()}"}) from e

        logger.info("%s %s created by user %s", self.label, record.id, user_id)
        return self._to_response(record)


class FolderService(_OwnedNameService[Folder, FolderResponse]):
    model = Folder
    response = FolderResponse
    label = "Folder"


class TagService(_OwnedNameService[Tag, TagResponse]):
    model = Tag
    response = TagResponse
    label = "Tag"


folder_service = FolderService()
tag_service = TagService()
