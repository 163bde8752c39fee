"""
Noteful Backend — User, Folder and Tag Service Tests
=====================================================

What we test:
    ✅ Registration field rules (including column widths) and duplicate usernames
    ✅ A unique-constraint hit on insert is a ValidationError, not a DatabaseError
    ✅ Stored password is a bcrypt hash, never the plain text
    ✅ Folder/tag names are per-user unique, bounded and listed by name
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from app.exceptions import ValidationError
from app.models import User
from app.schemas.auth import UserCreate
from app.services.auth_service import AuthService
from app.services.taxonomy_service import FolderService, TagService
from app.services.user_service import UserService


class TestUserService:

    def setup_method(self):
        self.service = UserService()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload,message", [
        ({"password": "longenough"}, "Missing `username` in request body"),
        ({"username": "alice"}, "Missing `password` in request body"),
        ({"username": " alice", "password": "longenough"},
         "Field: `username` cannot start or end with whitespace"),
        ({"username": "alice", "password": "longenough "},
         "Field: `password` cannot start or end with whitespace"),
        ({"username": "", "password": "longenough"},
         "Field: `username` must be at least 1 characters long"),
        ({"username": "alice", "password": "short"},
         "Field: `password` must be at least 8 characters long"),
        ({"username": "alice", "password": "x" * 73},
         "Field: `password` must be at most 72 bytes long"),
        ({"username": "alice", "password": "\u00e9" * 37},
         "Field: `password` must be at most 72 bytes long"),
        ({"username": "a" * 73, "password": "longenough"},
         "Field: `username` must be at most 72 characters long"),
        ({"fullname": "F" * 256, "username": "alice", "password": "longenough"},
         "Field: `fullname` must be at most 255 characters long"),
    ])
    async def test_field_rules(self, mock_db_session, payload, message):
        with pytest.raises(ValidationError) as exc_info:
            await self.service.create_user(mock_db_session, UserCreate(**payload))
        assert exc_info.value.message == message
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_stores_hash(self, db_session):
        result = await self.service.create_user(
            db_session, UserCreate(fullname="  Alice A. ", username="alice", password="longenough")
        )

        assert result.username == "alice"
        assert result.fullname == "Alice A."
        stored = (await db_session.execute(select(User).where(User.id == result.id))).scalar_one()
        assert stored.password != "longenough"
        assert AuthService.verify_password("longenough", stored.password)

    @pytest.mark.asyncio
    async def test_duplicate_username(self, db_session, make_user):
        await make_user("alice")
        with pytest.raises(ValidationError) as exc_info:
            await self.service.create_user(
                db_session, UserCreate(username="alice", password="longenough")
            )
        assert exc_info.value.message == "The username already exists"

    @pytest.mark.asyncio
    async def test_username_taken_between_check_and_insert(self, mock_db_session):
        not_found = MagicMock()
        not_found.scalar_one_or_none.return_value = None
        mock_db_session.execute.return_value = not_found
        mock_db_session.flush.side_effect = IntegrityError(
            "INSERT INTO users", {}, Exception("UNIQUE constraint failed: users.username")
        )

        with pytest.raises(ValidationError) as exc_info:
            await self.service.create_user(
                mock_db_session, UserCreate(username="alice", password="longenough")
            )
        assert exc_info.value.message == "The username already exists"
        assert exc_info.value.field == "username"


class TestTaxonomyServices:

    @pytest.mark.asyncio
    async def test_folder_create_and_list_sorted(self, db_session, make_user):
        alice = await make_user()
        service = FolderService()
        await service.create(db_session, "Work", alice.id)
        await service.create(db_session, "  Archive ", alice.id)

        folders = await service.list_for_user(db_session, alice.id)

        assert [f.name for f in folders] == ["Archive", "Work"]
        assert all(f.user_id == alice.id for f in folders)

    @pytest.mark.asyncio
    async def test_missing_name(self, mock_db_session):
        with pytest.raises(ValidationError) as exc_info:
            await TagService().create(mock_db_session, "   ", "5c3cf6a06b6a9f2f2c9c5a01")
        assert exc_info.value.message == "Missing `name` in request body"
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("service", [FolderService(), TagService()])
    async def test_name_longer_than_column(self, mock_db_session, service):
        with pytest.raises(ValidationError) as exc_info:
            await service.create(mock_db_session, "n" * 101, "5c3cf6a06b6a9f2f2c9c5a01")
        assert exc_info.value.message == "Field: `name` must be at most 100 characters long"
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_name_at_column_width_is_accepted(self, db_session, make_user):
        alice = await make_user()
        created = await FolderService().create(db_session, "n" * 100, alice.id)
        assert len(created.name) == 100

    @pytest.mark.asyncio
    @pytest.mark.parametrize("service,message", [
        (FolderService(), "Folder name already exists"),
        (TagService(), "Tag name already exists"),
    ])
    async def test_name_taken_between_check_and_insert(self, mock_db_session, service, message):
        not_found = MagicMock()
        not_found.scalar_one_or_none.return_value = None
        mock_db_session.execute.return_value = not_found
        mock_db_session.flush.side_effect = IntegrityError(
            "INSERT", {}, Exception("UNIQUE constraint failed")
        )

        with pytest.raises(ValidationError) as exc_info:
            await service.create(mock_db_session, "urgent", "5c3cf6a06b6a9f2f2c9c5a01")
        assert exc_info.value.message == message

    @pytest.mark.asyncio
    async def test_duplicate_name_per_user(self, db_session, make_user, make_tag):
        alice = await make_user("alice")
        bob = await make_user("bob")
        await make_tag(alice, "urgent")

        with pytest.raises(ValidationError) as exc_info:
            await TagService().create(db_session, "urgent", alice.id)
        assert exc_info.value.message == "Tag name already exists"

        created = await TagService().create(db_session, "urgent", bob.id)
        assert created.user_id == bob.id

    @pytest.mark.asyncio
    async def test_lists_are_per_user(self, db_session, make_user, make_folder):
        alice = await make_user("alice")
        bob = await make_user("bob")
        await make_folder(bob, "Bob's")

        assert await FolderService().list_for_user(db_session, alice.id) == []
