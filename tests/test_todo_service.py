"""
Tests for ownership-scoped todo CRUD.
"""

from datetime import datetime, timedelta, timezone

import pytest
from unittest.mock import AsyncMock, patch

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core import todo_service
from core.errors import ForbiddenError, NotFoundError, StoreError, ValidationError
from database.helpers import get_todo, insert_user


async def _make_user(session, email):
    user = await insert_user(session, name=email.split("@")[0], email=email, password_hash="$2b$10$x")
    return str(user.user_id)


class TestCreateAndList:
    @pytest.mark.asyncio
    async def test_create_trims_title(self, session):
        owner = await _make_user(session, "a@x.com")
        todo = await todo_service.create_todo(session, owner, "  buy milk  ")
        assert todo["title"] == "buy milk"
        assert todo["completed"] is False
        assert todo["user_id"] == owner
        assert todo["created_at"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("title", [None, "", "   ", 42])
    async def test_create_rejects_blank_title(self, session, title):
        owner = await _make_user(session, "a@x.com")
        with pytest.raises(ValidationError, match="Todo title is required"):
            await todo_service.create_todo(session, owner, title)

    @pytest.mark.asyncio
    async def test_list_is_scoped_and_newest_first(self, session):
        alice = await _make_user(session, "a@x.com")
        bob = await _make_user(session, "b@x.com")
        first = await todo_service.create_todo(session, alice, "first")
        second = await todo_service.create_todo(session, alice, "second")
        await todo_service.create_todo(session, bob, "bob's")

        row = await get_todo(session, first["id"])
        row.created_at = datetime.now(timezone.utc) - timedelta(minutes=5)
        await session.flush()

        todos = await todo_service.list_todos(session, alice)
        assert [t["id"] for t in todos] == [second["id"], first["id"]]
        assert all(t["user_id"] == alice for t in todos)


class TestUpdate:
    @pytest.mark.asyncio
    async def test_update_fields(self, session):
        owner = await _make_user(session, "a@x.com")
        todo = await todo_service.create_todo(session, owner, "buy milk")

        updated = await todo_service.update_todo(session, owner, todo["id"], {"completed": True})
        assert updated["completed"] is True
        assert updated["title"] == "buy milk"

        updated = await todo_service.update_todo(session, owner, todo["id"], {"title": " buy oat milk "})
        assert updated["title"] == "buy oat milk"
        assert updated["user_id"] == owner

    @pytest.mark.asyncio
    @pytest.mark.parametrize("changes", [{}, {"completed": None}, {"title": ""}, {"title": "", "completed": True}])
    async def test_requires_a_field(self, session, changes):
        owner = await _make_user(session, "a@x.com")
        todo = await todo_service.create_todo(session, owner, "buy milk")
        with pytest.raises(ValidationError, match="At least one field"):
            await todo_service.update_todo(session, owner, todo["id"], changes)

    @pytest.mark.asyncio
    async def test_blank_title_rejected(self, session):
        owner = await _make_user(session, "a@x.com")
        todo = await todo_service.create_todo(session, owner, "buy milk")
        with pytest.raises(ValidationError, match="Todo title is required"):
            await todo_service.update_todo(session, owner, todo["id"], {"title": "   "})

    @pytest.mark.asyncio
    @pytest.mark.parametrize("todo_id", ["00000000-0000-0000-0000-000000000000", "not-a-uuid"])
    async def test_unknown_todo(self, session, todo_id):
        owner = await _make_user(session, "a@x.com")
        with pytest.raises(NotFoundError, match="Todo not found"):
            await todo_service.update_todo(session, owner, todo_id, {"completed": True})

    @pytest.mark.asyncio
    async def test_other_owner_forbidden(self, session):
        alice = await _make_user(session, "a@x.com")
        bob = await _make_user(session, "b@x.com")
        todo = await todo_service.create_todo(session, alice, "alice's")

        with pytest.raises(ForbiddenError) as exc_info:
            await todo_service.update_todo(session, bob, todo["id"], {"title": "mine now"})
        assert exc_info.value.status_code == 403

        row = await get_todo(session, todo["id"])
        assert row.title == "alice's"
        assert str(row.user_id) == alice


class TestDelete:
    @pytest.mark.asyncio
    async def test_delete(self, session):
        owner = await _make_user(session, "a@x.com")
        todo = await todo_service.create_todo(session, owner, "buy milk")
        assert await todo_service.delete_todo(session, owner, todo["id"]) is True
        assert await get_todo(session, todo["id"]) is None

    @pytest.mark.asyncio
    async def test_delete_other_owner_forbidden(self, session):
        alice = await _make_user(session, "a@x.com")
        bob = await _make_user(session, "b@x.com")
        todo = await todo_service.create_todo(session, alice, "alice's")
        with pytest.raises(ForbiddenError, match="delete this todo"):
            await todo_service.delete_todo(session, bob, todo["id"])
        assert await get_todo(session, todo["id"]) is not None

    @pytest.mark.asyncio
    async def test_delete_unknown(self, session):
        owner = await _make_user(session, "a@x.com")
        with pytest.raises(NotFoundError):
            await todo_service.delete_todo(session, owner, "00000000-0000-0000-0000-000000000000")


class TestStoreFailures:
    @pytest.mark.asyncio
    async def test_create(self, session):
        owner = await _make_user(session, "a@x.com")
        with patch("core.todo_service.insert_todo", new=AsyncMock(side_effect=SQLAlchemyError("db down"))):
            with pytest.raises(StoreError) as exc_info:
                await todo_service.create_todo(session, owner, "buy milk")
        assert exc_info.value.message == "Error creating todo"
        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_list(self, session):
        owner = await _make_user(session, "a@x.com")
        with patch("core.todo_service.list_todos_for_user", new=AsyncMock(side_effect=SQLAlchemyError("db down"))):
            with pytest.raises(StoreError, match="Error fetching todos"):
                await todo_service.list_todos(session, owner)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("call", ["update", "delete"])
    async def test_lookup(self, session, call):
        owner = await _make_user(session, "a@x.com")
        todo = await todo_service.create_todo(session, owner, "buy milk")
        with patch("core.todo_service.get_todo", new=AsyncMock(side_effect=SQLAlchemyError("db down"))):
            with pytest.raises(StoreError, match="Error fetching todo"):
                if call == "update":
                    await todo_service.update_todo(session, owner, todo["id"], {"completed": True})
                else:
                    await todo_service.delete_todo(session, owner, todo["id"])

    @pytest.mark.asyncio
    async def test_update_flush(self, session):
        owner = await _make_user(session, "a@x.com")
        todo = await todo_service.create_todo(session, owner, "buy milk")
        with patch.object(AsyncSession, "flush", new=AsyncMock(side_effect=SQLAlchemyError("db down"))):
            with pytest.raises(StoreError, match="Error updating todo"):
                await todo_service.update_todo(session, owner, todo["id"], {"completed": True})

    @pytest.mark.asyncio
    async def test_delete(self, session):
        owner = await _make_user(session, "a@x.com")
        todo = await todo_service.create_todo(session, owner, "buy milk")
        with patch("core.todo_service.delete_todo_row", new=AsyncMock(side_effect=SQLAlchemyError("db down"))):
            with pytest.raises(StoreError, match="Error deleting todo"):
                await todo_service.delete_todo(session, owner, todo["id"])
        assert await get_todo(session, todo["id"]) is not None
