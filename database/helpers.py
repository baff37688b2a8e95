"""
Database helper functions: single-statement reads and writes for users
and todos.

Helpers only ``flush``; the request-scoped session from
``database.session.get_db_session`` owns the commit.
"""

from __future__ import annotations

import logging
import uuid
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import Todo, User

logger = logging.getLogger(__name__)


def _to_uuid(value: str | uuid.UUID) -> uuid.UUID:
    return uuid.UUID(value) if isinstance(value, str) else value


def parse_uuid(value: str | uuid.UUID) -> Optional[uuid.UUID]:
    """Like ``_to_uuid`` but returns ``None`` for malformed ids."""
    try:
        return _to_uuid(value)
    except (ValueError, AttributeError, TypeError):
        return None


# ── Users ───────────────────────────────────────────────────────────


async def get_user_by_email(session: AsyncSession, email: str) -> Optional[User]:
    result = await session.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def get_user_by_id(session: AsyncSession, user_id: str | uuid.UUID) -> Optional[User]:
    uid = parse_uuid(user_id)
    if uid is None:
        return None
    result = await session.execute(select(User).where(User.user_id == uid))
    return result.scalar_one_or_none()


async def insert_user(
    session: AsyncSession,
    name: str,
    email: str,
    password_hash: str,
    age: int | None = None,
    location: str | None = None,
) -> User:
    """Insert a user row.

    Raises ``sqlalchemy.exc.IntegrityError`` if the email is already taken
    at the store level.
    """
    user = User(
        user_id=uuid.uuid4(),
        name=name,
        email=email,
        password_hash=password_hash,
        age=age,
        location=location,
    )
    session.add(user)
    await session.flush()
    return user


# ── Todos ───────────────────────────────────────────────────────────


async def insert_todo(session: AsyncSession, user_id: str | uuid.UUID, title: str) -> Todo:
    todo = Todo(
        todo_id=uuid.uuid4(),
        user_id=_to_uuid(user_id),
        title=title,
        completed=False,
    )
    session.add(todo)
    await session.flush()
    await session.refresh(todo)
    return todo


async def list_todos_for_user(session: AsyncSession, user_id: str | uuid.UUID) -> List[Todo]:
    """Return the user's todos, newest first."""
    uid = parse_uuid(user_id)
    if uid is None:
        return []
    result = await session.execute(
        select(Todo)
        .where(Todo.user_id == uid)
        .order_by(Todo.created_at.desc())
    )
    return list(result.scalars().all())


async def get_todo(session: AsyncSession, todo_id: str | uuid.UUID) -> Optional[Todo]:
    tid = parse_uuid(todo_id)
    if tid is None:
        return None
    result = await session.execute(select(Todo).where(Todo.todo_id == tid))
    return result.scalar_one_or_none()


async def delete_todo_row(session: AsyncSession, todo: Todo) -> None:
    await session.delete(todo)
    await session.flush()


async def wipe_all(session: AsyncSession) -> dict:
    """Delete every todo and user in the current transaction."""
    todos = await session.execute(delete(Todo))
    users = await session.execute(delete(User))
    await session.flush()
    logger.warning("Store wiped: %d todos, %d users", todos.rowcount, users.rowcount)
    return {"todos": todos.rowcount, "users": users.rowcount}
