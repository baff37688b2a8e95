"""
Ownership-scoped todo CRUD.

Every mutating call loads the row first and checks ``todo.user_id``
against the caller: unknown ids are 404, someone else's todo is 403.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import ForbiddenError, NotFoundError, StoreError, ValidationError
from database.helpers import (
    delete_todo_row,
    get_todo,
    insert_todo,
    list_todos_for_user,
    parse_uuid,
)
from database.models import Todo
from utils.validators import validate_title

logger = logging.getLogger(__name__)

NO_UPDATE_FIELDS = "At least one field (title or completed) must be provided"


async def create_todo(session: AsyncSession, owner_id: str, title: Any) -> Dict[str, Any]:
    clean_title = validate_title(title)
    try:
        todo = await insert_todo(session, owner_id, clean_title)
    except SQLAlchemyError as exc:
        logger.error("Create todo failed for user %s: %s", owner_id, exc)
        raise StoreError("Error creating todo") from exc
    logger.info("Todo %s created by %s", todo.todo_id, owner_id)
    return todo.to_dict()


async def list_todos(session: AsyncSession, owner_id: str) -> List[Dict[str, Any]]:
    """Owner's todos, newest first."""
    try:
        todos = await list_todos_for_user(session, owner_id)
    except SQLAlchemyError as exc:
        logger.error("List todos failed for user %s: %s", owner_id, exc)
        raise StoreError("Error fetching todos") from exc
    return [t.to_dict() for t in todos]


async def _load_owned(session: AsyncSession, owner_id: str, todo_id: str, action: str) -> Todo:
    try:
        todo = await get_todo(session, todo_id)
    except SQLAlchemyError as exc:
        logger.error("Todo lookup failed for %s: %s", todo_id, exc)
        raise StoreError("Error fetching todo") from exc
    if todo is None:
        raise NotFoundError("Todo not found")
    if todo.user_id != parse_uuid(owner_id):
        logger.warning("User %s tried to %s todo %s owned by %s", owner_id, action, todo_id, todo.user_id)
        raise ForbiddenError(f"You do not have permission to {action} this todo")
    return todo


async def update_todo(
    session: AsyncSession,
    owner_id: str,
    todo_id: str,
    changes: Dict[str, Any],
) -> Dict[str, Any]:
    """
    Apply a partial update.

    *changes* holds only the fields the client sent; ``completed: null``
    counts as not sent and an empty-string title is rejected outright.
    """
    fields = {k: v for k, v in changes.items() if k in ("title", "completed") and v is not None}
    if changes.get("title") == "" or not fields:
        raise ValidationError(NO_UPDATE_FIELDS)
    if "title" in fields:
        fields["title"] = validate_title(fields["title"])

    todo = await _load_owned(session, owner_id, todo_id, "update")

    for key, value in fields.items():
        setattr(todo, key, value)
    try:
        await session.flush()
        await session.refresh(todo)
    except SQLAlchemyError as exc:
        logger.error("Update todo %s failed: %s", todo_id, exc)
        raise StoreError("Error updating todo") from exc
    return todo.to_dict()


async def delete_todo(session: AsyncSession, owner_id: str, todo_id: str) -> bool:
    todo = await _load_owned(session, owner_id, todo_id, "delete")
    try:
        await delete_todo_row(session, todo)
    except SQLAlchemyError as exc:
        logger.error("Delete todo %s failed: %s", todo_id, exc)
        raise StoreError("Error deleting todo") from exc
    logger.info("Todo %s deleted by %s", todo_id, owner_id)
    return True
