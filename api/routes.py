"""
Todo routes. Every endpoint requires a bearer token.

Route prefix: /todos
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from auth.dependencies import db_session, get_current_user_id
from core import todo_service
from utils.schemas import TodoCreateRequest, TodoUpdateRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["todos"], dependencies=[Depends(get_current_user_id)])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_todo(
    req: TodoCreateRequest,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(db_session),
) -> Dict[str, Any]:
    todo = await todo_service.create_todo(session, user_id, req.title)
    return {
        "success": True,
        "message": "Todo created successfully",
        "data": todo,
    }


@router.get("")
async def list_todos(
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(db_session),
) -> Dict[str, Any]:
    todos = await todo_service.list_todos(session, user_id)
    return {
        "success": True,
        "message": "Todos retrieved successfully",
        "data": todos,
        "count": len(todos),
    }


@router.put("/{todo_id}")
async def update_todo(
    todo_id: str,
    req: TodoUpdateRequest,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(db_session),
) -> Dict[str, Any]:
    todo = await todo_service.update_todo(session, user_id, todo_id, req.provided())
    return {
        "success": True,
        "message": "Todo updated successfully",
        "data": todo,
    }


@router.delete("/{todo_id}")
async def delete_todo(
    todo_id: str,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(db_session),
) -> Dict[str, Any]:
    await todo_service.delete_todo(session, user_id, todo_id)
    return {
        "success": True,
        "message": "Todo deleted successfully",
    }
