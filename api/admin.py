"""
Development-only maintenance routes.

Only mounted when ``ENABLE_RESET_ENDPOINT=true``; still requires a valid
bearer token.

Route prefix: /admin
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from auth.dependencies import CurrentUser, db_session, get_current_user
from core.errors import StoreError
from database.helpers import wipe_all

logger = logging.getLogger(__name__)

router = APIRouter(tags=["admin"])


@router.post("/reset")
async def reset_store(
    user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(db_session),
) -> Dict[str, Any]:
    """Delete every todo and user in a single transaction."""
    logger.warning("Store reset requested by %s (%s)", user.email, user.user_id)
    try:
        removed = await wipe_all(session)
    except SQLAlchemyError as exc:
        logger.error("Store reset failed: %s", exc)
        raise StoreError("Error resetting database") from exc
    return {
        "success": True,
        "message": "Database reset successful",
        "data": removed,
    }
