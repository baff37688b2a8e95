"""
FastAPI dependencies for authentication.

Provides ``db_session`` and the session guard (``get_current_user`` /
``get_current_user_id``) used across all protected routes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import AsyncGenerator, Optional

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from auth.jwt import verify_token
from core.errors import NoTokenError, TokenError, UnauthorizedError
from database.session import get_db_session

logger = logging.getLogger(__name__)

_BEARER_PREFIX = "Bearer "


@dataclass(frozen=True)
class CurrentUser:
    user_id: str
    email: str


async def db_session(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[AsyncSession, None]:
    """Yield a DB session for route handlers."""
    yield session


async def get_current_user(
    request: Request,
    authorization: Optional[str] = Header(None, alias="Authorization"),
) -> CurrentUser:
    """
    Extract and verify the Bearer token from the Authorization header.

    The resolved identity is also stored on ``request.state.user``.
    Expired, malformed and missing tokens each fail with their own 401
    message; anything else unexpected becomes a generic 401.
    """
    if not authorization or not authorization.startswith(_BEARER_PREFIX):
        raise NoTokenError()
    token = authorization[len(_BEARER_PREFIX):].strip()
    if not token:
        raise NoTokenError()

    try:
        claims = verify_token(token)
    except TokenError:
        raise
    except Exception as exc:
        logger.warning("Token verification failed unexpectedly: %s", exc)
        raise UnauthorizedError() from exc

    user = CurrentUser(user_id=claims.user_id, email=claims.email)
    request.state.user = user
    return user


async def get_current_user_id(
    user: CurrentUser = Depends(get_current_user),
) -> str:
    """Authenticated ``user_id`` (UUID string)."""
    return user.user_id
