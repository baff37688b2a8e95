"""
Signup / login orchestration.

signup:  validate → check uniqueness → hash → persist
login:   lookup → verify hash → issue token

bcrypt runs in a worker thread so a slow hash never blocks the event loop.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from auth.jwt import create_token
from auth.password import hash_password, verify_password
from core.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    StoreError,
)
from database.helpers import get_user_by_email, get_user_by_id, insert_user
from utils.validators import (
    require_fields,
    validate_email,
    validate_password,
    validate_profile,
)

logger = logging.getLogger(__name__)

USER_EXISTS = "User with this email already exists"
INVALID_CREDENTIALS = "Invalid email or password"


async def signup(
    session: AsyncSession,
    name: str | None,
    email: str | None,
    password: str | None,
    age: int | None = None,
    location: str | None = None,
) -> Dict[str, Any]:
    """Register a new user and return its public fields."""
    require_fields("Name, email, and password are required", name, email, secrets=(password,))
    validate_password(password)
    validate_email(email)
    validate_profile(age, location)

    try:
        existing = await get_user_by_email(session, email)
    except SQLAlchemyError as exc:
        logger.error("Signup lookup failed for %s: %s", email, exc)
        raise StoreError("Error registering user") from exc
    if existing is not None:
        raise ConflictError(USER_EXISTS)

    password_hash = await asyncio.to_thread(hash_password, password)

    try:
        user = await insert_user(
            session,
            name=name,
            email=email,
            password_hash=password_hash,
            age=age,
            location=location,
        )
    except IntegrityError as exc:
        # Lost the race against a concurrent signup for the same email.
        await session.rollback()
        logger.info("Duplicate signup rejected by unique constraint: %s", email)
        raise ConflictError(USER_EXISTS) from exc
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.error("Signup insert failed for %s: %s", email, exc)
        raise StoreError("Error registering user") from exc

    logger.info("Registered user %s (%s)", user.name, user.user_id)
    return {
        "userId": str(user.user_id),
        "email": user.email,
        "name": user.name,
    }


async def login(
    session: AsyncSession,
    email: str | None,
    password: str | None,
) -> Dict[str, Any]:
    """
    Authenticate with email + password and issue a bearer token.

    Unknown email and wrong password fail with the same message.
    """
    require_fields("Email and password are required", email, secrets=(password,))

    try:
        user = await get_user_by_email(session, email)
    except SQLAlchemyError as exc:
        logger.error("Login lookup failed for %s: %s", email, exc)
        raise StoreError("Error logging in") from exc

    if user is None:
        raise AuthenticationError(INVALID_CREDENTIALS)

    try:
        valid = await asyncio.to_thread(verify_password, password, user.password_hash)
    except ValueError:
        logger.error("Stored password hash for user %s is malformed", user.user_id)
        valid = False
    if not valid:
        raise AuthenticationError(INVALID_CREDENTIALS)

    token = create_token(str(user.user_id), user.email)
    logger.info("Login: %s (%s)", user.name, user.user_id)

    return {
        "userId": str(user.user_id),
        "email": user.email,
        "name": user.name,
        "token": token,
    }


async def get_profile(session: AsyncSession, user_id: str) -> Dict[str, Any]:
    """Public profile of the authenticated user."""
    try:
        user = await get_user_by_id(session, user_id)
    except SQLAlchemyError as exc:
        logger.error("Profile lookup failed for %s: %s", user_id, exc)
        raise StoreError("Error fetching profile") from exc
    if user is None:
        raise NotFoundError("User not found")

    return {
        "userId": str(user.user_id),
        "email": user.email,
        "name": user.name,
        "age": user.age,
        "location": user.location,
        "createdAt": user.created_at.isoformat() if user.created_at else None,
    }
