"""
Auth API routes — signup, login, profile.

Route prefix: /auth
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from auth import service
from auth.dependencies import db_session, get_current_user_id
from utils.schemas import LoginRequest, SignupRequest

router = APIRouter(tags=["auth"])


@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def signup(
    req: SignupRequest,
    session: AsyncSession = Depends(db_session),
) -> Dict[str, Any]:
    """Register a new user."""
    data = await service.signup(
        session,
        name=req.name,
        email=req.email,
        password=req.password,
        age=req.age,
        location=req.location,
    )
    return {
        "success": True,
        "message": "User registered successfully",
        "data": data,
    }


@router.post("/login")
async def login(
    req: LoginRequest,
    session: AsyncSession = Depends(db_session),
) -> Dict[str, Any]:
    """Login with email + password."""
    data = await service.login(session, email=req.email, password=req.password)
    return {
        "success": True,
        "message": "Login successful",
        "data": data,
    }


@router.get("/profile")
async def profile(
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(db_session),
) -> Dict[str, Any]:
    """Profile of the authenticated user."""
    data = await service.get_profile(session, user_id)
    return {
        "success": True,
        "message": "Profile retrieved successfully",
        "data": data,
    }
