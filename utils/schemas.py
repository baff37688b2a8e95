"""
Pydantic request schemas for the auth and todo endpoints.

Required-field checks live in the services so clients get the same
messages regardless of which field is missing; these models only pin
field names and types.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, StrictInt


# ═══════════════════════════════════════════════════════════════════════════════
# Auth
# ═══════════════════════════════════════════════════════════════════════════════


class SignupRequest(BaseModel):
    name: Optional[str] = Field(None, max_length=128)
    email: Optional[str] = Field(None, max_length=255)
    password: Optional[str] = Field(None, max_length=128)
    age: Optional[StrictInt] = None
    location: Optional[str] = Field(None, max_length=255)


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


# ═══════════════════════════════════════════════════════════════════════════════
# Todos
# ═══════════════════════════════════════════════════════════════════════════════


class TodoCreateRequest(BaseModel):
    title: Optional[str] = None


class TodoUpdateRequest(BaseModel):
    """Partial update; only fields present in the body are applied."""

    title: Optional[str] = None
    completed: Optional[bool] = None

    def provided(self) -> dict:
        """Fields the client actually sent (``null`` included)."""
        return {name: getattr(self, name) for name in self.model_fields_set}
