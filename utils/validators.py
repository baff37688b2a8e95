"""
Input validators used by the auth and todo services.

Each raises ``core.errors.ValidationError`` with the client-facing message.
"""

from __future__ import annotations

import re
from typing import Any, Optional

from auth.password import MAX_PASSWORD_BYTES
from core.errors import ValidationError

MIN_PASSWORD_LENGTH = 6

_EMAIL_RE = re.compile(r"[^@\s]+@[^@\s]+")


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


def require_fields(message: str, *values: Any, secrets: tuple = ()) -> None:
    """
    Fail with *message* if any value is missing or blank.

    *secrets* (passwords) are only checked for absence or ``""``;
    whitespace is a legitimate password character.
    """
    if any(is_blank(v) for v in values) or any(s is None or s == "" for s in secrets):
        raise ValidationError(message)


def validate_password(password: str) -> None:
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
        )
    # bcrypt only looks at the first 72 bytes
    if len(password.encode()) > MAX_PASSWORD_BYTES:
        raise ValidationError(
            f"Password must be at most {MAX_PASSWORD_BYTES} bytes long"
        )


def validate_email(email: str) -> None:
    if not _EMAIL_RE.fullmatch(email):
        raise ValidationError("Invalid email format")


def validate_profile(age: Optional[int], location: Optional[str]) -> None:
    """Checks for the optional profile fields accepted at signup."""
    if age is not None and (isinstance(age, bool) or age <= 0):
        raise ValidationError("Age must be a positive number")
    if location is not None and location.strip() == "":
        raise ValidationError("Location must not be empty")


def validate_title(title: Any) -> str:
    """Return the trimmed title, or fail if it is missing or blank."""
    if not isinstance(title, str) or title.strip() == "":
        raise ValidationError("Todo title is required")
    return title.strip()
