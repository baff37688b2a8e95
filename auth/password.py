"""
Password hashing and verification.

Uses bcrypt for password hashing with automatic
salting and a fixed work factor.
"""

from __future__ import annotations

import bcrypt

BCRYPT_ROUNDS = 10
MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    """Hash a password with bcrypt (auto-salted, work factor 10)."""
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """
    Constant-time comparison against a bcrypt hash.

    Returns ``False`` on mismatch. Raises ``ValueError`` when
    ``password_hash`` is not a bcrypt hash at all.
    """
    if not isinstance(password_hash, str) or not password_hash:
        raise ValueError("Malformed password hash")
    if len(password.encode()) > MAX_PASSWORD_BYTES:
        # Signup never accepts these, so it cannot match a stored hash.
        return False
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except (ValueError, TypeError) as exc:
        raise ValueError("Malformed password hash") from exc
