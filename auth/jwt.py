"""
JWT-style token creation and verification.

Tokens are base64-encoded JSON payloads signed with HMAC-SHA256.
Secret key is loaded from ``config.jwt_secret`` (env var: ``JWT_SECRET``).

Verification is stateless: a token stays valid until ``exp`` even if the
user is gone, since there is no revocation list.
"""

from __future__ import annotations

import binascii
import hashlib
import hmac
import json
import time
from base64 import b64decode, b64encode
from dataclasses import dataclass

from config.settings import config
from core.errors import TokenExpiredError, TokenMalformedError


@dataclass(frozen=True)
class TokenClaims:
    user_id: str
    email: str
    issued_at: int
    expires_at: int


def _sign(raw: bytes) -> str:
    return hmac.new(config.jwt_secret.encode(), raw, hashlib.sha256).hexdigest()


def create_token(
    user_id: str,
    email: str,
    expires_in: int | None = None,
    now: float | None = None,
) -> str:
    """Create a signed token carrying ``user_id``, ``email`` and expiry."""
    issued_at = int(time.time() if now is None else now)
    lifetime = config.jwt_expiry_seconds if expires_in is None else expires_in
    payload = {
        "user_id": user_id,
        "email": email,
        "iat": issued_at,
        "exp": issued_at + lifetime,
    }
    raw = json.dumps(payload).encode()
    return b64encode(raw).decode() + "." + _sign(raw)


def verify_token(token: str, now: float | None = None) -> TokenClaims:
    """
    Verify token and return its claims.

    The signature is checked before any claim is read.

    Raises ``TokenMalformedError`` on a bad structure or signature and
    ``TokenExpiredError`` once ``exp`` has passed.
    """
    parts = token.split(".", 1) if isinstance(token, str) else []
    if len(parts) != 2:
        raise TokenMalformedError()
    try:
        raw = b64decode(parts[0], validate=True)
    except (binascii.Error, ValueError):
        raise TokenMalformedError()

    if not hmac.compare_digest(parts[1].encode(), _sign(raw).encode()):
        raise TokenMalformedError()

    try:
        payload = json.loads(raw)
        claims = TokenClaims(
            user_id=str(payload["user_id"]),
            email=str(payload["email"]),
            issued_at=int(payload["iat"]),
            expires_at=int(payload["exp"]),
        )
    except (ValueError, KeyError, TypeError):
        raise TokenMalformedError()

    current = time.time() if now is None else now
    if claims.expires_at <= current:
        raise TokenExpiredError()
    return claims
