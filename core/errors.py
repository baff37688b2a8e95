"""
Typed service errors.

Services raise these instead of leaking SQLAlchemy / library exceptions.
``api.middleware.register_exception_handlers`` is the only place that turns
them into HTTP responses.
"""

from __future__ import annotations

from typing import Optional


class AppError(Exception):
    """Base class for every error the service reports to clients."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = 400
    default_message = "Missing required fields"


class ConflictError(AppError):
    status_code = 409
    default_message = "User with this email already exists"


class AuthenticationError(AppError):
    status_code = 401
    default_message = "Invalid email or password"


# ── Bearer token failures (all 401, distinct messages) ────────────────


class TokenError(AppError):
    status_code = 401
    default_message = "Unauthorized access"


class NoTokenError(TokenError):
    default_message = "No authorization token provided"


class TokenExpiredError(TokenError):
    default_message = "Token has expired"


class TokenMalformedError(TokenError):
    default_message = "Invalid token"


class UnauthorizedError(TokenError):
    default_message = "Unauthorized access"


# ── Resource access ───────────────────────────────────────────────────


class ForbiddenError(AppError):
    status_code = 403
    default_message = "You do not have permission to access this resource"


class NotFoundError(AppError):
    status_code = 404
    default_message = "Not found"


class StoreError(AppError):
    status_code = 500
    default_message = "Database error"
