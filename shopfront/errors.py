"""
Domain exceptions for the Shopfront backend.

Services raise these; the exception handlers registered in ``shopfront.main``
turn them into ``{statusCode, message, error}`` JSON responses.
"""

from enum import StrEnum
from typing import Any


class ShopfrontError(Exception):
    """
    Base exception for all Shopfront errors.

    Carries one or more human-readable messages. A single message is rendered
    as a string, several as a list.
    """

    status_code: int = 500
    error: str = "Internal Server Error"

    def __init__(self, messages: str | list[str], headers: dict[str, str] | None = None):
        self.messages = [messages] if isinstance(messages, str) else list(messages)
        self.headers = headers
        super().__init__("; ".join(self.messages))

    @property
    def message(self) -> str | list[str]:
        return self.messages[0] if len(self.messages) == 1 else self.messages

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "statusCode": self.status_code,
            "message": self.message,
            "error": self.error,
        }


class ValidationError(ShopfrontError):
    """Malformed input."""

    status_code = 400
    error = "Bad Request"


class ConflictError(ShopfrontError):
    """Duplicate username or shop name."""

    status_code = 409
    error = "Conflict"


class AuthErrorReason(StrEnum):
    """Why authentication failed."""

    INVALID_CREDENTIALS = "invalid_credentials"
    UNAUTHORIZED = "unauthorized"


class AuthError(ShopfrontError):
    """Bad credentials, or a missing, invalid or expired token."""

    status_code = 401
    error = "Unauthorized"

    def __init__(self, message: str, reason: AuthErrorReason = AuthErrorReason.UNAUTHORIZED):
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})
        self.reason = reason


class NotFoundError(ShopfrontError):
    """Unknown user or shop."""

    status_code = 404
    error = "Not Found"
