"""Domain exceptions raised by the service layer.

Services raise these instead of ``HTTPException`` so they stay usable outside
a request. ``mama_app.api.exception_handlers`` maps each class to its HTTP
status and response body.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from fastapi import status


class DomainError(Exception):
    """Base class for errors that are safe to report to API clients."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    default_message: str = "Bad request"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(DomainError):
    """Malformed or conflicting input, reported per field."""

    status_code = 422  # Unprocessable Content
    default_message = "The given data was invalid."

    def __init__(
        self,
        errors: Mapping[str, Sequence[str]] | None = None,
        message: str | None = None,
    ) -> None:
        super().__init__(message)
        self.errors: dict[str, list[str]] = {
            field: list(messages) for field, messages in (errors or {}).items()
        }

    @classmethod
    def single(cls, field: str, message: str) -> "ValidationError":
        return cls({field: [message]})


class UnauthorizedError(DomainError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthenticated."


class ForbiddenError(DomainError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Insufficient permissions"


class NotFoundError(DomainError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class OtpInvalidError(DomainError):
    """No unconsumed one-time code matches the submitted value."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid or already used reset code"


class OtpExpiredError(DomainError):
    status_code = status.HTTP_410_GONE
    default_message = "Reset code has expired"


__all__ = [
    "DomainError",
    "ForbiddenError",
    "NotFoundError",
    "OtpExpiredError",
    "OtpInvalidError",
    "UnauthorizedError",
    "ValidationError",
]
