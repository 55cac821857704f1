"""
Domain exceptions of flashdeck.

Every class here specializes one of the shared error categories, so the
HTTP status and the unified error body come from ``flashdeck.shared.errors``.
"""

from typing import Any

from sqlalchemy.exc import IntegrityError

from flashdeck.shared.errors import (
    AppError,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    ExceptionMapper,
    NotFoundError,
    ValidationError,
    is_foreign_key_violation,
    is_unique_violation,
)

__all__ = [
    "AuthenticationError",
    "InvalidCredentialsError",
    "TokenExpiredError",
    "TokenInvalidError",
    "PermissionDeniedError",
    "UserNotFoundError",
    "DeckNotFoundError",
    "CardNotFoundError",
    "DuplicateResourceError",
    "EmailAlreadyExistsError",
    "UsernameAlreadyExistsError",
]


# ==================== Authentication ====================


class InvalidCredentialsError(AuthenticationError):
    """Bad credentials."""


class TokenExpiredError(AuthenticationError):
    """Token has expired."""


class TokenInvalidError(AuthenticationError):
    """Invalid token."""


# ==================== Authorization ====================


class PermissionDeniedError(AuthorizationError):
    """You don't have permission to perform this action."""

    code = "PERMISSION_DENIED"


# ==================== Resources ====================


class _ResourceNotFoundError(NotFoundError):
    resource_type: str = "resource"

    def __init__(self, resource_id: Any | None = None, message: str | None = None) -> None:
        self.resource_id = resource_id
        details = {"resource_type": self.resource_type}
        if resource_id is not None:
            details["resource_id"] = str(resource_id)
        super().__init__(message=message, details=details)


class UserNotFoundError(_ResourceNotFoundError):
    """User not found."""

    code = "USER_NOT_FOUND"
    resource_type = "user"


class DeckNotFoundError(_ResourceNotFoundError):
    """Deck not found."""

    code = "DECK_NOT_FOUND"
    resource_type = "deck"


class CardNotFoundError(_ResourceNotFoundError):
    """Card not found."""

    code = "CARD_NOT_FOUND"
    resource_type = "card"


# ==================== Conflicts ====================


class DuplicateResourceError(ConflictError):
    """Resource already exists."""

    code = "DUPLICATE_RESOURCE"


class EmailAlreadyExistsError(DuplicateResourceError):
    """Email is already registered."""


class UsernameAlreadyExistsError(DuplicateResourceError):
    """Username is already taken."""


@ExceptionMapper.register(IntegrityError)
def _handle_integrity_error(exc: IntegrityError, func_name: str) -> AppError:
    """Unique violations surface as DuplicateResourceError."""
    if is_unique_violation(exc):
        return DuplicateResourceError(details={"constraint": "unique"})
    if is_foreign_key_violation(exc):
        return ValidationError(
            message="Related record not found",
            details={"constraint": "foreign_key"},
        )
    return ValidationError(message="Database constraint violation")
