"""Shared errors package.

Centralized error handling and exception management.
"""

from .base import AppError
from .decorators import safe
from .domain import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ServiceUnavailableError,
    ValidationError,
)
from .handlers import setup_exception_handlers
from .mapping import ExceptionMapper, is_foreign_key_violation, is_unique_violation
from .schemas import ErrorDetail, ErrorResponse

__all__ = [
    # Base
    "AppError",
    # Domain errors
    "NotFoundError",
    "ConflictError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "ServiceUnavailableError",
    # Mapping
    "ExceptionMapper",
    "is_unique_violation",
    "is_foreign_key_violation",
    # Decorators
    "safe",
    # Handlers
    "setup_exception_handlers",
    # Schemas
    "ErrorDetail",
    "ErrorResponse",
]
