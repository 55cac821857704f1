"""Mapping of infrastructure errors to domain errors."""

import logging
from collections.abc import Callable
from typing import Any

from sqlalchemy.exc import DatabaseError, IntegrityError, OperationalError

from .base import AppError
from .domain import ConflictError, ServiceUnavailableError, ValidationError

logger = logging.getLogger(__name__)

Handler = Callable[[Any, str], AppError]


class ExceptionMapper:
    """Registry translating technical exceptions into AppError instances.

    Handlers registered later for the same type replace earlier ones,
    which lets the domain layer refine the defaults below.
    """

    _handlers: dict[type[Exception], Handler] = {}

    @classmethod
    def register(cls, *exception_types: type[Exception]) -> Callable[[Handler], Handler]:
        """Register a handler for exception types.

        Usage:
            @ExceptionMapper.register(IntegrityError)
            def _handle_integrity_error(exc: IntegrityError, func_name: str) -> AppError:
                return ConflictError(message="Record already exists")
        """

        def decorator(handler: Handler) -> Handler:
            for exc_type in exception_types:
                cls._handlers[exc_type] = handler
            return handler

        return decorator

    @classmethod
    def map(cls, exc: Exception, func_name: str = "") -> AppError:
        """Map a technical exception to a domain exception."""
        handler = cls._handlers.get(type(exc))

        if handler is None:
            for exc_type in type(exc).__mro__:
                if exc_type in cls._handlers:
                    handler = cls._handlers[exc_type]
                    break

        if handler is not None:
            return handler(exc, func_name)

        logger.exception("Unhandled exception in %s: %s", func_name, type(exc).__name__)
        return AppError(details={"function": func_name} if func_name else None)


def is_unique_violation(exc: IntegrityError) -> bool:
    message = str(exc.orig if exc.orig is not None else exc).lower()
    return "unique" in message or "duplicate" in message


def is_foreign_key_violation(exc: IntegrityError) -> bool:
    message = str(exc.orig if exc.orig is not None else exc).lower()
    return "foreign key" in message


@ExceptionMapper.register(IntegrityError)
def _handle_integrity_error(exc: IntegrityError, func_name: str) -> AppError:
    """Database: integrity constraint violation."""
    if is_unique_violation(exc):
        return ConflictError(
            message="Record already exists",
            details={"constraint": "unique"},
        )
    if is_foreign_key_violation(exc):
        return ValidationError(
            message="Related record not found",
            details={"constraint": "foreign_key"},
        )
    return ValidationError(message="Database constraint violation")


@ExceptionMapper.register(OperationalError, DatabaseError)
def _handle_database_error(exc: Exception, func_name: str) -> AppError:
    """Database: connection or operational error."""
    logger.error("Database error in %s: %s", func_name, exc)
    return ServiceUnavailableError(
        message="Database temporarily unavailable",
        details={"service": "database"},
    )
