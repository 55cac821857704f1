"""Loguru-based logging for flashdeck.

- structured JSON logging for production
- colored console output for development
- automatic sensitive data redaction
"""

from loguru import logger

from .config import (
    InterceptHandler,
    build_log_entry,
    configure_third_party_loggers,
    get_logger,
    redact_sensitive_value,
    setup_logger,
)

__all__ = [
    "logger",
    "setup_logger",
    "get_logger",
    "build_log_entry",
    "redact_sensitive_value",
    "InterceptHandler",
    "configure_third_party_loggers",
]
