"""Loguru logger configuration.

- structured JSON output for production, colored console output for development
- request_id / trace_id correlation from the request context
- redaction of sensitive fields passed through ``extra``
- interception of stdlib logging (uvicorn, fastapi, sqlalchemy, asyncpg)
"""

from __future__ import annotations

import json
import logging
import re
import sys
from typing import TYPE_CHECKING, Any

from loguru import logger

from ..context import get_request_id, get_trace_id

if TYPE_CHECKING:
    from flashdeck.core.config import Settings

SENSITIVE_PATTERNS = re.compile(
    r"(password|token|secret|credential|authorization|api_key)",
    re.IGNORECASE,
)

# Attributes every stdlib LogRecord carries; anything else came from ``extra=``.
_STANDARD_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", None, None))
) | {"message", "asctime", "taskName"}

THIRD_PARTY_LOGGERS = (
    "uvicorn",
    "uvicorn.access",
    "uvicorn.error",
    "fastapi",
    "asyncpg",
    "sqlalchemy",
    "sqlalchemy.engine",
    "alembic",
)


class InterceptHandler(logging.Handler):
    """Redirect stdlib logging records into Loguru.

    Application modules log through ``logging.getLogger(__name__)`` with
    ``extra={...}``; those extra attributes are bound onto the Loguru record.
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame = logging.currentframe()
        depth = 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        extra = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _STANDARD_RECORD_ATTRS
        }
        logger.bind(logger_name=record.name, **extra).opt(
            depth=depth, exception=record.exc_info
        ).log(level, record.getMessage())


def _context_patcher(record: dict[str, Any]) -> None:
    record["extra"].setdefault("request_id", get_request_id())
    record["extra"].setdefault("trace_id", get_trace_id())


def redact_sensitive_value(key: str, value: Any) -> Any:
    """Mask values whose key looks like a credential."""
    if SENSITIVE_PATTERNS.search(key):
        return "***REDACTED***"
    return value


def build_log_entry(record: dict[str, Any], service_name: str) -> dict[str, Any]:
    """Build the JSON document written for a single record."""
    extra = record["extra"]
    entry: dict[str, Any] = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "message": record["message"],
        "logger": extra.get("logger_name", record["name"]),
        "function": record["function"],
        "line": record["line"],
        "service": service_name,
        "request_id": extra.get("request_id", ""),
        "trace_id": extra.get("trace_id", ""),
    }

    for key, value in extra.items():
        if key not in entry and key != "logger_name":
            entry[key] = redact_sensitive_value(key, value)

    exc = record.get("exception")
    if exc:
        entry["exception"] = {
            "type": exc.type.__name__ if exc.type else None,
            "value": str(exc.value) if exc.value else None,
        }

    return entry


def _create_json_sink(service_name: str) -> Any:
    def json_sink(message: Any) -> None:
        entry = build_log_entry(message.record, service_name)
        sys.stdout.write(json.dumps(entry, ensure_ascii=False, default=str) + "\n")
        sys.stdout.flush()

    return json_sink


def setup_logger(settings: Settings) -> None:
    """Configure Loguru sinks and intercept third-party loggers.

    Args:
        settings: Application settings (logging level/format, app name, debug).
    """
    logger.remove()
    logger.configure(patcher=_context_patcher)

    level = settings.logging.level.upper()

    if settings.logging.is_json:
        logger.add(
            _create_json_sink(settings.app.name),
            level=level,
            backtrace=True,
            diagnose=False,
            enqueue=True,
        )
    else:
        dev_format = (
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
            "<level>{message}</level> | "
            "<dim>request_id={extra[request_id]}</dim>"
        )
        logger.add(
            sys.stdout,
            format=dev_format,
            level=level,
            colorize=True,
            backtrace=True,
            diagnose=settings.app.debug,
            enqueue=True,
        )

    configure_third_party_loggers(settings)

    logger.info(
        "Logger configured: level={} format={}",
        level,
        "json" if settings.logging.is_json else "console",
    )


def configure_third_party_loggers(settings: Settings) -> None:
    """Route stdlib loggers through Loguru and tame their verbosity."""
    logging.root.handlers = [InterceptHandler()]
    logging.root.setLevel(settings.logging.level.upper())

    for name in THIRD_PARTY_LOGGERS:
        std_logger = logging.getLogger(name)
        std_logger.handlers = [InterceptHandler()]
        std_logger.propagate = False

        if name.startswith("sqlalchemy"):
            std_logger.setLevel(logging.INFO if settings.db.echo else logging.WARNING)
        elif name in ("uvicorn.access", "asyncpg"):
            std_logger.setLevel(logging.WARNING if settings.logging.is_json else logging.INFO)
        else:
            std_logger.setLevel(logging.INFO)


def get_logger(name: str):
    """Loguru logger bound to a module name."""
    return logger.bind(logger_name=name)
