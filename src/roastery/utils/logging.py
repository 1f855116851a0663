"""Logging configuration for the Roastery domain.

stdlib logging carries the handlers (console plus rotating files);
structlog sits on top and renders key/value events as JSON in production
and as coloured console lines everywhere else.

Orders and voice calls carry customer data, so every event passes through
``redact_personal_data`` before it is rendered: emails are masked, secrets
are hidden and call transcripts are reduced to their length.

Environment variables:
    LOG_LEVEL   overrides the per-environment level
    LOG_DIR     directory for the rotating log files (default ``logs``)
    LOG_FORMAT  ``json`` or ``console``, overriding the per-environment choice
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any

import structlog

SERVICE_NAME = "roastery"

MAX_LOG_BYTES = 10 * 1024 * 1024

SECRET_KEYS = frozenset({"api_key", "authorization", "password", "token"})
EMAIL_KEYS = frozenset({"customer_email", "email"})
TRANSCRIPT_KEYS = frozenset({"transcript"})


def current_environment() -> str:
    return (os.getenv("ENV") or os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV") or "development").lower()


def get_log_level() -> str:
    """Get log level based on environment."""
    level_map = {
        "production": "INFO",
        "staging": "INFO",
        "development": "DEBUG",
        "test": "WARNING",
    }

    return os.getenv("LOG_LEVEL", level_map.get(current_environment(), "INFO")).upper()


def mask_email(value: str) -> str:
    """``ada@example.com`` -> ``a***@example.com``."""
    local, sep, domain = str(value).partition("@")
    if not sep:
        return "***"
    return f"{local[:1]}***@{domain}"


def redact_personal_data(_, __, event_dict: dict) -> dict:
    """structlog processor hiding customer data and credentials."""
    for key, value in event_dict.items():
        if value is None:
            continue
        if key in SECRET_KEYS:
            event_dict[key] = "***"
        elif key in EMAIL_KEYS:
            event_dict[key] = mask_email(value)
        elif key in TRANSCRIPT_KEYS:
            event_dict[key] = f"<{len(str(value))} chars>"
    return event_dict


def add_service_name(_, __, event_dict: dict) -> dict:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def _rotating_handler(path: Path, level) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path,
        maxBytes=MAX_LOG_BYTES,
        backupCount=5,
        encoding="utf-8",
    )
    handler.setLevel(level)
    return handler


def setup_stdlib_logging(
    level: str | None = None, log_dir: str | None = None, log_file_prefix: str = SERVICE_NAME
) -> None:
    """Route stdlib logging to stdout and to ``<prefix>.log`` / ``<prefix>_error.log``."""
    log_level = level or get_log_level()

    log_path = Path(log_dir or os.getenv("LOG_DIR", "logs"))
    log_path.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers = []

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)

    root_logger.addHandler(console_handler)
    root_logger.addHandler(_rotating_handler(log_path / f"{log_file_prefix}.log", log_level))
    root_logger.addHandler(_rotating_handler(log_path / f"{log_file_prefix}_error.log", logging.ERROR))

    # Quieten chatty libraries; requests talks to Retell through urllib3
    for name in ("urllib3", "asyncio", "protean", "sqlalchemy.engine"):
        logging.getLogger(name).setLevel(logging.WARNING)


def use_json_output() -> bool:
    log_format = os.getenv("LOG_FORMAT", "").lower()
    if log_format in ("json", "console"):
        return log_format == "json"
    return current_environment() in ("production", "staging")


def setup_structlog() -> None:
    """Configure structlog for structured logging."""
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        add_service_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        redact_personal_data,
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.LINENO,
                structlog.processors.CallsiteParameter.FUNC_NAME,
            ]
        ),
    ]

    if use_json_output():
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=sys.stdout.isatty(),
                exception_formatter=structlog.dev.RichTracebackFormatter(
                    show_locals=False,
                    max_frames=2,
                ),
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging(
    level: str | None = None, log_dir: str | None = None, log_file_prefix: str = SERVICE_NAME
) -> None:
    """Configure all logging for the application."""
    setup_stdlib_logging(level=level, log_dir=log_dir, log_file_prefix=log_file_prefix)
    setup_structlog()


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a configured logger instance."""
    return structlog.get_logger(name)


def add_context(**kwargs: Any) -> None:
    """Add context variables that will be included in all subsequent log messages."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all context variables."""
    structlog.contextvars.clear_contextvars()
