"""Logging configuration for the Storefront.

Standard library logging owns the handlers (console plus two rotating files);
structlog builds and renders the events. Request-scoped values such as
``request_id`` are bound through ``structlog.contextvars`` and appear on
every line logged while the request is handled.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any

import structlog

LOG_FILE = "storefront.log"
ERROR_LOG_FILE = "storefront_error.log"
MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5

_LEVELS_BY_ENV = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}
_JSON_ENVS = ("production", "staging")
_QUIET_LOGGERS = ("protean", "asyncio", "uvicorn.access")


def current_environment() -> str:
    return (os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV") or "development").lower()


def get_log_level() -> str:
    """``LOG_LEVEL`` wins; otherwise the default for the current environment."""
    return os.getenv("LOG_LEVEL", _LEVELS_BY_ENV.get(current_environment(), "INFO")).upper()


def _rotating_handler(path: Path, level) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path,
        maxBytes=MAX_LOG_BYTES,
        backupCount=LOG_BACKUPS,
        encoding="utf-8",
    )
    handler.setLevel(level)
    return handler


def setup_stdlib_logging(log_dir: Path | None = None) -> None:
    level = get_log_level()
    log_dir = log_dir or Path(os.getenv("LOG_DIR", "logs"))
    log_dir.mkdir(parents=True, exist_ok=True)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [
        console,
        _rotating_handler(log_dir / LOG_FILE, level),
        _rotating_handler(log_dir / ERROR_LOG_FILE, logging.ERROR),
    ]

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def _renderer():
    if current_environment() in _JSON_ENVS:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=True,
        exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=False, max_frames=2),
    )


def setup_structlog() -> None:
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            _renderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging(log_dir: Path | None = None) -> None:
    """Configure all logging for the application. Call once at startup."""
    setup_stdlib_logging(log_dir)
    setup_structlog()


def bind_request_context(**kwargs: Any) -> None:
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()
