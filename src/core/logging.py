"""
Logging configuration module.

Console logging is always on; rotating application and error log files are
added when settings.log_file_enabled is set. Every record carries the id of
the request being handled (or "no-request-id" outside a request).
"""

import logging
import logging.config
import sys
from contextvars import ContextVar
from pathlib import Path
from typing import Any

from src.core.config import settings

# Request id of the request being handled, set by RequestIDMiddleware
request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)

FORMATTERS: dict[str, dict[str, Any]] = {
    "console": {
        "format": (
            "%(asctime)s - %(name)s - %(levelname)s - [%(correlation_id)s] - "
            "[%(filename)s:%(lineno)d] - %(message)s"
        ),
        "datefmt": "%Y-%m-%d %H:%M:%S",
    },
    "json": {
        "()": "pythonjsonlogger.jsonlogger.JsonFormatter",
        "format": (
            "%(asctime)s %(name)s %(levelname)s %(correlation_id)s "
            "%(filename)s %(lineno)d %(message)s"
        ),
    },
}


class CorrelationIdFilter(logging.Filter):
    """Stamp each record with the current request id as correlation_id."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "correlation_id"):
            record.correlation_id = request_id_var.get() or "no-request-id"
        return True


def _file_handler(filename: str, level: str) -> dict[str, Any]:
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "level": level,
        "formatter": settings.log_format,
        "filename": filename,
        "maxBytes": settings.log_file_max_bytes,
        "backupCount": settings.log_file_backup_count,
        "encoding": "utf-8",
        "filters": ["correlation_id"],
    }


def get_logging_config() -> dict[str, Any]:
    """
    Build the dictConfig for the current settings.

    Application records ("src.*") go to every handler; uvicorn keeps its
    INFO output and SQLAlchemy is limited to warnings.

    Returns:
        Dictionary compatible with logging.config.dictConfig()
    """
    handlers: dict[str, dict[str, Any]] = {
        "console": {
            "class": "logging.StreamHandler",
            "level": settings.log_level,
            "formatter": settings.log_format,
            "stream": sys.stdout,
            "filters": ["correlation_id"],
        },
    }

    if settings.log_file_enabled:
        log_path = Path(settings.log_file_path)
        handlers["file"] = _file_handler(str(log_path), settings.log_level)
        handlers["error_file"] = _file_handler(str(log_path.parent / "error.log"), "ERROR")

    names = list(handlers)
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": FORMATTERS,
        "filters": {"correlation_id": {"()": CorrelationIdFilter}},
        "handlers": handlers,
        "root": {"level": settings.log_level, "handlers": names},
        "loggers": {
            "src": {"level": settings.log_level, "handlers": names, "propagate": False},
            "uvicorn": {"level": "INFO", "handlers": ["console"], "propagate": False},
            "sqlalchemy": {"level": "WARNING", "handlers": ["console"], "propagate": False},
        },
    }


def setup_logging() -> None:
    """
    Configure application logging from settings.

    Call this at application startup, before any logging occurs.
    """
    if settings.log_file_enabled:
        Path(settings.log_file_path).parent.mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(get_logging_config())

    logging.getLogger(__name__).info(
        f"Logging configured: level={settings.log_level}, "
        f"format={settings.log_format}, "
        f"file_enabled={settings.log_file_enabled}"
    )
