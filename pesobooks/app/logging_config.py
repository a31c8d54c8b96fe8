"""
Logging configuration for PesoBooks.

Uses structlog for structured logging with:
- Console output (always)
- File output with weekly rotation (optional)
- JSON formatting

Log rotation: Weekly with 52 weeks (1 year) retention, gzip compression.
"""
import gzip
import logging
import logging.handlers
import shutil
import sys
from pathlib import Path
from typing import Any, Optional

import structlog
from structlog.types import EventDict

from pesobooks.app.config import get_settings, PROJECT_ROOT


def get_log_directory() -> Path:
    """Get or create the log directory."""
    log_dir = PROJECT_ROOT / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


def add_log_level(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """
    Add log level to the event dict.
    """
    if method_name == "warn":
        method_name = "warning"
    event_dict["level"] = method_name.upper()
    return event_dict


def _get_rotated_filename(default_name: str) -> str:
    """
    Custom namer for rotated log files.

    Example: pesobooks.log.2025-11-28 -> pesobooks.log.2025-11-28.gz
    """
    return default_name + ".gz"


def _compress_rotated_file(source: str, dest: str) -> None:
    """Compress a rotated log file with gzip and remove the original."""
    with open(source, 'rb') as f_in:
        with gzip.open(dest, 'wb') as f_out:
            shutil.copyfileobj(f_in, f_out)

    Path(source).unlink()


def configure_logging(log_level: Optional[str] = None, enable_file_logging: Optional[bool] = None) -> None:
    """
    Configure structured logging for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Defaults to settings.LOG_LEVEL.
        enable_file_logging: Whether to enable file logging.
            Defaults to settings.LOG_TO_FILE (always off in test mode).
    """
    settings = get_settings()
    if log_level is None:
        log_level = settings.LOG_LEVEL
    if enable_file_logging is None:
        enable_file_logging = settings.LOG_TO_FILE

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    # Remove all existing handlers from root logger
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handlers = []

    # Console handler goes to stderr so script output on stdout stays clean
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)
    handlers.append(console_handler)

    if enable_file_logging:
        log_file = get_log_directory() / "pesobooks.log"

        # Rotate every Monday at midnight (UTC), keep 52 weeks
        file_handler = logging.handlers.TimedRotatingFileHandler(
            filename=str(log_file),
            when="W0",
            interval=1,
            backupCount=52,
            encoding="utf-8",
            utc=True
            )
        file_handler.setLevel(numeric_level)
        file_handler.rotator = _compress_rotated_file
        file_handler.namer = _get_rotated_filename

        handlers.append(file_handler)

    logging.basicConfig(
        format="%(message)s",
        handlers=handlers,
        level=numeric_level,
        force=True
        )

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
        )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a logger instance (structured logger).

    Usage:
        logger = get_logger(__name__)
        logger.info("message", key="value")
    """
    return structlog.get_logger(name)
