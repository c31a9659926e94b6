"""Structured logging configuration.

Provides JSON-formatted logs with:
- Category detection (parse, geometry, animation, cli)
- Extra fields passed through `extra=`
- Exception text when present
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

from shape_morph.config import settings

if TYPE_CHECKING:
    from typing import TextIO


class StructuredFormatter(logging.Formatter):
    """JSON formatter, one object per line."""

    # Map logger names to categories
    CATEGORY_MAP = {
        "shape_morph.parser": "parse",
        "shape_morph.arc": "geometry",
        "shape_morph.normalize": "geometry",
        "shape_morph.equalize": "geometry",
        "shape_morph.schedule": "animation",
        "shape_morph.interpolation": "animation",
        "shape_morph.animation": "animation",
        "shape_morph.cli": "cli",
    }

    # Standard LogRecord fields to exclude from 'extra'
    STANDARD_FIELDS = {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "exc_info",
        "exc_text",
        "thread",
        "threadName",
        "taskName",
        "message",
    }

    def _get_category(self, logger_name: str) -> str:
        """Determine category from logger name."""
        for prefix, cat in self.CATEGORY_MAP.items():
            if logger_name.startswith(prefix):
                return cat
        return "system"

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_record: dict = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "category": self._get_category(record.name),
            "logger": record.name,
            "message": record.getMessage(),
        }

        extra = {}
        for key, value in record.__dict__.items():
            if key not in self.STANDARD_FIELDS and not key.startswith("_"):
                # Keep serializable values, stringify the rest
                try:
                    json.dumps(value)
                    extra[key] = value
                except (TypeError, ValueError):
                    extra[key] = str(value)
        if extra:
            log_record["extra"] = extra

        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_record)


class ErrorFilter(logging.Filter):
    """Filter that only allows ERROR and CRITICAL level logs."""

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= logging.ERROR


def _rotating_handler(path: str, backup_count: int) -> RotatingFileHandler:
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    return RotatingFileHandler(
        path,
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=backup_count,
        encoding="utf-8",
    )


def configure_logging(
    *,
    json_format: bool = True,
    log_level: int | str = logging.INFO,
    log_file: str | None = None,
    error_log_file: str | None = None,
    stream: TextIO | None = None,
) -> None:
    """Configure application logging.

    Args:
        json_format: Use JSON formatting (False for human-readable lines)
        log_level: Minimum log level
        log_file: Path to main log file (None for stream only)
        error_log_file: Path to error-only log file (None to skip)
        stream: Stream to write to (default: sys.stderr)
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter: logging.Formatter
    if json_format:
        formatter = StructuredFormatter()
    else:
        formatter = logging.Formatter(
            "%(asctime)s %(levelname)5s [%(name)s] %(message)s",
            datefmt="%H:%M:%S",
        )

    stream_handler = logging.StreamHandler(stream or sys.stderr)
    stream_handler.setFormatter(formatter)
    root_logger.addHandler(stream_handler)

    if log_file:
        file_handler = _rotating_handler(log_file, backup_count=7)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    if error_log_file:
        error_handler = _rotating_handler(error_log_file, backup_count=14)
        error_handler.setFormatter(formatter)
        error_handler.addFilter(ErrorFilter())
        root_logger.addHandler(error_handler)


def setup_dev_logging() -> None:
    """Configure logging from settings.

    SHAPE_MORPH_LOG_JSON and SHAPE_MORPH_LOG_LEVEL shape the stream output;
    SHAPE_MORPH_LOG_FILE and SHAPE_MORPH_ERROR_LOG_FILE add rotating files.
    """
    configure_logging(
        json_format=settings.log_json,
        log_level=settings.log_level.upper(),
        log_file=settings.log_file,
        error_log_file=settings.error_log_file,
    )
