"""
Centralized logging configuration for salesqa.

Every module logs through ``logging.getLogger(__name__)``; this module sets
up the ``salesqa`` parent logger once so all of them share handlers.

Features:
- JSON and text format support
- Rotating file handler plus optional console handler
- Automatic log directory creation
- Structured events through ``log_event``
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

__all__ = ["JSONFormatter", "configure_logger", "configure_from_config", "log_event"]

ROOT_LOGGER = "salesqa"
TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_RESERVED = frozenset(
    {
        "name", "msg", "args", "created", "filename", "funcName", "levelname",
        "levelno", "lineno", "module", "msecs", "message", "pathname", "process",
        "processName", "relativeCreated", "thread", "threadName", "exc_info",
        "exc_text", "stack_info", "taskName",
    }
)


class JSONFormatter(logging.Formatter):
    """Format log records as JSON for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # extra fields passed through log_event
        for key, value in record.__dict__.items():
            if key not in _RESERVED:
                log_data[key] = value

        return json.dumps(log_data, default=str)


def configure_logger(
    name: str = ROOT_LOGGER,
    log_dir: Optional[str] = None,
    level: str = "INFO",
    log_format: str = "json",
    console_output: bool = True,
    max_bytes: Optional[int] = None,
    backup_count: Optional[int] = None,
) -> logging.Logger:
    """
    Configure a logger with consistent settings.

    Args:
        name: Logger name, ``salesqa`` covers every module logger
        log_dir: Directory for log files (default: ``./data/logs``)
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Format type ('json' or 'text')
        console_output: Whether to also log to stderr
        max_bytes: Rotation size, 10 MB when unset
        backup_count: Rotated files to keep, 5 when unset

    Returns:
        Configured logger instance

    Example:
        >>> logger = configure_logger(level="DEBUG", log_dir="/tmp/salesqa-logs")
        >>> log_event(logger, message="ready", rows=10)
    """
    logger = logging.getLogger(name)

    # Return existing logger if already configured
    if logger.handlers:
        return logger

    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.propagate = False

    log_path = Path(log_dir) if log_dir else Path("./data/logs")
    log_path.mkdir(parents=True, exist_ok=True)

    max_bytes_value = max_bytes if max_bytes and max_bytes > 0 else 10 * 1024 * 1024
    backup_count_value = backup_count if backup_count is not None else 5

    file_handler = RotatingFileHandler(
        log_path / f"{name.replace('.', '_')}.log",
        maxBytes=max_bytes_value,
        backupCount=max(backup_count_value, 1),
        encoding="utf-8",
    )
    if log_format == "json":
        file_handler.setFormatter(JSONFormatter())
    else:
        file_handler.setFormatter(logging.Formatter(TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    logger.addHandler(file_handler)

    # stdout carries command output, so the console handler writes to stderr
    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter("%(levelname)s %(message)s"))
        logger.addHandler(console_handler)

    return logger


def configure_from_config(config, level: Optional[str] = None) -> logging.Logger:
    """Configure the ``salesqa`` logger from an ``AppConfig.logging`` section."""

    settings = config.logging
    return configure_logger(
        name=ROOT_LOGGER,
        log_dir=settings.directory,
        level=level or settings.level,
        log_format=settings.format,
        console_output=settings.console_output,
        max_bytes=int(settings.max_file_size_mb * 1024 * 1024),
        backup_count=settings.backup_count,
    )


def log_event(logger: logging.Logger, level: str = "info", **kwargs) -> None:
    """
    Log an event with structured data.

    Args:
        logger: Logger instance
        level: Log level ('debug', 'info', 'warning', 'error', 'critical')
        **kwargs: Key-value pairs to log; ``message`` becomes the log message

    Example:
        >>> log_event(logging.getLogger("salesqa"), message="Retrieved rows", rows=12)
    """
    message = kwargs.pop("message", None) or kwargs.pop("msg", "")
    log_method = getattr(logger, level.lower(), logger.info)
    log_method(message, extra=kwargs)
