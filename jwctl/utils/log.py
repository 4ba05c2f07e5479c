"""Logging utilities for jwctl."""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional


_LOG_RECORD_FIELDS = {
    "name",
    "msg",
    "args",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "exc_info",
    "exc_text",
    "stack_info",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "processName",
    "process",
    "taskName",
    "message",
    "asctime",
    "stacklevel",
}

_CONSOLE_FORMAT = "%(levelname)s: %(message)s"
_CONSOLE_FORMAT_WITH_TIME = "%(asctime)s %(levelname)s: %(message)s"


class StructuredFormatter(logging.Formatter):
    """Formatter with ISO timestamps and context."""

    def formatTime(self, record: logging.LogRecord, datefmt: Optional[str] = None) -> str:
        timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc)
        return timestamp.strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        extras = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _LOG_RECORD_FIELDS and not key.startswith("_")
        }
        if extras:
            try:
                serialized = json.dumps(extras, sort_keys=True, ensure_ascii=True, default=str)
            except (TypeError, ValueError):
                serialized = str(extras)
            return f"{message} | {serialized}"
        return message


def _level_from_env(default: int = logging.WARNING) -> int:
    level_name = os.getenv("JW_LOG_LEVEL", "").strip().upper()
    if not level_name:
        return default
    level = getattr(logging, level_name, None)
    return level if isinstance(level, int) else default


class JwctlLogger:
    """Logger for jwctl."""

    def __init__(self, name: str = "jwctl", log_file: Optional[Path] = None):
        self.logger = logging.getLogger(name)
        # File handlers capture debug output while the console respects its own level.
        self.logger.setLevel(logging.DEBUG)
        self.logger.propagate = False

        self._console_handler: Optional[logging.Handler] = None
        for handler in self.logger.handlers:
            if isinstance(handler, logging.StreamHandler) and not isinstance(
                handler, logging.FileHandler
            ):
                self._console_handler = handler
                break

        if self._console_handler is None:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(_level_from_env())
            console_handler.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
            self.logger.addHandler(console_handler)
            self._console_handler = console_handler

        self._file_handler: Optional[logging.Handler] = None
        self._file_handler_path: Optional[Path] = None

        if log_file is not None:
            self.attach_file_handler(log_file)

    def set_console_level(self, level: int, *, timestamps: bool = False) -> None:
        """Adjust console verbosity and optionally prefix lines with timestamps."""
        if self._console_handler is None:
            return
        self._console_handler.setLevel(level)
        fmt = _CONSOLE_FORMAT_WITH_TIME if timestamps else _CONSOLE_FORMAT
        self._console_handler.setFormatter(logging.Formatter(fmt))

    def attach_file_handler(self, log_file: Path) -> Path:
        """Attach or replace a file handler for logging to disk."""
        log_file.parent.mkdir(parents=True, exist_ok=True)
        if self._file_handler and self._file_handler_path == log_file:
            return log_file

        if self._file_handler:
            self.logger.removeHandler(self._file_handler)
            self._file_handler.close()

        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(StructuredFormatter("%(asctime)s [%(levelname)s] %(message)s"))
        self.logger.addHandler(file_handler)
        self._file_handler = file_handler
        self._file_handler_path = log_file
        return log_file

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Log debug message."""
        self.logger.debug(message, *args, **kwargs)

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Log info message."""
        self.logger.info(message, *args, **kwargs)

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Log warning message."""
        self.logger.warning(message, *args, **kwargs)


# Global logger instance
_logger: Optional[JwctlLogger] = None


def get_logger() -> JwctlLogger:
    """Get the global logger instance."""
    global _logger
    if _logger is None:
        _logger = JwctlLogger()
    return _logger


def init_logger(
    *, verbose: bool = False, timestamps: bool = False, log_file: Optional[Path] = None
) -> JwctlLogger:
    """Configure the global logger from command line flags."""
    logger = get_logger()
    level = logging.DEBUG if verbose else _level_from_env(logging.INFO)
    logger.set_console_level(level, timestamps=timestamps)
    if log_file is not None:
        logger.attach_file_handler(log_file)
    if verbose:
        logger.debug("Debug logging enabled")
    return logger
