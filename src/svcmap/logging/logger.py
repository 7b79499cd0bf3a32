# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: svcmap
"""
Logger setup for svcmap.

Loggers are standard library loggers carrying a StructuredFormatter, so any
``extra`` passed at the call site is rendered as ``key=value`` pairs (or as
JSON fields when ``json_format`` is enabled).
"""

from __future__ import annotations

import datetime
import enum
import json
import logging
import sys
from typing import Any

from svcmap.logging.config import LoggingSettings, LogLevel

# Attributes present on every LogRecord; anything else came in through ``extra``
_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__
) | {"message", "asctime"}


class StructuredFormatter(logging.Formatter):
    """Formatter that renders ``extra`` fields as structured context."""

    def __init__(
        self,
        json_format: bool = False,
        include_timestamp: bool = True,
        include_level: bool = True,
    ) -> None:
        """Initialize a structured formatter.

        Args:
            json_format: Whether to format logs as JSON
            include_timestamp: Whether to include timestamps in logs
            include_level: Whether to include log level in logs
        """
        self.json_format = json_format
        self.include_timestamp = include_timestamp
        self.include_level = include_level

        fmt = "%(name)s: %(message)s"
        if include_timestamp:
            fmt = "%(asctime)s " + fmt
        if include_level and not json_format:
            fmt = fmt + " [%(levelname)s]"

        super().__init__(fmt=fmt, datefmt="%Y-%m-%d %H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        if self.json_format:
            return self._format_json(record, self._extra(record))
        return super().format(record)

    def formatMessage(self, record: logging.LogRecord) -> str:
        # Context follows the message, ahead of the level suffix
        extra = self._extra(record)
        if not extra:
            return super().formatMessage(record)
        ctx_str = " ".join(f"{k}={self._format_value(v)}" for k, v in extra.items())
        return self._fmt % {**record.__dict__, "message": f"{record.message} {ctx_str}"}

    @staticmethod
    def _extra(record: logging.LogRecord) -> dict[str, Any]:
        return {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RESERVED_ATTRS
        }

    def _format_json(self, record: logging.LogRecord, extra: dict[str, Any]) -> str:
        log_data: dict[str, Any] = {
            "message": record.getMessage(),
            "name": record.name,
            **{k: self._format_value(v) for k, v in extra.items()},
        }
        if self.include_level:
            log_data["level"] = record.levelname
        if self.include_timestamp:
            log_data["timestamp"] = self.formatTime(record, self.datefmt)
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data)

    def _format_value(self, value: Any) -> str:
        """Format a context value for output.

        Types are rendered by qualified name, which is what most svcmap
        context carries.
        """
        # str-mixin enums would otherwise render as ClassName.MEMBER
        if isinstance(value, enum.Enum):
            value = value.value
        if isinstance(value, str):
            if " " in value:
                return f'"{value}"'
            return str(value)
        if isinstance(value, type):
            return f"{value.__module__}.{value.__qualname__}"
        if isinstance(value, datetime.datetime | datetime.date):
            return value.isoformat()
        if isinstance(value, (int, float, bool)) or value is None:
            return json.dumps(value)
        return str(value)


def _configure(logger: logging.Logger, settings: LoggingSettings) -> None:
    logger.setLevel(settings.level.stdlib_level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    formatter = StructuredFormatter(
        json_format=settings.json_format,
        include_timestamp=settings.include_timestamp,
        include_level=settings.include_level,
    )

    if settings.console_enabled:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(formatter)
        logger.addHandler(console)

    if settings.file_enabled and settings.file_path:
        file_handler = logging.FileHandler(settings.file_path)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # Records go to our own handlers or to the host's, never both
    logger.propagate = not logger.handlers


def get_logger(
    name: str,
    level: LogLevel | None = None,
    settings: LoggingSettings | None = None,
) -> logging.Logger:
    """Get a configured logger for the specified name.

    Args:
        name: Logger name (typically __name__)
        level: Optional log level override
        settings: Optional settings (loaded from the environment if None)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    _configure(logger, settings or LoggingSettings.load())

    if level is not None:
        logger.setLevel(level.stdlib_level)

    return logger
