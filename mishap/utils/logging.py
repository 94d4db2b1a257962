"""\
Logging
=======

Author: Akshay Mestry <xa@mes3.dev>
Created on: Friday, July 04 2025
Last updated on: Monday, October 19 2026

This module provides logging utilities and configuration helpers for the
error handler. Reported errors are written through the standard Python
logging library, so they end up wherever the application already sends
its logs.

It includes custom formatters for coloured and JSON output and automatic
extra field handling. `configure` installs console and rotating file
handlers based on `mishap.core.config.LoggerConfig`.
"""

from __future__ import annotations

import json
import logging
import logging.handlers
import os
import sys
import typing as t

from mishap.utils.filesystem import mkdir

if t.TYPE_CHECKING:
    from mishap.core.config import LoggerConfig

__all__: list[str] = [
    "ColouredFormatter",
    "JSONFormatter",
    "MishapFormatter",
    "configure",
    "get_logger",
]

_installed: list[logging.Handler] = []


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    This formatter outputs log records in JSON format, which is useful
    for structured logging, usually in the production environments
    where logs are collected and processed by log management systems.

    :param extras: Whether to include extra fields in output, defaults
        to `True`. If set to `False`, only the standard log fields will
        be included in the output.
    """

    def __init__(self, extras: bool = True):
        """Initialise the JSON formatter instance."""
        super().__init__()
        self.extras = extras

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        :param record: The log record to format.
        :return: JSON-formatted log message.
        """
        payload = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        if self.extras:
            for key, value in record.__dict__.items():
                if key not in MishapFormatter.LOG_RECORD_ATTRS and not (
                    key in payload or key.startswith("_")
                ):
                    payload[key] = value
        return json.dumps(payload, default=str)


class MishapFormatter(logging.Formatter):
    """Custom formatter that automatically includes extra fields.

    The formatter detects extra fields, those not part of the standard
    `LogRecord` attributes, and makes them available as `%(extra)s` in
    the format string.

    :param fmt: The format string for log messages, defaults to `None`.
    :param datefmt: The format string for timestamps in log messages,
        defaults to `None`.
    :param extra_format: Format string for individual extra fields,
        defaults to `key: value` pairs.
    :param extra_separator: Separator between multiple extra fields,
        defaults to a single space.
    :var LOG_RECORD_ATTRS: Set of standard `LogRecord` attributes.
    """

    LOG_RECORD_ATTRS = {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "exc_info",
        "exc_text",
        "stack_info",
        "message",
        "asctime",
        "taskName",
        "qualName",
        "extra",
    }

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        extra_format: str = "{key}: {value}",
        extra_separator: str = " ",
    ) -> None:
        """Initialise the custom formatter."""
        super().__init__(fmt, datefmt)
        self.extra = extra_format
        self.extra_separator = extra_separator

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record with automatic extra field handling.

        :param record: The log record to format.
        :return: Formatted log message with extra fields.
        """
        clone = logging.makeLogRecord(record.__dict__)
        extras = {
            key: value
            for key, value in record.__dict__.items()
            if key not in self.LOG_RECORD_ATTRS and not key.startswith("_")
        }
        clone.extra = (
            self.extra_separator.join(
                self.extra.format(key=key, value=value)
                for key, value in sorted(extras.items())
            )
            if extras
            else ""
        )
        if not hasattr(clone, "qualName"):
            clone.qualName = record.name
        return super().format(clone)


class ColouredFormatter(MishapFormatter):
    """Formatter with qualified function names and coloured levels.

    Colours are only applied when `is_tty` is set, so log files remain
    clean and free of ANSI escape sequences.

    :var COLORS: Dictionary mapping log levels to ANSI colour codes.
    """

    COLORS = {
        "DEBUG": "\x1b[38;5;14m",
        "INFO": "\x1b[38;5;41m",
        "WARNING": "\x1b[38;5;215m",
        "ERROR": "\x1b[38;5;204m",
        "CRITICAL": "\x1b[38;5;197m",
        "QUALNAME": "\x1b[38;5;140m",
        "RESET": "\x1b[0m",
    }

    is_tty: bool = False

    def make_qualname(self, record: logging.LogRecord) -> str:
        """Return the logger name joined with the calling function."""
        if record.funcName and record.funcName != "<module>":
            return f"{record.name}.{record.funcName}"
        return record.name

    def format(self, record: logging.LogRecord) -> str:
        """Format log record, with colours only for TTY output.

        :param record: The log record to format.
        :return: Formatted log message.
        """
        clone = logging.makeLogRecord(record.__dict__)
        qualname = self.make_qualname(record)
        if self.is_tty:
            colour = self.COLORS.get(record.levelname, self.COLORS["RESET"])
            clone.levelname = (
                f"{colour}{record.levelname:>8s}{self.COLORS['RESET']}"
            )
            clone.qualName = (
                f"{self.COLORS['QUALNAME']}{qualname}{self.COLORS['RESET']}"
            )
        else:
            clone.levelname = f"{record.levelname:>8s}"
            clone.qualName = qualname
        return super().format(clone)


def configure(config: LoggerConfig) -> None:
    """Configure logging based on provided configuration settings.

    This function sets up console and rotating file handlers on the
    root logger. It supports both structured JSON logging for
    production environments and coloured output for development.

    Calling it again replaces the handlers installed by the previous
    call. Handlers added by the application itself are left in place.

    :param config: Logging configuration settings.
    """
    handlers: list[logging.Handler] = []
    levels: list[int] = []
    logger = logging.getLogger()
    for installed in _installed:
        logger.removeHandler(installed)
        installed.close()
    _installed.clear()
    if config.tty.enable:
        levels.append(getattr(logging, config.tty.level.upper()))
    if config.file.enable:
        levels.append(getattr(logging, config.file.level.upper()))
    logger.setLevel(
        min(levels) if levels else getattr(logging, config.level.upper())
    )
    if config.tty.enable:
        tty = logging.StreamHandler(sys.stdout)
        tty.setLevel(getattr(logging, config.tty.level.upper()))
        if config.as_json:
            formatter: logging.Formatter = JSONFormatter()
        else:
            formatter = ColouredFormatter(
                fmt=config.tty.fmt,
                datefmt=config.datefmt,
                extra_format="[{key}: {value}]",
            )
            formatter.is_tty = config.tty.colour and sys.stdout.isatty()
        tty.setFormatter(formatter)
        handlers.append(tty)
    if config.file.enable:
        handler = logging.handlers.RotatingFileHandler(
            filename=os.path.join(mkdir(config.file.path), config.file.output),
            maxBytes=config.file.max_bytes,
            backupCount=config.file.backups,
            encoding=config.file.encoding,
        )
        handler.setLevel(getattr(logging, config.file.level.upper()))
        if config.as_json:
            formatter = JSONFormatter()
        else:
            formatter = ColouredFormatter(
                fmt=config.file.fmt,
                datefmt=config.datefmt,
                extra_format="[{key}: {value}]",
            )
        handler.setFormatter(formatter)
        handlers.append(handler)
    for handler in handlers:
        logger.addHandler(handler)
    _installed.extend(handlers)


def get_logger(logger_name: str) -> logging.Logger:
    """Get a logger instance with the specified name.

    :param logger_name: Logger name.
    :return: Logger instance.
    """
    return logging.getLogger(logger_name)
