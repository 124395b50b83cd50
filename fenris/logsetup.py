"""Logger configuration: console and rotating-file output with one shared format."""

from __future__ import annotations

import logging
import logging.handlers
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Any

__all__ = [
    "LogLevel",
    "LoggingConfig",
    "initialize_logging",
    "configure_logging",
    "get_logger",
    "set_log_level",
    "log_level_to_string",
]

DEFAULT_LOGGER_NAME = "fenris"

_TRACE = 5
_OFF = logging.CRITICAL + 10

_PATTERN = "[%(asctime)s.%(msecs)03d] [%(name)s] [%(levelname)s] %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_RECORD_LEVEL_NAMES = {
    _TRACE: "trace",
    logging.DEBUG: "debug",
    logging.INFO: "info",
    logging.WARNING: "warning",
    logging.ERROR: "error",
    logging.CRITICAL: "critical",
}

_loggers: dict[str, logging.Logger] = {}


class LogLevel(Enum):
    """Severity threshold of a logger; the value is its textual name."""

    TRACE = "trace"
    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"
    CRITICAL = "critical"
    OFF = "off"

    @property
    def numeric(self) -> int:
        """The equivalent numeric level of the logging module."""
        return _NUMERIC_LEVELS[self]


_NUMERIC_LEVELS = {
    LogLevel.TRACE: _TRACE,
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.CRITICAL: logging.CRITICAL,
    LogLevel.OFF: _OFF,
}


@dataclass
class LoggingConfig:
    """Where log output goes and how much of it."""

    level: LogLevel = LogLevel.INFO
    console_logging: bool = True
    file_logging: bool = False
    log_file_path: str = "fenris.log"
    max_file_size: int = 1048576
    max_files: int = 3


class _Formatter(logging.Formatter):
    """Formatter that writes level names in lower case."""

    def format(self, record: logging.LogRecord) -> str:
        renamed = logging.makeLogRecord(record.__dict__)
        renamed.levelname = _RECORD_LEVEL_NAMES.get(
            record.levelno, record.levelname.lower()
        )
        return super().format(renamed)


def initialize_logging(
    config: LoggingConfig, logger_name: str = DEFAULT_LOGGER_NAME
) -> logging.Logger:
    """Set up and register the logger ``logger_name`` according to ``config``.

    Raises OSError when the log file cannot be opened.
    """
    formatter = _Formatter(_PATTERN, datefmt=_DATE_FORMAT)
    handlers: list[logging.Handler] = []

    if config.console_logging:
        handlers.append(logging.StreamHandler(sys.stdout))
    if config.file_logging:
        handlers.append(
            logging.handlers.RotatingFileHandler(
                config.log_file_path,
                maxBytes=config.max_file_size,
                backupCount=config.max_files,
            )
        )

    logger = logging.getLogger(logger_name)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    for handler in handlers:
        handler.setLevel(config.level.numeric)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(config.level.numeric)
    logger.propagate = False
    _loggers[logger_name] = logger
    return logger


def configure_logging(args: Any, log_name: str = DEFAULT_LOGGER_NAME) -> logging.Logger:
    """Initialise logging from parsed command-line options.

    ``args`` carries ``log_level``, ``no_console_log``, ``file_log`` and
    ``log_file``. Raises ValueError for an unknown log level.
    """
    try:
        level = LogLevel(args.log_level)
    except ValueError:
        raise ValueError(f"Invalid log level: {args.log_level}") from None

    config = LoggingConfig(
        level=level,
        console_logging=not args.no_console_log,
        file_logging=bool(args.file_log),
        log_file_path=args.log_file,
    )
    return initialize_logging(config, log_name)


def get_logger(logger_name: str = DEFAULT_LOGGER_NAME) -> logging.Logger:
    """Return a registered logger, or the default logger if none has that name."""
    registered = _loggers.get(logger_name)
    if registered is not None:
        return registered
    return logging.getLogger(DEFAULT_LOGGER_NAME)


def set_log_level(level: LogLevel) -> None:
    """Set the level of every registered logger and of the default logger."""
    for logger in _loggers.values():
        logger.setLevel(level.numeric)
    logging.getLogger(DEFAULT_LOGGER_NAME).setLevel(level.numeric)


def log_level_to_string(level: LogLevel) -> str:
    """Return the textual name of a log level."""
    if isinstance(level, LogLevel):
        return level.value
    return "info"