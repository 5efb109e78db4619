"""Centralized logging configuration for aihooks.

Library modules log under the ``aihooks`` namespace and never configure
handlers themselves; applications (or the CLI) call ``setup_logging``.
Provider keys must not reach a log sink: Gemini carries its key in the
request URL, so every handler installed here masks ``key=`` query values.
"""

import logging
import re
import sys
from pathlib import Path
from typing import Literal

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

ROOT_LOGGER = "aihooks"

# Loggers of the HTTP stack; httpx logs full request URLs at INFO
HTTP_LOGGERS = ("httpx", "httpcore")

_KEY_PARAM = re.compile(r"([?&]key=)[^&\s\"']+")

# Module-level logger cache
_loggers: dict[str, logging.Logger] = {}


class RedactKeyFilter(logging.Filter):
    """Mask ``key=`` query parameters in formatted log messages."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = _KEY_PARAM.sub(r"\1***", message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def setup_logging(
    level: LogLevel = "INFO",
    log_file: Path | None = None,
    console_level: LogLevel = "WARNING",
    http_level: LogLevel = "WARNING",
) -> logging.Logger:
    """Configure library logging.

    Args:
        level: Level of the aihooks root logger
        log_file: Optional file path for logging
        console_level: Level for console output (default WARNING to keep CLI clean)
        http_level: Level of the httpx/httpcore loggers

    Returns:
        Configured aihooks root logger
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(getattr(logging, level))
    logger.handlers.clear()

    redact = RedactKeyFilter()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(getattr(logging, console_level))
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    console_handler.addFilter(redact)
    logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        file_handler.addFilter(redact)
        logger.addHandler(file_handler)

    for name in HTTP_LOGGERS:
        http_logger = logging.getLogger(name)
        http_logger.setLevel(getattr(logging, http_level))
        if not any(isinstance(f, RedactKeyFilter) for f in http_logger.filters):
            http_logger.addFilter(redact)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a named logger under the aihooks namespace.

    Args:
        name: Logger name (prefixed with 'aihooks.' if needed)

    Returns:
        Logger instance
    """
    full_name = name if name.startswith(f"{ROOT_LOGGER}.") else f"{ROOT_LOGGER}.{name}"

    if full_name not in _loggers:
        _loggers[full_name] = logging.getLogger(full_name)

    return _loggers[full_name]


def set_log_level(level: LogLevel) -> None:
    """Set the logging level for all aihooks loggers."""
    logging.getLogger(ROOT_LOGGER).setLevel(getattr(logging, level))
