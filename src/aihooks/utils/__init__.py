"""Utility functions."""

from .console import console, err_console
from .logging import RedactKeyFilter, get_logger, set_log_level, setup_logging

__all__ = [
    "RedactKeyFilter",
    "console",
    "err_console",
    "get_logger",
    "set_log_level",
    "setup_logging",
]
