"""Logging helpers shared by the CLI entry point and library modules."""

from __future__ import annotations

import logging
from typing import Optional

from constants import Constants


def configure_logging(level: str = "INFO", logfile: Optional[str] = None, quiet: bool = False) -> None:
    """Configure the root logger with the project log format.

    Args:
        level: Log level name, e.g. "DEBUG".
        logfile: Optional path; when set, records go to this file instead of stderr.
        quiet: Suppress console output entirely (file logging still applies).
    """
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    numeric_level = getattr(logging, str(level).upper(), logging.INFO)
    root.setLevel(numeric_level)

    formatter = logging.Formatter(Constants.LOG_FORMAT)
    if logfile:
        handler: logging.Handler = logging.FileHandler(logfile, encoding="utf-8")
    elif quiet:
        handler = logging.NullHandler()
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    root.addHandler(handler)


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records would be emitted by logger."""
    return logger.isEnabledFor(logging.DEBUG)
