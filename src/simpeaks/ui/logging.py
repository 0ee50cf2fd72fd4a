"""Logging configuration for SimPeaks.

All library modules log to children of the ``simpeaks`` logger. Nothing is
emitted until :func:`setup_logging` attaches handlers; the helpers below are
no-ops until then.
"""

from __future__ import annotations

import json
import logging
import os
import platform
import sys
from datetime import datetime
from pathlib import Path

from rich.logging import RichHandler

from simpeaks.ui.console import PROG_NAME, VERSION, console

LOGGER_NAME = "simpeaks"

# Set by setup_logging, cleared by close_logging
_logger: logging.Logger | None = None

_LEVELS = {"debug": logging.DEBUG, "info": logging.INFO, "warning": logging.WARNING, "error": logging.ERROR}


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        log_record = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "thread": record.threadName,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_record)


def setup_logging(
    log_file: Path | None = None,
    verbose: bool = False,
    level: int = logging.INFO,
) -> logging.Logger | None:
    """Attach file and console handlers to the ``simpeaks`` logger.

    Args:
        log_file: Log file path; a ``.json`` suffix selects JSON lines
        verbose: Also log to the console through rich
        level: Threshold for both handlers

    Returns
    -------
        The configured logger, or None when neither output is requested
    """
    global _logger

    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)

    if log_file is None and not verbose:
        _logger = None
        return None

    logger.setLevel(level)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(level)
        if log_file.suffix == ".json":
            file_handler.setFormatter(JSONFormatter())
        else:
            file_handler.setFormatter(
                logging.Formatter(
                    "%(asctime)s | %(levelname)-5s | %(threadName)s | %(message)s",
                    datefmt="%Y-%m-%d %H:%M:%S",
                )
            )
        logger.addHandler(file_handler)

    if verbose:
        console_handler = RichHandler(
            console=console,
            show_time=False,
            show_path=False,
            markup=False,
        )
        console_handler.setLevel(level)
        logger.addHandler(console_handler)

    _logger = logger
    logger.info(
        "%s %s log opened (pid %d, python %s)", PROG_NAME, VERSION, os.getpid(), platform.python_version()
    )
    logger.info("argv: %s", " ".join(sys.argv))
    return logger


def log(message: str, level: str = "info") -> None:
    """Log a message (if logging is enabled)."""
    if _logger is None:
        return

    _logger.log(_LEVELS.get(level.lower(), logging.INFO), message)


def log_section(title: str) -> None:
    """Log a section header."""
    if _logger is None:
        return

    _logger.info("-- %s --", title)


def log_dict(data: dict[str, object], indent: str = "  ") -> None:
    """Log a dictionary as key-value pairs."""
    if _logger is None:
        return

    for key, value in data.items():
        _logger.info("%s%s = %s", indent, key, value)


def close_logging() -> None:
    """Log the closing line and detach all handlers."""
    global _logger

    if _logger is None:
        return

    _logger.info("%s log closed", PROG_NAME)

    for handler in _logger.handlers[:]:
        handler.close()
        _logger.removeHandler(handler)
    _logger = None


__all__ = [
    "LOGGER_NAME",
    "JSONFormatter",
    "close_logging",
    "log",
    "log_dict",
    "log_section",
    "setup_logging",
]
