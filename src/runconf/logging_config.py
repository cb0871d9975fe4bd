# runconf/logging_config.py
"""
Logging helpers for applications embedding runconf.

runconf itself only creates module loggers under the "runconf" namespace.
These helpers attach handlers to that namespace without touching the root
logger.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

PACKAGE_LOGGER = "runconf"

FORMATS = {
    "simple": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    "detailed": "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s",
}

_log_file_path: Path | None = None


def setup_logging(
    level: str | int = "INFO",
    *,
    console: bool = True,
    file: bool = False,
    log_dir: str | Path = ".runconf/logs",
    format: Literal["simple", "detailed"] = "simple",
    format_string: str | None = None,
    propagate: bool = True,
) -> logging.Logger:
    """
    Configure the runconf package logger.

    Calling it again replaces the handlers installed by a previous call.

    Args:
        level: Log level name or number
        console: Log to stderr
        file: Also log to <log_dir>/runconf.log
        log_dir: Directory for the log file
        format: Named format ("simple" or "detailed")
        format_string: Custom format, overrides `format`
        propagate: Set False to keep records away from the root logger's handlers
    """
    global _log_file_path

    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if isinstance(level, str):
        level = level.upper()
    logger.setLevel(level)
    logger.propagate = propagate
    logger.disabled = False

    formatter = logging.Formatter(format_string or FORMATS[format])

    if console:
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)

    _log_file_path = None
    if file:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        _log_file_path = log_path / "runconf.log"
        file_handler = logging.FileHandler(_log_file_path)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    return logger


def disable_logging() -> None:
    """Silence all runconf log output (useful for tests)."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.addHandler(logging.NullHandler())
    logger.propagate = False
    logger.disabled = True


def get_log_file_path() -> Path | None:
    """Path of the log file set up by setup_logging(file=True), if any."""
    return _log_file_path
