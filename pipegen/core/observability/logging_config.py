"""
Logging configuration for the pipegen CLI.

Only the ``pipegen`` logger tree is configured; the root logger and
any host application's handlers are left alone. Level precedence:
CLI flag > PIPEGEN_LOG_LEVEL > WARNING. PIPEGEN_LOG_FILE adds a file
handler with its own level (PIPEGEN_LOG_FILE_LEVEL).
"""

from __future__ import annotations

import logging
import sys

PACKAGE_LOGGER = "pipegen"

_FMT_MINIMAL = "%(message)s"
_FMT_VERBOSE = "%(asctime)s [%(name)s] %(message)s"
_FMT_DEBUG = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_DATEFMT_CONSOLE = "%H:%M:%S"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> logging.Logger:
    """Attach console (and optional file) handlers to the pipegen logger.

    Safe to call repeatedly: previous pipegen handlers are closed and
    replaced. Returns the configured logger.
    """
    numeric_level = _parse_level(level)

    if numeric_level <= logging.DEBUG:
        fmt, datefmt = _FMT_DEBUG, _DATEFMT_CONSOLE
    elif numeric_level <= logging.INFO:
        fmt, datefmt = _FMT_VERBOSE, _DATEFMT_CONSOLE
    else:
        fmt, datefmt = _FMT_MINIMAL, None

    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(numeric_level)
    console.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    logger.addHandler(console)

    effective_level = numeric_level
    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else numeric_level
        effective_level = min(effective_level, file_level)

        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_DEBUG, datefmt=_DATEFMT_FILE))
        logger.addHandler(fh)

    logger.setLevel(effective_level)
    # Handled here; don't duplicate into the root logger
    logger.propagate = False
    return logger


def _parse_level(level: str | None) -> int:
    """Level name → numeric constant, WARNING for unknown names."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
