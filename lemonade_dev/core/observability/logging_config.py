"""
Logging configuration for the ``lemonade`` CLI.

Only the ``lemonade_dev`` logger tree is configured.  The dev loop loads
the application's entrypoint into this same process, and that
application owns the root logger.

Levels are resolved in precedence order:
    CLI flag  >  LEMON_LOG_LEVEL  >  WARNING

LEMON_LOG_FILE adds a file handler, at LEMON_LOG_FILE_LEVEL when set.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Mapping

PACKAGE_LOGGER = "lemonade_dev"

LOG_LEVEL_ENV = "LEMON_LOG_LEVEL"
LOG_FILE_ENV = "LEMON_LOG_FILE"
LOG_FILE_LEVEL_ENV = "LEMON_LOG_FILE_LEVEL"

# Bare messages at WARNING and above; module and level once tracing
_CONSOLE_FMT = "%(message)s"
_CONSOLE_TRACE_FMT = "lemonade %(levelname)s %(name)s: %(message)s"
_FILE_FMT = "%(asctime)s %(levelname)s %(name)s:%(lineno)d %(message)s"


def level_from_flags(debug: bool = False, verbose: bool = False, quiet: bool = False) -> str | None:
    """Level named by the global CLI flags, or None when none was given."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return None


def parse_level(level: str | None) -> int:
    """Numeric level for a name; unknown or empty names mean WARNING."""
    if not level:
        return logging.WARNING
    numeric = logging.getLevelName(level.strip().upper())
    return numeric if isinstance(numeric, int) else logging.WARNING


def setup_logging(
    level: str | None = None,
    log_file: str | None = None,
    log_file_level: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> logging.Logger:
    """Attach console (and optional file) handlers to the package logger.

    Arguments left as None fall back to the LEMON_LOG_* variables in
    ``environ`` (default: the process environment).  Calling it again
    replaces the handlers of the previous call.

    Returns:
        The configured ``lemonade_dev`` logger.
    """
    env = os.environ if environ is None else environ
    console_level = parse_level(level or env.get(LOG_LEVEL_ENV))
    log_file = log_file or env.get(LOG_FILE_ENV) or None
    log_file_level = log_file_level or env.get(LOG_FILE_LEVEL_ENV)

    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    fmt = _CONSOLE_FMT if console_level >= logging.WARNING else _CONSOLE_TRACE_FMT
    console.setFormatter(logging.Formatter(fmt))
    logger.addHandler(console)

    effective = console_level
    if log_file:
        file_level = parse_level(log_file_level) if log_file_level else console_level
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FILE_FMT))
        logger.addHandler(fh)
        effective = min(effective, file_level)

    logger.setLevel(effective)
    logger.propagate = False
    return logger
