# File: src/mstair/jsoncolor/logging_utils.py
"""
Shared logging setup for the jsoncolor command-line driver.

`setup_logging()` is called once at startup. Output goes to stderr, so it never mixes
with rendered JSON on stdout, and is formatted with timestamp, logger name, level,
and message text. Level names are colored when stderr is a terminal.

Example:
    >>> from mstair.jsoncolor.logging_utils import setup_logging
    >>> import logging
    >>> setup_logging(verbose=True)
    >>> log = logging.getLogger("example")
    >>> log.info("Processing started")
    2025-10-16 14:22:01,845 - example - INFO - Processing started
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Final

from colorama import Fore
from colorama import Style as AnsiStyle

from mstair.jsoncolor.terminal import is_tty


__all__ = ["LevelColorFormatter", "level_from_environment", "setup_logging"]

LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

LEVEL_COLORS: Final[dict[int, str]] = {
    logging.DEBUG: Fore.LIGHTBLACK_EX,
    logging.INFO: Fore.LIGHTWHITE_EX,
    logging.WARNING: Fore.YELLOW,
    logging.ERROR: Fore.LIGHTRED_EX,
    logging.CRITICAL: Fore.RED + AnsiStyle.BRIGHT,
}


class LevelColorFormatter(logging.Formatter):
    """Formatter that colors the level name of each record."""

    def format(self, record: logging.LogRecord) -> str:
        color = LEVEL_COLORS.get(record.levelno)
        if not color:
            return super().format(record)
        original = record.levelname
        record.levelname = f"{color}{original}{AnsiStyle.RESET_ALL}"
        try:
            return super().format(record)
        finally:
            record.levelname = original


def level_from_environment(default: int = logging.INFO) -> int:
    """Return the level named by LOG_LEVEL (a name or a number), else `default`."""
    raw = os.environ.get("LOG_LEVEL", "").strip().strip("\"'")
    if not raw:
        return default
    if raw.isdigit():
        return int(raw, 10)
    level = logging.getLevelNamesMapping().get(raw.upper())
    return level if isinstance(level, int) and level != logging.NOTSET else default


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Configure standard logging for the driver.

    Args:
        verbose: Enable verbose (DEBUG) logging output.
        quiet: Suppress most logging output.
    """
    if quiet:
        level = logging.ERROR  # Only show errors in quiet mode
    elif verbose:
        level = logging.DEBUG
    else:
        level = level_from_environment()

    handler = logging.StreamHandler(sys.stderr)
    formatter_class = LevelColorFormatter if is_tty(sys.stderr) else logging.Formatter
    handler.setFormatter(formatter_class(LOG_FORMAT))

    logging.basicConfig(level=level, handlers=[handler], force=True)


# End of file: src/mstair/jsoncolor/logging_utils.py
