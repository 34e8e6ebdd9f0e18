# File: src/mstair/jsoncolor/terminal.py
"""
Terminal color capability detection.

`detect_color_level()` is meant to be called once by a driver program; its result is
passed to `Formatter(color_level=...)` rather than stored as global state.

Detection order:
  1. NO_COLOR (non-empty) disables color.
  2. FORCE_COLOR forces color on (or off for 0/false/no), skipping the TTY check.
  3. A stream that is not a TTY gets no color.
  4. TERM=dumb gets no color.
  5. COLORTERM=truecolor/24bit, or Windows Terminal, gets TRUECOLOR.
  6. A TERM containing "256color" gets ANSI256.
  7. Anything else gets ANSI16.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from typing import Any, Final

from mstair.jsoncolor.styles import ColorLevel


__all__ = ["detect_color_level", "is_tty"]

_FALSE_WORDS: Final[frozenset[str]] = frozenset({"0", "false", "no", "off"})
_FORCED_LEVELS: Final[dict[str, ColorLevel]] = {
    "2": ColorLevel.ANSI256,
    "3": ColorLevel.TRUECOLOR,
}


def is_tty(stream: Any) -> bool:
    """Return True if `stream` reports being attached to a terminal."""
    isatty = getattr(stream, "isatty", None)
    if not callable(isatty):
        return False
    try:
        return bool(isatty())
    except (OSError, ValueError):
        return False


def detect_color_level(
    stream: Any = None,
    environ: Mapping[str, str] | None = None,
) -> ColorLevel:
    """
    Decide how many colors output to `stream` can show.

    :param stream: Output stream, defaults to sys.stdout.
    :param environ: Environment mapping, defaults to os.environ.
    :return ColorLevel: The detected capability.
    """
    env = os.environ if environ is None else environ
    target = sys.stdout if stream is None else stream

    if env.get("NO_COLOR"):
        return ColorLevel.NONE

    forced = env.get("FORCE_COLOR")
    if forced is not None:
        forced = forced.strip().lower()
        if forced in _FALSE_WORDS:
            return ColorLevel.NONE
        return max(_FORCED_LEVELS.get(forced, ColorLevel.ANSI16), _level_from_term(env))

    if not is_tty(target):
        return ColorLevel.NONE
    if env.get("TERM", "").lower() == "dumb":
        return ColorLevel.NONE
    return _level_from_term(env)


def _level_from_term(env: Mapping[str, str]) -> ColorLevel:
    if env.get("COLORTERM", "").lower() in {"truecolor", "24bit"} or env.get("WT_SESSION"):
        return ColorLevel.TRUECOLOR
    if "256color" in env.get("TERM", "").lower():
        return ColorLevel.ANSI256
    return ColorLevel.ANSI16


# End of file: src/mstair/jsoncolor/terminal.py
