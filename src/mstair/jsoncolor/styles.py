# File: src/mstair/jsoncolor/styles.py
"""
Terminal style handles for colorized JSON output.

A `Style` wraps text in ANSI control sequences. Each style declares the minimum
`ColorLevel` it needs and may name a fallback for less capable terminals, so a
256-color key style degrades to plain white on a 16-color terminal.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import IntEnum
from typing import Final

from colorama import Fore
from colorama import Style as AnsiStyle


__all__ = [
    "DEFAULT_BOOLEAN_STYLE",
    "DEFAULT_KEY_STYLE",
    "DEFAULT_NULL_STYLE",
    "DEFAULT_NUMBER_STYLE",
    "DEFAULT_PUNCTUATION_STYLE",
    "DEFAULT_STRING_STYLE",
    "ColorLevel",
    "Style",
    "ansi256_code",
    "rgb_code",
]

_ANSI256_SPEC_RX: Final[re.Pattern[str]] = re.compile(r"^256:(?P<n>\d{1,3})$")
_HEX_SPEC_RX: Final[re.Pattern[str]] = re.compile(r"^#(?P<hex>[0-9a-fA-F]{6})$")


class ColorLevel(IntEnum):
    """Color capability of an output terminal, in increasing order."""

    NONE = 0
    ANSI16 = 1
    ANSI256 = 2
    TRUECOLOR = 3


def rgb_code(r: int, g: int, b: int) -> str:
    """
    Convert RGB values to ANSI escape code for terminal color output.

    :param r: Red component (0-255)
    :param g: Green component (0-255)
    :param b: Blue component (0-255)
    :return str: ANSI escape code for the specified RGB color.
    """
    return f"\033[38;2;{max(0, min(255, r))};{max(0, min(255, g))};{max(0, min(255, b))}m"


def ansi256_code(n: int) -> str:
    """Return the ANSI escape code for entry `n` of the 256-color palette."""
    return f"\033[38;5;{max(0, min(255, n))}m"


@dataclass(frozen=True, slots=True)
class Style:
    """
    Opaque handle that wraps text with terminal color control sequences.
    """

    code: str
    """ANSI sequence emitted before the text."""

    level: ColorLevel = ColorLevel.ANSI16
    """Minimum terminal capability needed to show this style."""

    fallback: Style | None = None
    """Style to use instead when the terminal is less capable than `level`."""

    def resolve(self, level: ColorLevel) -> Style | None:
        """Return the first style in the fallback chain that `level` can show, else None."""
        style: Style | None = self
        while style is not None and style.level > level:
            style = style.fallback
        return style

    def apply(self, text: str) -> str:
        return f"{self.code}{text}{AnsiStyle.RESET_ALL}"

    @classmethod
    def parse(cls, spec: str) -> Style | None:
        """
        Build a Style from a textual color spec.

        Accepted forms:
        - colorama color names, case-insensitive: "green", "light_cyan", "bright_red"
        - "#rrggbb" truecolor values
        - "256:<n>" 256-color palette entries
        - "none" or "" for no styling

        :param spec: The color spec.
        :return Style | None: The style, or None for no styling.
        :raises ValueError: If the spec is not recognized.
        """
        text = spec.strip()
        if not text or text.lower() == "none":
            return None

        if match := _HEX_SPEC_RX.match(text):
            hex_digits = match["hex"]
            rgb = [int(hex_digits[i : i + 2], 16) for i in (0, 2, 4)]
            return cls(rgb_code(*rgb), ColorLevel.TRUECOLOR)

        if match := _ANSI256_SPEC_RX.match(text):
            n = int(match["n"])
            if n > 255:
                raise ValueError(f"256-color index out of range: {spec!r}")
            return cls(ansi256_code(n), ColorLevel.ANSI256)

        # Clean up the name then check if it is a valid color from the Fore module
        clean = text.upper().removesuffix("_EX").replace("-", "").replace("_", "")
        if "BRIGHT" in clean:
            clean = clean.replace("BRIGHT", "LIGHT")
        if "LIGHT" in clean:
            clean += "_EX"
        if clean != "RESET" and clean in dir(Fore):
            return cls(getattr(Fore, clean))

        raise ValueError(f"Unrecognized color spec: {spec!r}")


DEFAULT_PUNCTUATION_STYLE: Final[Style] = Style(Fore.WHITE)
DEFAULT_KEY_STYLE: Final[Style] = Style(ansi256_code(250), ColorLevel.ANSI256, fallback=Style(Fore.WHITE))
DEFAULT_STRING_STYLE: Final[Style] = Style(Fore.GREEN)
DEFAULT_BOOLEAN_STYLE: Final[Style] = Style(Fore.YELLOW)
DEFAULT_NUMBER_STYLE: Final[Style] = Style(Fore.CYAN)
DEFAULT_NULL_STYLE: Final[Style] = Style(Fore.MAGENTA)


# End of file: src/mstair/jsoncolor/styles.py
