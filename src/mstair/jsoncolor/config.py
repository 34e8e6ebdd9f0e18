# File: src/mstair/jsoncolor/config.py
"""
Environment-driven Formatter defaults.

Variables (a `.env` file is loaded first, without overriding the process environment):

- JSONCOLOR_INDENT: spaces per nesting level (int >= 0)
- JSONCOLOR_MAX_STRING_LENGTH: string truncation threshold (int >= 0)
- JSONCOLOR_RAW_STRINGS, JSONCOLOR_ESCAPE_UNICODE, JSONCOLOR_DISABLE_COLOR: boolean flags
- JSONCOLOR_STYLES: DSL of `category=style` fragments, e.g. "key=blue; string=#88cc88"
- JSONCOLOR_STYLE_<CATEGORY>: style for one category, wins over JSONCOLOR_STYLES

Categories: punctuation, key, string, number, boolean, null.
Styles: see `Style.parse()`; "none" disables styling for the category.

Example:
    >>> from mstair.jsoncolor.formatter import Formatter
    >>> settings = FormatterSettings.from_environment({"JSONCOLOR_INDENT": "2"})
    >>> Formatter(**settings.formatter_kwargs()).indent
    2
"""

from __future__ import annotations

import dataclasses
import logging
import os
import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import IO, Any, Final

import dotenv

from mstair.jsoncolor.exceptions import ConfigError
from mstair.jsoncolor.styles import Style


__all__ = [
    "ENV_PREFIX",
    "STYLE_CATEGORIES",
    "FormatterSettings",
    "fs_load_dotenv",
]

_LOG = logging.getLogger(__name__)

ENV_PREFIX: Final[str] = "JSONCOLOR_"
STYLE_CATEGORIES: Final[tuple[str, ...]] = ("punctuation", "key", "string", "number", "boolean", "null")

_FRAGMENT_SEPARATOR_RX: Final[re.Pattern[str]] = re.compile(r"[;, ]+")
_ASSIGNMENT_OPERATOR_RX: Final[re.Pattern[str]] = re.compile(r"[:=]+")
_TRUE_WORDS: Final[frozenset[str]] = frozenset({"1", "true", "yes", "on"})
_FALSE_WORDS: Final[frozenset[str]] = frozenset({"0", "false", "no", "off"})


def fs_load_dotenv(
    *,
    dotenv_path: str | os.PathLike[str] | None = None,
    stream: IO[str] | None = None,
    override: bool = False,
) -> bool:
    """
    Parse a .env file and load the variables found into the environment.

    :param dotenv_path: Absolute or relative path to the .env file.
    :param stream: Text stream with .env content, used if `dotenv_path` is None.
    :param override: Whether .env values replace variables that are already set.
    :return: True if at least one environment variable is set else False

    If both `dotenv_path` and `stream` are None, `find_dotenv()` locates the file,
    searching upward from the current working directory.
    """
    if dotenv_path is None and stream is None:
        dotenv_path = dotenv.find_dotenv(usecwd=True)
    return dotenv.load_dotenv(dotenv_path=dotenv_path, stream=stream, override=override)


@dataclass(slots=True)
class FormatterSettings:
    """
    Formatter options resolved from the environment.

    Fields left as None were not configured and keep the Formatter defaults.
    """

    indent: int | None = None
    max_string_length: int | None = None
    raw_strings: bool | None = None
    escape_unicode: bool | None = None
    disabled_color: bool | None = None
    styles: dict[str, Style | None] = field(default_factory=dict)
    """Configured styles by category; a None value means "no styling"."""

    @classmethod
    def from_environment(cls, environ: Mapping[str, str] | None = None) -> FormatterSettings:
        """
        Read settings from `environ`, or from os.environ after loading a .env file.

        :raises ConfigError: If a variable holds an invalid value.
        """
        if environ is None:
            fs_load_dotenv()
            environ = os.environ

        settings = cls(
            indent=_int_var(environ, "INDENT"),
            max_string_length=_int_var(environ, "MAX_STRING_LENGTH"),
            raw_strings=_bool_var(environ, "RAW_STRINGS"),
            escape_unicode=_bool_var(environ, "ESCAPE_UNICODE"),
            disabled_color=_bool_var(environ, "DISABLE_COLOR"),
        )
        dsl = environ.get(ENV_PREFIX + "STYLES", "")
        for category, spec in _parse_styles_dsl(dsl):
            settings.styles[category] = _parse_style(ENV_PREFIX + "STYLES", spec)
        for category in STYLE_CATEGORIES:
            name = f"{ENV_PREFIX}STYLE_{category.upper()}"
            if name in environ:
                settings.styles[category] = _parse_style(name, environ[name])

        _LOG.debug("Formatter settings from environment: %r", settings)
        return settings

    def replace(self, **overrides: Any) -> FormatterSettings:
        """Return a copy with each non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return dataclasses.replace(self, **changes)

    def formatter_kwargs(self) -> dict[str, Any]:
        """Return keyword arguments for `Formatter` covering only the configured options."""
        kwargs: dict[str, Any] = {
            name: value
            for name in ("indent", "max_string_length", "raw_strings", "escape_unicode", "disabled_color")
            if (value := getattr(self, name)) is not None
        }
        for category, style in self.styles.items():
            kwargs[f"{category}_style"] = style
        return kwargs


def _parse_styles_dsl(dsl: str) -> Iterator[tuple[str, str]]:
    """Yield (category, spec) pairs from a `category=style` DSL string."""
    for fragment in _FRAGMENT_SEPARATOR_RX.split(dsl):
        part = fragment.strip()
        if not part:
            continue
        segs = _ASSIGNMENT_OPERATOR_RX.split(part, maxsplit=1)
        if len(segs) != 2:
            raise ConfigError(ENV_PREFIX + "STYLES", part, "category=style")
        category = segs[0].strip().strip("'\"").lower()
        if category not in STYLE_CATEGORIES:
            raise ConfigError(ENV_PREFIX + "STYLES", part, f"a category in {', '.join(STYLE_CATEGORIES)}")
        yield category, segs[1].strip().strip("'\"")


def _parse_style(name: str, spec: str) -> Style | None:
    try:
        return Style.parse(spec)
    except ValueError as exc:
        raise ConfigError(name, spec, "a color name, #rrggbb, 256:<n> or none") from exc


def _int_var(environ: Mapping[str, str], suffix: str) -> int | None:
    name = ENV_PREFIX + suffix
    raw = environ.get(name, "").strip()
    if not raw:
        return None
    if not raw.isdigit():
        raise ConfigError(name, raw, "a non-negative integer")
    return int(raw, 10)


def _bool_var(environ: Mapping[str, str], suffix: str) -> bool | None:
    name = ENV_PREFIX + suffix
    raw = environ.get(name, "").strip().lower()
    if not raw:
        return None
    if raw in _TRUE_WORDS:
        return True
    if raw in _FALSE_WORDS:
        return False
    raise ConfigError(name, raw, "one of 1/true/yes/on or 0/false/no/off")


# End of file: src/mstair/jsoncolor/config.py
