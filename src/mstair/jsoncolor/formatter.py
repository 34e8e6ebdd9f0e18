# File: src/mstair/jsoncolor/formatter.py
"""
Recursive, colorized JSON renderer.

`Formatter.render()` walks a value depth-first and writes its text to a sink:

- objects render as `{` + key-sorted `"key": value` pairs + `}`
- records render like objects but keep their declaration order
- arrays render as `[` + elements + `]`
- strings are JSON-escaped and quoted (unless `raw_strings`), then truncated
- numbers, booleans and null render as their JSON literals

With `indent == 0` entries are separated by single spaces on one line; with
`indent > 0` every entry sits on its own line, indented `indent` spaces per level,
and closing braces align with the line that opened them.

Example:
    >>> import io
    >>> out = io.StringIO()
    >>> Formatter(disabled_color=True).render({"b": [1, 2], "a": None}, out)
    28
    >>> out.getvalue()
    '{ "a": null, "b": [ 1, 2 ] }'
"""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from decimal import Decimal
from typing import IO, Any, Final

from mstair.jsoncolor.exceptions import NestingDepthError
from mstair.jsoncolor.model import Kind, Record, deref, format_number, kind_of
from mstair.jsoncolor.sink import SinkWriter
from mstair.jsoncolor.styles import (
    DEFAULT_BOOLEAN_STYLE,
    DEFAULT_KEY_STYLE,
    DEFAULT_NULL_STYLE,
    DEFAULT_NUMBER_STYLE,
    DEFAULT_PUNCTUATION_STYLE,
    DEFAULT_STRING_STYLE,
    ColorLevel,
    Style,
)


__all__ = ["Formatter"]

INITIAL_DEPTH: Final[int] = 0
MAX_NESTING_DEPTH: Final[int] = 256
"""Default container nesting limit; two interpreter frames are used per level."""
VALUE_SEP: Final[str] = ","
KEY_SEP: Final[str] = ": "
NULL: Final[str] = "null"
START_MAP: Final[str] = "{"
END_MAP: Final[str] = "}"
START_ARRAY: Final[str] = "["
END_ARRAY: Final[str] = "]"
EMPTY_MAP: Final[str] = START_MAP + END_MAP
EMPTY_ARRAY: Final[str] = START_ARRAY + END_ARRAY
ELLIPSIS: Final[str] = "..."


@dataclass(kw_only=True)
class Formatter:
    """
    Renders JSON-like values as indented, optionally colorized text.

    Configure by keyword or by assigning fields before calling `render()`; fields are
    only read during a render, so one instance can serve many sequential renders.
    """

    indent: int = 0
    """Spaces per nesting level; 0 renders each container on a single line."""

    punctuation_style: Style | None = DEFAULT_PUNCTUATION_STYLE
    """Style for braces, brackets and commas."""

    key_style: Style | None = DEFAULT_KEY_STYLE
    """Style for object keys, including the trailing `": "`."""

    string_style: Style | None = DEFAULT_STRING_STYLE
    number_style: Style | None = DEFAULT_NUMBER_STYLE
    boolean_style: Style | None = DEFAULT_BOOLEAN_STYLE
    null_style: Style | None = DEFAULT_NULL_STYLE

    max_string_length: int = 0
    """Truncate string text at this many characters and append `...`; 0 disables."""

    disabled_color: bool = False
    """If True, no style is applied regardless of the style fields."""

    raw_strings: bool = False
    """If True, string values are written verbatim instead of JSON-escaped and quoted."""

    escape_unicode: bool = False
    """If True, non-ASCII characters in strings and keys are written as `\\uXXXX` escapes."""

    color_level: ColorLevel = ColorLevel.TRUECOLOR
    """Capability of the target terminal, decided by the caller."""

    max_nesting_depth: int = MAX_NESTING_DEPTH
    """Deepest container nesting rendered; deeper values raise NestingDepthError."""

    def __post_init__(self) -> None:
        if self.indent < 0:
            raise ValueError(f"indent must be >= 0, got {self.indent}")
        if self.max_string_length < 0:
            raise ValueError(f"max_string_length must be >= 0, got {self.max_string_length}")
        if self.max_nesting_depth < 1:
            raise ValueError(f"max_nesting_depth must be >= 1, got {self.max_nesting_depth}")

    def render(self, value: Any, sink: IO[bytes] | IO[str] | Any) -> int:
        """
        Write the rendering of `value` to `sink`, without a trailing newline.

        :param value: The value to render.
        :param sink: Binary stream (receives UTF-8) or text stream.
        :return int: Number of bytes written, control sequences included.
        :raises SinkWriteError: On the first failed write; nothing is retried.
        :raises NestingDepthError: If containers nest deeper than `max_nesting_depth`.
        """
        writer = SinkWriter(sink)
        self._render_value(value, writer, INITIAL_DEPTH)
        writer.flush()
        return writer.bytes_written

    def write_through(self, text: str, sink: IO[bytes] | IO[str] | Any) -> int:
        """Write already rendered text to `sink` unchanged."""
        writer = SinkWriter(sink)
        writer.write(text)
        writer.flush()
        return writer.bytes_written

    # == Dispatcher ==

    def _render_value(self, value: Any, w: SinkWriter, depth: int) -> int:
        value = deref(value)
        match kind_of(value):
            case Kind.RECORD:
                record = Record.from_object(value)
                return self._render_entries(self._record_entries(record), len(record), w, depth)
            case Kind.OBJECT:
                return self._render_entries(self._object_entries(value), len(value), w, depth)
            case Kind.ARRAY:
                return self._render_array(value, w, depth)
            case Kind.STRING:
                return self._render_string(value, w)
            case Kind.BOOLEAN:
                return w.write(self._colorize(self.boolean_style, "true" if value else "false"))
            case Kind.NUMBER:
                return self._render_number(value, w)
            case Kind.NULL:
                return w.write(self._colorize(self.null_style, NULL))
            case Kind.UNKNOWN:
                # Unrecognized shapes are skipped: nothing written, no error.
                return 0

    # == Containers ==

    @staticmethod
    def _object_entries(mapping: Mapping[Any, Any]) -> Iterator[tuple[str, Any]]:
        """Entries of a dynamic mapping, sorted by key."""
        keyed = sorted(((str(k), v) for k, v in mapping.items()), key=lambda kv: kv[0])
        yield from keyed

    @staticmethod
    def _record_entries(record: Record) -> Iterator[tuple[str, Any]]:
        """Entries of a record, in declaration order."""
        for field in record:
            yield field.name, field.value

    def _render_entries(
        self,
        entries: Iterator[tuple[str, Any]],
        count: int,
        w: SinkWriter,
        depth: int,
    ) -> int:
        self._check_depth(w, depth)
        if count == 0:
            return w.write(self._colorize(self.punctuation_style, EMPTY_MAP))

        written = w.write(self._colorize(self.punctuation_style, START_MAP))
        written += self._write_obj_sep(w)

        remaining = count
        for key, value in entries:
            written += self._write_indent(w, depth + 1)
            quoted = json.dumps(key, ensure_ascii=self.escape_unicode)
            written += w.write(self._colorize(self.key_style, quoted + KEY_SEP))
            written += self._render_value(value, w, depth + 1)

            remaining -= 1
            if remaining:
                written += w.write(self._colorize(self.punctuation_style, VALUE_SEP))
            written += self._write_obj_sep(w)

        written += self._write_indent(w, depth)
        written += w.write(self._colorize(self.punctuation_style, END_MAP))
        return written

    def _render_array(self, items: Sequence[Any], w: SinkWriter, depth: int) -> int:
        self._check_depth(w, depth)
        if not items:
            return w.write(self._colorize(self.punctuation_style, EMPTY_ARRAY))

        written = w.write(self._colorize(self.punctuation_style, START_ARRAY))
        written += self._write_obj_sep(w)

        last = len(items) - 1
        for index, item in enumerate(items):
            written += self._write_indent(w, depth + 1)
            written += self._render_value(item, w, depth + 1)
            if index < last:
                written += w.write(self._colorize(self.punctuation_style, VALUE_SEP))
            written += self._write_obj_sep(w)

        written += self._write_indent(w, depth)
        written += w.write(self._colorize(self.punctuation_style, END_ARRAY))
        return written

    # == Scalars ==

    def _render_string(self, text: str, w: SinkWriter) -> int:
        if not self.raw_strings:
            text = json.dumps(text, ensure_ascii=self.escape_unicode)
        if self.max_string_length and len(text) >= self.max_string_length:
            text = text[: self.max_string_length] + ELLIPSIS
        return w.write(self._colorize(self.string_style, text))

    def _render_number(self, number: int | float | Decimal, w: SinkWriter) -> int:
        return w.write(self._colorize(self.number_style, format_number(number)))

    # == Layout and style helpers ==

    def _check_depth(self, w: SinkWriter, depth: int) -> None:
        # The root container sits at depth 0.
        if depth >= self.max_nesting_depth:
            raise NestingDepthError(self.max_nesting_depth, w.bytes_written)

    def _write_indent(self, w: SinkWriter, depth: int) -> int:
        return w.write(" " * (self.indent * depth))

    def _write_obj_sep(self, w: SinkWriter) -> int:
        return w.write("\n" if self.indent else " ")

    def _colorize(self, style: Style | None, text: str) -> str:
        if self.disabled_color or style is None:
            return text
        resolved = style.resolve(self.color_level)
        return resolved.apply(text) if resolved is not None else text


# End of file: src/mstair/jsoncolor/formatter.py
