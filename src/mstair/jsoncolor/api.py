# File: src/mstair/jsoncolor/api.py
"""
`json`-module style entry points.

- `marshal()` renders straight to a stream, like `json.dump()`.
- `dumps()` returns the rendering as a string, like `json.dumps()`.

Both accept the `Formatter` fields as keyword options.
"""

from __future__ import annotations

import dataclasses
import io
from functools import cache
from typing import IO, Any

from mstair.jsoncolor.formatter import Formatter


__all__ = [
    "FORMATTER_VALID_KWARGS",
    "dumps",
    "marshal",
]


def marshal(value: Any, sink: IO[bytes] | IO[str] | Any, **options: Any) -> int:
    """
    Render `value` to `sink` with a Formatter built from `options`.

    Args:
        value: The value to render.
        sink: Binary or text output stream.
        **options: Formatter fields (indent, max_string_length, disabled_color, ...).

    Returns:
        int: Number of bytes written.

    Raises:
        TypeError: If an option is not a Formatter field.
        SinkWriteError: If the sink fails.
    """
    return _formatter(options).render(value, sink)


def dumps(value: Any, *, string_bypass: bool = False, **options: Any) -> str:
    """
    Return the rendering of `value` as a string.

    Args:
        value: The value to render.
        string_bypass: If True and value is a str, return it unchanged (already rendered text).
        **options: Formatter fields.

    Returns:
        str: The rendered text, without a trailing newline.
    """
    formatter = _formatter(options)
    buffer = io.StringIO()
    if string_bypass and isinstance(value, str):
        formatter.write_through(value, buffer)
    else:
        formatter.render(value, buffer)
    return buffer.getvalue()


def _formatter(options: dict[str, Any]) -> Formatter:
    unknown = set(options) - FORMATTER_VALID_KWARGS()
    if unknown:
        raise TypeError(f"Unknown formatter option(s): {', '.join(sorted(unknown))}")
    return Formatter(**options)


@cache
def FORMATTER_VALID_KWARGS() -> frozenset[str]:
    """Return the set of option names accepted by Formatter."""
    return frozenset(f.name for f in dataclasses.fields(Formatter) if f.init)


# End of file: src/mstair/jsoncolor/api.py
