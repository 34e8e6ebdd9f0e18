# File: src/mstair/jsoncolor/cli.py
"""
Pretty-print and colorize JSON at the terminal.

Reads a JSON document from a file or stdin, then renders it to stdout with a
Formatter configured from JSONCOLOR_* environment variables and command-line flags.

Usage:
    jsoncolor [PATH] [--indent N] [--max-string-length N] [--raw-strings]
              [--escape-unicode] [--no-color | --force-color] [--json5] [-v | -q]

Exit codes:
    0  success
    2  input file missing or unreadable
    3  invalid JSON, a document nested too deeply, or invalid configuration
    4  writing the output failed
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from decimal import Decimal
from pathlib import Path
from typing import Any

import colorama
import json5
from charset_normalizer import from_bytes

from mstair.jsoncolor.config import FormatterSettings
from mstair.jsoncolor.exceptions import ConfigError, NestingDepthError, SinkWriteError
from mstair.jsoncolor.formatter import Formatter
from mstair.jsoncolor.logging_utils import setup_logging
from mstair.jsoncolor.styles import ColorLevel
from mstair.jsoncolor.terminal import detect_color_level


__all__ = [
    "decode_input",
    "load_document",
    "main",
    "parse_args",
    "run",
]

_LOG = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INPUT = 2
EXIT_INVALID = 3
EXIT_OUTPUT = 4


def decode_input(data: bytes) -> str:
    """Decode raw input bytes using the best detected encoding, dropping any byte-order mark."""
    try:
        detection = from_bytes(data).best()
        text = data.decode(detection.encoding if detection else "utf-8")
    except (UnicodeDecodeError, LookupError):
        text = data.decode("latin1", errors="replace")
    return text.removeprefix("\ufeff")


def load_document(text: str, *, lenient: bool = False) -> Any:
    """
    Parse JSON text into the renderable value domain.

    Fractional numbers become Decimal so they print exactly as written.

    Args:
        text: The JSON (or JSON5 when lenient) text.
        lenient: Accept JSON5: comments, trailing commas, unquoted keys.

    Returns:
        The decoded value.

    Raises:
        ValueError: If the text is not valid JSON / JSON5.
    """
    if lenient:
        return json5.loads(text, parse_float=Decimal)
    return json.loads(text, parse_float=Decimal)


def parse_args(argv: list[str]) -> argparse.Namespace:
    """Parse and return command-line arguments."""
    parser = argparse.ArgumentParser(prog="jsoncolor", description="Pretty-print and colorize JSON.")
    parser.add_argument(
        "path",
        nargs="?",
        default="-",
        help="JSON file to render (default: '-' for stdin)",
    )
    parser.add_argument(
        "-i",
        "--indent",
        type=int,
        help="Spaces per nesting level; 0 renders compactly (default: JSONCOLOR_INDENT or 0)",
    )
    parser.add_argument(
        "-m",
        "--max-string-length",
        type=int,
        help="Truncate strings at this many characters; 0 disables",
    )
    parser.add_argument(
        "--raw-strings",
        action="store_true",
        default=None,
        help="Write string values verbatim, without JSON escaping or quotes.",
    )
    parser.add_argument(
        "--escape-unicode",
        action="store_true",
        default=None,
        help="Escape non-ASCII characters as \\uXXXX.",
    )
    color = parser.add_mutually_exclusive_group()
    color.add_argument("--no-color", action="store_true", help="Disable colors.")
    color.add_argument("--force-color", action="store_true", help="Use colors even when stdout is not a terminal.")
    parser.add_argument("--json5", action="store_true", help="Accept JSON5 input.")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log errors.")
    args = parser.parse_args(argv)
    if args.indent is not None and args.indent < 0:
        parser.error("--indent must be >= 0")
    if args.max_string_length is not None and args.max_string_length < 0:
        parser.error("--max-string-length must be >= 0")
    return args


def _read_input(path: str) -> bytes:
    if path == "-":
        return sys.stdin.buffer.read()
    return Path(path).read_bytes()


def _build_formatter(args: argparse.Namespace, settings: FormatterSettings) -> Formatter:
    settings = settings.replace(
        indent=args.indent,
        max_string_length=args.max_string_length,
        raw_strings=args.raw_strings,
        escape_unicode=args.escape_unicode,
    )
    if args.no_color:
        color_level = ColorLevel.NONE
    elif args.force_color:
        color_level = ColorLevel.TRUECOLOR
        settings = settings.replace(disabled_color=False)
    else:
        color_level = detect_color_level(sys.stdout)
    _LOG.debug("Color level: %s", color_level.name)
    return Formatter(color_level=color_level, **settings.formatter_kwargs())


def main(argv: list[str]) -> int:
    """
    Command-line interface entry point.
    """
    args = parse_args(argv)
    setup_logging(verbose=args.verbose, quiet=args.quiet)
    colorama.just_fix_windows_console()

    try:
        settings = FormatterSettings.from_environment()
    except ConfigError as exc:
        _LOG.error("Invalid configuration: %s", exc)
        return EXIT_INVALID

    try:
        data = _read_input(args.path)
    except OSError as exc:
        _LOG.error("Cannot read %s: %s", args.path, exc)
        return EXIT_INPUT

    try:
        document = load_document(decode_input(data), lenient=args.json5)
    except ValueError as exc:
        _LOG.error("Invalid %s in %s: %s", "JSON5" if args.json5 else "JSON", args.path, exc)
        return EXIT_INVALID

    formatter = _build_formatter(args, settings)
    try:
        written = formatter.render(document, sys.stdout)
        written += formatter.write_through("\n", sys.stdout)
    except SinkWriteError as exc:
        _LOG.error("Output failed: %s", exc)
        return EXIT_OUTPUT
    except NestingDepthError as exc:
        _LOG.error("Cannot render %s: %s", args.path, exc)
        return EXIT_INVALID
    _LOG.debug("Wrote %d bytes", written)
    return EXIT_OK


def run() -> None:
    """Console script entry point."""
    raise SystemExit(main(sys.argv[1:]))


if __name__ == "__main__":
    run()

# End of file: src/mstair/jsoncolor/cli.py
