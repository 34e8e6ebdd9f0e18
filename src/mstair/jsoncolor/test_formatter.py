# File: src/mstair/jsoncolor/test_formatter.py
"""
Unit tests for Formatter: layout, ordering, scalars, styling and sink failures.

Most tests render with color disabled so expected output stays readable; the
styling tests compare against colorama's escape sequences directly.
"""

from __future__ import annotations

import dataclasses
import io
import json
import tempfile
import weakref
from decimal import Decimal
from typing import Any, NamedTuple

import pytest
from colorama import Fore
from colorama import Style as AnsiStyle

from mstair.jsoncolor.exceptions import NestingDepthError, SinkWriteError
from mstair.jsoncolor.formatter import MAX_NESTING_DEPTH, Formatter
from mstair.jsoncolor.model import Record, Ref
from mstair.jsoncolor.styles import ColorLevel, Style, ansi256_code


RESET = AnsiStyle.RESET_ALL

SAMPLE_TEXT = """{
  "str": "foo",
  "num": 100,
  "bool": false,
  "null": null,
  "array": ["foo", "bar", "baz"],
  "obj": { "a": 1, "b": 2 }
}"""

SAMPLE_INDENT_2 = """{
  "array": [
    "foo",
    "bar",
    "baz"
  ],
  "bool": false,
  "null": null,
  "num": 100,
  "obj": {
    "a": 1,
    "b": 2
  },
  "str": "foo"
}"""


# == Fixtures ==


@dataclasses.dataclass
class Point:
    y: int
    x: int


class Pair(NamedTuple):
    right: str
    left: str


class FailingSink:
    """Binary sink that accepts `budget` writes, then raises."""

    def __init__(self, budget: int) -> None:
        self.budget = budget
        self.data = bytearray()

    def write(self, data: bytes) -> int:
        if self.budget <= 0:
            raise BrokenPipeError("pipe closed")
        self.budget -= 1
        self.data.extend(data)
        return len(data)


class ShortSink:
    """Binary sink that accepts only the first byte of every write."""

    def write(self, data: bytes) -> int:
        return 1


class StrOnlySink:
    """Sink with no `mode` that rejects bytes."""

    def write(self, data: Any) -> int:
        if not isinstance(data, str):
            raise TypeError("write() argument must be str")
        return len(data)


def nested_lists(levels: int) -> list[Any]:
    value: list[Any] = []
    for _ in range(levels - 1):
        value = [value]
    return value


@pytest.fixture
def sample() -> dict[str, Any]:
    return json.loads(SAMPLE_TEXT)


def render(value: Any, **options: Any) -> str:
    options.setdefault("disabled_color", True)
    out = io.StringIO()
    Formatter(**options).render(value, out)
    return out.getvalue()


# == Layout ==


@pytest.mark.unit
def test_sample_document_indent_2(sample: dict[str, Any]) -> None:
    assert render(sample, indent=2) == SAMPLE_INDENT_2


@pytest.mark.unit
def test_sample_document_compact(sample: dict[str, Any]) -> None:
    expected = (
        '{ "array": [ "foo", "bar", "baz" ], "bool": false, "null": null, '
        '"num": 100, "obj": { "a": 1, "b": 2 }, "str": "foo" }'
    )
    assert render(sample) == expected


@pytest.mark.unit
def test_nested_closing_braces_align_with_opening_depth() -> None:
    lines = render({"obj": {"a": 1, "b": 2}}, indent=2).splitlines()
    assert lines == ["{", '  "obj": {', '    "a": 1,', '    "b": 2', "  }", "}"]
    inner_close = lines[4]
    outer_close = lines[5]
    assert inner_close.index("}") == outer_close.index("}") + 2
    assert outer_close.index("}") == 0


@pytest.mark.unit
def test_array_of_arrays_indents_each_level() -> None:
    assert render([[1], []], indent=4) == "[\n    [\n        1\n    ],\n    []\n]"


@pytest.mark.unit
@pytest.mark.parametrize("indent", [0, 2, 4])
def test_empty_containers_ignore_indent(indent: int) -> None:
    assert render({}, indent=indent) == "{}"
    assert render([], indent=indent) == "[]"
    assert render(Record(), indent=indent) == "{}"


@pytest.mark.unit
def test_scalar_only_values_render_on_one_line() -> None:
    for value in ["multi\nline", 1.5, True, None, -7, Decimal("3.25")]:
        assert "\n" not in render(value)


@pytest.mark.unit
def test_top_level_commas_and_no_trailing_comma() -> None:
    value = {"c": 3, "a": 1, "b": 2, "d": 4}
    text = render(value)
    assert text.count(",") == len(value) - 1
    assert not text.rstrip("} ").endswith(",")
    pretty = render(value, indent=2)
    assert pretty.splitlines()[-2] == '  "d": 4'


# == Ordering ==


@pytest.mark.unit
def test_object_keys_are_sorted_regardless_of_insertion_order() -> None:
    assert render({"b": 1, "a": 2}) == '{ "a": 2, "b": 1 }'


@pytest.mark.unit
def test_non_string_keys_sort_by_their_text() -> None:
    assert render({10: "x", 9: "y"}) == '{ "10": "x", "9": "y" }'


@pytest.mark.unit
def test_records_keep_declaration_order() -> None:
    assert render(Record([("y", 1), ("x", 2)])) == '{ "y": 1, "x": 2 }'
    assert render(Point(y=1, x=2)) == '{ "y": 1, "x": 2 }'


@pytest.mark.unit
def test_named_tuple_is_an_array_until_converted() -> None:
    pair = Pair(right="r", left="l")
    assert render(pair) == '[ "r", "l" ]'
    assert render(Record.from_object(pair)) == '{ "right": "r", "left": "l" }'


@pytest.mark.unit
def test_record_fields_provider_is_rendered_in_its_order() -> None:
    class Version:
        def __record_fields__(self) -> list[tuple[str, Any]]:
            return [("major", 1), ("minor", 2), ("label", None)]

    assert render(Version()) == '{ "major": 1, "minor": 2, "label": null }'


# == Scalars ==


@pytest.mark.unit
@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (100, "100"),
        (100.0, "100"),
        (1.5, "1.5"),
        (-0.25, "-0.25"),
        (Decimal("1.50"), "1.50"),
        (10**20, "100000000000000000000"),
        (False, "false"),
        (True, "true"),
        (None, "null"),
        ("foo", '"foo"'),
    ],
)
def test_scalar_literals(value: Any, expected: str) -> None:
    assert render(value) == expected


@pytest.mark.unit
def test_string_escaping() -> None:
    assert render('say "hi"\n\\') == r'"say \"hi\"\n\\"'
    assert render("\x01") == r'"\u0001"'


@pytest.mark.unit
def test_non_ascii_passes_through_unless_escaped() -> None:
    assert render("café") == '"café"'
    assert render("café", escape_unicode=True) == r'"caf\u00e9"'
    assert render({"é": 1}, escape_unicode=True) == r'{ "\u00e9": 1 }'


@pytest.mark.unit
def test_raw_strings_skip_escaping_but_not_keys() -> None:
    assert render({"k": 'a"b'}, raw_strings=True) == '{ "k": a"b }'


@pytest.mark.unit
def test_truncation_with_raw_strings() -> None:
    assert render("abcdef", raw_strings=True, max_string_length=3) == "abc..."
    assert render("abcdef", raw_strings=True, max_string_length=0) == "abcdef"


@pytest.mark.unit
def test_truncation_applies_to_escaped_text_and_at_threshold() -> None:
    # '"abc"' is 5 characters once quoted
    assert render("abc", max_string_length=5) == '"abc"...'
    assert render("abc", max_string_length=6) == '"abc"'
    assert render("abcdef", max_string_length=3) == '"ab...'


# == Dispatch edge cases ==


@pytest.mark.unit
def test_unknown_values_write_nothing() -> None:
    out = io.BytesIO()
    written = Formatter(disabled_color=True).render({1, 2}, out)
    assert written == 0
    assert out.getvalue() == b""
    assert render({"a": object(), "b": 1}) == '{ "a": , "b": 1 }'


@pytest.mark.unit
def test_references_are_dereferenced() -> None:
    assert render(Ref(5)) == "5"
    assert render(Ref(Ref("x"))) == '"x"'
    assert render(Ref()) == "null"
    assert render(Ref(Ref(Ref(1)))) == ""


@pytest.mark.unit
def test_weak_references() -> None:
    target = Point(y=1, x=2)
    ref = weakref.ref(target)
    assert render(ref) == '{ "y": 1, "x": 2 }'
    del target
    assert render(ref) == "null"


# == Styling ==


@pytest.mark.unit
def test_default_styles_wrap_each_token() -> None:
    out = io.StringIO()
    Formatter().render({"a": [1, "s", True, None]}, out)
    white = Fore.WHITE
    expected = (
        f"{white}{{{RESET} "
        f'{ansi256_code(250)}"a": {RESET}'
        f"{white}[{RESET} "
        f"{Fore.CYAN}1{RESET}{white},{RESET} "
        f'{Fore.GREEN}"s"{RESET}{white},{RESET} '
        f"{Fore.YELLOW}true{RESET}{white},{RESET} "
        f"{Fore.MAGENTA}null{RESET} "
        f"{white}]{RESET} "
        f"{white}}}{RESET}"
    )
    assert out.getvalue() == expected


@pytest.mark.unit
def test_disabled_color_output_ignores_styles(sample: dict[str, Any]) -> None:
    plain = render(sample, indent=2)
    loud = Style(Fore.RED)
    restyled = render(
        sample,
        indent=2,
        punctuation_style=loud,
        key_style=loud,
        string_style=loud,
        number_style=None,
        boolean_style=loud,
        null_style=loud,
    )
    assert restyled == plain == SAMPLE_INDENT_2


@pytest.mark.unit
def test_color_level_none_renders_plain(sample: dict[str, Any]) -> None:
    assert render(sample, indent=2, disabled_color=False, color_level=ColorLevel.NONE) == SAMPLE_INDENT_2


@pytest.mark.unit
def test_key_style_falls_back_on_16_color_terminals() -> None:
    text = render({"a": 1}, disabled_color=False, color_level=ColorLevel.ANSI16, number_style=None)
    assert f'{Fore.WHITE}"a": {RESET}1' in text
    assert ansi256_code(250) not in text


@pytest.mark.unit
def test_missing_style_leaves_category_unstyled() -> None:
    assert render(3, disabled_color=False, number_style=None) == "3"


# == Sinks and byte counts ==


@pytest.mark.unit
def test_byte_count_matches_utf8_output(sample: dict[str, Any]) -> None:
    sample["str"] = "naïve ☃"
    out = io.BytesIO()
    written = Formatter(indent=2).render(sample, out)
    assert written == len(out.getvalue())
    text_out = io.StringIO()
    assert Formatter(indent=2).render(sample, text_out) == written
    assert text_out.getvalue().encode("utf-8") == out.getvalue()


@pytest.mark.unit
def test_write_failure_aborts_with_bytes_written() -> None:
    sink = FailingSink(budget=3)
    with pytest.raises(SinkWriteError) as exc_info:
        Formatter(disabled_color=True).render({"a": 1, "b": 2}, sink)
    assert exc_info.value.bytes_written == len(sink.data)
    assert bytes(sink.data) == b'{ "a": '
    assert isinstance(exc_info.value.__cause__, BrokenPipeError)


@pytest.mark.unit
def test_short_write_is_a_failure() -> None:
    with pytest.raises(SinkWriteError) as exc_info:
        Formatter().render([1], ShortSink())
    assert exc_info.value.bytes_written == 1


@pytest.mark.unit
def test_closed_sink_fails() -> None:
    out = io.BytesIO()
    out.close()
    with pytest.raises(SinkWriteError) as exc_info:
        Formatter().render(1, out)
    assert exc_info.value.bytes_written == 0


@pytest.mark.unit
def test_duck_typed_text_sink_receives_text() -> None:
    with tempfile.SpooledTemporaryFile(mode="w+", encoding="utf-8") as out:
        written = Formatter(disabled_color=True).render({"name": "Zoë"}, out)
        out.seek(0)
        assert out.read() == '{ "name": "Zoë" }'
    assert written == len('{ "name": "Zoë" }'.encode("utf-8"))


@pytest.mark.unit
def test_sink_type_errors_are_write_failures() -> None:
    with pytest.raises(SinkWriteError) as exc_info:
        Formatter().render([1], StrOnlySink())
    assert exc_info.value.bytes_written == 0
    assert isinstance(exc_info.value.__cause__, TypeError)


@pytest.mark.unit
def test_formatter_is_reusable_across_renders(sample: dict[str, Any]) -> None:
    formatter = Formatter(indent=2, disabled_color=True)
    first, second = io.StringIO(), io.StringIO()
    assert formatter.render(sample, first) == formatter.render(sample, second)
    assert first.getvalue() == second.getvalue()


@pytest.mark.unit
def test_write_through_is_unchanged() -> None:
    out = io.BytesIO()
    written = Formatter().write_through('{"already": "rendered"}', out)
    assert out.getvalue() == b'{"already": "rendered"}'
    assert written == len(out.getvalue())


@pytest.mark.unit
def test_invalid_configuration_is_rejected() -> None:
    with pytest.raises(ValueError, match="indent"):
        Formatter(indent=-1)
    with pytest.raises(ValueError, match="max_string_length"):
        Formatter(max_string_length=-2)
    with pytest.raises(ValueError, match="max_nesting_depth"):
        Formatter(max_nesting_depth=0)


# == Nesting limit ==


@pytest.mark.unit
def test_nesting_at_the_limit_renders() -> None:
    text = render(nested_lists(MAX_NESTING_DEPTH))
    assert text == "[ " * (MAX_NESTING_DEPTH - 1) + "[]" + " ]" * (MAX_NESTING_DEPTH - 1)


@pytest.mark.unit
def test_deep_document_raises_nesting_error() -> None:
    value = json.loads("[" * 600 + "]" * 600)
    out = io.StringIO()
    with pytest.raises(NestingDepthError) as exc_info:
        Formatter(disabled_color=True).render(value, out)
    assert exc_info.value.limit == MAX_NESTING_DEPTH
    assert exc_info.value.bytes_written == len(out.getvalue()) == 2 * MAX_NESTING_DEPTH


@pytest.mark.unit
def test_nesting_limit_counts_objects_and_records() -> None:
    formatter = Formatter(disabled_color=True, max_nesting_depth=2)
    assert render({"a": [1]}, max_nesting_depth=2) == '{ "a": [ 1 ] }'
    with pytest.raises(NestingDepthError):
        formatter.render({"a": [Record([("b", {})])]}, io.StringIO())
    with pytest.raises(NestingDepthError):
        formatter.render([[{}]], io.StringIO())


# End of file: src/mstair/jsoncolor/test_formatter.py
