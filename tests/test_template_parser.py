"""Tests for the header template parser.

Validates escape handling, special segment recognition, error messages
and the trailing line break added to templates that lack one.
"""

import io

import pytest

from core import DynamicValues
from header_template import (
    YEAR,
    YEAR_RANGE,
    TemplateParseError,
    TextSegment,
    parse_template,
)


def _single_text(template: str) -> str:
    """Parse a template expected to be one text segment and return its literal."""
    segments = parse_template(template).segments
    assert len(segments) == 1
    assert isinstance(segments[0], TextSegment)
    return segments[0].literal


class TestTrailingLineBreak:
    """A line break is added only when the last line is not empty."""

    @pytest.mark.parametrize("text", [" ", "a", "a\nb"])
    def test_added_with_default_style(self, text):
        assert _single_text(text) == text + "\n"

    def test_added_with_template_style(self):
        assert _single_text("a\r\nb") == "a\r\nb\r\n"

    @pytest.mark.parametrize("text", ["\r\n", "a\r\nb\r\n", "\n", "a\nb\n"])
    def test_not_added_when_last_line_is_empty(self, text):
        assert _single_text(text) == text

    def test_not_added_after_special_segment(self):
        """Only the final literal text gets a line break."""
        segments = parse_template("Copyright {Year}").segments
        assert segments == (TextSegment("Copyright "), YEAR)


class TestEscapes:
    """Doubled braces are literal braces."""

    def test_double_open_brace(self):
        assert _single_text("{{\n") == "{\n"

    def test_double_close_brace(self):
        assert _single_text("}}\n") == "}\n"

    def test_escaped_braces_around_word(self):
        assert _single_text("{{Year}}\n") == "{Year}\n"


class TestSpecialSegments:
    """Recognized special segments become their singletons."""

    def test_year(self):
        segments = parse_template("// {Year}\n").segments
        assert segments == (TextSegment("// "), YEAR, TextSegment("\n"))
        assert segments[1] is YEAR

    def test_year_range(self):
        segments = parse_template("(c) {YearRange} Contoso\n").segments
        assert segments == (TextSegment("(c) "), YEAR_RANGE, TextSegment(" Contoso\n"))

    @pytest.mark.parametrize("name", ["year", "YEAR", "yEaR"])
    def test_names_are_case_insensitive(self, name):
        assert parse_template("{" + name + "}").segments == (YEAR,)

    def test_adjacent_special_segments(self):
        segments = parse_template("{YearRange}{Year}").segments
        assert segments == (YEAR_RANGE, YEAR)


class TestParseErrors:
    """Syntax errors stop parsing with a message naming the construct."""

    def test_unrecognized_special_segment(self):
        with pytest.raises(TemplateParseError) as exc_info:
            parse_template("{Foo}")
        assert exc_info.value.message == "Unrecognized special segment 'Foo'"

    def test_unterminated_open_brace_at_end(self):
        with pytest.raises(TemplateParseError) as exc_info:
            parse_template("{")
        assert exc_info.value.message == "Unescaped '{' without closing '}'"

    def test_unterminated_special_segment(self):
        with pytest.raises(TemplateParseError) as exc_info:
            parse_template("// {Year\n")
        assert exc_info.value.message == "Unescaped '{' without closing '}'"

    def test_lone_close_brace(self):
        with pytest.raises(TemplateParseError) as exc_info:
            parse_template("a}b")
        assert exc_info.value.message == "Unescaped '}' without opening '{'"
        assert exc_info.value.position == 1

    def test_empty_template(self):
        with pytest.raises(TemplateParseError):
            parse_template("")

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_template("{Nope}")


class TestRoundTrip:
    """Templates without special segments render back verbatim."""

    @pytest.mark.parametrize(
        "text",
        [
            "// Licensed under the MIT license.\n",
            "/* {{braces}} */\r\n",
            "# Copyright (c) Contoso\n#\n# All rights reserved.\n",
        ],
    )
    def test_renders_source_text(self, text):
        expected = text.replace("{{", "{").replace("}}", "}")
        for year in (1999, 2024):
            assert parse_template(text).evaluate(DynamicValues(year)).text == expected

    def test_missing_final_line_break_is_added(self):
        assert parse_template("# header").evaluate(DynamicValues(2024)).text == "# header\n"

    def test_reads_from_stream(self):
        template = parse_template(io.StringIO("// {Year}\n"))
        assert template.evaluate(DynamicValues(2024)).text == "// 2024\n"
