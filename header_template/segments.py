"""Header template segments.

A template is an ordered sequence of segments. There are four kinds:

- TextSegment: literal text, matched leniently (whitespace and the
  copyright sign may be spelled differently)
- YearSegment: the current year
- YearRangeSegment: a start year, optionally followed by the current year
- NameSegment: a free-form field the user fills in

Segments only carry the data they own. Rendering, pattern contribution
and interpretation are plain functions that dispatch on the segment type
so the set of segment kinds stays closed and every function handles all
of them.
"""

import re
from dataclasses import dataclass

from core import (
    DynamicValues,
    NameMatchResult,
    SegmentMatchResult,
    YearRangeMatchResult,
)

NAME_PLACEHOLDER = "{Name}"

# En dash between the years of a rendered range
YEAR_RANGE_SEPARATOR = "–"

# Newline (with any horizontal whitespace before it), horizontal whitespace
# run, or any spelling of the copyright sign
_TEXT_TOKEN_PATTERN = re.compile(
    r"(?P<newline>[^\S\r\n]*(?:\r\n|\r|\n))"
    r"|(?P<space>[^\S\r\n]+)"
    r"|(?P<copyright>\(\s*c\s*\)|©)",
    re.IGNORECASE,
)

_NEWLINE_REGEX = r"[^\S\r\n]*(?:\r\n|\r|\n)"
_SPACE_REGEX = r"\s+"
_COPYRIGHT_REGEX = r"(?:\(\s*c\s*\)|©)"
_YEAR_REGEX = r"\d{4}"
_YEAR_RANGE_REGEX = r"(\d{4})(?:\s*[-–—]+\s*(\d{4}))?"
_NAME_REGEX = r".*?"


@dataclass(frozen=True)
class TextSegment:
    """Literal text."""

    literal: str

    def __post_init__(self) -> None:
        if not isinstance(self.literal, str):
            raise TypeError("TextSegment literal must be a string")


@dataclass(frozen=True)
class YearSegment:
    """The current year, four digits."""


@dataclass(frozen=True)
class YearRangeSegment:
    """A start year, optionally followed by the current year.

    The start year is not stored here. It comes from the header being
    updated (via YearRangeMatchResult) or defaults to the current year.
    """


@dataclass(frozen=True)
class NameSegment:
    """A free-form field with a default placeholder."""

    default_name: str = NAME_PLACEHOLDER

    def __post_init__(self) -> None:
        name = (self.default_name or "").strip()
        object.__setattr__(self, "default_name", name or NAME_PLACEHOLDER)


Segment = TextSegment | YearSegment | YearRangeSegment | NameSegment

# Stateless segments are shared
YEAR = YearSegment()
YEAR_RANGE = YearRangeSegment()


def _unknown_segment(segment: object) -> TypeError:
    return TypeError(f"Unknown template segment type: {type(segment).__name__}")


# =============================================================================
# Rendering
# =============================================================================


def format_year_range(start_year: int, end_year: int) -> str:
    """Format a year range, collapsing it to one year when start == end.

    Examples: (2019, 2019) -> '2019', (2019, 2023) -> '2019–2023'
    """
    if start_year == end_year:
        return str(start_year)
    return f"{start_year}{YEAR_RANGE_SEPARATOR}{end_year}"


def render_segment(
    segment: Segment,
    values: DynamicValues,
    previous: SegmentMatchResult | None = None,
) -> str:
    """Render the exact text for a segment.

    Args:
        segment: Segment to render
        values: Current dynamic values
        previous: This segment's result from matching a previous header,
            used to keep values the user entered (start year, name)

    Returns:
        Rendered text
    """
    if isinstance(segment, TextSegment):
        return segment.literal
    if isinstance(segment, YearSegment):
        return str(values.current_year)
    if isinstance(segment, YearRangeSegment):
        if isinstance(previous, YearRangeMatchResult):
            return format_year_range(previous.start_year, values.current_year)
        return str(values.current_year)
    if isinstance(segment, NameSegment):
        if isinstance(previous, NameMatchResult):
            return previous.trimmed_name
        return segment.default_name
    raise _unknown_segment(segment)


# =============================================================================
# Pattern contribution
# =============================================================================


def _text_pattern(literal: str) -> str:
    parts = []
    pos = 0
    for token in _TEXT_TOKEN_PATTERN.finditer(literal):
        parts.append(re.escape(literal[pos : token.start()]))
        if token.group("newline") is not None:
            parts.append(_NEWLINE_REGEX)
        elif token.group("space") is not None:
            parts.append(_SPACE_REGEX)
        else:
            parts.append(_COPYRIGHT_REGEX)
        pos = token.end()
    parts.append(re.escape(literal[pos:]))
    return "".join(parts)


def segment_pattern(segment: Segment) -> str:
    """Get the regex fragment that matches a segment.

    Only YearRangeSegment contributes capture groups of its own
    (start and end year). The caller wraps each fragment in a named group.
    """
    if isinstance(segment, TextSegment):
        return _text_pattern(segment.literal)
    if isinstance(segment, YearSegment):
        return _YEAR_REGEX
    if isinstance(segment, YearRangeSegment):
        return _YEAR_RANGE_REGEX
    if isinstance(segment, NameSegment):
        return _NAME_REGEX
    raise _unknown_segment(segment)


# =============================================================================
# Interpretation
# =============================================================================


def _differs(expected: str, actual: str) -> bool:
    """Case-insensitive comparison that also compares length."""
    return len(expected) != len(actual) or expected.lower() != actual.lower()


def _invalid_year_message(year: int, current_year: int) -> str:
    return f"The year {year} is invalid. The current year is {current_year}."


def _current_year_message(current_year: int) -> str:
    return f"The current year is {current_year}."


def interpret_segment(
    segment: Segment,
    values: DynamicValues,
    text: str,
    start: int,
    length: int,
    inner_captures: tuple[str, ...] = (),
) -> SegmentMatchResult:
    """Interpret the substring a segment matched.

    Args:
        segment: Segment that matched
        values: Current dynamic values
        text: Full candidate text
        start: Start of the segment's sub-match
        length: Length of the segment's sub-match
        inner_captures: Values of the capture groups the segment
            contributed, in order, skipping groups that did not participate

    Returns:
        SegmentMatchResult (or a subclass carrying extracted values)
    """
    captured = text[start : start + length]

    if isinstance(segment, TextSegment):
        return SegmentMatchResult(is_inexact=_differs(segment.literal, captured))

    if isinstance(segment, YearSegment):
        year = int(captured)
        current = values.current_year
        return SegmentMatchResult(
            is_inexact=False,
            error_messages=(_invalid_year_message(year, current),) if year > current else (),
            update_messages=(_current_year_message(current),) if year < current else (),
        )

    if isinstance(segment, YearRangeSegment):
        start_year = int(inner_captures[0])
        end_year = int(inner_captures[1]) if len(inner_captures) > 1 else start_year
        current = values.current_year

        errors = []
        if end_year < start_year:
            errors.append(
                f"The end year ({end_year}) must be greater than or equal to "
                f"the start year ({start_year})."
            )
        if end_year > current:
            errors.append(_invalid_year_message(end_year, current))

        return YearRangeMatchResult(
            is_inexact=_differs(format_year_range(start_year, end_year), captured),
            error_messages=tuple(errors),
            update_messages=(_current_year_message(current),) if end_year < current else (),
            start_year=start_year,
        )

    if isinstance(segment, NameSegment):
        trimmed = captured.strip()
        blank = not trimmed or trimmed == NAME_PLACEHOLDER
        return NameMatchResult(
            is_inexact=len(trimmed) != length,
            error_messages=("Name must not be blank.",) if blank else (),
            trimmed_name=trimmed,
        )

    raise _unknown_segment(segment)
