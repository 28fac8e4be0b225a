"""Core data types for header checking.

All data structures are frozen dataclasses with attribute access.
Match results are values: state carried from a previous header into a
re-render always flows through a new result object, never through the
segments themselves.
"""

from dataclasses import dataclass, field

MIN_YEAR = 1000
MAX_YEAR = 9999


@dataclass(frozen=True)
class DynamicValues:
    """Values that change over time and feed matching and rendering.

    Built by the caller (usually from wall-clock time) so the engine
    never reads the clock itself.
    """

    current_year: int

    def __post_init__(self) -> None:
        if not MIN_YEAR <= self.current_year <= MAX_YEAR:
            raise ValueError(
                f"Current year must be between {MIN_YEAR} and {MAX_YEAR}, "
                f"inclusive (got {self.current_year})."
            )


@dataclass(frozen=True)
class SegmentMatchResult:
    """Outcome of interpreting one segment's sub-match."""

    is_inexact: bool = False
    error_messages: tuple[str, ...] = ()
    update_messages: tuple[str, ...] = ()


@dataclass(frozen=True)
class YearRangeMatchResult(SegmentMatchResult):
    """Year range sub-match; keeps the start year for re-rendering."""

    start_year: int = MIN_YEAR


@dataclass(frozen=True)
class NameMatchResult(SegmentMatchResult):
    """Name sub-match; keeps the entered name for re-rendering."""

    trimmed_name: str = ""


@dataclass(frozen=True)
class MatchResult:
    """Outcome of matching a whole header template against some text.

    start/length locate the header in the candidate text. Errors and
    update notices are listed in segment order.
    """

    start: int
    length: int
    is_inexact: bool = False
    error_messages: tuple[str, ...] = ()
    update_messages: tuple[str, ...] = ()

    # Per-segment results, parallel to the template's segments
    segment_results: tuple[SegmentMatchResult, ...] = field(default=(), repr=False)

    @property
    def end(self) -> int:
        return self.start + self.length


@dataclass(frozen=True)
class EvaluationResult:
    """Regenerated header text plus where the previous header was found.

    previous_span is (start, length) of the previous header, or None
    when there was no previous text or it did not match.
    """

    text: str
    previous_span: tuple[int, int] | None = None
