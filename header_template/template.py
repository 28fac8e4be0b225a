"""Header template: compiled matcher and renderer.

The segments' regex fragments are joined into one composite pattern,
each fragment wrapped in a named group (segment0, segment1, ...). The
pattern is compiled on first use and shared by every match afterwards,
including matches running on other threads.
"""

import logging
import re
import threading
from dataclasses import dataclass, field

from core import DynamicValues, EvaluationResult, MatchResult, SegmentMatchResult
from header_template.segments import (
    Segment,
    TextSegment,
    interpret_segment,
    render_segment,
    segment_pattern,
)

logger = logging.getLogger(__name__)

_SEGMENT_GROUP = "segment{}"


@dataclass(frozen=True)
class CompiledTemplate:
    """Composite regex plus where each segment's groups live in it.

    inner_groups[i] lists the group numbers segment i contributed on its
    own (e.g. the start and end year of a year range).
    """

    regex: re.Pattern[str]
    segment_groups: tuple[int, ...]
    inner_groups: tuple[tuple[int, ...], ...]


def _compile(segments: tuple[Segment, ...]) -> CompiledTemplate:
    parts = []
    for i, segment in enumerate(segments):
        parts.append(f"(?P<{_SEGMENT_GROUP.format(i)}>{segment_pattern(segment)})")
    regex = re.compile("".join(parts), re.IGNORECASE)

    segment_groups = tuple(regex.groupindex[_SEGMENT_GROUP.format(i)] for i in range(len(segments)))
    bounds = segment_groups + (regex.groups + 1,)
    inner_groups = tuple(
        tuple(range(bounds[i] + 1, bounds[i + 1])) for i in range(len(segments))
    )

    logger.debug("[TEMPLATE] Compiled %d segments: %s", len(segments), regex.pattern)
    return CompiledTemplate(regex, segment_groups, inner_groups)


@dataclass(frozen=True, eq=False)
class HeaderTemplate:
    """An immutable, ordered sequence of template segments.

    Usage:
        template = parse_template("// Copyright (c) {YearRange} Contoso\\n")
        result = template.try_match(source_text, DynamicValues(2024))
        fixed = template.evaluate(DynamicValues(2024), previous_text=source_text)
    """

    segments: tuple[Segment, ...]

    _compiled: list[CompiledTemplate] = field(default_factory=list, init=False, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "segments", tuple(self.segments))
        if not self.segments:
            raise ValueError("A header template needs at least one segment")

    # =========================================================================
    # Compilation
    # =========================================================================

    @property
    def compiled(self) -> CompiledTemplate:
        """Composite pattern, built once on first access."""
        if not self._compiled:
            with self._lock:
                if not self._compiled:
                    self._compiled.append(_compile(self.segments))
        return self._compiled[0]

    # =========================================================================
    # Matching
    # =========================================================================

    def _trimmed_last_span(self, text: str, match: re.Match[str], span: tuple[int, int]) -> tuple[int, int]:
        """Undo over-consumption of trailing whitespace by a last text segment.

        Only trims when the composite pattern still matches exactly the
        shortened header, and never splits a '\\r\\n' line break.
        """
        last = self.segments[-1]
        if not isinstance(last, TextSegment):
            return span

        start, end = span
        excess = (end - start) - len(last.literal)
        if excess <= 0:
            return span

        trimmed_end = end - excess
        if text[trimmed_end - 1 : trimmed_end + 1] == "\r\n":
            return span

        if self.compiled.regex.fullmatch(text, match.start(), match.end() - excess) is None:
            return span
        return start, trimmed_end

    def try_match(self, text: str, values: DynamicValues) -> MatchResult | None:
        """Find this header in some text.

        Args:
            text: Candidate text (usually a whole source file)
            values: Current dynamic values

        Returns:
            MatchResult for the first match, or None if the header is absent
        """
        compiled = self.compiled
        match = compiled.regex.search(text)
        if match is None:
            return None

        spans = [match.span(group) for group in compiled.segment_groups]
        trimmed = self._trimmed_last_span(text, match, spans[-1])
        excess = spans[-1][1] - trimmed[1]
        spans[-1] = trimmed

        results: list[SegmentMatchResult] = []
        for segment, (start, end), inner in zip(self.segments, spans, compiled.inner_groups):
            captures = tuple(
                match.group(group) for group in inner if match.group(group) is not None
            )
            results.append(
                interpret_segment(segment, values, text, start, end - start, captures)
            )

        return MatchResult(
            start=match.start(),
            length=match.end() - match.start() - excess,
            is_inexact=any(r.is_inexact for r in results),
            error_messages=tuple(m for r in results for m in r.error_messages),
            update_messages=tuple(m for r in results for m in r.update_messages),
            segment_results=tuple(results),
        )

    # =========================================================================
    # Rendering
    # =========================================================================

    def render(
        self,
        values: DynamicValues,
        previous: MatchResult | None = None,
    ) -> str:
        """Render the header, reusing values from a previous match if given."""
        previous_results = previous.segment_results if previous else ()
        parts = []
        for i, segment in enumerate(self.segments):
            prior = previous_results[i] if i < len(previous_results) else None
            parts.append(render_segment(segment, values, prior))
        return "".join(parts)

    def evaluate(
        self,
        values: DynamicValues,
        previous_text: str | None = None,
    ) -> EvaluationResult:
        """Generate an up-to-date header.

        When previous_text contains a header matching this template, the
        values the user entered (start year, names) are kept and the span
        of that header is returned so the caller can replace it.

        Args:
            values: Current dynamic values
            previous_text: Text that may contain an older header

        Returns:
            EvaluationResult with the header text and the previous span
        """
        previous = self.try_match(previous_text, values) if previous_text is not None else None
        if previous is None:
            return EvaluationResult(text=self.render(values))
        return EvaluationResult(
            text=self.render(values, previous),
            previous_span=(previous.start, previous.length),
        )
