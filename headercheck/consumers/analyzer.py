"""Header analysis for a single source text.

Turns a template match into diagnostics:

- header not found: INCORRECT_HEADER on the first non-blank line,
  marked insert-only
- header found after other text: MISPLACED_HEADER on the text before it
- header found but inexact: INCORRECT_HEADER on the header
- each error message: INVALID_HEADER on the header
- each update message: OUTDATED_HEADER on the header
"""

import dataclasses
import logging
import re
from dataclasses import dataclass, field
from enum import Enum

from core import DynamicValues, MatchResult
from header_template import HeaderTemplate
from headercheck.diagnostics import (
    INCORRECT_HEADER,
    INVALID_HEADER,
    IS_INSERT_ONLY,
    MISPLACED_HEADER,
    MISSING_TEMPLATE,
    OUTDATED_HEADER,
    Diagnostic,
    Severity,
    create_diagnostic,
)
from headercheck.services.template_source import TemplateLoad

logger = logging.getLogger(__name__)

_LINE_PATTERN = re.compile(r"[^\r\n]*(?:\r\n|\r|\n)?")


class HeaderState(Enum):
    """Where a file ended up in the header check."""

    NO_TEMPLATE_CONFIGURED = "no_template_configured"
    TEMPLATE_INVALID = "template_invalid"
    CHECK_DISABLED = "check_disabled"
    HEADER_ABSENT = "header_absent"
    HEADER_MATCHED_EXACT = "header_matched_exact"
    HEADER_MATCHED_INEXACT = "header_matched_inexact"


@dataclass
class HeaderAnalysis:
    """Outcome of analyzing one source text."""

    state: HeaderState
    diagnostics: list[Diagnostic] = field(default_factory=list)
    match: MatchResult | None = None

    @property
    def has_errors(self) -> bool:
        return any(d.severity == Severity.ERROR for d in self.diagnostics)


def top_line_span(text: str) -> tuple[int, int]:
    """Span from the start of the text to the end of its first non-blank line.

    Falls back to the whole text when every line is blank.
    """
    for line in _LINE_PATTERN.finditer(text):
        if line.start() == line.end():
            break
        content = line.group(0).rstrip("\r\n")
        if content.strip():
            return 0, line.start() + len(content)
    return 0, len(text)


def analyze_text(text: str, template: HeaderTemplate, values: DynamicValues) -> HeaderAnalysis:
    """Check a source text's header against a template.

    Args:
        text: Source file contents
        template: Header template
        values: Current dynamic values

    Returns:
        HeaderAnalysis with state and diagnostics
    """
    result = template.try_match(text, values)
    if result is None:
        start, length = top_line_span(text)
        return HeaderAnalysis(
            state=HeaderState.HEADER_ABSENT,
            diagnostics=[
                create_diagnostic(
                    INCORRECT_HEADER,
                    start,
                    length,
                    properties={IS_INSERT_ONLY: "True"},
                )
            ],
        )

    diagnostics = []
    if result.start != 0:
        diagnostics.append(create_diagnostic(MISPLACED_HEADER, 0, result.start))

    if result.is_inexact:
        diagnostics.append(create_diagnostic(INCORRECT_HEADER, result.start, result.length))

    for message in result.error_messages:
        diagnostics.append(create_diagnostic(INVALID_HEADER, result.start, result.length, message))

    for message in result.update_messages:
        diagnostics.append(create_diagnostic(OUTDATED_HEADER, result.start, result.length, message))

    logger.debug(
        "[CHECK] Header at %d+%d inexact=%s errors=%d updates=%d",
        result.start,
        result.length,
        result.is_inexact,
        len(result.error_messages),
        len(result.update_messages),
    )
    return HeaderAnalysis(
        state=HeaderState.HEADER_MATCHED_INEXACT if result.is_inexact else HeaderState.HEADER_MATCHED_EXACT,
        diagnostics=diagnostics,
        match=result,
    )


def analyze_with_template_load(text: str, load: TemplateLoad, values: DynamicValues) -> HeaderAnalysis:
    """Analyze a source text given the outcome of loading the template.

    Template problems are reported on the file's first non-blank line.
    """
    if load.diagnostic is not None:
        start, length = top_line_span(text)
        state = (
            HeaderState.NO_TEMPLATE_CONFIGURED
            if load.diagnostic.id == MISSING_TEMPLATE.id
            else HeaderState.TEMPLATE_INVALID
        )
        return HeaderAnalysis(
            state=state,
            diagnostics=[dataclasses.replace(load.diagnostic, start=start, length=length)],
        )

    if load.template is None:
        return HeaderAnalysis(state=HeaderState.CHECK_DISABLED)

    return analyze_text(text, load.template, values)
