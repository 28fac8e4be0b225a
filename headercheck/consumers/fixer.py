"""Header fixes.

Produces one replacement text for a source text given the diagnostics
reported on it:

- Insert header: the header was not found, insert it at the top
- Move below header: the header is correct but something precedes it
- Update and move header: regenerate the header and move it to the top
- Update header: regenerate the header in place
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from core import DynamicValues
from header_template import HeaderTemplate
from headercheck.diagnostics import FIXABLE_IDS, MISPLACED_HEADER, Diagnostic

logger = logging.getLogger(__name__)

INSERT_TITLE = "Insert header"
MOVE_TITLE = "Move below header"
UPDATE_AND_MOVE_TITLE = "Update and move header"
UPDATE_TITLE = "Update header"


@dataclass(frozen=True)
class HeaderFix:
    """A fix for a source text."""

    title: str
    text: str


def fix_title(diagnostics: list[Diagnostic]) -> str:
    """Title describing what fixing these diagnostics does."""
    has_update_location = any(not d.is_insert_only for d in diagnostics)
    move_to_top = any(d.id == MISPLACED_HEADER.id for d in diagnostics)
    only_move = all(d.id == MISPLACED_HEADER.id for d in diagnostics)

    if not has_update_location:
        return INSERT_TITLE
    if only_move:
        return MOVE_TITLE
    if move_to_top:
        return UPDATE_AND_MOVE_TITLE
    return UPDATE_TITLE


def fix_text(
    text: str,
    template: HeaderTemplate,
    diagnostics: Iterable[Diagnostic],
    values: DynamicValues,
) -> HeaderFix | None:
    """Fix the header of a source text.

    Args:
        text: Source file contents
        template: Header template
        diagnostics: Diagnostics reported on the text
        values: Current dynamic values

    Returns:
        HeaderFix, or None if none of the diagnostics is fixable
    """
    fixable = [d for d in diagnostics if d.id in FIXABLE_IDS]
    if not fixable:
        return None

    title = fix_title(fixable)
    update_location = next(((d.start, d.length) for d in fixable if not d.is_insert_only), None)
    move_to_top = any(d.id == MISPLACED_HEADER.id for d in fixable)

    evaluation = template.evaluate(values, previous_text=text)
    header = evaluation.text

    if move_to_top and evaluation.previous_span is not None:
        start, length = evaluation.previous_span
        fixed = header + text[:start] + text[start + length :]
    else:
        start, length = update_location or (0, 0)
        fixed = text[:start] + header + text[start + length :]

    logger.debug("[FIX] %s", title)
    return HeaderFix(title=title, text=fixed)
