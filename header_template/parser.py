"""Template parser.

Template syntax:
    - Any character other than '{' and '}' is literal text
    - '{{' and '}}' are a literal '{' and '}'
    - '{Name}' is a special segment; see header_template.registry for the
      recognized names ({Year}, {YearRange}, case-insensitive)

If the template does not end with a line break, one is added so that a
template missing its final newline still matches headers that have one.
"""

import logging
import re
from typing import TextIO

from header_template.registry import get_registry
from header_template.segments import Segment, TextSegment
from header_template.template import HeaderTemplate

logger = logging.getLogger(__name__)

_LINE_BREAK_PATTERN = re.compile(r"\r\n|\r|\n")

UNESCAPED_OPEN_MESSAGE = "Unescaped '{' without closing '}'"
UNESCAPED_CLOSE_MESSAGE = "Unescaped '}' without opening '{'"


class TemplateParseError(ValueError):
    """Raised when template source has a syntax error."""

    def __init__(self, message: str, position: int | None = None):
        super().__init__(message)
        self.message = message
        self.position = position


def _line_break_for(source: str) -> str:
    """Line break style used by the template itself, '\\n' if it has none."""
    match = _LINE_BREAK_PATTERN.search(source)
    return match.group(0) if match else "\n"


def _ends_with_line_break(text: str) -> bool:
    return text.endswith(("\n", "\r"))


def parse_template(source: str | TextIO) -> HeaderTemplate:
    """Parse template source into a HeaderTemplate.

    Args:
        source: Template text or a text stream to read it from

    Returns:
        Parsed HeaderTemplate

    Raises:
        TemplateParseError: On the first syntax error
    """
    text = source if isinstance(source, str) else source.read()
    registry = get_registry()

    segments: list[Segment] = []
    buffer: list[str] = []

    def flush() -> None:
        if buffer:
            segments.append(TextSegment("".join(buffer)))
            buffer.clear()

    pos = 0
    end = len(text)
    while pos < end:
        c = text[pos]

        if c == "{":
            if pos + 1 < end and text[pos + 1] == "{":
                buffer.append("{")
                pos += 2
                continue

            close = text.find("}", pos + 1)
            if close == -1:
                raise TemplateParseError(UNESCAPED_OPEN_MESSAGE, pos)

            name = text[pos + 1 : close]
            definition = registry.get(name)
            if definition is None:
                raise TemplateParseError(f"Unrecognized special segment '{name}'", pos)

            flush()
            segments.append(definition.segment)
            pos = close + 1
            continue

        if c == "}":
            if pos + 1 < end and text[pos + 1] == "}":
                buffer.append("}")
                pos += 2
                continue
            raise TemplateParseError(UNESCAPED_CLOSE_MESSAGE, pos)

        buffer.append(c)
        pos += 1

    if buffer and not _ends_with_line_break(buffer[-1]):
        buffer.append(_line_break_for(text))
    flush()

    if not segments:
        raise TemplateParseError("Template is empty")

    logger.debug("[TEMPLATE] Parsed %d segments", len(segments))
    return HeaderTemplate(tuple(segments))
