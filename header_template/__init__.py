"""Header template engine.

Parses header templates, matches them against source text and
regenerates up-to-date headers.

Usage:
    from header_template import parse_template
    from core import DynamicValues

    template = parse_template("// Copyright (c) {YearRange} Contoso\\n")
    result = template.try_match(source_text, DynamicValues(2024))
    header = template.evaluate(DynamicValues(2024), previous_text=source_text).text
"""

from header_template.parser import TemplateParseError, parse_template
from header_template.registry import (
    SpecialSegmentDefinition,
    SpecialSegmentRegistry,
    get_registry,
)
from header_template.segments import (
    NAME_PLACEHOLDER,
    YEAR,
    YEAR_RANGE,
    NameSegment,
    Segment,
    TextSegment,
    YearRangeSegment,
    YearSegment,
    format_year_range,
)
from header_template.template import HeaderTemplate

__all__ = [
    # Main API
    "HeaderTemplate",
    "TemplateParseError",
    "parse_template",
    # Segments
    "NAME_PLACEHOLDER",
    "YEAR",
    "YEAR_RANGE",
    "NameSegment",
    "Segment",
    "TextSegment",
    "YearRangeSegment",
    "YearSegment",
    "format_year_range",
    # Registry
    "SpecialSegmentDefinition",
    "SpecialSegmentRegistry",
    "get_registry",
]
