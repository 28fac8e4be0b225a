"""Core types for header checking.

All data structures are frozen dataclasses with attribute access.
"""

from core.types import (
    MAX_YEAR,
    MIN_YEAR,
    DynamicValues,
    EvaluationResult,
    MatchResult,
    NameMatchResult,
    SegmentMatchResult,
    YearRangeMatchResult,
)

__all__ = [
    "MAX_YEAR",
    "MIN_YEAR",
    "DynamicValues",
    "EvaluationResult",
    "MatchResult",
    "NameMatchResult",
    "SegmentMatchResult",
    "YearRangeMatchResult",
]
