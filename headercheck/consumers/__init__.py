"""Consumers - header analysis, fixes and the per-file driver."""

from headercheck.consumers.analyzer import (
    HeaderAnalysis,
    HeaderState,
    analyze_text,
    analyze_with_template_load,
    top_line_span,
)
from headercheck.consumers.checker import CheckSummary, FileReport, HeaderChecker
from headercheck.consumers.fixer import HeaderFix, fix_text, fix_title

__all__ = [
    "CheckSummary",
    "FileReport",
    "HeaderAnalysis",
    "HeaderChecker",
    "HeaderFix",
    "HeaderState",
    "analyze_text",
    "analyze_with_template_load",
    "fix_text",
    "fix_title",
    "top_line_span",
]
