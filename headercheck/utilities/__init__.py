"""Utilities - timezone, logging."""

from headercheck.utilities.logging import setup_logging
from headercheck.utilities.tz import current_values, now_user, now_utc

__all__ = [
    "current_values",
    "now_user",
    "now_utc",
    "setup_logging",
]
