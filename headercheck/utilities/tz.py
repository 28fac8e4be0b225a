"""Timezone utilities.

Single source of truth for "now". The template engine never reads the
clock; the current year is taken here, in the user's timezone, and
passed in as DynamicValues.
"""

from datetime import UTC, datetime

from core import DynamicValues
from headercheck.config import get_user_timezone

__all__ = [
    "current_values",
    "now_user",
    "now_utc",
]


def now_user() -> datetime:
    """Get current time in user timezone."""
    return datetime.now(get_user_timezone())


def now_utc() -> datetime:
    """Get current time in UTC."""
    return datetime.now(UTC)


def current_values(current_year: int | None = None) -> DynamicValues:
    """Build DynamicValues for now.

    Args:
        current_year: Override for the current year (None = from the clock)

    Returns:
        DynamicValues for template matching and rendering
    """
    if current_year is None:
        current_year = now_user().year
    return DynamicValues(current_year=current_year)
