"""Configuration for header checking.

Settings are read from environment variables each time a getter is
called, so tests can patch the environment:

    HEADERCHECK_TIMEZONE         Timezone used to determine the current year (UTC)
    HEADERCHECK_TEMPLATE_SUFFIX  Suffix identifying header template files (.template)
    HEADERCHECK_MAX_WORKERS      Files checked in parallel (8)
    HEADERCHECK_LOG_LEVEL        Log level (INFO)
"""

import logging
import os
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_TIMEZONE = "UTC"
DEFAULT_TEMPLATE_SUFFIX = ".template"
DEFAULT_MAX_WORKERS = 8
DEFAULT_LOG_LEVEL = "INFO"

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _env(name: str) -> str | None:
    value = os.environ.get(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def get_user_timezone_str() -> str:
    """Get configured timezone name."""
    return _env("HEADERCHECK_TIMEZONE") or DEFAULT_TIMEZONE


def get_user_timezone() -> ZoneInfo:
    """Get configured timezone, falling back to UTC if it is unknown."""
    name = get_user_timezone_str()
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("[CONFIG] Unknown timezone '%s', using %s", name, DEFAULT_TIMEZONE)
        return ZoneInfo(DEFAULT_TIMEZONE)


def get_template_suffix() -> str:
    """Get the file suffix that identifies header template files."""
    return _env("HEADERCHECK_TEMPLATE_SUFFIX") or DEFAULT_TEMPLATE_SUFFIX


def get_max_workers() -> int:
    """Get the number of files checked in parallel."""
    value = _env("HEADERCHECK_MAX_WORKERS")
    if value is None:
        return DEFAULT_MAX_WORKERS
    try:
        workers = int(value)
    except ValueError:
        workers = 0
    if workers < 1:
        logger.warning(
            "[CONFIG] Invalid HEADERCHECK_MAX_WORKERS '%s', using %d",
            value,
            DEFAULT_MAX_WORKERS,
        )
        return DEFAULT_MAX_WORKERS
    return workers


def get_log_level() -> str:
    """Get configured log level name."""
    value = (_env("HEADERCHECK_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper()
    if value not in VALID_LOG_LEVELS:
        logger.warning("[CONFIG] Invalid HEADERCHECK_LOG_LEVEL '%s', using %s", value, DEFAULT_LOG_LEVEL)
        return DEFAULT_LOG_LEVEL
    return value
