"""Date formatting for Jira timestamps."""

import logging
from datetime import datetime, timezone

import dateutil.parser

logger = logging.getLogger("mcp-jira.utils.date")


def parse_date(date_str: str | None, format_string: str = "%Y-%m-%d") -> str:
    """
    Reformat a Jira timestamp.

    Accepts ISO 8601 strings such as ``2024-01-05T10:30:00.000+0000`` and
    epoch timestamps in milliseconds.

    Args:
        date_str: Date string
        format_string: The output format (default: "%Y-%m-%d")

    Returns:
        Formatted date string, an empty string for missing input, or the
        original string when it cannot be parsed
    """
    if not date_str:
        return ""

    try:
        if date_str.isdigit():
            date = datetime.fromtimestamp(int(date_str) / 1000, tz=timezone.utc)
        else:
            date = dateutil.parser.parse(date_str)
        return date.strftime(format_string)
    except (ValueError, TypeError, OverflowError) as e:
        logger.debug(f"Could not parse date '{date_str}': {e}")

    return date_str

