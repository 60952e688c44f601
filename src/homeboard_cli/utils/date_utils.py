"""Calendar date helpers.

Dates coming from the command line are plain ``YYYY-MM-DD`` strings and are
always treated as local calendar dates. They are never routed through an
instant with a timezone, which would shift them by a day for users west of
UTC.
"""

from __future__ import annotations

from datetime import date, datetime

DATE_FORMAT = "%Y-%m-%d"


def parse_local_date(value: str) -> date:
    """Parse a ``YYYY-MM-DD`` string as a local calendar date.

    Args:
        value: Date string (e.g., "2024-03-06")

    Returns:
        date object

    Raises:
        ValueError: If the string is not a valid calendar date
    """
    try:
        return datetime.strptime(value.strip(), DATE_FORMAT).date()
    except (AttributeError, ValueError) as e:
        raise ValueError(
            f"Invalid date '{value}': expected YYYY-MM-DD"
        ) from e


def format_date_string(value: date) -> str:
    """Format a date as ``YYYY-MM-DD``."""
    return value.isoformat()


def today() -> date:
    """Return today's local calendar date."""
    return date.today()


def weekday_index(value: date) -> int:
    """Return the weekday of *value* with Sunday=0 ... Saturday=6."""
    return value.isoweekday() % 7
