"""Recurrence utility functions for the Homeboard CLI.

Expands a set of weekdays plus a repeat interval into the concrete calendar
dates a task batch is created on. Weekdays are always Sunday=0 ... Saturday=6.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator
from datetime import date, timedelta

from homeboard_cli.models.recurrence import GenerationRequest
from homeboard_cli.utils.date_utils import weekday_index

_ONE_WEEK = timedelta(weeks=1)

_WEEKDAY_NAMES = {
    "sun": 0,
    "sunday": 0,
    "mon": 1,
    "monday": 1,
    "tue": 2,
    "tues": 2,
    "tuesday": 2,
    "wed": 3,
    "wednesday": 3,
    "thu": 4,
    "thur": 4,
    "thurs": 4,
    "thursday": 4,
    "fri": 5,
    "friday": 5,
    "sat": 6,
    "saturday": 6,
}


def week_of_month(value: date) -> int:
    """Return which week of its month *value* falls in (1-5).

    The 1st-7th is week 1, the 8th-14th week 2, and so on.
    """
    return math.ceil(value.day / 7)


def nth_weekday_of_month(year: int, month: int, weekday: int, n: int) -> date | None:
    """Find the n-th occurrence of a weekday in a month.

    Args:
        year: Calendar year
        month: Calendar month (1-12)
        weekday: Weekday (0=Sunday ... 6=Saturday)
        n: Occurrence to find (1 = first)

    Returns:
        The date, or None if the month has fewer than n such weekdays
    """
    current = date(year, month, 1)
    current += timedelta(days=(weekday - weekday_index(current)) % 7)

    for _ in range(n - 1):
        current += _ONE_WEEK
        if current.month != month:
            return None

    if current.month != month:
        return None
    return current


def _week_anchors(start: date, end: date, every: int) -> Iterator[date]:
    """Yield week anchors from *start* through *end*, keeping every n-th week."""
    anchor = start
    index = 0
    while anchor <= end:
        if index % every == 0:
            yield anchor
        anchor += _ONE_WEEK
        index += 1


def _weekly_candidates(
    start: date, end: date, weekdays: Iterable[int], every: int
) -> Iterator[date]:
    for anchor in _week_anchors(start, end, every):
        anchor_weekday = weekday_index(anchor)
        for weekday in weekdays:
            yield anchor + timedelta(days=(weekday - anchor_weekday + 7) % 7)


def _month_starts(first: date, end: date) -> Iterator[date]:
    current = first.replace(day=1)
    while current <= end:
        yield current
        if current.month == 12:
            current = current.replace(year=current.year + 1, month=1)
        else:
            current = current.replace(month=current.month + 1)


def _monthly_candidates(start: date, end: date, weekdays: Iterable[int]) -> Iterator[date]:
    for weekday in weekdays:
        first = start + timedelta(days=(weekday - weekday_index(start)) % 7)
        if first > end:
            continue

        ordinal = week_of_month(first)
        for month_start in _month_starts(first, end):
            found = nth_weekday_of_month(
                month_start.year, month_start.month, weekday, ordinal
            )
            # A missing 5th occurrence skips the month, it never rolls over
            if found is not None:
                yield found


def _single_candidate(start: date, weekdays: frozenset[int]) -> Iterator[date]:
    if weekday_index(start) in weekdays:
        yield start


def generate_task_dates(request: GenerationRequest) -> list[date]:
    """Generate every date a repeating task should be created on.

    Degenerate input (no weekdays, or start after end) yields an empty list
    rather than an error.

    Args:
        request: Weekdays, repeat interval and inclusive date range

    Returns:
        Ascending list of unique dates within [start, end]
    """
    weekdays = request.selected_weekdays
    start, end = request.start, request.end

    if not weekdays or start > end:
        return []

    ordered = sorted(weekdays)
    interval = request.repeat_interval
    if interval is None:
        candidates = _single_candidate(start, weekdays)
    elif interval == "weekly":
        candidates = _weekly_candidates(start, end, ordered, every=1)
    elif interval == "biweekly":
        candidates = _weekly_candidates(start, end, ordered, every=2)
    else:
        candidates = _monthly_candidates(start, end, ordered)

    return sorted({d for d in candidates if start <= d <= end})


def describe_repeat(
    selected_weekdays: Iterable[int], repeat_interval: str | None
) -> str:
    """Get a human-readable description of a repeat pattern.

    Args:
        selected_weekdays: Weekdays (0=Sunday ... 6=Saturday)
        repeat_interval: "weekly", "biweekly", "monthly" or None

    Returns:
        Description such as "Repeats every week on Mon, Fri", or an empty
        string when there is nothing to repeat
    """
    day_names = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")

    weekdays = sorted(set(selected_weekdays))
    if not repeat_interval or not weekdays:
        return ""

    if repeat_interval == "weekly":
        interval_text = "every week"
    elif repeat_interval == "biweekly":
        interval_text = "every 2 weeks"
    else:
        interval_text = "monthly (same week pattern)"

    names = ", ".join(day_names[d] for d in weekdays)
    return f"Repeats {interval_text} on {names}"


def parse_weekdays(text: str) -> frozenset[int]:
    """Parse a comma-separated weekday list such as "mon,wed,5".

    Tokens may be day names (full or abbreviated, any case) or digits 0-6
    with Sunday=0.

    Raises:
        ValueError: If a token is not a recognised weekday
    """
    weekdays: set[int] = set()
    for raw in text.split(","):
        token = raw.strip().lower()
        if not token:
            continue
        if token.isdigit():
            value = int(token)
            if not 0 <= value <= 6:
                raise ValueError(f"Weekday out of range (0=Sun ... 6=Sat): {raw.strip()}")
            weekdays.add(value)
        elif token in _WEEKDAY_NAMES:
            weekdays.add(_WEEKDAY_NAMES[token])
        else:
            raise ValueError(f"Unknown weekday: {raw.strip()}")
    return frozenset(weekdays)
