"""Date utilities for finandrive.

Pure functions for calendar dates, working-day counting and report periods.
Dates are plain ``datetime.date`` values; no timezone is ever involved.
"""

from collections.abc import Set
from datetime import date, datetime, timedelta
from typing import Literal

from finandrive.domain.models import IsoDate

Period = Literal["today", "week", "month", "all", "custom"]

PERIODS: tuple[Period, ...] = ("today", "week", "month", "all", "custom")

WEEKDAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")


def parse_date(value: str) -> date:
    """Parse a YYYY-MM-DD string into a calendar date.

    Args:
        value: Date string in YYYY-MM-DD format.

    Returns:
        The calendar date, independent of the host timezone.

    Raises:
        ValueError: If the string is not a valid YYYY-MM-DD date.
    """
    return datetime.strptime(value, "%Y-%m-%d").date()


def format_date(day: date) -> IsoDate:
    """Format a calendar date as YYYY-MM-DD."""
    return IsoDate(day.strftime("%Y-%m-%d"))


def weekday_index(day: date) -> int:
    """Get the weekday index of a date, with 0 = Sunday and 6 = Saturday."""
    return day.isoweekday() % 7


def count_working_days(start: date, end: date, work_days: Set[int]) -> int:
    """Count days in [start, end] whose weekday is a work day.

    Args:
        start: First day of the range (inclusive).
        end: Last day of the range (inclusive).
        work_days: Weekday indices (0 = Sunday) the user works on.

    Returns:
        Number of matching days. Zero if end is before start.
    """
    count = 0
    current = start
    while current <= end:
        if weekday_index(current) in work_days:
            count += 1
        current += timedelta(days=1)
    return count


def start_of_week(day: date) -> date:
    """Get the Monday of the week containing day (Sunday belongs to the previous week)."""
    return day - timedelta(days=day.weekday())


def start_of_month(day: date) -> date:
    """Get the first day of the month containing day."""
    return day.replace(day=1)


def period_range(
    period: Period,
    today: date,
    start: date | None = None,
    end: date | None = None,
) -> tuple[date, date] | None:
    """Calculate the inclusive date range for a report period.

    Args:
        period: One of "today", "week", "month", "all" or "custom".
        today: Reference date.
        start: First day for a custom period.
        end: Last day for a custom period.

    Returns:
        Tuple of (since, until), both inclusive, or None when the period
        is unbounded ("all", or "custom" missing a bound).

    Raises:
        ValueError: If the period is unknown or a custom start is after its end.
    """
    if period == "today":
        return today, today
    if period == "week":
        return start_of_week(today), today
    if period == "month":
        return start_of_month(today), today
    if period == "all":
        return None
    if period == "custom":
        if start is None or end is None:
            return None
        if start > end:
            raise ValueError(f"Start date {format_date(start)} is after end date {format_date(end)}")
        return start, end
    raise ValueError(f"Unknown period '{period}'. Use one of: {', '.join(PERIODS)}")


def format_work_days(work_days: Set[int]) -> str:
    """Format a work-day set for display (e.g., "Mon, Tue, Wed")."""
    if not work_days:
        return "none"
    return ", ".join(WEEKDAY_NAMES[index][:3] for index in sorted(work_days))


def parse_weekday(value: str) -> int:
    """Parse a weekday given as an index (0-6) or a name ("mon", "Monday").

    Raises:
        ValueError: If the value is not a recognised weekday.
    """
    text = value.strip().lower()
    if text.isdigit():
        index = int(text)
        if 0 <= index <= 6:
            return index
        raise ValueError(f"Weekday index must be between 0 (Sunday) and 6 (Saturday), got {index}")

    if len(text) >= 3:
        for index, name in enumerate(WEEKDAY_NAMES):
            if name.lower().startswith(text):
                return index

    raise ValueError(f"Unknown weekday '{value}'")
