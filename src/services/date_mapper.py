"""Mapping between challenge day indices and calendar dates.

Day 1 is the start date itself. Start dates are plain calendar dates: an ISO
string such as "2024-01-01" is read as that local day, never as a UTC instant,
so no timezone offset can move it. Every function here degrades to an empty
result (None or "") instead of raising when the start date is missing or
unparseable.
"""

import logging
from datetime import date, datetime, timedelta

from dateutil import parser as dateutil_parser

from src.core.errors import ErrorCategory
from src.core.logging import log_with_context
from src.domain.challenge import DateLabelSetting


logger = logging.getLogger(__name__)

DateLike = date | str | None


def parse_start_date(value: DateLike) -> date | None:
    """Parse a start date leniently.

    Args:
        value: A date, a datetime (its calendar date is used), or an ISO string
            with or without a time component

    Returns:
        The calendar date, or None if absent or unparseable
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    try:
        return dateutil_parser.isoparse(text).date()
    except (ValueError, OverflowError):
        log_with_context(
            logger,
            "debug",
            "Unparseable start date",
            start_date=text,
            error_category=ErrorCategory.UNPARSEABLE_DATE.value,
        )
        return None


def date_for_day(day: int, start_date: DateLike) -> date | None:
    """Return the calendar date of a challenge day (start_date + day - 1)."""
    start = parse_start_date(start_date)
    if start is None:
        return None
    try:
        return start + timedelta(days=day - 1)
    except (OverflowError, TypeError):
        return None


def day_for_date(target: date, start_date: DateLike, total_days: int) -> int | None:
    """Return the day index of target, or None when outside the challenge.

    The challenge covers [start_date, start_date + total_days - 1].
    """
    start = parse_start_date(start_date)
    if start is None or target is None:
        return None
    if isinstance(target, datetime):
        target = target.date()
    offset = (target - start).days + 1
    if 1 <= offset <= total_days:
        return offset
    return None


def today_index(start_date: DateLike, total_days: int, today: date | None = None) -> int | None:
    """Return which challenge day is today, if today falls inside the challenge."""
    return day_for_date(today or date.today(), start_date, total_days)


def format_day_label(day: int, start_date: DateLike, setting: DateLabelSetting = DateLabelSetting.SHORT) -> str:
    """Format the date label shown under a calendar cell.

    "Jan 5" for short labels, "Fri, January 5" for long ones; empty without a date.
    """
    d = date_for_day(day, start_date)
    if d is None:
        return ""
    if setting == DateLabelSetting.LONG:
        return f"{d:%a}, {d:%B} {d.day}"
    return f"{d:%b} {d.day}"


def month_label(day: int, start_date: DateLike) -> str:
    """Return "January 2024" style month of the given day, or empty without a date."""
    d = date_for_day(day, start_date)
    if d is None:
        return ""
    return f"{d:%B %Y}"


def today_label(start_date: DateLike, total_days: int, today: date | None = None) -> str:
    """Describe where today sits in the challenge."""
    if parse_start_date(start_date) is None:
        return ""
    index = today_index(start_date, total_days, today)
    if index is None:
        return "Outside challenge range"
    return f"Day {index}"
