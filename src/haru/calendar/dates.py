"""Calendar arithmetic: pure functions, no clock access.

Every function that needs "now" takes it as an argument so results are
deterministic.  Values accepted as dates are ``datetime.date``,
``datetime.datetime`` or ISO 8601 strings (``YYYY-MM-DD`` with an
optional time part).  A datetime is judged on its own calendar day;
no timezone conversion is applied.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime

from haru.errors import InvalidArgumentError

INVALID_DATE = "Invalid Date"

# Fixed English abbreviations; calendar.month_abbr follows the process locale.
MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

WEEKDAY_ABBR = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

DateLike = date | datetime | str


def _check_month(month: int, year: int) -> None:
    if not 1 <= month <= 12:
        raise InvalidArgumentError(f"month must be 1-12, got {month}")
    if not 1 <= year <= 9999:
        raise InvalidArgumentError(f"year must be 1-9999, got {year}")


def parse_calendar_date(value: object) -> date | None:
    """Return the calendar day of *value*, or None if it does not parse."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def days_in_month(month: int, year: int) -> int:
    """Number of days in a Gregorian month."""
    _check_month(month, year)
    return calendar.monthrange(year, month)[1]


def first_weekday_of_month(month: int, year: int, week_start: int = calendar.SUNDAY) -> int:
    """Column (0-6) of day 1, counting from *week_start*.

    *week_start* uses the ``calendar`` module constants (MONDAY=0 ...
    SUNDAY=6).  With the default, 0 means Sunday.
    """
    _check_month(month, year)
    if not 0 <= week_start <= 6:
        raise InvalidArgumentError(f"week_start must be 0-6, got {week_start}")
    return (date(year, month, 1).weekday() - week_start) % 7


def weekday_headers(week_start: int = calendar.SUNDAY) -> list[str]:
    """Short weekday names in display order starting at *week_start*."""
    if not 0 <= week_start <= 6:
        raise InvalidArgumentError(f"week_start must be 0-6, got {week_start}")
    return [WEEKDAY_ABBR[(week_start + i) % 7] for i in range(7)]


def is_same_calendar_day(a: DateLike, b: DateLike) -> bool:
    """True when both values fall on the same year, month and day."""
    day_a = parse_calendar_date(a)
    day_b = parse_calendar_date(b)
    if day_a is None or day_b is None:
        return False
    return day_a == day_b


def is_today(value: DateLike, reference_now: DateLike) -> bool:
    return is_same_calendar_day(value, reference_now)


def is_current_month(month: int, year: int, reference_now: DateLike) -> bool:
    today = parse_calendar_date(reference_now)
    if today is None:
        return False
    return today.year == year and today.month == month


def format_short(value: object) -> str:
    """Format as ``"Sep 1, 2025"``; returns ``"Invalid Date"`` instead of raising."""
    day = parse_calendar_date(value)
    if day is None:
        return INVALID_DATE
    return f"{MONTH_ABBR[day.month - 1]} {day.day}, {day.year}"


def relative_label(value: DateLike, reference_now: DateLike) -> str:
    """Label a date relative to *reference_now*.

    Uses the signed difference in whole calendar days, so two datetimes on
    the same calendar day are always "Today" regardless of the clock time.
    """
    day = parse_calendar_date(value)
    today = parse_calendar_date(reference_now)
    if day is None or today is None:
        return format_short(value)
    delta = (day - today).days
    if delta == 0:
        return "Today"
    if delta == -1:
        return "Yesterday"
    if delta == 1:
        return "Tomorrow"
    return format_short(day)
