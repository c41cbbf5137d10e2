"""Calendar views: date arithmetic and per-day entry aggregation."""

from haru.calendar.dates import (
    INVALID_DATE,
    days_in_month,
    first_weekday_of_month,
    format_short,
    is_current_month,
    is_same_calendar_day,
    is_today,
    parse_calendar_date,
    relative_label,
    weekday_headers,
)
from haru.calendar.index import (
    DEFAULT_MAX_ENTRIES_PER_DAY,
    CalendarCell,
    CappedDay,
    build_month,
    cap_entries,
    find_unplaceable,
    month_grid,
    timeline,
)

__all__ = [
    "DEFAULT_MAX_ENTRIES_PER_DAY",
    "INVALID_DATE",
    "CalendarCell",
    "CappedDay",
    "build_month",
    "cap_entries",
    "days_in_month",
    "find_unplaceable",
    "first_weekday_of_month",
    "format_short",
    "is_current_month",
    "is_same_calendar_day",
    "is_today",
    "month_grid",
    "parse_calendar_date",
    "relative_label",
    "timeline",
    "weekday_headers",
]
