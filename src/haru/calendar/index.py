"""Calendar aggregation: group entries into the days of a month.

Aggregation is policy-free: every cell carries the full list of its
entries in input order.  Capping ("show 3, then +N") and grid layout are
presentation helpers applied on top by the caller.
"""

from __future__ import annotations

import calendar
import logging
from collections.abc import Iterable, Sequence
from datetime import date

from pydantic import BaseModel, Field

from haru.calendar.dates import days_in_month, first_weekday_of_month
from haru.content.models import DiaryEntry
from haru.errors import InvalidArgumentError

logger = logging.getLogger(__name__)

DEFAULT_MAX_ENTRIES_PER_DAY = 3


class CalendarCell(BaseModel):
    """All entries for one real day of a displayed month."""

    date: date
    entries: list[DiaryEntry] = Field(default_factory=list)

    @property
    def day(self) -> int:
        return self.date.day


class CappedDay(BaseModel):
    """Entries to show for a day plus how many were left out."""

    shown: list[DiaryEntry] = Field(default_factory=list)
    overflow_count: int = 0


def build_month(entries: Iterable[DiaryEntry], month: int, year: int) -> list[CalendarCell]:
    """Bucket entries by day for one month.

    Returns exactly one cell per day, day 1 first.  Entries dated outside
    the month are left out, as are entries whose date does not parse
    (logged at WARNING).

    Raises:
        InvalidArgumentError: month not in 1-12 or year not in 1-9999.
    """
    n_days = days_in_month(month, year)
    by_day: dict[int, list[DiaryEntry]] = {}
    for entry in entries:
        entry_date = entry.calendar_date
        if entry_date is None:
            logger.warning("Skipping entry %s with unparseable date %r", entry.id, entry.date)
            continue
        if entry_date.year != year or entry_date.month != month:
            continue
        by_day.setdefault(entry_date.day, []).append(entry)

    return [
        CalendarCell(date=date(year, month, day), entries=by_day.get(day, []))
        for day in range(1, n_days + 1)
    ]


def find_unplaceable(entries: Iterable[DiaryEntry]) -> list[DiaryEntry]:
    """Entries no calendar can show because their date does not parse."""
    return [e for e in entries if e.calendar_date is None]


def cap_entries(entries: Sequence[DiaryEntry], limit: int = DEFAULT_MAX_ENTRIES_PER_DAY) -> CappedDay:
    """Keep the first *limit* entries and count the rest."""
    if limit < 0:
        raise InvalidArgumentError(f"limit must be >= 0, got {limit}")
    return CappedDay(shown=list(entries[:limit]), overflow_count=max(0, len(entries) - limit))


def month_grid(
    cells: Sequence[CalendarCell],
    week_start: int = calendar.SUNDAY,
) -> list[list[CalendarCell | None]]:
    """Lay a month's cells out in 7-column weeks.

    Leading and trailing slots outside the month are None.
    """
    if not cells:
        return []
    first = cells[0].date
    slots: list[CalendarCell | None] = [None] * first_weekday_of_month(first.month, first.year, week_start)
    slots.extend(cells)
    if len(slots) % 7:
        slots.extend([None] * (7 - len(slots) % 7))
    return [slots[i : i + 7] for i in range(0, len(slots), 7)]


def timeline(entries: Iterable[DiaryEntry]) -> list[DiaryEntry]:
    """Non-deleted entries, most recent date first, then newest created.

    Entries with an unparseable date go last.
    """
    live = [e for e in entries if not e.is_deleted]
    return sorted(
        live,
        key=lambda e: (e.calendar_date is not None, e.calendar_date or date.min, e.created_at),
        reverse=True,
    )
