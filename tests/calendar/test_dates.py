"""Tests for calendar date arithmetic."""

import calendar
from datetime import UTC, date, datetime, timedelta, timezone

import pytest

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
from haru.errors import InvalidArgumentError

NOW = date(2025, 9, 17)


class TestDaysInMonth:
    def test_leap_february(self):
        assert days_in_month(2, 2024) == 29

    def test_common_february(self):
        assert days_in_month(2, 2023) == 28

    def test_century_rules(self):
        assert days_in_month(2, 1900) == 28
        assert days_in_month(2, 2000) == 29

    @pytest.mark.parametrize("month,expected", [(1, 31), (4, 30), (9, 30), (12, 31)])
    def test_month_lengths(self, month: int, expected: int):
        assert days_in_month(month, 2025) == expected

    @pytest.mark.parametrize("month", [0, 13, -1])
    def test_invalid_month(self, month: int):
        with pytest.raises(InvalidArgumentError):
            days_in_month(month, 2025)

    def test_invalid_year(self):
        with pytest.raises(InvalidArgumentError):
            days_in_month(1, 0)


class TestFirstWeekdayOfMonth:
    def test_sunday_start(self):
        # 2025-09-01 was a Monday
        assert first_weekday_of_month(9, 2025) == 1

    def test_month_starting_on_sunday(self):
        # 2025-06-01 was a Sunday
        assert first_weekday_of_month(6, 2025) == 0

    def test_monday_start(self):
        assert first_weekday_of_month(9, 2025, week_start=calendar.MONDAY) == 0
        assert first_weekday_of_month(6, 2025, week_start=calendar.MONDAY) == 6

    def test_invalid_week_start(self):
        with pytest.raises(InvalidArgumentError):
            first_weekday_of_month(9, 2025, week_start=7)

    def test_invalid_month(self):
        with pytest.raises(InvalidArgumentError):
            first_weekday_of_month(13, 2025)


class TestWeekdayHeaders:
    def test_sunday_first(self):
        assert weekday_headers() == ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]

    def test_monday_first(self):
        assert weekday_headers(calendar.MONDAY)[0] == "Mon"
        assert weekday_headers(calendar.MONDAY)[-1] == "Sun"


class TestParseCalendarDate:
    def test_accepts_date_datetime_and_strings(self):
        assert parse_calendar_date(date(2025, 9, 1)) == date(2025, 9, 1)
        assert parse_calendar_date(datetime(2025, 9, 1, 23, 59)) == date(2025, 9, 1)
        assert parse_calendar_date("2025-09-01") == date(2025, 9, 1)
        assert parse_calendar_date("2025-09-01T23:59:00Z") == date(2025, 9, 1)

    @pytest.mark.parametrize("value", ["", "  ", "yesterday", "2025-13-01", "2025-02-30", None, 20250901])
    def test_rejects_garbage(self, value: object):
        assert parse_calendar_date(value) is None


class TestSameCalendarDay:
    def test_ignores_time_of_day(self):
        assert is_same_calendar_day(datetime(2025, 9, 17, 0, 1), datetime(2025, 9, 17, 23, 59))

    def test_different_days(self):
        assert not is_same_calendar_day(date(2025, 9, 17), date(2025, 9, 18))

    def test_same_day_different_year(self):
        assert not is_same_calendar_day(date(2024, 9, 17), date(2025, 9, 17))

    def test_unparseable_is_false(self):
        assert not is_same_calendar_day("junk", NOW)

    def test_is_today(self):
        assert is_today("2025-09-17", NOW)
        assert not is_today("2025-09-16", NOW)


class TestIsCurrentMonth:
    def test_current(self):
        assert is_current_month(9, 2025, NOW)

    def test_other(self):
        assert not is_current_month(9, 2024, NOW)
        assert not is_current_month(8, 2025, NOW)


class TestFormatShort:
    def test_format(self):
        assert format_short("2025-09-01") == "Sep 1, 2025"
        assert format_short(date(2024, 12, 25)) == "Dec 25, 2024"

    @pytest.mark.parametrize("value", ["", "nope", "2025-02-30", None])
    def test_invalid_never_raises(self, value: object):
        assert format_short(value) == INVALID_DATE == "Invalid Date"


class TestRelativeLabel:
    def test_boundaries(self):
        assert relative_label("2025-09-16", NOW) == "Yesterday"
        assert relative_label("2025-09-18", NOW) == "Tomorrow"
        assert relative_label("2025-09-17", NOW) == "Today"
        assert relative_label("2025-09-01", NOW) == "Sep 1, 2025"

    def test_two_days_out(self):
        assert relative_label("2025-09-19", NOW) == "Sep 19, 2025"
        assert relative_label("2025-09-15", NOW) == "Sep 15, 2025"

    def test_time_of_day_does_not_matter(self):
        late_now = datetime(2025, 9, 17, 23, 59)
        assert relative_label(datetime(2025, 9, 17, 0, 1), late_now) == "Today"
        assert relative_label(datetime(2025, 9, 16, 23, 59), datetime(2025, 9, 17, 0, 0)) == "Yesterday"

    def test_timezone_offset_within_same_day(self):
        seoul = timezone(timedelta(hours=9))
        value = datetime(2025, 9, 17, 1, 0, tzinfo=seoul)
        assert relative_label(value, datetime(2025, 9, 17, 12, 0, tzinfo=UTC)) == "Today"

    def test_across_year_boundary(self):
        assert relative_label("2024-12-31", date(2025, 1, 1)) == "Yesterday"

    def test_invalid_value(self):
        assert relative_label("garbage", NOW) == "Invalid Date"
