"""
Tests for the calendar capability and Spanish date formatting.
"""
from datetime import date, datetime, timezone

import pytest

from cultivo.core.calendar import (
    DEFAULT_CALENDAR, Calendar, as_date, as_datetime, format_date, format_week_range, is_same_week,
    week_start, weekday_name,
)


class TestGregorianCalendar:

    def setup_method(self):
        self.calendar = DEFAULT_CALENDAR

    def test_satisfies_protocol(self):
        """Test the default calendar implements Calendar"""
        assert isinstance(self.calendar, Calendar)

    def test_arithmetic(self):
        """Test day and week offsets across a month boundary"""
        assert self.calendar.add_days(date(2025, 9, 28), 5) == date(2025, 10, 3)
        assert self.calendar.add_weeks(date(2025, 9, 4), 2) == date(2025, 9, 18)
        assert self.calendar.days_between(date(2025, 9, 4), date(2026, 3, 16)) == 193

    @pytest.mark.parametrize("a, b, expected", [
        (date(2025, 9, 4), date(2025, 9, 5), -1),
        (date(2025, 9, 4), date(2025, 9, 4), 0),
        (date(2025, 9, 5), date(2025, 9, 4), 1),
    ])
    def test_compare(self, a, b, expected):
        """Test three-way comparison"""
        assert self.calendar.compare(a, b) == expected

    def test_start_of_day(self):
        """Test dates become midnight datetimes"""
        assert self.calendar.at_start_of_day(date(2025, 9, 4)) == datetime(2025, 9, 4, 0, 0)
        assert self.calendar.weekday(date(2025, 9, 4)) == 3  # Thursday


class TestFormatting:

    def test_format_date(self):
        """Test dd/MM/yyyy"""
        assert format_date(datetime(2025, 9, 7, 15, 0)) == "07/09/2025"

    def test_week_range(self):
        """Test Spanish week range labels"""
        assert format_week_range(date(2025, 9, 4), date(2025, 9, 10)) == "04 sept - 10 sept 2025"
        assert format_week_range(date(2025, 12, 25), date(2025, 12, 31)) == "25 dic - 31 dic 2025"

    def test_weekday_name(self):
        """Test Spanish weekday names"""
        assert weekday_name(date(2025, 9, 4)) == "jueves"
        assert weekday_name(date(2025, 9, 7)) == "domingo"


class TestNormalisation:

    def test_date_becomes_midnight(self):
        """Test dates promote to naive midnight"""
        assert as_datetime(date(2025, 9, 4)) == datetime(2025, 9, 4)

    def test_aware_offset_dropped(self):
        """Test aware datetimes become naive, keeping wall time without a zone"""
        value = as_datetime(datetime(2025, 9, 4, 10, 0, tzinfo=timezone.utc))
        assert value.tzinfo is None
        assert value == datetime(2025, 9, 4, 10, 0)

    def test_aware_converted_to_zone(self):
        """Test aware datetimes are moved into the given zone first"""
        value = as_datetime(datetime(2025, 12, 1, 12, 0, tzinfo=timezone.utc), "America/Santiago")
        assert value.tzinfo is None
        assert value.date() == date(2025, 12, 1)
        assert value.hour in (8, 9)
        assert as_date(datetime(2025, 12, 1, 2, 0, tzinfo=timezone.utc),
                       "America/Santiago") == date(2025, 11, 30)


class TestWeeks:

    def test_week_start_monday(self):
        """Test Monday-based week start"""
        assert week_start(date(2025, 9, 4)) == date(2025, 9, 1)
        assert week_start(date(2025, 9, 1)) == date(2025, 9, 1)

    def test_is_same_week(self):
        """Test same-week checks across a Sunday/Monday boundary"""
        assert is_same_week(date(2025, 9, 1), date(2025, 9, 7))
        assert not is_same_week(date(2025, 9, 7), date(2025, 9, 8))
        assert is_same_week(date(2025, 9, 7), date(2025, 9, 8), week_starts_on=6)
