"""Tests for period resolution (day/week/month/year ranges)."""

from datetime import date

import pytest

from expensebook.periods import (
    DateRange,
    month_to_date,
    normalize_period,
    resolve_period,
    trailing_days,
    week_start,
)


class TestWeekStart:
    def test_wednesday_goes_back_to_monday(self):
        # 2024-05-15 is a Wednesday
        assert week_start(date(2024, 5, 15)) == date(2024, 5, 13)

    def test_sunday_goes_back_six_days(self):
        assert week_start(date(2024, 5, 19)) == date(2024, 5, 13)

    def test_monday_is_its_own_start(self):
        assert week_start(date(2024, 5, 13)) == date(2024, 5, 13)

    def test_crosses_month_boundary(self):
        # 2024-06-02 is a Sunday
        assert week_start(date(2024, 6, 2)) == date(2024, 5, 27)


class TestResolvePeriod:
    def test_day_is_today_only(self):
        today = date(2024, 5, 15)
        assert resolve_period("day", today) == DateRange(today, today)

    def test_week(self):
        r = resolve_period("week", date(2024, 5, 15))
        assert r.start == date(2024, 5, 13)
        assert r.end == date(2024, 5, 15)

    def test_month_same_day_previous_month(self):
        r = resolve_period("month", date(2024, 5, 15))
        assert r.start == date(2024, 4, 15)

    def test_month_clamps_to_shorter_month(self):
        assert resolve_period("month", date(2024, 3, 31)).start == date(2024, 2, 29)
        assert resolve_period("month", date(2023, 3, 31)).start == date(2023, 2, 28)

    def test_month_crosses_year(self):
        assert resolve_period("month", date(2024, 1, 10)).start == date(2023, 12, 10)

    def test_year(self):
        assert resolve_period("year", date(2024, 5, 15)).start == date(2023, 5, 15)

    def test_year_from_leap_day(self):
        assert resolve_period("year", date(2024, 2, 29)).start == date(2023, 2, 28)

    def test_end_is_always_today(self):
        today = date(2024, 5, 15)
        for period in ("day", "week", "month", "year"):
            assert resolve_period(period, today).end == today

    def test_unknown_period_raises(self):
        with pytest.raises(ValueError):
            resolve_period("decade", date(2024, 5, 15))


class TestHelpers:
    def test_normalize_keeps_known_period(self):
        assert normalize_period("month") == "month"

    def test_normalize_falls_back_to_first(self):
        assert normalize_period(None) == "day"
        assert normalize_period("bogus", ("week", "month")) == "week"

    def test_month_to_date(self):
        r = month_to_date(date(2024, 5, 15))
        assert r == DateRange(date(2024, 5, 1), date(2024, 5, 15))

    def test_trailing_days(self):
        r = trailing_days(3, date(2024, 5, 15))
        assert r.start == date(2024, 5, 12)
        assert date(2024, 5, 12) in r
        assert date(2024, 5, 11) not in r
