"""Resolve named reporting periods to inclusive date ranges ending today."""
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Optional

from dateutil.relativedelta import relativedelta

DAY = "day"
WEEK = "week"
MONTH = "month"
YEAR = "year"

PERIODS = (DAY, WEEK, MONTH, YEAR)


@dataclass(frozen=True)
class DateRange:
    start: date
    end: date


def week_start(today: date) -> date:
    """Most recent Monday on or before ``today``."""
    # isoweekday(): Monday == 1 ... Sunday == 7
    weekday = today.isoweekday()
    back = 6 if weekday == 7 else weekday - 1
    return today - timedelta(days=back)


def resolve_period(period: str, today: Optional[date] = None) -> DateRange:
    """Map ``period`` to a ``DateRange`` whose end is ``today``.

    Month and year rollbacks use ``relativedelta``, which clamps to the last
    valid day of the target month (2024-03-31 minus one month is 2024-02-29).
    """
    today = today or date.today()
    if period == DAY:
        start = today
    elif period == WEEK:
        start = week_start(today)
    elif period == MONTH:
        start = today - relativedelta(months=1)
    elif period == YEAR:
        start = today - relativedelta(years=1)
    else:
        raise ValueError(f"Unknown period: {period!r}")
    return DateRange(start=start, end=today)


def normalize_period(value: Optional[str], allowed: Iterable[str] = PERIODS) -> str:
    allowed = tuple(allowed)
    if value in allowed:
        return value
    return allowed[0]


def month_to_date(today: Optional[date] = None) -> DateRange:
    today = today or date.today()
    return DateRange(start=today.replace(day=1), end=today)


def trailing_days(days: int, today: Optional[date] = None) -> DateRange:
    today = today or date.today()
    return DateRange(start=today - timedelta(days=days), end=today)
