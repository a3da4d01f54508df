"""Split a date range into calendar-month windows."""

from __future__ import annotations

import calendar
from datetime import date, timedelta
from typing import Iterator

from .models import DateRange, MonthWindow


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def _next_month(d: date) -> date:
    if d.month == 12:
        return date(d.year + 1, 1, 1)
    return date(d.year, d.month + 1, 1)


def month_starts(date_range: DateRange) -> Iterator[date]:
    """Yield the first day of every calendar month the range touches."""
    current = date_range.start.replace(day=1)
    while current <= date_range.end:
        yield current
        current = _next_month(current)


def partition_months(date_range: DateRange) -> list[MonthWindow]:
    """Return one window per touched month, clipped to *date_range*.

    Windows are ordered, contiguous, and together cover the range exactly.
    """
    windows: list[MonthWindow] = []
    for first in month_starts(date_range):
        last = _next_month(first) - timedelta(days=1)
        windows.append(
            MonthWindow(
                start=max(first, date_range.start),
                end=min(last, date_range.end),
                index=len(windows),
            )
        )
    return windows


def salary_date(month_start: date, day: int) -> date:
    """Salary date for the month; days past month end fall on the last day.

    Day 31 in a 30-day month lands on the 30th rather than rolling over to
    the 1st of the next month, so every month gets exactly one salary.
    """
    last = days_in_month(month_start.year, month_start.month)
    return month_start.replace(day=min(day, last))
