"""Tests for ledgergen/months.py — month partitioning and salary dates."""

from datetime import date, timedelta

import pytest

from ledgergen.models import DateRange, LedgerConfigError
from ledgergen.months import days_in_month, month_starts, partition_months, salary_date


def _assert_covers(windows, date_range):
    assert windows[0].start == date_range.start
    assert windows[-1].end == date_range.end
    for prev, nxt in zip(windows, windows[1:]):
        assert nxt.start == prev.end + timedelta(days=1)
    for i, w in enumerate(windows):
        assert w.index == i
        assert w.start <= w.end
        assert w.start.month == w.end.month and w.start.year == w.end.year
    assert sum(w.days for w in windows) == date_range.days


class TestPartitionMonths:
    def test_single_month(self):
        r = DateRange(date(2024, 1, 1), date(2024, 1, 31))
        windows = partition_months(r)
        assert len(windows) == 1
        assert (windows[0].start, windows[0].end) == (r.start, r.end)

    def test_inside_one_month(self):
        r = DateRange(date(2024, 3, 10), date(2024, 3, 12))
        windows = partition_months(r)
        assert len(windows) == 1
        assert windows[0].days == 3

    def test_single_day(self):
        r = DateRange(date(2024, 5, 5), date(2024, 5, 5))
        windows = partition_months(r)
        assert len(windows) == 1
        assert windows[0].start == windows[0].end == date(2024, 5, 5)

    def test_clipped_edges(self):
        r = DateRange(date(2024, 1, 15), date(2024, 3, 10))
        windows = partition_months(r)
        assert [(w.start, w.end) for w in windows] == [
            (date(2024, 1, 15), date(2024, 1, 31)),
            (date(2024, 2, 1), date(2024, 2, 29)),
            (date(2024, 3, 1), date(2024, 3, 10)),
        ]
        _assert_covers(windows, r)

    def test_year_boundary(self):
        r = DateRange(date(2023, 11, 20), date(2024, 2, 5))
        windows = partition_months(r)
        assert [w.start.month for w in windows] == [11, 12, 1, 2]
        _assert_covers(windows, r)

    @pytest.mark.parametrize(
        "start,end",
        [
            (date(2023, 1, 31), date(2023, 3, 1)),
            (date(2024, 2, 29), date(2025, 2, 28)),
            (date(2022, 6, 1), date(2024, 6, 30)),
        ],
    )
    def test_coverage(self, start, end):
        r = DateRange(start, end)
        _assert_covers(partition_months(r), r)


class TestDateRange:
    def test_reversed_raises(self):
        with pytest.raises(LedgerConfigError, match="Invalid date range"):
            DateRange(date(2024, 2, 1), date(2024, 1, 1))

    def test_contains(self):
        r = DateRange(date(2024, 1, 1), date(2024, 1, 31))
        assert date(2024, 1, 31) in r
        assert date(2024, 2, 1) not in r


class TestMonthStarts:
    def test_months_touched(self):
        r = DateRange(date(2024, 1, 31), date(2024, 3, 1))
        assert list(month_starts(r)) == [
            date(2024, 1, 1),
            date(2024, 2, 1),
            date(2024, 3, 1),
        ]


class TestSalaryDate:
    def test_regular_day(self):
        assert salary_date(date(2024, 4, 1), 15) == date(2024, 4, 15)

    def test_clamped_to_month_end(self):
        assert salary_date(date(2024, 2, 1), 31) == date(2024, 2, 29)
        assert salary_date(date(2023, 2, 1), 30) == date(2023, 2, 28)
        assert salary_date(date(2024, 4, 1), 31) == date(2024, 4, 30)

    def test_days_in_month(self):
        assert days_in_month(2024, 2) == 29
        assert days_in_month(2023, 12) == 31
