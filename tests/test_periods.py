"""
Tests for pay-period arithmetic: period boundaries, payment dates,
period walking and year rollover in both directions.
"""
from __future__ import annotations

from datetime import date, timedelta

import pytest

from app.services.periods import (
    PeriodRange,
    add_months,
    get_payment_date,
    get_period_range,
    iter_periods,
)


class TestPeriodRange:
    def test_on_or_before_closing_day(self):
        assert get_period_range(date(2026, 3, 10), 15) == PeriodRange(
            start=date(2026, 2, 16), end=date(2026, 3, 15)
        )
        assert get_period_range(date(2026, 3, 15), 15).end == date(2026, 3, 15)

    def test_after_closing_day(self):
        assert get_period_range(date(2026, 3, 16), 15) == PeriodRange(
            start=date(2026, 3, 16), end=date(2026, 4, 15)
        )

    def test_december_rolls_into_january(self):
        assert get_period_range(date(2026, 12, 20), 15) == PeriodRange(
            start=date(2026, 12, 16), end=date(2027, 1, 15)
        )

    def test_january_reaches_back_into_december(self):
        assert get_period_range(date(2026, 1, 10), 15) == PeriodRange(
            start=date(2025, 12, 16), end=date(2026, 1, 15)
        )

    def test_pay_month_is_closing_month(self):
        assert get_period_range(date(2026, 12, 20), 15).pay_month == (2027, 1)

    def test_contains(self):
        period = get_period_range(date(2026, 3, 20), 15)
        assert date(2026, 3, 16) in period
        assert date(2026, 4, 15) in period
        assert date(2026, 4, 16) not in period

    def test_closing_28_in_common_year_february(self):
        # 29 Feb does not exist in 2026: the period starts on 1 March.
        assert get_period_range(date(2026, 3, 10), 28).start == date(2026, 3, 1)

    def test_closing_28_in_leap_year_february(self):
        assert get_period_range(date(2024, 3, 10), 28).start == date(2024, 2, 29)

    @pytest.mark.parametrize("closing_day", [1, 5, 10, 15, 20, 25, 27])
    def test_boundary_days(self, closing_day):
        day = date(2025, 1, 1)
        while day < date(2027, 1, 1):
            period = get_period_range(day, closing_day)
            assert period.start.day == closing_day + 1
            assert period.end.day == closing_day
            assert day in period
            day += timedelta(days=1)


class TestIterPeriods:
    @pytest.mark.parametrize("closing_day", [1, 10, 15, 28])
    def test_adjacent_and_complete(self, closing_day):
        first, last = date(2025, 1, 1), date(2027, 1, 1)
        periods = list(iter_periods(first, last, closing_day))

        assert first in periods[0]
        assert last in periods[-1]
        for prev, nxt in zip(periods, periods[1:]):
            assert nxt.start == prev.end + timedelta(days=1)

        covered = sum((p.end - p.start).days + 1 for p in periods)
        assert covered == (periods[-1].end - periods[0].start).days + 1

    def test_single_period(self):
        periods = list(iter_periods(date(2026, 3, 16), date(2026, 3, 20), 15))
        assert periods == [get_period_range(date(2026, 3, 16), 15)]

    def test_visits_each_period_once_in_order(self):
        periods = list(iter_periods(date(2026, 1, 1), date(2026, 12, 31), 15))
        starts = [p.start for p in periods]
        assert starts == sorted(set(starts))
        assert len(periods) == 13


class TestPaymentDate:
    def test_same_month_no_lag(self):
        assert get_payment_date(date(2026, 3, 10), 15, 0) == date(2026, 3, 25)

    def test_after_closing_moves_to_next_month(self):
        assert get_payment_date(date(2026, 3, 20), 15, 0) == date(2026, 4, 25)

    def test_lag_one(self):
        assert get_payment_date(date(2026, 3, 10), 15, 1) == date(2026, 4, 25)

    def test_december_rollover(self):
        assert get_payment_date(date(2026, 12, 20), 15, 1) == date(2027, 2, 25)
        assert get_payment_date(date(2026, 12, 20), 15, 0) == date(2027, 1, 25)

    def test_long_lag(self):
        assert get_payment_date(date(2026, 11, 30), 15, 14) == date(2028, 2, 25)


class TestAddMonths:
    def test_clamps_to_month_end(self):
        assert add_months(date(2026, 1, 31), 1) == date(2026, 2, 28)

    def test_year_rollover(self):
        assert add_months(date(2026, 12, 5), 1) == date(2027, 1, 5)
        assert add_months(date(2026, 1, 5), -1) == date(2025, 12, 5)
