"""
Tests for period summaries, the annual income monitor and the monthly
breakdown.
"""
from __future__ import annotations

from dataclasses import replace
from datetime import date
from decimal import Decimal

import pytest

from app.services.summary import calculate_annual_income, monthly_breakdown, summarize_period


class TestPeriodSummary:
    def test_totals_for_period(self, settings, make_entry, entry_map):
        entries = entry_map(
            make_entry(date(2026, 3, 16), selected_blocks=["A", "B", "C"]),   # 7457
            make_entry(date(2026, 4, 15), support_minutes=60),               # 1075 + 800
            make_entry(date(2026, 4, 16), selected_blocks=["A"]),            # next period
        )
        s = summarize_period(entries, settings, date(2026, 3, 20))
        assert (s.start, s.end) == (date(2026, 3, 16), date(2026, 4, 15))
        assert (s.pay_year, s.pay_month) == (2026, 4)
        assert s.total_pay == 7457 + 1875
        assert s.class_count == 3
        assert s.work_day_count == 2
        assert s.administrative_minutes == 25 + 60

    def test_empty_period(self, settings):
        s = summarize_period({}, settings, date(2026, 3, 20))
        assert s.total_pay == 0
        assert s.work_day_count == 0


class TestAnnualIncome:
    @pytest.fixture()
    def entries(self, make_entry, entry_map):
        return entry_map(
            make_entry(date(2025, 12, 20), allowance_amount=100_000),  # paid Jan 2026
            make_entry(date(2026, 5, 1), allowance_amount=200_000),
            make_entry(date(2026, 12, 20), allowance_amount=50_000),   # paid Jan 2027
        )

    def test_counts_by_payment_year(self, settings, entries):
        a = calculate_annual_income(entries, settings, 2026)
        assert a.total_income == 300_000
        assert a.remaining == 730_000
        assert a.progress_ratio == Decimal("0.2913")
        assert a.status == "ok"

    def test_payment_lag_shifts_year(self, settings, entries):
        lagged = replace(settings, payment_month_lag=1)
        # Dec 20 2025 → Feb 2026 still 2026; Dec 20 2026 → Feb 2027
        assert calculate_annual_income(entries, lagged, 2026).total_income == 300_000
        assert calculate_annual_income(entries, lagged, 2027).total_income == 50_000

    @pytest.mark.parametrize("amount,status", [
        (824_000, "ok"),          # exactly 0.80
        (900_000, "warning"),
        (1_000_000, "danger"),
    ])
    def test_status(self, settings, make_entry, entry_map, amount, status):
        entries = entry_map(make_entry(date(2026, 5, 1), allowance_amount=amount))
        assert calculate_annual_income(entries, settings, 2026).status == status

    def test_over_limit_caps_ratio(self, settings, make_entry, entry_map):
        entries = entry_map(make_entry(date(2026, 5, 1), allowance_amount=2_000_000))
        a = calculate_annual_income(entries, settings, 2026)
        assert a.progress_ratio == Decimal("1.0000")
        assert a.remaining == 0


class TestMonthlyBreakdown:
    def test_rows(self, settings, make_entry, entry_map):
        entries = entry_map(
            make_entry(date(2026, 3, 16), selected_blocks=["A"], support_minutes=30),
            make_entry(date(2026, 3, 17), selected_blocks=["A", "B"]),
            make_entry(date(2025, 3, 17), selected_blocks=["A"]),
        )
        rows = monthly_breakdown(entries, settings, 2026)
        assert [r.month for r in rows] == list(range(1, 13))
        march = rows[2]
        assert march.class_count == 3
        assert march.hours == Decimal("5.00")
        assert rows[0].income == 0
        assert march.income > 0
