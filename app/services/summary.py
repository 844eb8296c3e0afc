"""
Period and annual summaries built on the calculator.

summarize_period(entries, settings, reference)  -> PeriodSummary
calculate_annual_income(entries, settings, year) -> AnnualIncome
monthly_breakdown(entries, settings, year)      -> list[MonthlyRow]
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Mapping

from app.services.calculator import administrative_minutes, compute_daily_total
from app.services.periods import get_payment_date, get_period_range
from app.services.snapshot import PayrollSettings, WorkEntryData, is_empty_entry

WARNING_RATIO = Decimal("0.80")
DANGER_RATIO = Decimal("0.95")
BLOCK_HOURS = Decimal("1.5")


@dataclass
class PeriodSummary:
    start: date
    end: date
    pay_year: int
    pay_month: int
    total_pay: int
    class_count: int
    work_day_count: int
    administrative_minutes: int


@dataclass
class AnnualIncome:
    year: int
    total_income: int
    annual_limit: int
    remaining: int
    progress_ratio: Decimal   # 0.0000 – 1.0000
    status: str               # "ok" | "warning" | "danger"


@dataclass
class MonthlyRow:
    month: int
    income: int
    class_count: int
    hours: Decimal


def _active(all_entries: Mapping[date, WorkEntryData]) -> list[WorkEntryData]:
    return [e for e in all_entries.values() if not is_empty_entry(e)]


def summarize_period(
    all_entries: Mapping[date, WorkEntryData],
    settings: PayrollSettings,
    reference: date,
) -> PeriodSummary:
    period = get_period_range(reference, settings.closing_day)
    in_period = [e for e in _active(all_entries) if e.date in period]
    pay_year, pay_month = period.pay_month

    return PeriodSummary(
        start=period.start,
        end=period.end,
        pay_year=pay_year,
        pay_month=pay_month,
        total_pay=sum(compute_daily_total(e, settings) for e in in_period),
        class_count=sum(len(e.selected_blocks) for e in in_period),
        work_day_count=len(in_period),
        administrative_minutes=sum(administrative_minutes(e) for e in in_period),
    )


def calculate_annual_income(
    all_entries: Mapping[date, WorkEntryData],
    settings: PayrollSettings,
    year: int,
) -> AnnualIncome:
    """
    Income counted by payment date (January–December of `year`) against
    the annual dependent-income limit.
    """
    total = 0
    for entry in _active(all_entries):
        paid_on = get_payment_date(entry.date, settings.closing_day, settings.payment_month_lag)
        if paid_on.year == year:
            total += compute_daily_total(entry, settings)

    limit = settings.annual_limit
    ratio = min(Decimal(1), Decimal(total) / Decimal(limit)) if limit > 0 else Decimal(1)
    ratio = ratio.quantize(Decimal("0.0001"), rounding=ROUND_HALF_UP)

    if ratio > DANGER_RATIO:
        status = "danger"
    elif ratio > WARNING_RATIO:
        status = "warning"
    else:
        status = "ok"

    return AnnualIncome(
        year=year,
        total_income=total,
        annual_limit=limit,
        remaining=max(0, limit - total),
        progress_ratio=ratio,
        status=status,
    )


def monthly_breakdown(
    all_entries: Mapping[date, WorkEntryData],
    settings: PayrollSettings,
    year: int,
) -> list[MonthlyRow]:
    """Income, classes and approximate hours per calendar month worked."""
    rows = {m: MonthlyRow(month=m, income=0, class_count=0, hours=Decimal(0)) for m in range(1, 13)}
    for entry in _active(all_entries):
        if entry.date.year != year:
            continue
        row = rows[entry.date.month]
        classes = len(entry.selected_blocks)
        row.income += compute_daily_total(entry, settings)
        row.class_count += classes
        row.hours += Decimal(entry.support_minutes) / 60 + BLOCK_HOURS * classes

    for row in rows.values():
        row.hours = row.hours.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return [rows[m] for m in range(1, 13)]
