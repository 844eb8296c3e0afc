"""
Pay-period arithmetic.

A pay period runs from the day after one closing day through the next
closing day, inclusive. With closing_day=15:

    2026-03-10 → [2026-02-16, 2026-03-15]   (paid as "March")
    2026-03-20 → [2026-03-16, 2026-04-15]   (paid as "April")

Payment lands on the 25th of the pay month plus payment_month_lag months.

Public API
----------
get_period_range(reference, closing_day)            -> PeriodRange
get_payment_date(work_date, closing_day, lag)       -> date
iter_periods(first, last, closing_day)              -> Iterator[PeriodRange]
add_months(day, months)                             -> date
"""
from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterator

PAYMENT_DAY = 25


@dataclass(frozen=True)
class PeriodRange:
    start: date
    end: date

    @property
    def pay_month(self) -> tuple[int, int]:
        """(year, month) the period is paid as: the month it closes in."""
        return self.end.year, self.end.month

    def __contains__(self, day: date) -> bool:
        return self.start <= day <= self.end


# ---------------------------------------------------------------------------
# Month helpers
# ---------------------------------------------------------------------------

def _shift_month(year: int, month: int, months: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + months
    return index // 12, index % 12 + 1


def add_months(day: date, months: int) -> date:
    """Same day-of-month `months` later, clamped to the month's last day."""
    year, month = _shift_month(day.year, day.month, months)
    last = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last))


# ---------------------------------------------------------------------------
# Public
# ---------------------------------------------------------------------------

def get_period_range(reference: date, closing_day: int = 15) -> PeriodRange:
    """Return the pay period containing `reference`."""
    if reference.day <= closing_day:
        end_year, end_month = reference.year, reference.month
    else:
        end_year, end_month = _shift_month(reference.year, reference.month, 1)

    prev_year, prev_month = _shift_month(end_year, end_month, -1)
    start = date(prev_year, prev_month, closing_day) + timedelta(days=1)
    end = date(end_year, end_month, closing_day)
    return PeriodRange(start=start, end=end)


def get_payment_date(work_date: date, closing_day: int = 15, lag_months: int = 1) -> date:
    """Nominal payment date (the 25th) for work done on `work_date`."""
    year, month = work_date.year, work_date.month
    if work_date.day > closing_day:
        year, month = _shift_month(year, month, 1)
    year, month = _shift_month(year, month, lag_months)
    return date(year, month, PAYMENT_DAY)


def iter_periods(first: date, last: date, closing_day: int = 15) -> Iterator[PeriodRange]:
    """
    Yield consecutive periods, oldest first, from the one containing `first`
    through the one containing `last`.

    Steps from each period's end to the next day, so every date is covered
    exactly once whatever the period lengths.
    """
    period = get_period_range(first, closing_day)
    while period.start <= last:
        yield period
        period = get_period_range(period.end + timedelta(days=1), closing_day)
