"""
Payroll router — computed pay, periods and the annual-limit monitor.

GET /payroll/daily/{day}        — one day's pay with its breakdown
GET /payroll/period             — summary of the pay period containing a date
GET /payroll/payment-date       — when work on a date gets paid
GET /payroll/annual             — income by payment year vs. the annual limit
GET /payroll/monthly            — income / classes / hours per month
"""
from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.db.base import get_db
from app.schemas.common import ErrorResponse
from app.schemas.payroll import (
    AnnualIncomeResponse,
    DailyPayResponse,
    MonthlyBreakdownResponse,
    MonthlyRowResponse,
    PaymentDateResponse,
    PeriodSummaryResponse,
)
from app.services import store
from app.services.calculator import daily_breakdown
from app.services.periods import get_payment_date
from app.services.summary import calculate_annual_income, monthly_breakdown, summarize_period

router = APIRouter(prefix="/payroll", tags=["payroll"])


def _today() -> date:
    return datetime.now(tz=timezone.utc).date()


@router.get(
    "/daily/{day}",
    response_model=DailyPayResponse,
    summary="Pay for one day",
    responses={404: {"model": ErrorResponse, "description": "Nothing recorded for that day"}},
)
def daily_pay(day: date, db: Session = Depends(get_db)):
    """Block pay, administrative pay, allowances and transport for a recorded day."""
    entry = store.entry_to_snapshot(store.require_entry(db, day))
    b = daily_breakdown(entry, store.get_settings(db))
    return DailyPayResponse(
        day=str(day),
        block_pay=b.block_pay,
        administrative_minutes=b.administrative_minutes,
        administrative_pay=b.administrative_pay,
        location_allowance=b.location_allowance,
        allowance=b.allowance,
        transport=b.transport,
        total=b.total,
    )


@router.get("/period", response_model=PeriodSummaryResponse, summary="Pay period summary")
def period_summary(
    reference_date: Optional[date] = Query(
        default=None,
        description="Any day inside the period. Defaults to today (UTC).",
        examples=["2026-03-20"],
    ),
    db: Session = Depends(get_db),
):
    entries, settings = store.load_snapshot(db)
    s = summarize_period(entries, settings, reference_date or _today())
    return PeriodSummaryResponse(
        start=str(s.start),
        end=str(s.end),
        pay_month=f"{s.pay_year:04d}-{s.pay_month:02d}",
        total_pay=s.total_pay,
        class_count=s.class_count,
        work_day_count=s.work_day_count,
        administrative_minutes=s.administrative_minutes,
    )


@router.get("/payment-date", response_model=PaymentDateResponse, summary="Payment date for a work day")
def payment_date(
    work_date: date = Query(..., examples=["2026-03-20"]),
    db: Session = Depends(get_db),
):
    settings = store.get_settings(db)
    paid_on = get_payment_date(work_date, settings.closing_day, settings.payment_month_lag)
    return PaymentDateResponse(work_date=str(work_date), payment_date=str(paid_on))


@router.get("/annual", response_model=AnnualIncomeResponse, summary="Annual income vs. limit")
def annual_income(
    year: Optional[int] = Query(default=None, ge=2000, le=2100, description="Payment year. Defaults to this year."),
    db: Session = Depends(get_db),
):
    """
    Sum of pay whose payment date falls in `year`, compared with the
    configured annual income ceiling.
    """
    entries, settings = store.load_snapshot(db)
    a = calculate_annual_income(entries, settings, year or _today().year)
    return AnnualIncomeResponse(
        year=a.year,
        total_income=a.total_income,
        annual_limit=a.annual_limit,
        remaining=a.remaining,
        progress_ratio=float(a.progress_ratio),
        status=a.status,
    )


@router.get("/monthly", response_model=MonthlyBreakdownResponse, summary="Monthly breakdown")
def monthly(
    year: Optional[int] = Query(default=None, ge=2000, le=2100, description="Calendar year. Defaults to this year."),
    db: Session = Depends(get_db),
):
    entries, settings = store.load_snapshot(db)
    target = year or _today().year
    rows = monthly_breakdown(entries, settings, target)
    return MonthlyBreakdownResponse(
        year=target,
        months=[
            MonthlyRowResponse(
                month=r.month,
                income=r.income,
                class_count=r.class_count,
                hours=float(r.hours),
            )
            for r in rows
        ],
    )
