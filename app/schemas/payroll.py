"""
Payroll schemas.

GET /payroll/daily/{day}      → DailyPayResponse
GET /payroll/period           → PeriodSummaryResponse
GET /payroll/payment-date     → PaymentDateResponse
GET /payroll/annual           → AnnualIncomeResponse
GET /payroll/monthly          → MonthlyBreakdownResponse
"""
from pydantic import BaseModel, Field


class DailyPayResponse(BaseModel):
    day: str
    block_pay: int
    administrative_minutes: int
    administrative_pay: int
    location_allowance: int
    allowance: int
    transport: int
    total: int


class PeriodSummaryResponse(BaseModel):
    start: str = Field(description="First day of the pay period (inclusive).")
    end: str = Field(description="Closing day of the pay period (inclusive).")
    pay_month: str = Field(description="Month the period is paid as, YYYY-MM.", examples=["2026-04"])
    total_pay: int
    class_count: int
    work_day_count: int
    administrative_minutes: int


class PaymentDateResponse(BaseModel):
    work_date: str
    payment_date: str


class AnnualIncomeResponse(BaseModel):
    year: int
    total_income: int
    annual_limit: int
    remaining: int
    progress_ratio: float = Field(description="Income / limit, capped at 1.0.", examples=[0.4213])
    status: str = Field(description='"ok", "warning" (> 80%) or "danger" (> 95%).')


class MonthlyRowResponse(BaseModel):
    month: int
    income: int
    class_count: int
    hours: float


class MonthlyBreakdownResponse(BaseModel):
    year: int
    months: list[MonthlyRowResponse]
