"""
Settings schemas.

GET /settings → SettingsSchema
PUT /settings → SettingsSchema (wholesale replace)
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.services.snapshot import Campus, DEFAULT_CAMPUS_TRANSPORT_RATES


class ProfileSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str = Field(default="Guest tutor", max_length=64)
    avatar_id: str = "default"
    theme_color: Optional[str] = None
    active_title: Optional[str] = "rookie"
    unlocked_titles: list[str] = Field(default_factory=lambda: ["rookie"])


class SettingsSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True, use_enum_values=True)

    teaching_hourly_rate: int = Field(default=1380, gt=0, description="Class hourly rate (yen).")
    hourly_rate: int = Field(default=1075, gt=0, description="Administrative hourly rate (yen).")
    transport_cost: int = Field(default=500, ge=0, description="Default daily transport (yen).")
    campus_transport_rates: dict[Campus, int] = Field(
        default_factory=lambda: dict(DEFAULT_CAMPUS_TRANSPORT_RATES),
        description="Transport per campus. Missing campuses are filled from defaults.",
    )
    default_campus: Campus = Campus.hiraoka
    closing_day: int = Field(default=15, ge=1, le=28, description="Day of month a pay period closes.")
    payment_month_lag: int = Field(default=0, ge=0, le=12)
    annual_limit: int = Field(default=1_030_000, gt=0, description="Annual income ceiling (yen).")
    profile: ProfileSchema = Field(default_factory=ProfileSchema)

    @field_validator("campus_transport_rates")
    @classmethod
    def non_negative_rates(cls, v: dict) -> dict:
        for campus, rate in v.items():
            if rate < 0:
                raise ValueError(f"transport rate for {campus} must be >= 0")
        return v
