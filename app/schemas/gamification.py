"""
Gamification schemas.

GET  /gamification/badges            → BadgeListResponse
GET  /gamification/badges/lifetime   → LifetimeBadgeTotalsResponse
GET  /gamification/level             → LevelResponse
POST /gamification/titles/sync       → TitlesResponse
"""
from pydantic import BaseModel, ConfigDict, Field


class BadgeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str = Field(description="Deterministic per-response id, e.g. streak-gold-0.")
    key: str
    category: str
    tier: str
    label_key: str
    description_key: str
    icon: str


class BadgeListResponse(BaseModel):
    period_start: str
    period_end: str
    badges: list[BadgeOut]


class LifetimeBadgeTotalsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    streak_count: int
    earnings_count: int
    event_count: int


class LevelResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    level: int
    xp: int
    xp_for_next_level: int
    progress_percent: int
    lifetime_earnings: int
    lifetime_class_count: int
    lifetime_work_day_count: int
    eligible_titles: list[str]


class TitlesResponse(BaseModel):
    unlocked_titles: list[str]
