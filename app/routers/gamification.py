"""
Gamification router — badges, level and titles.

GET  /gamification/badges            — badge shelf for a pay period
GET  /gamification/badges/lifetime   — badges ever earned
GET  /gamification/level             — XP, level, progress
POST /gamification/titles/sync       — unlock every title the history qualifies for
"""
from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.db.base import get_db
from app.schemas.gamification import (
    BadgeListResponse,
    BadgeOut,
    LevelResponse,
    LifetimeBadgeTotalsResponse,
    TitlesResponse,
)
from app.services import store
from app.services.badges import (
    calculate_lifetime_badge_totals,
    get_event_badges,
    get_period_badges,
)
from app.services.level import calculate_level_data, eligible_titles
from app.services.periods import get_period_range

router = APIRouter(prefix="/gamification", tags=["gamification"])


def _today() -> date:
    return datetime.now(tz=timezone.utc).date()


@router.get("/badges", response_model=BadgeListResponse, summary="Badges for a pay period")
def badges(
    reference_date: Optional[date] = Query(
        default=None,
        description="Any day inside the period. Defaults to today (UTC).",
    ),
    db: Session = Depends(get_db),
):
    """
    Streak badges (one per run of 3+ consecutive work days), the highest
    earnings tier reached, and event badges from the whole history.
    """
    entries, settings = store.load_snapshot(db)
    reference = reference_date or _today()
    period = get_period_range(reference, settings.closing_day)
    return BadgeListResponse(
        period_start=str(period.start),
        period_end=str(period.end),
        badges=[BadgeOut.model_validate(b) for b in get_period_badges(entries, settings, reference)],
    )


@router.get(
    "/badges/lifetime",
    response_model=LifetimeBadgeTotalsResponse,
    summary="Lifetime badge totals",
)
def lifetime_badges(db: Session = Depends(get_db)):
    entries, settings = store.load_snapshot(db)
    totals = calculate_lifetime_badge_totals(entries, settings, today=_today())
    return LifetimeBadgeTotalsResponse.model_validate(totals)


@router.get("/level", response_model=LevelResponse, summary="Level and XP")
def level(db: Session = Depends(get_db)):
    entries, settings = store.load_snapshot(db)
    data = calculate_level_data(entries, settings)
    return LevelResponse(
        level=data.level,
        xp=data.xp,
        xp_for_next_level=data.xp_for_next_level,
        progress_percent=data.progress_percent,
        lifetime_earnings=data.lifetime_earnings,
        lifetime_class_count=data.lifetime_class_count,
        lifetime_work_day_count=data.lifetime_work_day_count,
        eligible_titles=eligible_titles(data.level, get_event_badges(entries)),
    )


@router.post("/titles/sync", response_model=TitlesResponse, summary="Unlock earned titles")
def sync_titles(db: Session = Depends(get_db)):
    """Titles are only ever added; a later drop in level never removes one."""
    return TitlesResponse(unlocked_titles=store.sync_unlocked_titles(db))
