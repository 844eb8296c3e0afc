"""
Settings router.

GET /settings   — current settings (defaults created on first call)
PUT /settings   — replace settings wholesale
"""
from dataclasses import asdict

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.base import get_db
from app.schemas.settings import ProfileSchema, SettingsSchema
from app.services import store
from app.services.level import merge_unlocked_titles
from app.services.snapshot import PayrollSettings, ProfileData

router = APIRouter(prefix="/settings", tags=["settings"])


def _to_schema(data: PayrollSettings) -> SettingsSchema:
    return SettingsSchema(
        teaching_hourly_rate=data.teaching_hourly_rate,
        hourly_rate=data.hourly_rate,
        transport_cost=data.transport_cost,
        campus_transport_rates=data.campus_transport_rates,
        default_campus=data.default_campus,
        closing_day=data.closing_day,
        payment_month_lag=data.payment_month_lag,
        annual_limit=data.annual_limit,
        profile=ProfileSchema(**asdict(data.profile)),
    )


@router.get("", response_model=SettingsSchema, summary="Current settings")
def get_settings(db: Session = Depends(get_db)):
    return _to_schema(store.get_settings(db))


@router.put("", response_model=SettingsSchema, summary="Replace settings")
def put_settings(payload: SettingsSchema, db: Session = Depends(get_db)):
    """
    Replace the settings record. Campuses missing from
    `campus_transport_rates` are filled from defaults, and titles already
    unlocked stay unlocked whatever the payload says.
    """
    current = store.get_settings(db)
    profile = payload.profile
    data = PayrollSettings(
        teaching_hourly_rate=payload.teaching_hourly_rate,
        hourly_rate=payload.hourly_rate,
        transport_cost=payload.transport_cost,
        campus_transport_rates=dict(payload.campus_transport_rates),
        default_campus=payload.default_campus,
        closing_day=payload.closing_day,
        payment_month_lag=payload.payment_month_lag,
        annual_limit=payload.annual_limit,
        profile=ProfileData(
            name=profile.name,
            avatar_id=profile.avatar_id,
            theme_color=profile.theme_color,
            active_title=profile.active_title,
            unlocked_titles=merge_unlocked_titles(
                current.profile.unlocked_titles, profile.unlocked_titles
            ),
        ),
    )
    return _to_schema(store.save_settings(db, data))
