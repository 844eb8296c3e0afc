"""
Entry store — persistence for the entry map and the settings record.

Responsibilities
----------------
  * Settings: created with defaults on first read; missing campus rates and
    profile fields are back-filled from defaults; saved wholesale.
  * Entries: upserted by day from partial changes. Role sets are normalized
    (leader wins over sub-leader, a role auto-selects its block, a deselected
    block loses its carried-over role) and location follows campus.
    An update that leaves nothing recorded deletes the row.
  * Snapshot: hands the pure core a complete copy as dataclasses.
  * Titles: applies the unlock ratchet (set union, never removal).
"""
from __future__ import annotations

import json
import logging
from dataclasses import asdict, fields, replace
from datetime import date
from typing import Any, Iterable, Optional

from sqlalchemy.orm import Session

from app.core.errors import BatchTooLargeError, EmptyBatchError, EntryNotFoundError
from app.models.user_settings import SETTINGS_ID, UserSettings
from app.models.work_entry import WorkEntry
from app.services.badges import get_event_badges
from app.services.level import calculate_level_data, eligible_titles, merge_unlocked_titles
from app.services.snapshot import (
    DEFAULT_CAMPUS_TRANSPORT_RATES,
    PayrollSettings,
    ProfileData,
    WorkEntryData,
    is_empty_entry,
    location_for_campus,
    sort_blocks,
)

logger = logging.getLogger(__name__)

BATCH_MAX_DAYS = 62

_ENTRY_FIELDS = {
    "selected_blocks",
    "leader_blocks",
    "sub_leader_blocks",
    "support_minutes",
    "allowance_amount",
    "campus",
    "has_transport",
    "transport_cost",
}


# ---------------------------------------------------------------------------
# JSON column helpers
# ---------------------------------------------------------------------------

def _loads(raw: Optional[str], default):
    if not raw:
        return default
    return json.loads(raw)


def _dumps(value) -> str:
    return json.dumps(value, ensure_ascii=False)


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

def _profile_from_dict(data: dict) -> ProfileData:
    known = {f.name for f in fields(ProfileData)}
    merged = {**asdict(ProfileData()), **{k: v for k, v in data.items() if k in known}}
    return ProfileData(**merged)


def settings_to_snapshot(row: UserSettings) -> PayrollSettings:
    rates = {**DEFAULT_CAMPUS_TRANSPORT_RATES, **_loads(row.campus_transport_rates, {})}
    return PayrollSettings(
        teaching_hourly_rate=row.teaching_hourly_rate,
        hourly_rate=row.hourly_rate,
        transport_cost=row.transport_cost,
        campus_transport_rates=rates,
        default_campus=row.default_campus,
        closing_day=row.closing_day,
        payment_month_lag=row.payment_month_lag,
        annual_limit=row.annual_limit,
        profile=_profile_from_dict(_loads(row.profile, {})),
    )


def _write_settings(row: UserSettings, data: PayrollSettings) -> None:
    row.teaching_hourly_rate = data.teaching_hourly_rate
    row.hourly_rate = data.hourly_rate
    row.transport_cost = data.transport_cost
    row.campus_transport_rates = _dumps(
        {**DEFAULT_CAMPUS_TRANSPORT_RATES, **data.campus_transport_rates}
    )
    row.default_campus = data.default_campus
    row.closing_day = data.closing_day
    row.payment_month_lag = data.payment_month_lag
    row.annual_limit = data.annual_limit
    row.profile = _dumps(asdict(data.profile))


def get_settings_row(db: Session) -> UserSettings:
    """Return the settings row, creating it with defaults on first access."""
    row = db.get(UserSettings, SETTINGS_ID)
    if row is None:
        row = UserSettings(id=SETTINGS_ID)
        _write_settings(row, PayrollSettings())
        db.add(row)
        db.commit()
        db.refresh(row)
        logger.info("Created default settings record")
    return row


def get_settings(db: Session) -> PayrollSettings:
    return settings_to_snapshot(get_settings_row(db))


def save_settings(db: Session, data: PayrollSettings) -> PayrollSettings:
    """Replace the settings record wholesale."""
    row = get_settings_row(db)
    _write_settings(row, data)
    db.commit()
    db.refresh(row)
    return settings_to_snapshot(row)


# ---------------------------------------------------------------------------
# Entries — conversion and normalization
# ---------------------------------------------------------------------------

def entry_to_snapshot(row: WorkEntry) -> WorkEntryData:
    return WorkEntryData(
        id=row.id,
        date=row.day,
        selected_blocks=_loads(row.selected_blocks, []),
        support_minutes=row.support_minutes,
        allowance_amount=row.allowance_amount,
        location=row.location,
        campus=row.campus,
        has_transport=row.has_transport,
        transport_cost=row.transport_cost,
        leader_blocks=_loads(row.leader_blocks, []),
        sub_leader_blocks=_loads(row.sub_leader_blocks, []),
    )


def new_entry(day: date, settings: PayrollSettings) -> WorkEntryData:
    """Blank entry for a day not recorded yet: home campus, transport on."""
    return WorkEntryData(
        id="",
        date=day,
        campus=settings.default_campus,
        location=location_for_campus(settings.default_campus),
        has_transport=True,
    )


def apply_entry_changes(
    current: WorkEntryData, changes: dict[str, Any], settings: PayrollSettings
) -> WorkEntryData:
    """
    Merge partial changes onto an entry and normalize its role sets.

    Roles given in `changes` select their blocks and take the block away
    from the other role; roles carried over from `current` are kept only
    for blocks that remain selected. When both role sets arrive together,
    leader wins.
    """
    unknown = set(changes) - _ENTRY_FIELDS
    if unknown:
        raise ValueError(f"Unknown entry fields: {sorted(unknown)}")

    updated = replace(current, **changes)
    selected = set(updated.selected_blocks)

    if "leader_blocks" in changes:
        leader = set(updated.leader_blocks)
    else:
        leader = {b for b in current.leader_blocks if b in selected}
    if "sub_leader_blocks" in changes:
        sub_leader = set(updated.sub_leader_blocks)
    else:
        sub_leader = {b for b in current.sub_leader_blocks if b in selected}

    if "sub_leader_blocks" in changes and "leader_blocks" not in changes:
        leader -= sub_leader
    else:
        sub_leader -= leader
    selected |= leader | sub_leader

    return replace(
        updated,
        selected_blocks=sort_blocks(selected),
        leader_blocks=sort_blocks(leader),
        sub_leader_blocks=sort_blocks(sub_leader),
        location=location_for_campus(updated.campus or settings.default_campus),
    )


def _write_entry(row: WorkEntry, data: WorkEntryData) -> None:
    row.selected_blocks = _dumps(data.selected_blocks)
    row.leader_blocks = _dumps(data.leader_blocks)
    row.sub_leader_blocks = _dumps(data.sub_leader_blocks)
    row.support_minutes = data.support_minutes
    row.allowance_amount = data.allowance_amount
    row.location = data.location
    row.campus = data.campus
    row.has_transport = data.has_transport
    row.transport_cost = data.transport_cost


# ---------------------------------------------------------------------------
# Entries — queries
# ---------------------------------------------------------------------------

def get_entry(db: Session, day: date) -> Optional[WorkEntry]:
    return db.query(WorkEntry).filter(WorkEntry.day == day).first()


def require_entry(db: Session, day: date) -> WorkEntry:
    row = get_entry(db, day)
    if row is None:
        raise EntryNotFoundError(day=day)
    return row


def list_entries(
    db: Session, start: Optional[date] = None, end: Optional[date] = None
) -> list[WorkEntry]:
    query = db.query(WorkEntry)
    if start is not None:
        query = query.filter(WorkEntry.day >= start)
    if end is not None:
        query = query.filter(WorkEntry.day <= end)
    return query.order_by(WorkEntry.day).all()


# ---------------------------------------------------------------------------
# Entries — writes
# ---------------------------------------------------------------------------

def _upsert(
    db: Session, day: date, changes: dict[str, Any], settings: PayrollSettings
) -> Optional[WorkEntry]:
    row = get_entry(db, day)
    current = entry_to_snapshot(row) if row is not None else new_entry(day, settings)
    updated = apply_entry_changes(current, changes, settings)

    if is_empty_entry(updated):
        if row is not None:
            db.delete(row)
            logger.info("Pruned empty entry for %s", day)
        return None

    if row is None:
        row = WorkEntry(day=day)
        db.add(row)
    _write_entry(row, updated)
    return row


def upsert_entry(db: Session, day: date, changes: dict[str, Any]) -> Optional[WorkEntry]:
    """
    Create or update the entry for `day`.
    Returns None when the result is empty and the entry was removed.
    """
    row = _upsert(db, day, changes, get_settings(db))
    db.commit()
    if row is not None:
        db.refresh(row)
    return row


def upsert_entries(
    db: Session, days: Iterable[date], changes: dict[str, Any]
) -> list[tuple[date, Optional[WorkEntry]]]:
    """Apply the same changes to several days in one transaction."""
    unique_days = sorted(set(days))
    if not unique_days:
        raise EmptyBatchError()
    if len(unique_days) > BATCH_MAX_DAYS:
        raise BatchTooLargeError(max_items=BATCH_MAX_DAYS, received=len(unique_days))

    settings = get_settings(db)
    results = [(day, _upsert(db, day, changes, settings)) for day in unique_days]
    db.commit()
    for _, row in results:
        if row is not None:
            db.refresh(row)
    return results


def delete_entry(db: Session, day: date) -> None:
    row = require_entry(db, day)
    db.delete(row)
    db.commit()
    logger.info("Deleted entry for %s", day)


# ---------------------------------------------------------------------------
# Snapshot and titles
# ---------------------------------------------------------------------------

def load_snapshot(db: Session) -> tuple[dict[date, WorkEntryData], PayrollSettings]:
    """Complete, consistent copy of entries and settings for the pure core."""
    settings = get_settings(db)
    entries = {row.day: entry_to_snapshot(row) for row in list_entries(db)}
    return entries, settings


def sync_unlocked_titles(db: Session) -> list[str]:
    """
    Add every title the current history qualifies for to the profile.
    Titles already unlocked are never removed.
    """
    entries, settings = load_snapshot(db)
    level = calculate_level_data(entries, settings).level
    eligible = eligible_titles(level, get_event_badges(entries))

    current = settings.profile.unlocked_titles
    merged = merge_unlocked_titles(current, eligible)
    if merged != current:
        added = [t for t in merged if t not in current]
        settings.profile.unlocked_titles = merged
        save_settings(db, settings)
        logger.info("Unlocked titles: %s", ", ".join(added))
    return merged
