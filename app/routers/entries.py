"""
Entries router.

GET    /entries             — list entries, optionally within [start, end]
PUT    /entries/batch       — same changes applied to several days
GET    /entries/{day}       — one day's entry
PUT    /entries/{day}       — create or update (204 when the result is empty)
DELETE /entries/{day}       — remove a day's entry
"""
from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from app.core.errors import InvalidPeriodQueryError
from app.db.base import get_db
from app.models.work_entry import WorkEntry
from app.schemas.common import ErrorResponse
from app.schemas.entries import (
    BatchDayResult,
    BatchEntryResponse,
    BatchEntryUpdate,
    WorkEntryResponse,
    WorkEntryUpdate,
)
from app.services import store
from app.services.calculator import compute_daily_total
from app.services.snapshot import PayrollSettings

router = APIRouter(prefix="/entries", tags=["entries"])


# ---------------------------------------------------------------------------
# Serialization helper
# ---------------------------------------------------------------------------

def _entry_to_response(row: WorkEntry, settings: PayrollSettings) -> WorkEntryResponse:
    data = store.entry_to_snapshot(row)
    return WorkEntryResponse(
        id=data.id,
        day=str(data.date),
        selected_blocks=data.selected_blocks,
        leader_blocks=data.leader_blocks,
        sub_leader_blocks=data.sub_leader_blocks,
        support_minutes=data.support_minutes,
        allowance_amount=data.allowance_amount,
        location=data.location,
        campus=data.campus,
        has_transport=data.has_transport,
        transport_cost=data.transport_cost,
        daily_total=compute_daily_total(data, settings),
    )


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

@router.get(
    "",
    response_model=list[WorkEntryResponse],
    summary="List work entries",
    responses={422: {"model": ErrorResponse, "description": "start is after end"}},
)
def list_entries(
    start: Optional[date] = Query(default=None, description="First day (inclusive)."),
    end: Optional[date] = Query(default=None, description="Last day (inclusive)."),
    db: Session = Depends(get_db),
):
    """Return recorded days in ascending order, each with its computed daily total."""
    if start and end and start > end:
        raise InvalidPeriodQueryError(start=start, end=end)
    settings = store.get_settings(db)
    return [_entry_to_response(row, settings) for row in store.list_entries(db, start, end)]


@router.put(
    "/batch",
    response_model=BatchEntryResponse,
    summary="Apply the same changes to several days",
    responses={422: {"model": ErrorResponse, "description": "Empty or oversized batch"}},
)
def upsert_batch(payload: BatchEntryUpdate, db: Session = Depends(get_db)):
    """
    Bulk edit from calendar multi-select. Every listed day receives the same
    partial update; days left empty are pruned and reported with `entry: null`.
    """
    results = store.upsert_entries(db, payload.days, payload.changes.changes())
    settings = store.get_settings(db)
    items = [
        BatchDayResult(
            day=str(day),
            entry=_entry_to_response(row, settings) if row is not None else None,
        )
        for day, row in results
    ]
    saved = sum(1 for item in items if item.entry is not None)
    return BatchEntryResponse(
        total=len(items),
        saved=saved,
        pruned=len(items) - saved,
        items=items,
    )


@router.get(
    "/{day}",
    response_model=WorkEntryResponse,
    summary="One day's entry",
    responses={404: {"model": ErrorResponse, "description": "Nothing recorded for that day"}},
)
def get_entry(day: date, db: Session = Depends(get_db)):
    row = store.require_entry(db, day)
    return _entry_to_response(row, store.get_settings(db))


@router.put(
    "/{day}",
    response_model=WorkEntryResponse,
    summary="Create or update a day's entry",
    responses={
        200: {"description": "Entry saved."},
        204: {"description": "The update left the day empty; the entry was removed."},
        422: {"model": ErrorResponse, "description": "Invalid block, negative amount or null field"},
    },
)
def put_entry(day: date, payload: WorkEntryUpdate, db: Session = Depends(get_db)):
    """
    Partial upsert keyed by day.

    - A role (leader / sub-leader) auto-selects its block; leader wins.
    - `location` follows `campus`.
    - No blocks, no minutes, no allowance and no transport → the entry is deleted.
    """
    row = store.upsert_entry(db, day, payload.changes())
    if row is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return _entry_to_response(row, store.get_settings(db))


@router.delete(
    "/{day}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a day's entry",
    responses={404: {"model": ErrorResponse, "description": "Nothing recorded for that day"}},
)
def delete_entry(day: date, db: Session = Depends(get_db)):
    store.delete_entry(db, day)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
