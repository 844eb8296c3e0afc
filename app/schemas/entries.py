"""
Work entry schemas.

PUT  /entries/{day}     → WorkEntryUpdate      → WorkEntryResponse (or 204 when pruned)
PUT  /entries/batch     → BatchEntryUpdate     → BatchEntryResponse
GET  /entries           →                        list[WorkEntryResponse]
"""
from __future__ import annotations

from datetime import date
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.services.snapshot import Campus, WorkBlock
from app.services.store import BATCH_MAX_DAYS


class WorkEntryUpdate(BaseModel):
    """
    Partial update for one day. Only the fields sent are changed; a new
    entry starts at the home campus with transport enabled.
    """
    model_config = ConfigDict(use_enum_values=True, extra="forbid")

    selected_blocks: Optional[list[WorkBlock]] = Field(
        default=None,
        description="Class blocks taught (A–G).",
        examples=[["A", "B", "C"]],
    )
    leader_blocks: Optional[list[WorkBlock]] = Field(
        default=None,
        description="Blocks taught as leader. Selecting a block here also selects it.",
    )
    sub_leader_blocks: Optional[list[WorkBlock]] = Field(
        default=None,
        description="Blocks taught as sub-leader. Leader wins if a block is in both.",
    )
    support_minutes: Optional[int] = Field(default=None, ge=0, examples=[30])
    allowance_amount: Optional[int] = Field(default=None, ge=0, examples=[0])
    campus: Optional[Campus] = Field(
        default=None,
        description="Campus worked at. Location allowance type follows it.",
    )
    has_transport: Optional[bool] = None
    transport_cost: Optional[int] = Field(
        default=None, ge=0,
        description="Per-day transport override. Omit to use the campus rate.",
    )

    @field_validator(
        "selected_blocks",
        "leader_blocks",
        "sub_leader_blocks",
        "support_minutes",
        "allowance_amount",
        "has_transport",
    )
    @classmethod
    def not_null(cls, v):
        # Omit a field to leave it unchanged; null only clears campus / transport_cost.
        if v is None:
            raise ValueError("must not be null")
        return v

    def changes(self) -> dict:
        """Only the fields the client actually sent."""
        return self.model_dump(exclude_unset=True)


class WorkEntryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    day: str
    selected_blocks: list[str]
    leader_blocks: list[str]
    sub_leader_blocks: list[str]
    support_minutes: int
    allowance_amount: int
    location: str
    campus: Optional[str] = None
    has_transport: bool
    transport_cost: Optional[int] = None
    daily_total: int = Field(description="Expected pay for the day, in yen.")


class BatchEntryUpdate(BaseModel):
    """Apply the same changes to several days (calendar multi-select)."""
    days: Annotated[list[date], Field(
        min_length=1,
        max_length=BATCH_MAX_DAYS,
        description=f"Days to update (1–{BATCH_MAX_DAYS}).",
    )]
    changes: WorkEntryUpdate


class BatchDayResult(BaseModel):
    day: str
    entry: Optional[WorkEntryResponse] = Field(
        default=None, description="Null when the update left the day empty (pruned)."
    )


class BatchEntryResponse(BaseModel):
    total: int
    saved: int
    pruned: int
    items: list[BatchDayResult]
