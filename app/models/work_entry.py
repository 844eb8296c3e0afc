"""
WorkEntry — one calendar day's recorded work. The day is the natural key.

Block lists are JSON-encoded Text (stdlib json), always stored sorted by the
block alphabet A..G. Empty entries are never stored: the store deletes a row
as soon as an update leaves it with nothing recorded.
"""
import uuid
from datetime import datetime, date
from sqlalchemy import Integer, String, Text, Boolean, DateTime, Date, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


def _new_id() -> str:
    return uuid.uuid4().hex


class WorkEntry(Base):
    __tablename__ = "work_entries"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    day: Mapped[date] = mapped_column(Date, nullable=False, unique=True, index=True)
    selected_blocks: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    leader_blocks: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    sub_leader_blocks: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    support_minutes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    allowance_amount: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    location: Mapped[str] = mapped_column(
        String(16), nullable=False, default="hiraoka",
        comment='"hiraoka" or "other"; derived from campus',
    )
    campus: Mapped[str | None] = mapped_column(String(32), nullable=True)
    has_transport: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    transport_cost: Mapped[int | None] = mapped_column(
        Integer, nullable=True,
        comment="Per-day override; NULL falls back to the campus / default rate",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
