"""
UserSettings — the single settings record (id = 1).

Created with defaults on first read and replaced wholesale on save.
campus_transport_rates and profile are JSON-encoded Text.
"""
from datetime import datetime
from sqlalchemy import Integer, String, Text, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base

SETTINGS_ID = 1


class UserSettings(Base):
    __tablename__ = "user_settings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=SETTINGS_ID)
    teaching_hourly_rate: Mapped[int] = mapped_column(Integer, nullable=False)
    hourly_rate: Mapped[int] = mapped_column(
        Integer, nullable=False, comment="Administrative (support) hourly rate"
    )
    transport_cost: Mapped[int] = mapped_column(Integer, nullable=False)
    campus_transport_rates: Mapped[str] = mapped_column(Text, nullable=False, default="{}")
    default_campus: Mapped[str] = mapped_column(String(32), nullable=False)
    closing_day: Mapped[int] = mapped_column(Integer, nullable=False)
    payment_month_lag: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    annual_limit: Mapped[int] = mapped_column(Integer, nullable=False)
    profile: Mapped[str] = mapped_column(Text, nullable=False, default="{}")
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
