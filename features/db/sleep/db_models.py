"""ORM model for canonical daily sleep records."""

from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import Date, DateTime, Float, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.db.base import Base


class SleepData(Base):
    """One aggregated night of sleep for a user; at most one row per user and date."""

    __tablename__ = "sleep_data"
    __table_args__ = (UniqueConstraint("user_id", "calendar_date", name="uq_sleep_data_user_date"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(64), index=True)
    calendar_date: Mapped[date] = mapped_column(Date, index=True)
    total_sleep_minutes: Mapped[int] = mapped_column(Integer, default=0)
    deep_sleep_minutes: Mapped[int] = mapped_column(Integer, default=0)
    rem_sleep_minutes: Mapped[int] = mapped_column(Integer, default=0)
    light_sleep_minutes: Mapped[int] = mapped_column(Integer, default=0)
    sleep_score: Mapped[int | None] = mapped_column(Integer, nullable=True)
    avg_hr: Mapped[float | None] = mapped_column(Float, nullable=True)
    lowest_hr: Mapped[float | None] = mapped_column(Float, nullable=True)
    bedtime_start: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)


__all__ = ["SleepData"]
