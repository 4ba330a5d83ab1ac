"""ORM model for habit completion markers."""

from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import Date, DateTime, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.db.base import Base


class HabitCompletion(Base):
    """Presence of a row means the habit was completed on ``completed_date``."""

    __tablename__ = "habit_completions"
    __table_args__ = (
        UniqueConstraint(
            "challenge_id",
            "habit_id",
            "user_id",
            "completed_date",
            name="uq_habit_completions_key",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    challenge_id: Mapped[str] = mapped_column(String(64), index=True)
    habit_id: Mapped[str] = mapped_column(String(64))
    user_id: Mapped[str] = mapped_column(String(64), index=True)
    completed_date: Mapped[date] = mapped_column(Date)
    created_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), server_default=func.now())


__all__ = ["HabitCompletion"]
