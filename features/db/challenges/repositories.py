"""Repository for habit completion markers."""

from __future__ import annotations

from datetime import date

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from features.challenges.habits import HabitCompletionKey
from infrastructure.db.upsert import BaseRepository

from .db_models import HabitCompletion


def _key_filters(key: HabitCompletionKey) -> list:
    return [
        HabitCompletion.challenge_id == key.challenge_id,
        HabitCompletion.habit_id == key.habit_id,
        HabitCompletion.user_id == key.user_id,
        HabitCompletion.completed_date == key.completed_date,
    ]


class HabitCompletionRepository(BaseRepository):
    """Create, remove and count completion markers by their composite key."""

    async def exists(self, session: AsyncSession, key: HabitCompletionKey) -> bool:
        statement = select(HabitCompletion.id).where(*_key_filters(key)).limit(1)
        result = await self._execute(session, statement, operation="habit_completion.exists")
        return result.scalar_one_or_none() is not None

    async def insert(self, session: AsyncSession, key: HabitCompletionKey) -> HabitCompletion:
        """Create the marker; an existing marker for the key is left untouched."""

        values = {
            "challenge_id": key.challenge_id,
            "habit_id": key.habit_id,
            "user_id": key.user_id,
            "completed_date": key.completed_date,
        }
        return await self._upsert(
            session,
            HabitCompletion,
            values,
            _key_filters(key),
            operation="habit_completion.insert",
        )

    async def delete(self, session: AsyncSession, key: HabitCompletionKey) -> int:
        statement = delete(HabitCompletion).where(*_key_filters(key))
        result = await self._execute(session, statement, operation="habit_completion.delete")
        return result.rowcount or 0

    async def count_for_participant(self, session: AsyncSession, challenge_id: str, user_id: str) -> int:
        statement = (
            select(func.count())
            .select_from(HabitCompletion)
            .where(HabitCompletion.challenge_id == challenge_id, HabitCompletion.user_id == user_id)
        )
        result = await self._execute(session, statement, operation="habit_completion.count")
        return int(result.scalar_one())

    async def completed_habit_ids(
        self,
        session: AsyncSession,
        challenge_id: str,
        user_id: str,
        completed_date: date,
    ) -> list[str]:
        """Habit ids completed by ``user_id`` on ``completed_date``."""

        statement = select(HabitCompletion.habit_id).where(
            HabitCompletion.challenge_id == challenge_id,
            HabitCompletion.user_id == user_id,
            HabitCompletion.completed_date == completed_date,
        )
        result = await self._execute(session, statement, operation="habit_completion.list")
        return list(result.scalars().all())


__all__ = ["HabitCompletionRepository"]
