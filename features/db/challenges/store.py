"""SQL-backed habit completion store used by the toggle guard."""

from __future__ import annotations

import logging

from features.challenges.habits import HabitCompletionKey
from features.sleep.calendar import DateLike, coerce_date
from infrastructure.db.engines import AsyncSessionFactory
from infrastructure.db.sessions import session_scope

from .repositories import HabitCompletionRepository

logger = logging.getLogger(__name__)


class SqlHabitCompletionStore:
    """Each operation runs in its own transaction."""

    def __init__(
        self,
        session_factory: AsyncSessionFactory,
        *,
        repository: HabitCompletionRepository | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._repository = repository or HabitCompletionRepository()

    async def exists(self, key: HabitCompletionKey) -> bool:
        async with session_scope(self._session_factory) as session:
            return await self._repository.exists(session, key)

    async def insert(self, key: HabitCompletionKey) -> None:
        async with session_scope(self._session_factory) as session:
            await self._repository.insert(session, key)
        logger.debug("Habit %s completed by %s on %s", key.habit_id, key.user_id, key.completed_date)

    async def delete(self, key: HabitCompletionKey) -> None:
        async with session_scope(self._session_factory) as session:
            await self._repository.delete(session, key)
        logger.debug("Habit %s uncompleted by %s on %s", key.habit_id, key.user_id, key.completed_date)

    async def count_completions(self, challenge_id: str, user_id: str) -> int:
        async with session_scope(self._session_factory) as session:
            return await self._repository.count_for_participant(session, challenge_id, user_id)

    async def completed_habit_ids(
        self,
        challenge_id: str,
        user_id: str,
        completed_date: DateLike,
    ) -> list[str]:
        async with session_scope(self._session_factory) as session:
            return await self._repository.completed_habit_ids(
                session,
                challenge_id,
                user_id,
                coerce_date(completed_date),
            )


__all__ = ["SqlHabitCompletionStore"]
