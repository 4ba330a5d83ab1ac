"""Duplicate-safe toggling of daily habit completions.

A completion is an existence marker: a row for the key means the habit was
done that day. Rapid double taps must not flip the marker twice, so while a
toggle for a key is running any further toggle of the same key is dropped.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import date
from typing import Protocol

from features.sleep.calendar import DateLike, coerce_date

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class HabitCompletionKey:
    challenge_id: str
    habit_id: str
    user_id: str
    completed_date: date

    @classmethod
    def build(cls, challenge_id: str, habit_id: str, user_id: str, completed_date: DateLike) -> "HabitCompletionKey":
        return cls(
            challenge_id=str(challenge_id),
            habit_id=str(habit_id),
            user_id=str(user_id),
            completed_date=coerce_date(completed_date),
        )


class HabitCompletionStore(Protocol):
    """Storage of completion markers; must enforce uniqueness of the key."""

    async def exists(self, key: HabitCompletionKey) -> bool:
        ...

    async def insert(self, key: HabitCompletionKey) -> None:
        ...

    async def delete(self, key: HabitCompletionKey) -> None:
        ...


class InFlightKeys:
    """Set of keys whose toggle is currently running."""

    def __init__(self) -> None:
        self._keys: set[HabitCompletionKey] = set()
        self._lock = threading.Lock()

    def claim(self, key: HabitCompletionKey) -> bool:
        """Mark ``key`` as in flight; ``False`` when it already was."""

        with self._lock:
            if key in self._keys:
                return False
            self._keys.add(key)
            return True

    def release(self, key: HabitCompletionKey) -> None:
        with self._lock:
            self._keys.discard(key)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._keys

    def __len__(self) -> int:
        with self._lock:
            return len(self._keys)


class HabitToggleGuard:
    """Flip habit completions with at most one toggle in flight per key."""

    def __init__(self, store: HabitCompletionStore, in_flight: InFlightKeys | None = None) -> None:
        self._store = store
        self._in_flight = in_flight if in_flight is not None else InFlightKeys()

    @property
    def in_flight(self) -> InFlightKeys:
        return self._in_flight

    async def toggle(
        self,
        challenge_id: str,
        habit_id: str,
        user_id: str,
        completed_date: DateLike,
    ) -> bool | None:
        """Flip the completion for the key.

        Returns ``True`` when the habit is now complete, ``False`` when it is
        now incomplete and ``None`` when an identical toggle was already
        running and this call was ignored.
        """

        key = HabitCompletionKey.build(challenge_id, habit_id, user_id, completed_date)
        if not self._in_flight.claim(key):
            logger.warning(
                "Ignoring duplicate habit toggle for challenge=%s habit=%s user=%s date=%s",
                key.challenge_id,
                key.habit_id,
                key.user_id,
                key.completed_date,
            )
            return None

        try:
            if await self._store.exists(key):
                await self._store.delete(key)
                return False
            await self._store.insert(key)
            return True
        finally:
            self._in_flight.release(key)


__all__ = ["HabitCompletionKey", "HabitCompletionStore", "HabitToggleGuard", "InFlightKeys"]
