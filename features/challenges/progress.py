"""Habit completion progress for challenge participants."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Iterable

from config.challenges.defaults import LIGHT_MODE_HABIT_COUNT
from features.sleep.calendar import DateLike
from features.sleep.utils import round_half_up

from .schemas import Challenge, ChallengeMode, Habit

logger = logging.getLogger(__name__)

CompletionCounter = Callable[[str, str], Awaitable[int]]


@dataclass(frozen=True, slots=True)
class ParticipantProgress:
    user_id: str | None
    total_completions: int
    possible_completions: int
    percentage: int


def habits_for_mode(
    habits: Iterable[Habit],
    mode: ChallengeMode | str | None,
    light_count: int = LIGHT_MODE_HABIT_COUNT,
) -> list[Habit]:
    """Return the habits tracked in ``mode``; light mode keeps the first few by sort order."""

    ordered = sorted(habits, key=lambda habit: habit.sort_order)
    if ChallengeMode(mode or ChallengeMode.PRO) is ChallengeMode.LIGHT:
        return ordered[:light_count]
    return ordered


def participant_progress(
    total_completions: int,
    day_number: int,
    habit_count: int,
    *,
    user_id: str | None = None,
) -> ParticipantProgress:
    possible = day_number * habit_count
    percentage = round_half_up(total_completions / possible * 100) if possible > 0 else 0
    return ParticipantProgress(
        user_id=user_id,
        total_completions=total_completions,
        possible_completions=possible,
        percentage=percentage,
    )


async def challenge_progress(
    challenge: Challenge,
    count_completions: CompletionCounter,
    *,
    today: DateLike | None = None,
) -> list[ParticipantProgress]:
    """Progress of every accepted participant.

    ``count_completions(challenge_id, user_id)`` returns how many completion
    markers the participant has recorded for the challenge.
    """

    habit_count = len(habits_for_mode(challenge.habits, challenge.mode))
    current_day = challenge.day_number(today)
    results = []
    for participant in challenge.accepted_participants:
        total = await count_completions(challenge.id, participant.user_id)
        results.append(participant_progress(total, current_day, habit_count, user_id=participant.user_id))
    logger.debug("Computed progress for %d participants of challenge %s", len(results), challenge.id)
    return results


__all__ = ["ParticipantProgress", "challenge_progress", "habits_for_mode", "participant_progress"]
