"""Challenge models, habit toggling and participant progress."""

from __future__ import annotations

from .habits import HabitCompletionKey, HabitCompletionStore, HabitToggleGuard, InFlightKeys
from .progress import ParticipantProgress, challenge_progress, habits_for_mode, participant_progress
from .schemas import Challenge, ChallengeMode, Habit, Participant, ParticipantStatus

__all__ = [
    "Challenge",
    "ChallengeMode",
    "Habit",
    "HabitCompletionKey",
    "HabitCompletionStore",
    "HabitToggleGuard",
    "InFlightKeys",
    "Participant",
    "ParticipantProgress",
    "ParticipantStatus",
    "challenge_progress",
    "habits_for_mode",
    "participant_progress",
]
