"""Tests for challenge models and habit progress."""

from __future__ import annotations

from datetime import date
from unittest.mock import AsyncMock

import pytest

from features.challenges.progress import challenge_progress, habits_for_mode, participant_progress
from features.challenges.schemas import Challenge, ChallengeMode, Habit, ParticipantStatus


def _habits():
    return [Habit(id=f"h{index}", title=f"Habit {index}", sort_order=index) for index in (4, 2, 1, 3)]


def test_new_challenge_has_thirty_day_span_and_accepted_creator():
    challenge = Challenge.new(
        name="Wind down",
        creator_id="alice",
        invitee_ids=["bob", "carol", "alice"],
        start_date="2025-03-01",
    )

    assert challenge.start_date == date(2025, 3, 1)
    assert challenge.end_date == date(2025, 3, 31)
    assert challenge.mode is ChallengeMode.PRO
    assert [(p.user_id, p.status) for p in challenge.participants] == [
        ("alice", ParticipantStatus.ACCEPTED),
        ("bob", ParticipantStatus.INVITED),
        ("carol", ParticipantStatus.INVITED),
    ]
    assert [p.user_id for p in challenge.accepted_participants] == ["alice"]


def test_challenge_calendar_helpers():
    challenge = Challenge.new(name="x", creator_id="alice", start_date=date(2025, 3, 1))

    assert challenge.day_number(date(2025, 3, 6)) == 6
    assert challenge.days_remaining(date(2025, 3, 6)) == 25
    assert challenge.is_active(date(2025, 3, 31)) is True
    assert challenge.is_active(date(2025, 4, 1)) is False


def test_challenge_parses_stored_rows():
    challenge = Challenge.model_validate(
        {
            "id": "c1",
            "name": "Stored",
            "creator_id": "alice",
            "start_date": "2025-03-01",
            "end_date": "2025-03-31",
            "mode": None,
            "participants": [{"user_id": "alice", "status": "accepted"}],
        }
    )

    assert challenge.mode is ChallengeMode.PRO
    assert challenge.accepted_participants[0].user_id == "alice"


def test_habits_for_mode_orders_and_limits_light_mode():
    assert [habit.id for habit in habits_for_mode(_habits(), "pro")] == ["h1", "h2", "h3", "h4"]
    assert [habit.id for habit in habits_for_mode(_habits(), ChallengeMode.LIGHT)] == ["h1", "h2", "h3"]


def test_participant_progress_percentage():
    progress = participant_progress(9, 5, 4, user_id="alice")

    assert progress.possible_completions == 20
    assert progress.percentage == 45


def test_participant_progress_before_start_is_zero():
    assert participant_progress(0, 0, 4).percentage == 0


@pytest.mark.asyncio
async def test_challenge_progress_counts_accepted_participants():
    challenge = Challenge.new(
        name="Light",
        creator_id="alice",
        invitee_ids=["bob"],
        mode="light",
        habits=_habits(),
        start_date=date(2025, 3, 1),
        challenge_id="c1",
    )
    counter = AsyncMock(return_value=5)

    results = await challenge_progress(challenge, counter, today=date(2025, 3, 2))

    counter.assert_awaited_once_with("c1", "alice")
    assert len(results) == 1
    assert results[0].possible_completions == 6
    assert results[0].percentage == 83
