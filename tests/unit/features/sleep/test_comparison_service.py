"""Tests for the challenge comparison service."""

from __future__ import annotations

from datetime import date
from unittest.mock import AsyncMock

import pytest

from features.challenges.schemas import Challenge
from features.sleep.comparison import Direction
from features.sleep.metrics import SleepMetric
from features.sleep.service import ChallengeComparisonService, ParticipantSleepData


def _participant(nights, participant_id, baseline_scores, active_scores):
    return ParticipantSleepData(
        participant_id=participant_id,
        baseline=nights("sleep_score", baseline_scores, start=date(2025, 1, 1), user_id=participant_id),
        active=nights("sleep_score", active_scores, start=date(2025, 2, 1), user_id=participant_id),
    )


def test_compare_participant_uses_median_fill_for_active_period(nights):
    service = ChallengeComparisonService()
    data = ParticipantSleepData(
        participant_id="alice",
        baseline=nights("avg_hr", [60.0, 60.0, 60.0]),
        active=nights("avg_hr", [57.0, 57.0], start=date(2025, 2, 1)),
    )

    result = service.compare_participant(data, SleepMetric.AVG_HEART_RATE, expected_day_count=4)

    assert result.baseline_average == 60
    assert result.current_average == 57
    assert result.improvement_percent == -5
    assert result.direction is Direction.UP
    assert result.baseline_data_points == 3
    assert result.current_data_points == 2


def test_compare_participant_without_active_data_has_no_signal(nights):
    service = ChallengeComparisonService()
    data = ParticipantSleepData(participant_id="alice", baseline=nights("sleep_score", [80]), active=[])

    result = service.compare_participant(data, "sleep_score", expected_day_count=3)

    assert result.current_average is None
    assert result.improvement_percent is None
    assert result.direction is Direction.NEUTRAL
    assert result.to_dict()["direction"] == "neutral"


def test_leaderboard_ranks_participants(nights):
    service = ChallengeComparisonService()
    participants = [
        _participant(nights, "alice", [80, 80], [84, 84]),
        _participant(nights, "bob", [70, 70], [77, 77]),
        _participant(nights, "carol", [75], []),
    ]

    result = service.leaderboard(participants, SleepMetric.SLEEP_SCORE, current_user_id="alice")

    assert [entry.participant_id for entry in result.leaderboard.entries] == ["bob", "alice"]
    assert result.leaderboard.current_user_rank == 2
    assert len(result.comparisons) == 3
    payload = result.to_dict()
    assert payload["metric"] == "sleep_score"
    assert payload["entries"][0] == {"rank": 1, "participant_id": "bob", "percent": 10}


def test_valid_nights_only_ignores_short_nights(record_factory):
    service = ChallengeComparisonService(valid_nights_only=True)
    data = ParticipantSleepData(
        participant_id="alice",
        baseline=[
            record_factory(date(2025, 1, 1), sleep_score=80),
            record_factory(date(2025, 1, 2), sleep_score=20, total_sleep_minutes=120),
        ],
        active=[record_factory(date(2025, 2, 1), sleep_score=88)],
    )

    result = service.compare_participant(data, SleepMetric.SLEEP_SCORE)

    assert result.baseline_average == 80
    assert result.baseline_data_points == 1
    assert result.improvement_percent == 10


def test_change_indicators_cover_league_metrics(record_factory):
    service = ChallengeComparisonService()
    data = ParticipantSleepData(
        participant_id="alice",
        baseline=[record_factory(date(2025, 1, 1), lowest_hr=52.0)],
        active=[record_factory(date(2025, 2, 1), lowest_hr=50.0, sleep_score=None)],
    )

    result = service.change_indicators(data)
    indicators = result.indicators

    assert result.participant_id == "alice"
    assert set(indicators) == {"sleep_score", "avg_hr", "lowest_hr", "deep_sleep"}
    assert indicators["lowest_hr"].delta == -2
    assert indicators["lowest_hr"].direction is Direction.UP
    assert indicators["avg_hr"].direction is Direction.NEUTRAL
    assert indicators["sleep_score"] is None

    payload = result.to_dict()
    assert payload["indicators"]["lowest_hr"] == {"delta": -2, "direction": "up"}
    assert payload["indicators"]["sleep_score"] is None


@pytest.mark.asyncio
async def test_compare_for_challenge_loads_accepted_participants(nights):
    challenge = Challenge.new(
        name="Sleep better",
        creator_id="alice",
        invitee_ids=["bob"],
        start_date=date(2025, 2, 1),
    )

    async def fetch_period(user_id, start, end):
        if end < date(2025, 2, 1):
            return nights("sleep_score", [80, 80], start=start, user_id=user_id)
        return nights("sleep_score", [88], start=start, user_id=user_id)

    source = AsyncMock()
    source.fetch_period.side_effect = fetch_period
    service = ChallengeComparisonService(record_source=source)

    result = await service.compare_for_challenge(
        challenge,
        SleepMetric.SLEEP_SCORE,
        today=date(2025, 2, 3),
        current_user_id="alice",
    )

    # Only the accepted creator is compared; bob is still invited
    assert [entry.participant_id for entry in result.leaderboard.entries] == ["alice"]
    assert result.comparisons[0].current_average == 88
    source.fetch_period.assert_any_await("alice", date(2025, 1, 2), date(2025, 1, 31))
    source.fetch_period.assert_any_await("alice", date(2025, 2, 1), date(2025, 2, 3))
    assert source.fetch_period.await_count == 2


@pytest.mark.asyncio
async def test_load_participant_requires_record_source():
    service = ChallengeComparisonService()

    with pytest.raises(RuntimeError):
        await service.load_participant("alice", date(2025, 2, 1), date(2025, 3, 3))
