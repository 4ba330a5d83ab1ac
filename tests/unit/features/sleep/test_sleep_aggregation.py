"""Tests for merging multiple provider sessions into one record per day."""

from __future__ import annotations

from datetime import date

import pytest

from core.exceptions import ValidationError
from features.sleep.aggregation import aggregate_sessions_by_day, build_daily_records, select_primary_session
from features.sleep.schemas import RawSleepSession


def _session(**values):
    payload = {"day": "2026-02-15", "type": "long_sleep"}
    payload.update(values)
    return payload


def test_single_session_is_used_as_is():
    sessions = [
        _session(
            total_sleep_duration=27000,
            deep_sleep_duration=5400,
            rem_sleep_duration=5400,
            light_sleep_duration=16200,
            average_heart_rate=58,
            lowest_heart_rate=52,
            bedtime_start="2026-02-14T23:00:00+00:00",
        )
    ]

    day = aggregate_sessions_by_day(sessions)[date(2026, 2, 15)]

    assert day.total_sleep_seconds == 27000
    assert day.deep_sleep_seconds == 5400
    assert day.rem_sleep_seconds == 5400
    assert day.light_sleep_seconds == 16200
    assert day.average_heart_rate == 58
    assert day.lowest_heart_rate == 52
    assert day.session_count == 1


def test_two_overnight_sessions_sum_durations_and_use_longer_for_heart_rate():
    sessions = [
        _session(total_sleep_duration=18000, deep_sleep_duration=3600, average_heart_rate=62, lowest_heart_rate=56),
        _session(total_sleep_duration=9000, deep_sleep_duration=1800, average_heart_rate=55, lowest_heart_rate=50),
    ]

    day = aggregate_sessions_by_day(sessions)[date(2026, 2, 15)]

    assert day.total_sleep_seconds == 27000
    assert day.deep_sleep_seconds == 5400
    assert day.average_heart_rate == 62
    assert day.lowest_heart_rate == 56


def test_nap_durations_are_added_but_heart_rate_comes_from_overnight_sleep():
    sessions = [
        _session(type="rest", total_sleep_duration=30000, average_heart_rate=65, lowest_heart_rate=60),
        _session(total_sleep_duration=25200, average_heart_rate=58, lowest_heart_rate=52),
    ]

    day = aggregate_sessions_by_day(sessions)[date(2026, 2, 15)]

    assert day.total_sleep_seconds == 55200
    assert day.average_heart_rate == 58
    assert day.primary_session_type == "long_sleep"


def test_nap_only_day_still_produces_record():
    records = build_daily_records(
        [_session(type="rest", total_sleep_duration=3600, average_heart_rate=65)],
        "user-1",
    )

    assert len(records) == 1
    assert records[0].total_sleep_minutes == 60
    assert records[0].avg_hr == 65


def test_missing_durations_count_as_zero():
    records = build_daily_records([_session(), _session(type="rest")], "user-1")

    assert records[0].total_sleep_minutes == 0
    assert records[0].deep_sleep_minutes == 0
    assert records[0].avg_hr is None
    assert records[0].lowest_hr is None


def test_minutes_round_half_up():
    records = build_daily_records([_session(total_sleep_duration=90, deep_sleep_duration=150)], "user-1")

    # 1.5 and 2.5 minutes both round up
    assert records[0].total_sleep_minutes == 2
    assert records[0].deep_sleep_minutes == 3


def test_zero_heart_rate_is_kept():
    records = build_daily_records([_session(average_heart_rate=0, total_sleep_duration=600)], "user-1")

    assert records[0].avg_hr == 0


def test_records_are_sorted_by_day_and_scores_attached():
    sessions = [
        _session(day="2026-02-17", total_sleep_duration=25000),
        _session(day="2026-02-15", total_sleep_duration=26000),
        _session(day="2026-02-16", total_sleep_duration=27000),
    ]

    records = build_daily_records(sessions, "user-1", {"2026-02-15": 81, date(2026, 2, 16): 77})

    assert [record.calendar_date for record in records] == [date(2026, 2, 15), date(2026, 2, 16), date(2026, 2, 17)]
    assert [record.sleep_score for record in records] == [81, 77, None]
    assert all(record.user_id == "user-1" for record in records)


def test_empty_input_yields_no_records():
    assert build_daily_records([], "user-1") == []


def test_session_without_day_is_rejected():
    with pytest.raises(ValidationError) as excinfo:
        build_daily_records([{"type": "long_sleep", "total_sleep_duration": 100}], "user-1")

    assert excinfo.value.field == "day"


def test_primary_session_ties_keep_first_received():
    first = RawSleepSession(day=date(2026, 2, 15), session_type="long_sleep", total_sleep_seconds=100, average_heart_rate=1)
    second = RawSleepSession(day=date(2026, 2, 15), session_type="long_sleep", total_sleep_seconds=100, average_heart_rate=2)

    assert select_primary_session([first, second]) is first
