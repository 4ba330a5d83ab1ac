"""Shared builders for sleep feature tests."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Any

import pytest

from features.sleep.schemas import CanonicalDailySleepRecord


def make_record(day: date | str, **overrides: Any) -> CanonicalDailySleepRecord:
    values: dict[str, Any] = {
        "user_id": "user-1",
        "calendar_date": day,
        "total_sleep_minutes": 420,
        "deep_sleep_minutes": 80,
        "rem_sleep_minutes": 90,
        "light_sleep_minutes": 250,
        "sleep_score": 80,
        "avg_hr": 60.0,
        "lowest_hr": 50.0,
    }
    values.update(overrides)
    return CanonicalDailySleepRecord(**values)


@pytest.fixture
def record_factory():
    return make_record


@pytest.fixture
def nights(record_factory):
    """Build consecutive nights with ``field`` taken from ``values``."""

    def _build(field: str, values: list[Any], *, start: date = date(2025, 1, 1), user_id: str = "user-1"):
        return [
            record_factory(start + timedelta(days=offset), user_id=user_id, **{field: value})
            for offset, value in enumerate(values)
        ]

    return _build
