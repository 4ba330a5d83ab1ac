"""Collapse raw wearable sleep sessions into one canonical record per day.

A ring reports every sleep period separately, so a night with a main sleep and
an afternoon nap arrives as two sessions sharing the same ``day``. Durations
are summed across all of them; heart-rate and bedtime fields are taken from a
single *primary* session because averaging a nap's heart rate into the night
would misrepresent both.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Mapping, Sequence

from config.challenges.defaults import PRIMARY_SESSION_TYPE
from core.exceptions import ValidationError

from .calendar import DateLike, coerce_date
from .schemas import CanonicalDailySleepRecord, RawSleepSession
from .utils import round_half_up

logger = logging.getLogger(__name__)

SessionInput = RawSleepSession | Mapping[str, object]


@dataclass(slots=True)
class DailySleepAggregate:
    """Seconds-level aggregate of every session recorded for one day."""

    day: date
    total_sleep_seconds: int
    deep_sleep_seconds: int
    rem_sleep_seconds: int
    light_sleep_seconds: int
    average_heart_rate: float | None
    lowest_heart_rate: float | None
    bedtime_start: datetime | None
    primary_session_type: str | None
    session_count: int

    def to_record(self, user_id: str, sleep_score: int | None = None) -> CanonicalDailySleepRecord:
        """Convert to the persisted per-day record, rounding seconds to whole minutes."""

        return CanonicalDailySleepRecord(
            user_id=user_id,
            calendar_date=self.day,
            total_sleep_minutes=round_half_up(self.total_sleep_seconds / 60),
            deep_sleep_minutes=round_half_up(self.deep_sleep_seconds / 60),
            rem_sleep_minutes=round_half_up(self.rem_sleep_seconds / 60),
            light_sleep_minutes=round_half_up(self.light_sleep_seconds / 60),
            sleep_score=sleep_score,
            avg_hr=self.average_heart_rate,
            lowest_hr=self.lowest_heart_rate,
            bedtime_start=self.bedtime_start,
        )


def _coerce_session(session: SessionInput) -> RawSleepSession:
    if isinstance(session, RawSleepSession):
        return session
    if isinstance(session, Mapping):
        return RawSleepSession.from_payload(session)
    raise ValidationError(f"Unsupported sleep session type: {type(session).__name__}", field="session")


def select_primary_session(sessions: Sequence[RawSleepSession]) -> RawSleepSession:
    """Pick the session that supplies heart-rate and bedtime fields for a day.

    Overnight (``long_sleep``) sessions win over naps regardless of length;
    within the preferred group the longest session wins and ties keep the
    first one received.
    """

    if not sessions:
        raise ValueError("select_primary_session requires at least one session")

    overnight = [s for s in sessions if s.session_type == PRIMARY_SESSION_TYPE]
    candidates = overnight or list(sessions)

    primary = candidates[0]
    for candidate in candidates[1:]:
        if (candidate.total_sleep_seconds or 0) > (primary.total_sleep_seconds or 0):
            primary = candidate
    return primary


def _group_by_day(sessions: Iterable[SessionInput]) -> dict[date, list[RawSleepSession]]:
    grouped: dict[date, list[RawSleepSession]] = {}
    for raw in sessions:
        session = _coerce_session(raw)
        grouped.setdefault(session.day, []).append(session)
    return grouped


def _aggregate_day(day: date, sessions: Sequence[RawSleepSession]) -> DailySleepAggregate:
    primary = select_primary_session(sessions)
    return DailySleepAggregate(
        day=day,
        total_sleep_seconds=sum(s.total_sleep_seconds or 0 for s in sessions),
        deep_sleep_seconds=sum(s.deep_sleep_seconds or 0 for s in sessions),
        rem_sleep_seconds=sum(s.rem_sleep_seconds or 0 for s in sessions),
        light_sleep_seconds=sum(s.light_sleep_seconds or 0 for s in sessions),
        average_heart_rate=primary.average_heart_rate,
        lowest_heart_rate=primary.lowest_heart_rate,
        bedtime_start=primary.bedtime_start,
        primary_session_type=primary.session_type,
        session_count=len(sessions),
    )


def aggregate_sessions_by_day(sessions: Iterable[SessionInput]) -> dict[date, DailySleepAggregate]:
    """Group ``sessions`` by day and aggregate each group, ordered by day."""

    grouped = _group_by_day(sessions)
    aggregated = {day: _aggregate_day(day, grouped[day]) for day in sorted(grouped)}
    for day, aggregate in aggregated.items():
        if aggregate.session_count > 1:
            logger.debug(
                "Merged %d sleep sessions for %s (primary=%s)",
                aggregate.session_count,
                day,
                aggregate.primary_session_type,
            )
    return aggregated


def build_daily_records(
    sessions: Iterable[SessionInput],
    user_id: str,
    scores_by_day: Mapping[DateLike, int | None] | None = None,
) -> list[CanonicalDailySleepRecord]:
    """Return one :class:`CanonicalDailySleepRecord` per distinct day in ``sessions``.

    ``scores_by_day`` is the provider's separate daily sleep-score lookup; a day
    without a score keeps ``sleep_score`` absent.
    """

    scores = {coerce_date(day): score for day, score in (scores_by_day or {}).items()}
    return [
        aggregate.to_record(user_id, scores.get(day))
        for day, aggregate in aggregate_sessions_by_day(sessions).items()
    ]


__all__ = [
    "DailySleepAggregate",
    "aggregate_sessions_by_day",
    "build_daily_records",
    "select_primary_session",
]
