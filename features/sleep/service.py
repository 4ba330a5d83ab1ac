"""Baseline vs. active-period comparison across challenge participants."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING, Awaitable, Iterable, Protocol, Sequence

from config.challenges.defaults import MIN_VALID_SLEEP_MINUTES

from .averaging import filter_valid_nights, metric_average
from .calendar import DateLike, active_window, baseline_window, day_number
from .comparison import ChangeIndicator, LeaderboardEntry, build_leaderboard, change_indicator, percent_improvement
from .metrics import LEAGUE_METRICS, MetricDefinition, SleepMetric, get_metric
from .results import ChangeIndicatorsResult, ComparisonResult, LeaderboardResult
from .schemas import CanonicalDailySleepRecord

if TYPE_CHECKING:
    from features.challenges.schemas import Challenge

logger = logging.getLogger(__name__)


class SleepRecordSource(Protocol):
    """Anything able to return a user's daily records for an inclusive date range."""

    def fetch_period(self, user_id: str, start: date, end: date) -> Awaitable[list[CanonicalDailySleepRecord]]:
        ...


@dataclass(slots=True)
class ParticipantSleepData:
    """Daily records of one participant split into baseline and active periods."""

    participant_id: str
    baseline: Sequence[CanonicalDailySleepRecord] = field(default_factory=list)
    active: Sequence[CanonicalDailySleepRecord] = field(default_factory=list)


class ChallengeComparisonService:
    """Compute per-participant improvements and rank them for a metric."""

    def __init__(
        self,
        *,
        record_source: SleepRecordSource | None = None,
        valid_nights_only: bool = False,
        min_sleep_minutes: int = MIN_VALID_SLEEP_MINUTES,
    ) -> None:
        self._record_source = record_source
        self._valid_nights_only = valid_nights_only
        self._min_sleep_minutes = min_sleep_minutes

    def _prepare(self, records: Sequence[CanonicalDailySleepRecord]) -> Sequence[CanonicalDailySleepRecord]:
        if self._valid_nights_only:
            return filter_valid_nights(records, self._min_sleep_minutes)
        return records

    def compare_participant(
        self,
        data: ParticipantSleepData,
        metric: SleepMetric | str | MetricDefinition,
        *,
        expected_day_count: int | None = None,
    ) -> ComparisonResult:
        """Compare the baseline and active averages of ``metric`` for one participant.

        The baseline is a plain mean. The active period is median-filled up to
        ``expected_day_count`` days when fewer records are available.
        """

        definition = metric if isinstance(metric, MetricDefinition) else get_metric(metric)
        baseline = metric_average(self._prepare(data.baseline), definition)
        current = metric_average(self._prepare(data.active), definition, expected_day_count)
        improvement = percent_improvement(
            baseline.value,
            current.value,
            lower_is_better=definition.lower_is_better,
        )
        return ComparisonResult(
            participant_id=data.participant_id,
            metric=definition.metric.value,
            baseline_average=baseline.value,
            current_average=current.value,
            improvement_percent=improvement.percent,
            direction=improvement.direction,
            baseline_data_points=baseline.data_point_count,
            current_data_points=current.data_point_count,
        )

    def compare(
        self,
        participants: Iterable[ParticipantSleepData],
        metric: SleepMetric | str | MetricDefinition,
        *,
        expected_day_count: int | None = None,
    ) -> list[ComparisonResult]:
        return [
            self.compare_participant(data, metric, expected_day_count=expected_day_count)
            for data in participants
        ]

    def leaderboard(
        self,
        participants: Iterable[ParticipantSleepData],
        metric: SleepMetric | str | MetricDefinition,
        *,
        expected_day_count: int | None = None,
        current_user_id: str | None = None,
    ) -> LeaderboardResult:
        """Rank ``participants`` by improvement on ``metric``."""

        definition = metric if isinstance(metric, MetricDefinition) else get_metric(metric)
        comparisons = self.compare(participants, definition, expected_day_count=expected_day_count)
        board = build_leaderboard(
            (
                LeaderboardEntry(participant_id=result.participant_id, percent=result.improvement_percent, payload=result)
                for result in comparisons
            ),
            current_user_id=current_user_id,
            lower_is_better=definition.lower_is_better,
        )
        logger.info(
            "Ranked %d of %d participants on %s",
            len(board),
            len(comparisons),
            definition.metric.value,
        )
        return LeaderboardResult(metric=definition.metric.value, leaderboard=board, comparisons=comparisons)

    def change_indicators(
        self,
        data: ParticipantSleepData,
        metrics: Iterable[SleepMetric | str] = LEAGUE_METRICS,
        *,
        expected_day_count: int | None = None,
    ) -> ChangeIndicatorsResult:
        """Absolute baseline-to-current deltas per metric for detail views."""

        indicators: dict[str, ChangeIndicator | None] = {}
        for metric in metrics:
            definition = get_metric(metric)
            result = self.compare_participant(data, definition, expected_day_count=expected_day_count)
            indicators[definition.metric.value] = change_indicator(
                result.baseline_average,
                result.current_average,
                lower_is_better=definition.lower_is_better,
            )
        return ChangeIndicatorsResult(participant_id=data.participant_id, indicators=indicators)

    async def load_participant(
        self,
        participant_id: str,
        start_date: DateLike,
        end_date: DateLike,
        *,
        today: DateLike | None = None,
    ) -> ParticipantSleepData:
        """Fetch baseline and active-period records for one participant."""

        if self._record_source is None:
            raise RuntimeError("ChallengeComparisonService requires a record_source to load records")

        baseline_start, baseline_end = baseline_window(start_date)
        baseline = await self._record_source.fetch_period(participant_id, baseline_start, baseline_end)

        window = active_window(start_date, end_date, today)
        active: list[CanonicalDailySleepRecord] = []
        if window is not None:
            active = await self._record_source.fetch_period(participant_id, *window)

        return ParticipantSleepData(participant_id=participant_id, baseline=baseline, active=active)

    async def compare_for_challenge(
        self,
        challenge: "Challenge",
        metric: SleepMetric | str,
        *,
        today: DateLike | None = None,
        current_user_id: str | None = None,
    ) -> LeaderboardResult:
        """Load every accepted participant's records and rank them for ``metric``."""

        participants = [
            await self.load_participant(
                participant.user_id,
                challenge.start_date,
                challenge.end_date,
                today=today,
            )
            for participant in challenge.accepted_participants
        ]
        expected = day_number(challenge.start_date, today) or None
        return self.leaderboard(
            participants,
            metric,
            expected_day_count=expected,
            current_user_id=current_user_id,
        )


__all__ = ["ChallengeComparisonService", "ParticipantSleepData", "SleepRecordSource"]
