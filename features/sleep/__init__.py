"""Sleep-metrics aggregation and challenge comparison."""

from __future__ import annotations

from .aggregation import DailySleepAggregate, aggregate_sessions_by_day, build_daily_records, select_primary_session
from .averaging import (
    MetricSummary,
    PeriodAverage,
    average,
    filter_valid_nights,
    median,
    metric_average,
    summarise_metric,
)
from .calendar import (
    active_window,
    baseline_window,
    challenge_end_date,
    day_number,
    days_remaining,
    is_active,
    local_today,
    parse_local_date,
    to_local_date_str,
)
from .comparison import (
    ChangeIndicator,
    Direction,
    ImprovementResult,
    Leaderboard,
    LeaderboardEntry,
    RankedEntry,
    build_leaderboard,
    change_indicator,
    percent_improvement,
)
from .metrics import LEAGUE_METRICS, METRICS, MetricDefinition, SleepMetric, get_metric
from .results import ChangeIndicatorsResult, ComparisonResult, LeaderboardResult, SyncResult
from .schemas import CanonicalDailySleepRecord, RawSleepSession
from .service import ChallengeComparisonService, ParticipantSleepData

__all__ = [
    "CanonicalDailySleepRecord",
    "ChallengeComparisonService",
    "ChangeIndicator",
    "ChangeIndicatorsResult",
    "ComparisonResult",
    "DailySleepAggregate",
    "Direction",
    "ImprovementResult",
    "LEAGUE_METRICS",
    "Leaderboard",
    "LeaderboardEntry",
    "LeaderboardResult",
    "METRICS",
    "MetricDefinition",
    "MetricSummary",
    "ParticipantSleepData",
    "PeriodAverage",
    "RankedEntry",
    "RawSleepSession",
    "SleepMetric",
    "SyncResult",
    "active_window",
    "aggregate_sessions_by_day",
    "average",
    "baseline_window",
    "build_daily_records",
    "build_leaderboard",
    "challenge_end_date",
    "change_indicator",
    "day_number",
    "days_remaining",
    "filter_valid_nights",
    "get_metric",
    "is_active",
    "local_today",
    "median",
    "metric_average",
    "parse_local_date",
    "percent_improvement",
    "select_primary_session",
    "summarise_metric",
    "to_local_date_str",
]
