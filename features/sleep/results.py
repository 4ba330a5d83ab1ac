"""Result objects returned by the challenge comparison service."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from fastapi.encoders import jsonable_encoder

from .comparison import ChangeIndicator, Direction, Leaderboard


@dataclass(slots=True)
class ComparisonResult:
    """Baseline vs. active-period comparison of one metric for one participant."""

    participant_id: str
    metric: str
    baseline_average: float | int | None
    current_average: float | int | None
    improvement_percent: int | None
    direction: Direction
    baseline_data_points: int = 0
    current_data_points: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Return a serialisable representation for API responses."""

        return {
            "participant_id": self.participant_id,
            "metric": self.metric,
            "baseline_average": self.baseline_average,
            "current_average": self.current_average,
            "improvement_percent": self.improvement_percent,
            "direction": self.direction.value,
            "baseline_data_points": self.baseline_data_points,
            "current_data_points": self.current_data_points,
        }


@dataclass(slots=True)
class LeaderboardResult:
    metric: str
    leaderboard: Leaderboard
    comparisons: list[ComparisonResult] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "metric": self.metric,
            "current_user_rank": self.leaderboard.current_user_rank,
            "entries": [
                {
                    "rank": entry.rank,
                    "participant_id": jsonable_encoder(entry.participant_id),
                    "percent": entry.percent,
                }
                for entry in self.leaderboard.entries
            ],
            "comparisons": [comparison.to_dict() for comparison in self.comparisons],
        }


@dataclass(slots=True)
class SyncResult:
    """Outcome of aggregating and persisting one batch of provider sessions."""

    user_id: str
    rows_written: int = 0
    days: list[Any] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "user_id": self.user_id,
            "rows_written": self.rows_written,
            "days": jsonable_encoder(self.days),
        }


def change_indicator_to_dict(indicator: ChangeIndicator | None) -> dict[str, Any] | None:
    if indicator is None:
        return None
    return {"delta": indicator.delta, "direction": indicator.direction.value}


@dataclass(slots=True)
class ChangeIndicatorsResult:
    """Per-metric baseline-to-current deltas for one participant's detail view."""

    participant_id: str
    indicators: dict[str, ChangeIndicator | None] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "participant_id": self.participant_id,
            "indicators": {
                metric: change_indicator_to_dict(indicator) for metric, indicator in self.indicators.items()
            },
        }


__all__ = [
    "ChangeIndicatorsResult",
    "ComparisonResult",
    "LeaderboardResult",
    "SyncResult",
    "change_indicator_to_dict",
]
