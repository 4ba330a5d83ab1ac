"""Catalogue of the sleep metrics participants are compared on."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from core.exceptions import ValidationError


class SleepMetric(str, Enum):
    SLEEP_SCORE = "sleep_score"
    AVG_HEART_RATE = "avg_hr"
    LOWEST_HEART_RATE = "lowest_hr"
    DEEP_SLEEP = "deep_sleep"
    TOTAL_SLEEP = "total_sleep"


@dataclass(frozen=True, slots=True)
class MetricDefinition:
    """How to read one metric from a daily record and which direction is better."""

    metric: SleepMetric
    field: str
    label: str
    unit: str
    lower_is_better: bool
    fractional: bool = False
    divisor: int = 1

    def value_of(self, record: Any) -> float | None:
        """Return the metric value for ``record`` or ``None`` when it was not recorded."""

        raw = getattr(record, self.field, None)
        if raw is None:
            return None
        return raw / self.divisor if self.divisor != 1 else raw


METRICS: dict[SleepMetric, MetricDefinition] = {
    SleepMetric.SLEEP_SCORE: MetricDefinition(
        SleepMetric.SLEEP_SCORE, "sleep_score", "Sleep Score", "pts", lower_is_better=False
    ),
    SleepMetric.AVG_HEART_RATE: MetricDefinition(
        SleepMetric.AVG_HEART_RATE, "avg_hr", "Avg Heart Rate", "bpm", lower_is_better=True
    ),
    SleepMetric.LOWEST_HEART_RATE: MetricDefinition(
        SleepMetric.LOWEST_HEART_RATE, "lowest_hr", "Lowest Heart Rate", "bpm", lower_is_better=True
    ),
    SleepMetric.DEEP_SLEEP: MetricDefinition(
        SleepMetric.DEEP_SLEEP, "deep_sleep_minutes", "Deep Sleep", "min", lower_is_better=False
    ),
    SleepMetric.TOTAL_SLEEP: MetricDefinition(
        SleepMetric.TOTAL_SLEEP,
        "total_sleep_minutes",
        "Sleep Duration",
        "hours",
        lower_is_better=False,
        fractional=True,
        divisor=60,
    ),
}

# Metrics shown on the challenge league, in display order
LEAGUE_METRICS: tuple[SleepMetric, ...] = (
    SleepMetric.SLEEP_SCORE,
    SleepMetric.AVG_HEART_RATE,
    SleepMetric.LOWEST_HEART_RATE,
    SleepMetric.DEEP_SLEEP,
)


def get_metric(metric: SleepMetric | str) -> MetricDefinition:
    """Look up a metric definition by enum member or key."""

    try:
        return METRICS[SleepMetric(metric)]
    except ValueError as exc:
        raise ValidationError(f"Unknown sleep metric: {metric}", field="metric") from exc


__all__ = ["LEAGUE_METRICS", "METRICS", "MetricDefinition", "SleepMetric", "get_metric"]
