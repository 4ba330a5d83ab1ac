"""Period statistics over canonical daily sleep records.

Early in a challenge (or after a few missed syncs) the active period only has a
handful of nights. Averaging those alone lets one unusual night swing the
result, so when the caller states how many days the period should contain,
each missing day is filled with the median of the known values before
averaging.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Sequence

from config.challenges.defaults import MIN_VALID_SLEEP_MINUTES

from .metrics import MetricDefinition, SleepMetric, get_metric
from .utils import round_half_up, round_to_tenths

logger = logging.getLogger(__name__)

Number = int | float


@dataclass(frozen=True, slots=True)
class PeriodAverage:
    """Average of one metric over a period plus how many daily records were considered."""

    value: Number | None
    data_point_count: int


@dataclass(frozen=True, slots=True)
class MetricSummary:
    """Average, range and sample size of a metric, as shown on detail views."""

    average: Number | None
    minimum: Number | None
    maximum: Number | None
    data_point_count: int


def median(values: Sequence[Number]) -> float | None:
    """Return the median of ``values`` or ``None`` for an empty sequence."""

    if not values:
        return None
    ordered = sorted(values)
    middle = len(ordered) // 2
    if len(ordered) % 2:
        return ordered[middle]
    return (ordered[middle - 1] + ordered[middle]) / 2


def _round(value: float, fractional: bool) -> Number:
    return round_to_tenths(value) if fractional else round_half_up(value)


def average(
    values: Sequence[Number],
    expected_day_count: int | None = None,
    *,
    fractional: bool = False,
) -> Number | None:
    """Average ``values``, median-filling up to ``expected_day_count`` days when sparse.

    ``values`` must already exclude absent entries. The result is rounded to
    the nearest integer, or to one decimal when ``fractional`` is set.
    """

    if not values:
        return None

    count = len(values)
    total = float(sum(values))

    if expected_day_count is not None and count < expected_day_count:
        fill = median(values)
        missing = expected_day_count - count
        logger.debug("Median-filling %d missing days with %s", missing, fill)
        return _round((total + fill * missing) / expected_day_count, fractional)

    return _round(total / count, fractional)


def metric_values(records: Iterable[Any], metric: SleepMetric | str | MetricDefinition) -> list[Number]:
    """Extract the non-absent values of ``metric`` from ``records``."""

    definition = metric if isinstance(metric, MetricDefinition) else get_metric(metric)
    values = (definition.value_of(record) for record in records)
    return [value for value in values if value is not None]


def metric_average(
    records: Sequence[Any],
    metric: SleepMetric | str | MetricDefinition,
    expected_day_count: int | None = None,
) -> PeriodAverage:
    """Average ``metric`` across ``records``.

    ``data_point_count`` counts the records considered, not the values present
    for this particular metric.
    """

    definition = metric if isinstance(metric, MetricDefinition) else get_metric(metric)
    values = metric_values(records, definition)
    return PeriodAverage(
        value=average(values, expected_day_count, fractional=definition.fractional),
        data_point_count=len(records),
    )


def summarise_metric(records: Sequence[Any], metric: SleepMetric | str | MetricDefinition) -> MetricSummary:
    definition = metric if isinstance(metric, MetricDefinition) else get_metric(metric)
    values = metric_values(records, definition)
    if not values:
        return MetricSummary(average=None, minimum=None, maximum=None, data_point_count=len(records))
    return MetricSummary(
        average=average(values, fractional=definition.fractional),
        minimum=_round(min(values), definition.fractional),
        maximum=_round(max(values), definition.fractional),
        data_point_count=len(records),
    )


def filter_valid_nights(records: Iterable[Any], min_sleep_minutes: int = MIN_VALID_SLEEP_MINUTES) -> list[Any]:
    """Keep only complete nights.

    Drops nights shorter than ``min_sleep_minutes`` and nights missing a sleep
    score, either heart-rate figure or deep sleep minutes.
    """

    return [
        record
        for record in records
        if (getattr(record, "total_sleep_minutes", None) or 0) >= min_sleep_minutes
        and getattr(record, "sleep_score", None) is not None
        and getattr(record, "avg_hr", None) is not None
        and getattr(record, "lowest_hr", None) is not None
        and getattr(record, "deep_sleep_minutes", None) is not None
    ]


__all__ = [
    "MetricSummary",
    "PeriodAverage",
    "average",
    "filter_valid_nights",
    "median",
    "metric_average",
    "metric_values",
    "summarise_metric",
]
