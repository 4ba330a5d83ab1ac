"""Improvement percentages, change indicators and participant leaderboards."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Hashable, Iterable

from .utils import is_number, round_half_up, round_to_tenths

logger = logging.getLogger(__name__)


class Direction(str, Enum):
    """Whether a change is good news for the participant."""

    UP = "up"
    DOWN = "down"
    NEUTRAL = "neutral"


@dataclass(frozen=True, slots=True)
class ImprovementResult:
    percent: int | None
    direction: Direction


@dataclass(frozen=True, slots=True)
class ChangeIndicator:
    """Raw before/after delta used for the small arrows next to a metric."""

    delta: float
    direction: Direction


def _direction(change: float, lower_is_better: bool) -> Direction:
    if change == 0:
        return Direction.NEUTRAL
    improving = change < 0 if lower_is_better else change > 0
    return Direction.UP if improving else Direction.DOWN


def percent_improvement(
    baseline: float | None,
    current: float | None,
    *,
    lower_is_better: bool,
) -> ImprovementResult:
    """Signed percentage change from ``baseline`` to ``current``.

    The percentage keeps its arithmetic sign (a heart rate falling from 60 to
    57 is ``-5``); ``direction`` carries the interpretation. A missing value or
    a zero baseline yields ``percent=None`` with a neutral direction.
    """

    if not is_number(baseline) or not is_number(current) or baseline == 0:
        return ImprovementResult(percent=None, direction=Direction.NEUTRAL)

    percent = round_half_up((current - baseline) / baseline * 100)
    return ImprovementResult(percent=percent, direction=_direction(percent, lower_is_better))


def change_indicator(
    baseline: float | None,
    current: float | None,
    *,
    lower_is_better: bool,
) -> ChangeIndicator | None:
    if not is_number(baseline) or not is_number(current):
        return None
    delta = current - baseline
    # Float subtraction noise (7.3 - 7.1) would otherwise reach detail views
    if isinstance(delta, float):
        delta = round_to_tenths(delta)
    return ChangeIndicator(delta=delta, direction=_direction(delta, lower_is_better))


@dataclass(frozen=True, slots=True)
class LeaderboardEntry:
    participant_id: Hashable
    percent: int | None
    payload: Any = None


@dataclass(frozen=True, slots=True)
class RankedEntry:
    rank: int
    participant_id: Hashable
    percent: int
    payload: Any = None


@dataclass(slots=True)
class Leaderboard:
    entries: list[RankedEntry] = field(default_factory=list)
    current_user_rank: int | None = None

    def __len__(self) -> int:
        return len(self.entries)


def build_leaderboard(
    entries: Iterable[LeaderboardEntry],
    *,
    current_user_id: Hashable | None = None,
    lower_is_better: bool = False,
) -> Leaderboard:
    """Rank participants by improvement percentage.

    Entries without a percentage are dropped. Percentages are sorted highest
    first; for metrics where lower is better the sign is flipped first so the
    biggest drop leads. Ties are broken by participant id (ascending, compared
    as strings) so the order never depends on input order.
    """

    ranked_input = [entry for entry in entries if entry.percent is not None]
    sign = -1 if lower_is_better else 1
    ranked_input.sort(key=lambda entry: (-sign * entry.percent, str(entry.participant_id)))

    ranked = [
        RankedEntry(rank=index, participant_id=entry.participant_id, percent=entry.percent, payload=entry.payload)
        for index, entry in enumerate(ranked_input, start=1)
    ]

    current_rank = None
    if current_user_id is not None:
        current_rank = next((entry.rank for entry in ranked if entry.participant_id == current_user_id), None)

    logger.debug("Built leaderboard with %d ranked entries (current rank=%s)", len(ranked), current_rank)
    return Leaderboard(entries=ranked, current_user_rank=current_rank)


__all__ = [
    "ChangeIndicator",
    "Direction",
    "ImprovementResult",
    "Leaderboard",
    "LeaderboardEntry",
    "RankedEntry",
    "build_leaderboard",
    "change_indicator",
    "percent_improvement",
]
