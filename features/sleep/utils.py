"""Numeric helpers shared by the sleep aggregation and comparison modules."""

from __future__ import annotations

import math
from typing import Optional


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded towards positive infinity.

    Python's :func:`round` uses banker's rounding (``round(60.5) == 60``); the
    figures shown to participants have always rounded halves up.
    """

    return int(math.floor(value + 0.5))


def round_to_tenths(value: float) -> float:
    """Round half-up to one decimal place."""

    return math.floor(value * 10 + 0.5) / 10


def is_number(value: Optional[float]) -> bool:
    """True for finite ints/floats; ``None``, NaN and infinities are not numbers here."""

    if value is None or isinstance(value, bool):
        return False
    return math.isfinite(value)


__all__ = ["is_number", "round_half_up", "round_to_tenths"]
