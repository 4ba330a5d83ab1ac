"""Local-calendar date arithmetic for challenge periods.

Challenge boundaries are stored as ``YYYY-MM-DD`` strings that represent the
participant's *local* calendar day. Everything here works on
:class:`datetime.date` values so a timestamp near midnight can never shift a
day number, the remaining-days counter or the active flag by one.
"""

from __future__ import annotations

import math
from datetime import date, datetime, timedelta

from config.challenges.defaults import BASELINE_WINDOW_DAYS, CHALLENGE_DURATION_DAYS

DateLike = date | datetime | str

_ONE_DAY = timedelta(days=1)


def parse_local_date(date_str: str) -> date:
    """Parse a ``YYYY-MM-DD`` string as a local calendar date.

    Malformed input is a caller error and the ``ValueError`` raised by
    :func:`datetime.strptime` propagates unchanged.
    """

    return datetime.strptime(date_str, "%Y-%m-%d").date()


def to_local_date_str(value: date | datetime) -> str:
    """Format ``value`` as a zero-padded ``YYYY-MM-DD`` local date string."""

    if isinstance(value, datetime):
        value = value.date()
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def local_today() -> date:
    """Return today's date in the process-local timezone."""

    return datetime.now().date()


def coerce_date(value: DateLike) -> date:
    """Normalise a date, datetime or ``YYYY-MM-DD`` string to a :class:`date`."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return parse_local_date(value)
    raise TypeError(f"Unsupported date value type: {type(value).__name__}")


def _today_or(today: DateLike | None) -> date:
    return local_today() if today is None else coerce_date(today)


def day_number(start_date: DateLike, today: DateLike | None = None, duration: int = CHALLENGE_DURATION_DAYS) -> int:
    """Return the 1-based day index of ``today`` within a period starting on ``start_date``.

    Day 1 is the start date itself. Returns ``0`` before the period starts and
    never more than ``duration`` once it has finished.
    """

    start = coerce_date(start_date)
    current = _today_or(today)
    if current < start:
        return 0
    return min((current - start).days + 1, duration)


def days_remaining(end_date: DateLike, today: DateLike | None = None) -> int:
    """Return whole days left until ``end_date``, never negative."""

    end = coerce_date(end_date)
    current = _today_or(today)
    diff = math.ceil((end - current) / _ONE_DAY)
    return max(0, diff)


def is_active(start_date: DateLike, end_date: DateLike, today: DateLike | None = None) -> bool:
    """True when ``today`` falls within ``[start_date, end_date]`` (both inclusive)."""

    current = _today_or(today)
    return coerce_date(start_date) <= current <= coerce_date(end_date)


def challenge_end_date(start_date: DateLike, duration: int = CHALLENGE_DURATION_DAYS) -> date:
    """Return the fixed end date of a challenge that starts on ``start_date``."""

    return coerce_date(start_date) + timedelta(days=duration)


def baseline_window(start_date: DateLike, days: int = BASELINE_WINDOW_DAYS) -> tuple[date, date]:
    """Return the inclusive ``(first, last)`` days of the window preceding ``start_date``."""

    start = coerce_date(start_date)
    return start - timedelta(days=days), start - _ONE_DAY


def active_window(
    start_date: DateLike,
    end_date: DateLike,
    today: DateLike | None = None,
) -> tuple[date, date] | None:
    """Return the elapsed ``(first, last)`` days of a challenge, or ``None`` before it starts."""

    start = coerce_date(start_date)
    current = _today_or(today)
    if current < start:
        return None
    return start, min(current, coerce_date(end_date))


__all__ = [
    "DateLike",
    "active_window",
    "baseline_window",
    "challenge_end_date",
    "coerce_date",
    "day_number",
    "days_remaining",
    "is_active",
    "local_today",
    "parse_local_date",
    "to_local_date_str",
]
