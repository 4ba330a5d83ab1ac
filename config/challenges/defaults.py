"""Challenge and sleep-comparison defaults."""

from __future__ import annotations

from core.utils.env import get_int_env

CHALLENGE_DURATION_DAYS = get_int_env("CHALLENGE_DURATION_DAYS", 30)
BASELINE_WINDOW_DAYS = get_int_env("BASELINE_WINDOW_DAYS", 30)
# Nights shorter than this are treated as incomplete syncs and ignored for baselines
MIN_VALID_SLEEP_MINUTES = get_int_env("MIN_VALID_SLEEP_MINUTES", 300)
LIGHT_MODE_HABIT_COUNT = get_int_env("LIGHT_MODE_HABIT_COUNT", 3)
PRIMARY_SESSION_TYPE = "long_sleep"

__all__ = [
    "CHALLENGE_DURATION_DAYS",
    "BASELINE_WINDOW_DAYS",
    "MIN_VALID_SLEEP_MINUTES",
    "LIGHT_MODE_HABIT_COUNT",
    "PRIMARY_SESSION_TYPE",
]
