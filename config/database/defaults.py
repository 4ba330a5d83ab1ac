"""Connection pool settings for the sleep database."""

from __future__ import annotations

import os

from core.utils.env import get_int_env

POOL_SIZE = get_int_env("SLEEP_DB_POOL_SIZE", 5)
MAX_OVERFLOW = get_int_env("SLEEP_DB_MAX_OVERFLOW", 5)
# Supabase's pooler drops idle connections after a few minutes
POOL_RECYCLE = get_int_env("SLEEP_DB_POOL_RECYCLE", 300)
CONNECT_TIMEOUT = get_int_env("SLEEP_DB_CONNECT_TIMEOUT", 5)
ECHO = os.getenv("SLEEP_DB_ECHO", "false").lower() in {"1", "true", "yes"}

__all__ = ["CONNECT_TIMEOUT", "ECHO", "MAX_OVERFLOW", "POOL_RECYCLE", "POOL_SIZE"]
