"""Sleep database configuration."""

from __future__ import annotations

from .defaults import CONNECT_TIMEOUT, ECHO, MAX_OVERFLOW, POOL_RECYCLE, POOL_SIZE
from .urls import SLEEP_DB_SCHEMA, SLEEP_DB_URL, build_sleep_db_url

__all__ = [
    "CONNECT_TIMEOUT",
    "ECHO",
    "MAX_OVERFLOW",
    "POOL_RECYCLE",
    "POOL_SIZE",
    "SLEEP_DB_SCHEMA",
    "SLEEP_DB_URL",
    "build_sleep_db_url",
]
