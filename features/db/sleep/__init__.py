"""Persistence layer for canonical daily sleep records."""

from __future__ import annotations

from . import db_models
from .repositories import SleepDataRepository
from .service import SleepSyncService

__all__ = ["db_models", "SleepDataRepository", "SleepSyncService"]
