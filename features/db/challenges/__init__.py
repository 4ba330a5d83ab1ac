"""Persistence layer for challenge habit completions."""

from __future__ import annotations

from . import db_models
from .repositories import HabitCompletionRepository
from .store import SqlHabitCompletionStore

__all__ = ["db_models", "HabitCompletionRepository", "SqlHabitCompletionStore"]
