"""Environment-driven settings for the sleep challenge engine."""

from __future__ import annotations

from . import challenges, database, environment

__all__ = ["challenges", "database", "environment"]
