"""Runtime environment and database backend selection."""

from __future__ import annotations

import os
from typing import Literal

Environment = Literal["development", "production", "test"]
DatabaseType = Literal["mysql", "postgresql", "sqlite"]

_DATABASE_ALIASES: dict[str, DatabaseType] = {
    "postgresql": "postgresql",
    "postgres": "postgresql",
    "pg": "postgresql",
    "supabase": "postgresql",
    "mysql": "mysql",
    "mariadb": "mysql",
    "sqlite": "sqlite",
}


def get_environment() -> Environment:
    raw = os.getenv("NODE_ENV", "development").strip().lower()
    if raw in ("production", "test"):
        return raw  # type: ignore[return-value]
    return "development"


def get_database_type() -> DatabaseType:
    """Return the backend named by ``DB_TYPE``; hosted PostgreSQL when unset or unknown."""

    return _DATABASE_ALIASES.get(os.getenv("DB_TYPE", "").strip().lower(), "postgresql")


ENVIRONMENT: Environment = get_environment()

DATABASE_TYPE: DatabaseType = get_database_type()

__all__ = [
    "DATABASE_TYPE",
    "DatabaseType",
    "ENVIRONMENT",
    "Environment",
    "get_database_type",
    "get_environment",
]
