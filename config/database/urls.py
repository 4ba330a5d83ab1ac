"""Sleep database URL resolution.

Environment Variables:
    - SLEEP_DB_URL: full SQLAlchemy URL, takes precedence over everything below
    - SUPABASE_DB_HOST, SUPABASE_DB_PASSWORD, SUPABASE_DB_USER, SUPABASE_DB_PORT,
      SUPABASE_DB_NAME: hosted PostgreSQL (the default backend)
    - SLEEP_DB_SCHEMA: schema holding the sleep tables, per-environment default
    - DATABASE_HOST, DATABASE_USER, DATABASE_PASSWORD, DATABASE_NAME: MySQL,
      used when ``DB_TYPE=mysql``; the database name defaults per environment
"""

from __future__ import annotations

import os

from sqlalchemy.engine import URL

from config.environment import DATABASE_TYPE, ENVIRONMENT
from core.utils.env import get_int_env

_POSTGRESQL_SCHEMAS = {
    "production": "sleep",
    "development": "sleep_dev",
    "test": "sleep_test",
}
_MYSQL_DATABASES = {
    "production": "sleep",
    "development": "sleep_dev",
    "test": "sleep_test",
}

SLEEP_DB_SCHEMA = os.getenv("SLEEP_DB_SCHEMA") or _POSTGRESQL_SCHEMAS[ENVIRONMENT]


def _postgresql_url() -> URL | None:
    host = os.getenv("SUPABASE_DB_HOST")
    password = os.getenv("SUPABASE_DB_PASSWORD")
    if not host or not password:
        return None

    query = {"options": f"-csearch_path={SLEEP_DB_SCHEMA}"} if SLEEP_DB_SCHEMA else {}
    return URL.create(
        "postgresql+asyncpg",
        username=os.getenv("SUPABASE_DB_USER", "postgres"),
        password=password,
        host=host,
        port=get_int_env("SUPABASE_DB_PORT", 5432),
        database=os.getenv("SUPABASE_DB_NAME", "postgres"),
        query=query,
    )


def _mysql_url() -> URL | None:
    host = os.getenv("DATABASE_HOST")
    if not host:
        return None
    return URL.create(
        "mysql+aiomysql",
        username=os.getenv("DATABASE_USER", "sleep"),
        password=os.getenv("DATABASE_PASSWORD") or None,
        host=host,
        database=os.getenv("DATABASE_NAME") or _MYSQL_DATABASES[ENVIRONMENT],
    )


def build_sleep_db_url() -> str:
    """Return the configured URL, or an empty string when nothing is configured."""

    override = os.getenv("SLEEP_DB_URL")
    if override:
        return override

    url = _mysql_url() if DATABASE_TYPE == "mysql" else _postgresql_url()
    # Empty fails later with a clear ConfigurationError
    return url.render_as_string(hide_password=False) if url is not None else ""


SLEEP_DB_URL = build_sleep_db_url()

__all__ = ["SLEEP_DB_SCHEMA", "SLEEP_DB_URL", "build_sleep_db_url"]
