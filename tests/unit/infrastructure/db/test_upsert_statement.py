"""Tests for dialect-specific upsert statements."""

from __future__ import annotations

from datetime import date

import pytest
from sqlalchemy.dialects import mysql, postgresql, sqlite

from core.exceptions import DatabaseError
from features.db.sleep.db_models import SleepData
from infrastructure.db.upsert import build_upsert_statement

VALUES = {
    "user_id": "u1",
    "calendar_date": date(2026, 2, 15),
    "total_sleep_minutes": 480,
    "sleep_score": None,
}


def _compile(dialect_name: str, dialect) -> str:
    statement = build_upsert_statement(dialect_name, SleepData, VALUES, ["user_id", "calendar_date"])
    return str(statement.compile(dialect=dialect))


def test_postgresql_uses_on_conflict_update():
    sql = _compile("postgresql", postgresql.dialect())

    assert "ON CONFLICT (user_id, calendar_date) DO UPDATE" in sql
    assert "sleep_score = excluded.sleep_score" in sql
    assert "user_id = excluded.user_id" not in sql


def test_sqlite_uses_on_conflict_update():
    sql = _compile("sqlite", sqlite.dialect())

    assert "ON CONFLICT (user_id, calendar_date) DO UPDATE" in sql


def test_mysql_uses_on_duplicate_key():
    sql = _compile("mysql", mysql.dialect())

    assert "ON DUPLICATE KEY UPDATE" in sql


def test_key_only_values_do_nothing_on_conflict():
    statement = build_upsert_statement(
        "postgresql",
        SleepData,
        {"user_id": "u1", "calendar_date": date(2026, 2, 15)},
        ["user_id", "calendar_date"],
    )

    assert "DO NOTHING" in str(statement.compile(dialect=postgresql.dialect()))


def test_unknown_dialect_is_rejected():
    with pytest.raises(DatabaseError):
        build_upsert_statement("oracle", SleepData, VALUES, ["user_id", "calendar_date"])
