"""Tests for challenge configuration defaults."""

from __future__ import annotations

import config
from config.challenges import defaults


def test_challenge_defaults():
    assert defaults.CHALLENGE_DURATION_DAYS == 30
    assert defaults.BASELINE_WINDOW_DAYS == 30
    assert defaults.MIN_VALID_SLEEP_MINUTES == 300
    assert defaults.LIGHT_MODE_HABIT_COUNT == 3
    assert defaults.PRIMARY_SESSION_TYPE == "long_sleep"


def test_config_package_exposes_submodules():
    assert config.challenges.CHALLENGE_DURATION_DAYS == 30
    assert config.environment.DATABASE_TYPE in {"postgresql", "mysql", "sqlite"}


def test_environment_and_database_type_resolution(monkeypatch):
    from config.environment import get_database_type, get_environment

    monkeypatch.setenv("NODE_ENV", "Production")
    monkeypatch.setenv("DB_TYPE", "supabase")
    assert get_environment() == "production"
    assert get_database_type() == "postgresql"

    monkeypatch.setenv("NODE_ENV", "staging")
    monkeypatch.setenv("DB_TYPE", "mariadb")
    assert get_environment() == "development"
    assert get_database_type() == "mysql"
