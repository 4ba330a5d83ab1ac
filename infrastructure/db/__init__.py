"""Database infrastructure helpers."""

from __future__ import annotations

from .base import Base, metadata, prepare_database
from .engines import AsyncSessionFactory, SessionDependency, create_engine, get_session_factory
from .sessions import (
    dispose_engine,
    get_session_dependency,
    require_sleep_session_factory,
    session_scope,
)
from .upsert import BaseRepository, build_upsert_statement

__all__ = [
    "Base",
    "BaseRepository",
    "build_upsert_statement",
    "metadata",
    "prepare_database",
    "AsyncSessionFactory",
    "SessionDependency",
    "create_engine",
    "get_session_factory",
    "dispose_engine",
    "get_session_dependency",
    "require_sleep_session_factory",
    "session_scope",
]
