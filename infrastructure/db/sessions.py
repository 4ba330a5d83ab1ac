"""Session management utilities."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from core.exceptions import ConfigurationError, DatabaseError
from infrastructure.db.engines import create_engine, get_session_factory

logger = logging.getLogger(__name__)

# Lazy-loaded engine and session factory - initialized on first request
sleep_engine: Optional[AsyncEngine] = None
sleep_session_factory: Optional[async_sessionmaker] = None


@asynccontextmanager
async def session_scope(factory: async_sessionmaker) -> AsyncIterator[AsyncSession]:
    """Provide a transactional scope around a series of operations."""

    session = factory()
    try:
        yield session
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        raise DatabaseError("Database operation failed", operation="transaction") from exc
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()


def get_session_dependency(factory: async_sessionmaker) -> Callable[[], AsyncIterator[AsyncSession]]:
    """Return a dependency callable that yields a database session per request."""

    async def _get_session() -> AsyncIterator[AsyncSession]:
        async with session_scope(factory) as session:
            yield session

    return _get_session


def require_sleep_session_factory() -> async_sessionmaker:
    """Return the sleep database session factory or raise a configuration error."""
    global sleep_engine, sleep_session_factory

    if sleep_session_factory is None:
        from config.database.defaults import ECHO, MAX_OVERFLOW, POOL_RECYCLE, POOL_SIZE
        from config.database.urls import SLEEP_DB_URL

        if not SLEEP_DB_URL:
            raise ConfigurationError(
                "SLEEP_DB_URL is not configured; set it before requesting sessions",
                key="SLEEP_DB_URL",
            )

        sleep_engine = create_engine(
            SLEEP_DB_URL,
            echo=ECHO,
            pool_size=POOL_SIZE,
            max_overflow=MAX_OVERFLOW,
            pool_recycle=POOL_RECYCLE,
            url_key="SLEEP_DB_URL",
        )
        sleep_session_factory = get_session_factory(sleep_engine)
        logger.info("Sleep database engine initialised (%s)", sleep_engine.dialect.name)

    return sleep_session_factory


async def dispose_engine() -> None:
    """Dispose the lazily created engine, if any."""
    global sleep_engine, sleep_session_factory

    if sleep_engine is None:
        return
    try:
        await sleep_engine.dispose()
    except Exception:  # pragma: no cover - best-effort cleanup
        logger.warning("Failed to dispose sleep engine", exc_info=True)
    finally:
        sleep_engine = None
        sleep_session_factory = None


__all__ = [
    "dispose_engine",
    "get_session_dependency",
    "require_sleep_session_factory",
    "session_scope",
]
