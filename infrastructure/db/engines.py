"""Async engine construction for the sleep database.

PostgreSQL (asyncpg) is the hosted default, MySQL (aiomysql) serves
self-hosted installs and SQLite (aiosqlite) backs local runs and tests.
"""

from __future__ import annotations

import logging
import os
import re
import ssl
from typing import Any, AsyncIterator, Callable

from sqlalchemy.engine import URL, make_url
from sqlalchemy.exc import ArgumentError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from config.database.defaults import CONNECT_TIMEOUT
from core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

AsyncSessionFactory = async_sessionmaker[AsyncSession]
SessionDependency = Callable[[], AsyncIterator[AsyncSession]]

_SEARCH_PATH = re.compile(r"-csearch_path=(\w+)")


def _ssl_context(cert_path: str | None) -> ssl.SSLContext | None:
    """Verify the server against ``cert_path`` when the CA bundle exists."""

    if not cert_path:
        return None
    if not os.path.exists(cert_path):
        logger.warning("SSL certificate not found at %s, connecting without it", cert_path)
        return None

    context = ssl.create_default_context(cafile=cert_path)
    context.check_hostname = True
    context.verify_mode = ssl.CERT_REQUIRED
    return context


def split_search_path(url: URL) -> tuple[URL, str | None]:
    """Remove the libpq ``options`` query parameter and return the schema it named.

    asyncpg rejects ``options`` in the URL; the schema travels through
    ``server_settings`` instead.
    """

    options = url.query.get("options")
    if options is None:
        return url, None
    if isinstance(options, tuple):
        options = " ".join(options)
    match = _SEARCH_PATH.search(options)
    return url.difference_update_query(["options"]), match.group(1) if match else None


def _postgresql_connect_args(url: URL) -> tuple[URL, dict[str, Any]]:
    url, schema = split_search_path(url)
    connect_args: dict[str, Any] = {"command_timeout": 10}
    if schema:
        connect_args["server_settings"] = {"search_path": schema}
        logger.debug("PostgreSQL search_path set to %s", schema)
    context = _ssl_context(os.environ.get("SUPABASE_SSL_CERT_PATH"))
    if context is not None:
        connect_args["ssl"] = context
    return url, connect_args


def create_engine(
    url: str,
    *,
    echo: bool = False,
    pool_size: int = 5,
    max_overflow: int = 5,
    pool_recycle: int = 300,
    url_key: str = "SLEEP_DB_URL",
) -> AsyncEngine:
    """Create an async engine with driver options chosen from the URL's backend."""

    if not url:
        raise ConfigurationError("Database connection URL is required", key=url_key)
    try:
        parsed = make_url(url)
    except ArgumentError as exc:
        raise ConfigurationError(f"Invalid database URL in {url_key}", key=url_key) from exc

    backend = parsed.get_backend_name()
    if backend == "sqlite":
        # SQLite engines keep SQLAlchemy's default single-connection pool
        return create_async_engine(parsed, echo=echo)

    if backend == "postgresql":
        parsed, connect_args = _postgresql_connect_args(parsed)
    elif backend == "mysql":
        connect_args = {"connect_timeout": CONNECT_TIMEOUT}
    else:
        raise ConfigurationError(f"Unsupported database backend '{backend}'", key=url_key)

    return create_async_engine(
        parsed,
        echo=echo,
        pool_size=pool_size,
        max_overflow=max_overflow,
        pool_recycle=pool_recycle,
        pool_pre_ping=True,
        isolation_level="READ COMMITTED",
        connect_args=connect_args,
    )


def get_session_factory(engine: AsyncEngine) -> AsyncSessionFactory:
    """Return an ``async_sessionmaker`` bound to ``engine``."""

    return async_sessionmaker(engine, expire_on_commit=False)


__all__ = [
    "AsyncSessionFactory",
    "SessionDependency",
    "create_engine",
    "get_session_factory",
    "split_search_path",
]
