"""SQLAlchemy declarative base shared by the sleep and challenge models."""

from __future__ import annotations

from typing import Final

from sqlalchemy import MetaData
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy.orm import DeclarativeBase

# Deterministic constraint names keep migrations identical across backends
NAMING_CONVENTION: Final = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    metadata = MetaData(naming_convention=NAMING_CONVENTION)


metadata = Base.metadata


async def prepare_database(engine: AsyncEngine) -> None:
    """Create every sleep and challenge table missing on ``engine``."""

    # Register the models on the metadata before creating tables
    from features.db.challenges import db_models as _challenge_models  # noqa: F401
    from features.db.sleep import db_models as _sleep_models  # noqa: F401

    async with engine.begin() as connection:
        await connection.run_sync(metadata.create_all)


__all__: Final = ["Base", "NAMING_CONVENTION", "metadata", "prepare_database"]
