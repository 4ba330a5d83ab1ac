"""Dialect-aware upsert helpers shared by repositories."""

from __future__ import annotations

import logging
from typing import Any, Sequence

from sqlalchemy import Select, asc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import DatabaseError

logger = logging.getLogger(__name__)


def build_upsert_statement(
    dialect_name: str,
    model: type,
    values: dict[str, Any],
    conflict_columns: Sequence[str],
):
    """Build an INSERT that replaces the provided columns when the natural key exists.

    PostgreSQL and SQLite: INSERT ... ON CONFLICT (key) DO UPDATE
    MySQL: INSERT ... ON DUPLICATE KEY UPDATE (triggers on ANY unique constraint)
    """

    if dialect_name in {"postgresql", "sqlite"}:
        if dialect_name == "postgresql":
            from sqlalchemy.dialects.postgresql import insert as dialect_insert
        else:
            from sqlalchemy.dialects.sqlite import insert as dialect_insert

        statement = dialect_insert(model).values(**values)
        update_columns = {
            column.name: statement.excluded[column.name]
            for column in model.__table__.columns
            if column.name not in conflict_columns and column.name != "id" and column.name in values
        }

        # Only key columns provided
        if not update_columns:
            return statement.on_conflict_do_nothing(index_elements=list(conflict_columns))

        return statement.on_conflict_do_update(index_elements=list(conflict_columns), set_=update_columns)

    if dialect_name == "mysql":
        from sqlalchemy.dialects.mysql import insert as mysql_insert

        statement = mysql_insert(model).values(**values)
        update_columns = {
            column.name: statement.inserted[column.name]
            for column in model.__table__.columns
            if column.name != "id" and column.name in values
        }
        return statement.on_duplicate_key_update(**update_columns)

    raise DatabaseError(f"Upsert is not supported for dialect '{dialect_name}'", operation="upsert")


class BaseRepository:
    """Base repository providing upsert/select helpers and logging."""

    def __init__(self, *, log: logging.Logger | None = None) -> None:
        self._logger = log or logger

    async def _execute(self, session: AsyncSession, statement: Any, *, operation: str) -> Any:
        try:
            return await session.execute(statement)
        except SQLAlchemyError as exc:
            self._logger.exception("Database operation failed", extra={"operation": operation})
            raise DatabaseError("Database operation failed", operation=operation) from exc

    async def _upsert(
        self,
        session: AsyncSession,
        model: type,
        values: dict[str, Any],
        lookup_filters: Sequence[Any],
        *,
        operation: str,
    ) -> Any:
        """Execute an upsert keyed on ``lookup_filters`` and return the stored row.

        The lookup filters are ``Model.column == value`` expressions; their
        columns form the conflict target.
        """

        conflict_columns = [
            expression.left.key
            for expression in lookup_filters
            if hasattr(expression, "left") and hasattr(expression.left, "key")
        ]
        dialect_name = session.get_bind().dialect.name
        statement = build_upsert_statement(dialect_name, model, values, conflict_columns)

        await self._execute(session, statement, operation=operation)
        query: Select[Any] = (
            select(model).where(*lookup_filters).execution_options(populate_existing=True)
        )
        result = await self._execute(session, query, operation=operation)
        instance = result.scalar_one_or_none()

        if instance is None:
            raise DatabaseError("Upsert did not return a record", operation=operation)
        return instance

    async def _fetch(
        self,
        session: AsyncSession,
        model: type,
        filters: Sequence[Any],
        *,
        order_by: Any | None = None,
        operation: str,
    ) -> list[Any]:
        statement: Select[Any] = select(model).where(*filters)
        if order_by is not None:
            statement = statement.order_by(asc(order_by))
        result = await self._execute(session, statement, operation=operation)
        return list(result.scalars().all())


__all__ = ["BaseRepository", "build_upsert_statement"]
