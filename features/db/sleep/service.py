"""Sync and retrieval of canonical daily sleep records."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Awaitable, Callable, Iterable, Mapping, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from features.sleep.aggregation import SessionInput, build_daily_records
from features.sleep.calendar import DateLike, coerce_date
from features.sleep.results import SyncResult
from features.sleep.schemas import CanonicalDailySleepRecord, RawSleepSession
from infrastructure.db.engines import AsyncSessionFactory
from infrastructure.db.sessions import require_sleep_session_factory, session_scope

from .repositories import SleepDataRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SleepSyncService:
    """Aggregate provider sessions into daily records and persist them."""

    def __init__(
        self,
        *,
        repository: SleepDataRepository | None = None,
        session_factory: AsyncSessionFactory | None = None,
    ) -> None:
        self._repository = repository or SleepDataRepository()
        self._session_factory = session_factory

    @property
    def session_factory(self) -> AsyncSessionFactory:
        if self._session_factory is None:
            self._session_factory = require_sleep_session_factory()
        return self._session_factory

    async def with_session(
        self,
        session_factory: AsyncSessionFactory,
        handler: Callable[[AsyncSession], Awaitable[T]],
    ) -> T:
        """Execute ``handler`` within a managed transaction scope."""

        async with session_scope(session_factory) as session:
            return await handler(session)

    def validate(self, payload: Mapping[str, Any]) -> RawSleepSession:
        """Validate one provider session payload."""

        return RawSleepSession.from_payload(payload)

    async def sync(
        self,
        session: AsyncSession,
        user_id: str,
        sessions: Iterable[SessionInput],
        scores_by_day: Mapping[DateLike, int | None] | None = None,
    ) -> SyncResult:
        """Aggregate ``sessions`` per day and upsert one row per day for ``user_id``."""

        records = build_daily_records(sessions, user_id, scores_by_day)
        await self._repository.upsert_records(session, records)
        days = [record.calendar_date for record in records]
        logger.info("Synced %d sleep days for user %s", len(records), user_id)
        return SyncResult(user_id=user_id, rows_written=len(records), days=days)

    async def fetch_records(
        self,
        session: AsyncSession,
        user_id: str,
        start: DateLike | None = None,
        end: DateLike | None = None,
    ) -> list[CanonicalDailySleepRecord]:
        rows = await self._repository.fetch_records(
            session,
            user_id,
            start=coerce_date(start) if start is not None else None,
            end=coerce_date(end) if end is not None else None,
        )
        return [CanonicalDailySleepRecord.from_row(row) for row in rows]

    async def fetch_period(self, user_id: str, start: date, end: date) -> list[CanonicalDailySleepRecord]:
        """Load records in their own transaction; used as a comparison record source."""

        return await self.with_session(
            self.session_factory,
            lambda session: self.fetch_records(session, user_id, start, end),
        )


__all__ = ["SleepSyncService"]
