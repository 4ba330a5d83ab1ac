"""Repository for canonical daily sleep rows."""

from __future__ import annotations

from datetime import date
from typing import Iterable

from sqlalchemy.ext.asyncio import AsyncSession

from features.sleep.schemas import CanonicalDailySleepRecord
from infrastructure.db.upsert import BaseRepository

from .db_models import SleepData


class SleepDataRepository(BaseRepository):
    """Persist and retrieve one sleep row per user and calendar date."""

    async def upsert_record(self, session: AsyncSession, record: CanonicalDailySleepRecord) -> SleepData:
        """Insert the record or replace every value of the existing row for its date.

        Absent values are written as ``NULL`` so a re-sync never leaves stale
        figures from an earlier, different aggregation.
        """

        return await self._upsert(
            session,
            SleepData,
            record.to_row(),
            [SleepData.user_id == record.user_id, SleepData.calendar_date == record.calendar_date],
            operation="sleep.upsert",
        )

    async def upsert_records(
        self,
        session: AsyncSession,
        records: Iterable[CanonicalDailySleepRecord],
    ) -> list[SleepData]:
        return [await self.upsert_record(session, record) for record in records]

    async def fetch_records(
        self,
        session: AsyncSession,
        user_id: str,
        *,
        start: date | None = None,
        end: date | None = None,
    ) -> list[SleepData]:
        """Return rows for ``user_id`` between ``start`` and ``end`` inclusive, oldest first."""

        filters = [SleepData.user_id == user_id]
        if start is not None:
            filters.append(SleepData.calendar_date >= start)
        if end is not None:
            filters.append(SleepData.calendar_date <= end)

        return await self._fetch(
            session,
            SleepData,
            filters,
            order_by=SleepData.calendar_date,
            operation="sleep.fetch",
        )


__all__ = ["SleepDataRepository"]
