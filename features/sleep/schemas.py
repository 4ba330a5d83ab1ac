"""Validation models for wearable sleep payloads and canonical daily records."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError as PydanticValidationError, field_validator

from core.exceptions import ValidationError

from .calendar import coerce_date


def _parse_day(value: Any) -> Any:
    if value is None or isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return coerce_date(value)
        except ValueError as exc:
            raise ValueError("day must use YYYY-MM-DD format") from exc
    return value


class RawSleepSession(BaseModel):
    """One sleep session as returned by the wearable provider.

    Field aliases follow the Oura v2 ``sleep`` collection so provider responses
    can be validated without renaming keys first.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    day: date
    session_type: str | None = Field(default=None, alias="type")
    total_sleep_seconds: int | None = Field(default=None, alias="total_sleep_duration")
    deep_sleep_seconds: int | None = Field(default=None, alias="deep_sleep_duration")
    rem_sleep_seconds: int | None = Field(default=None, alias="rem_sleep_duration")
    light_sleep_seconds: int | None = Field(default=None, alias="light_sleep_duration")
    average_heart_rate: float | None = None
    lowest_heart_rate: float | None = None
    bedtime_start: datetime | None = None

    _coerce_day = field_validator("day", mode="before")(_parse_day)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "RawSleepSession":
        """Validate a provider payload, raising :class:`ValidationError` on malformed input."""

        try:
            return cls.model_validate(payload)
        except PydanticValidationError as exc:
            first = exc.errors()[0] if exc.errors() else {}
            location = first.get("loc") or ()
            field = str(location[0]) if location else None
            raise ValidationError(f"Invalid sleep session: {exc}", field=field) from exc


class CanonicalDailySleepRecord(BaseModel):
    """The single persisted sleep record for one user and one calendar date."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    calendar_date: date
    total_sleep_minutes: int = 0
    deep_sleep_minutes: int = 0
    rem_sleep_minutes: int = 0
    light_sleep_minutes: int = 0
    sleep_score: int | None = None
    avg_hr: float | None = None
    lowest_hr: float | None = None
    bedtime_start: datetime | None = None

    def to_row(self) -> dict[str, Any]:
        """Return every column, absent values included, for a replacing upsert."""

        return self.model_dump()

    @classmethod
    def from_row(cls, row: Any) -> "CanonicalDailySleepRecord":
        """Build a record from an ORM row or any attribute-bearing object."""

        return cls(**{name: getattr(row, name) for name in cls.model_fields})


__all__ = ["CanonicalDailySleepRecord", "RawSleepSession"]
