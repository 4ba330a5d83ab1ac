"""Challenge, participant and habit models shared by the challenge features."""

from __future__ import annotations

from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Iterable
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

from config.challenges.defaults import CHALLENGE_DURATION_DAYS
from features.sleep.calendar import (
    DateLike,
    challenge_end_date,
    coerce_date,
    day_number,
    days_remaining,
    is_active,
    local_today,
)


class ChallengeMode(str, Enum):
    PRO = "pro"
    LIGHT = "light"


class ParticipantStatus(str, Enum):
    INVITED = "invited"
    ACCEPTED = "accepted"
    DECLINED = "declined"


def _parse_local(value: Any) -> Any:
    if isinstance(value, (str, datetime)):
        return coerce_date(value)
    return value


class Habit(BaseModel):
    """One daily habit of a protocol."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    description: str | None = None
    sort_order: int = 0


class Participant(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str
    status: ParticipantStatus = ParticipantStatus.INVITED
    joined_at: datetime | None = None


class Challenge(BaseModel):
    """A fixed-length challenge between friends following one protocol."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    protocol_id: str | None = None
    creator_id: str
    start_date: date
    end_date: date
    mode: ChallengeMode = ChallengeMode.PRO
    habits: list[Habit] = Field(default_factory=list)
    participants: list[Participant] = Field(default_factory=list)

    _coerce_dates = field_validator("start_date", "end_date", mode="before")(_parse_local)

    @field_validator("mode", mode="before")
    @classmethod
    def _default_mode(cls, value: Any) -> Any:
        return value or ChallengeMode.PRO

    @classmethod
    def new(
        cls,
        *,
        name: str,
        creator_id: str,
        invitee_ids: Iterable[str] = (),
        protocol_id: str | None = None,
        mode: ChallengeMode | str | None = None,
        habits: Iterable[Habit] = (),
        start_date: DateLike | None = None,
        duration: int = CHALLENGE_DURATION_DAYS,
        challenge_id: str | None = None,
    ) -> "Challenge":
        """Create a challenge starting today (or ``start_date``) with the creator already accepted."""

        start = coerce_date(start_date) if start_date is not None else local_today()
        participants = [
            Participant(
                user_id=creator_id,
                status=ParticipantStatus.ACCEPTED,
                joined_at=datetime.now(timezone.utc),
            ),
            *(
                Participant(user_id=user_id, status=ParticipantStatus.INVITED)
                for user_id in invitee_ids
                if user_id != creator_id
            ),
        ]
        return cls(
            id=challenge_id or str(uuid4()),
            name=name,
            protocol_id=protocol_id,
            creator_id=creator_id,
            start_date=start,
            end_date=challenge_end_date(start, duration),
            mode=mode,
            habits=list(habits),
            participants=participants,
        )

    @property
    def accepted_participants(self) -> list[Participant]:
        return [p for p in self.participants if p.status is ParticipantStatus.ACCEPTED]

    def day_number(self, today: DateLike | None = None) -> int:
        return day_number(self.start_date, today)

    def days_remaining(self, today: DateLike | None = None) -> int:
        return days_remaining(self.end_date, today)

    def is_active(self, today: DateLike | None = None) -> bool:
        return is_active(self.start_date, self.end_date, today)


__all__ = ["Challenge", "ChallengeMode", "Habit", "Participant", "ParticipantStatus"]
