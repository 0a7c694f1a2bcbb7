from __future__ import annotations

from datetime import date, datetime
from enum import StrEnum

from pydantic import BaseModel, Field

from workout_engine.generation.schemas import GeneratedPayload


class DayStatus(StrEnum):
    PENDING = "pending"
    GENERATING = "generating"
    READY = "ready"
    ERROR = "error"


class DayRecord(BaseModel):
    """Persisted state of one (user, date) workout.

    payload is set only when status is ready; error only when status is error.
    """

    user_id: str
    date: date
    status: DayStatus
    workout_type: str | None = None
    payload: GeneratedPayload | None = None
    error: str | None = None
    created_at: datetime
    updated_at: datetime

    @property
    def is_placeholder(self) -> bool:
        return self.payload is not None and self.payload.is_placeholder


class WeekResult(BaseModel):
    """The seven days of a Monday-aligned week, in date order."""

    user_id: str
    week_start: date
    days: list[DayRecord] = Field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return sum(1 for day in self.days if day.status == DayStatus.READY)

    @property
    def failed(self) -> int:
        return sum(1 for day in self.days if day.status == DayStatus.ERROR)

    @property
    def placeholders(self) -> int:
        return sum(1 for day in self.days if day.is_placeholder)
