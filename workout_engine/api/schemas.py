from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import BaseModel, Field

from workout_engine.orchestration.models import DayRecord


class WeekGenerateRequest(BaseModel):
    profile: dict[str, Any] = Field(description="Raw user profile / questionnaire answers")
    today: date | None = Field(default=None, description="Any date in the target week (defaults to today)")
    force: bool = Field(default=False, description="Regenerate days that are already ready")


class DayGenerateRequest(BaseModel):
    profile: dict[str, Any] = Field(description="Raw user profile / questionnaire answers")
    date: date
    day_of_week_index: int | None = Field(
        default=None, ge=0, le=6, description="0=Monday .. 6=Sunday (derived from date when omitted)"
    )


class WeekResponse(BaseModel):
    user_id: str
    week_start: date
    succeeded: int
    failed: int
    days: list[DayRecord]


class DayFailure(BaseModel):
    date: date
    detail: str


class WeekFailureResponse(BaseModel):
    message: str
    failures: list[DayFailure]
    week: WeekResponse
