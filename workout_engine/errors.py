"""Error types raised by the workout engine.

Content generation absorbs its own failures (retry ladder, defaulting,
synthetic fallback). Only structural failures reach callers:
- PersistenceError: a store read or write failed
- DayGenerationError: one day could not reach 'ready'
- DayAlreadyGeneratingError: a fresh generation already owns the day
- WeekGenerationError: one or more days of a week failed
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from workout_engine.orchestration.models import WeekResult


class WorkoutEngineError(Exception):
    """Base class for workout engine errors."""


class GenerationServiceError(WorkoutEngineError):
    """Raised by a generation service when the upstream call fails."""


class PersistenceError(WorkoutEngineError):
    """Raised when the day store cannot complete an operation."""


class DayGenerationError(WorkoutEngineError):
    """Raised when a single day fails to generate.

    Attributes:
        day: Calendar date of the failed day
        detail: Human readable failure detail (also persisted on the record)
    """

    def __init__(self, day: date, detail: str):
        self.day = day
        self.detail = detail
        super().__init__(f"{day.isoformat()}: {detail}")


class DayAlreadyGeneratingError(DayGenerationError):
    """Raised when a non-stale generation is already in flight for the day."""

    def __init__(self, user_id: str, day: date):
        self.user_id = user_id
        super().__init__(day, f"generation already in progress for user {user_id}")


class WeekGenerationError(WorkoutEngineError):
    """Raised after all seven days settle when at least one failed.

    Attributes:
        failures: Mapping of failed date to failure detail
        result: The settled week, including the failed days' records
        in_progress: Failed dates rejected because a generation was already running
    """

    def __init__(
        self,
        failures: dict[date, str],
        result: WeekResult,
        in_progress: frozenset[date] = frozenset(),
    ):
        self.failures = failures
        self.result = result
        self.in_progress = in_progress
        summary = "; ".join(f"{day.isoformat()}: {detail}" for day, detail in sorted(failures.items()))
        super().__init__(f"Failed to generate {len(failures)} of 7 workouts: {summary}")
