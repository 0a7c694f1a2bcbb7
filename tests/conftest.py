"""Root conftest for all tests.

Shared fixtures: profiles, file-backed SQLite stores and scripted
generation services standing in for the LLM.
"""

from __future__ import annotations

import copy
from datetime import date
from typing import Any

import pytest

from workout_engine.catalog.catalog import default_catalog
from workout_engine.catalog.safety import SafetyFilter
from workout_engine.errors import PersistenceError
from workout_engine.generation.client import GenerationClient
from workout_engine.generation.pipeline import WorkoutPipeline
from workout_engine.generation.schemas import RequestEnvelope
from workout_engine.persistence.session import create_db_engine, create_session_factory, init_db
from workout_engine.persistence.store import SqlDayStore
from workout_engine.profiles.parsing import parse_profile

VALID_RESPONSE: dict[str, Any] = {
    "title": "Upper Body Builder",
    "description": "Push and pull work for the upper body.",
    "estimatedDuration": 40,
    "difficulty": "intermediate",
    "warmup": [
        {"name": "Arm Circles", "sets": 1, "reps": 20, "restTime": 0, "instructions": "Small circles, then large."},
        {"name": "Cat-Cow", "sets": 1, "reps": 10, "restTime": 0, "instructions": "Alternate arching and rounding."},
    ],
    "exercises": [
        {"name": "Incline Push-ups", "sets": 3, "reps": 12, "restTime": 60, "instructions": "Hands on a bench."},
        {"name": "Superman Hold", "sets": 3, "reps": 30, "restTime": 45, "instructions": "Lift arms and legs."},
        {"name": "Glute Bridge", "sets": 3, "reps": 15, "restTime": 45, "instructions": "Drive through the heels."},
        {"name": "Dead Bug", "sets": 3, "reps": 10, "restTime": 45, "instructions": "Keep the low back down."},
    ],
    "cooldown": [
        {"name": "Child's Pose", "sets": 1, "reps": 60, "restTime": 0, "instructions": "Sit back and breathe."},
        {"name": "Chest Stretch", "sets": 1, "reps": 30, "restTime": 0, "instructions": "Open the chest gently."},
    ],
    "coachNotes": "Move with control.",
    "progressionTips": "Add two reps next week.",
}


class ScriptedService:
    """GenerationService double that replays a script of responses.

    Each script item is returned as-is, or raised when it is an exception.
    The last item repeats once the script runs out.
    """

    def __init__(self, *script: Any):
        self.script = list(script) or [copy.deepcopy(VALID_RESPONSE)]
        self.calls: list[tuple[RequestEnvelope, float]] = []

    async def complete(self, envelope: RequestEnvelope, *, temperature: float) -> Any:
        self.calls.append((envelope, temperature))
        item = self.script[min(len(self.calls), len(self.script)) - 1]
        if isinstance(item, BaseException):
            raise item
        return copy.deepcopy(item)

    @property
    def temperatures(self) -> list[float]:
        return [temperature for _, temperature in self.calls]


class FailingStore:
    """DayStore wrapper that raises PersistenceError for chosen (operation, date) pairs.

    Every other call goes to the wrapped store.
    """

    def __init__(self, inner, failures: dict[str, set[date]]):
        self.inner = inner
        self.failures = failures

    def _check(self, operation: str, day: date) -> None:
        if day in self.failures.get(operation, set()):
            raise PersistenceError(f"{operation} failed: disk full")

    async def upsert_pending(self, user_id, day, workout_type=None):
        self._check("upsert_pending", day)
        return await self.inner.upsert_pending(user_id, day, workout_type)

    async def mark_generating(self, user_id, day, *, workout_type=None, stale_after=None):
        self._check("mark_generating", day)
        return await self.inner.mark_generating(user_id, day, workout_type=workout_type, stale_after=stale_after)

    async def mark_ready(self, user_id, day, payload):
        self._check("mark_ready", day)
        return await self.inner.mark_ready(user_id, day, payload)

    async def mark_error(self, user_id, day, detail):
        self._check("mark_error", day)
        return await self.inner.mark_error(user_id, day, detail)

    async def get_by_user_and_date_range(self, user_id, start, end):
        return await self.inner.get_by_user_and_date_range(user_id, start, end)


class RecordingSleep:
    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def valid_response() -> dict[str, Any]:
    return copy.deepcopy(VALID_RESPONSE)


@pytest.fixture
def scripted_service():
    """Factory fixture: scripted_service(response_or_exception, ...)."""
    return ScriptedService


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def profile():
    return parse_profile(
        {
            "userId": "user-1",
            "name": "Sam",
            "age": "34",
            "fitnessLevel": "Intermediate",
            "goal": "Build strength",
            "equipment": '["dumbbells", "resistance bands"]',
            "sessionDuration": "40 min",
            "trainingDaysPerWeek": 3,
            "limitations": "none",
        }
    )


@pytest.fixture
def knee_profile():
    return parse_profile(
        {
            "userId": "user-knee",
            "fitnessLevel": "beginner",
            "limitations": "Knee pain when bending deeply",
            "equipment": [],
            "sessionDuration": 30,
        }
    )


@pytest.fixture
def failing_store(store):
    """Factory fixture: failing_store(mark_ready={day}, ...) wraps the SQLite store."""

    def _make(**failures: set[date]) -> FailingStore:
        return FailingStore(store, failures)

    return _make


@pytest.fixture
def session_factory(tmp_path):
    engine = create_db_engine(f"sqlite:///{tmp_path / 'workouts.db'}")
    init_db(engine)
    yield create_session_factory(engine)
    engine.dispose()


@pytest.fixture
def store(session_factory) -> SqlDayStore:
    return SqlDayStore(session_factory)


@pytest.fixture
def make_pipeline(recording_sleep):
    """Factory fixture building a WorkoutPipeline over a given service, with no real sleeping."""

    def _make(service) -> WorkoutPipeline:
        safety = SafetyFilter()
        client = GenerationClient(service, safety=safety, base_delay=0.5, max_delay=3.0, sleep=recording_sleep)
        return WorkoutPipeline(default_catalog(), safety, client)

    return _make
