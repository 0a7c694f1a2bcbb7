"""Caller surface of the workout engine.

Wires the default catalog, safety rules, generation stack and SQL store into
orchestrators, and exposes the two operations callers use.
"""

from __future__ import annotations

from datetime import date

from sqlalchemy.orm import Session, sessionmaker

from workout_engine.catalog.catalog import ExerciseCatalog, default_catalog
from workout_engine.catalog.safety import SafetyFilter
from workout_engine.generation.client import GenerationClient
from workout_engine.generation.pipeline import WorkoutPipeline
from workout_engine.generation.service import GenerationService, PydanticAIGenerationService
from workout_engine.orchestration.day import DayOrchestrator
from workout_engine.orchestration.models import DayRecord, WeekResult
from workout_engine.orchestration.week import WeekOrchestrator
from workout_engine.persistence.store import DayStore, SqlDayStore
from workout_engine.profiles.models import UserProfile


def build_pipeline(
    service: GenerationService | None = None,
    catalog: ExerciseCatalog | None = None,
    safety: SafetyFilter | None = None,
) -> WorkoutPipeline:
    safety = safety or SafetyFilter()
    client = GenerationClient(service or PydanticAIGenerationService(), safety=safety)
    return WorkoutPipeline(catalog or default_catalog(), safety, client)


def build_week_orchestrator(
    service: GenerationService | None = None,
    store: DayStore | None = None,
    session_factory: sessionmaker[Session] | None = None,
) -> WeekOrchestrator:
    """Build a WeekOrchestrator over the default components.

    Args:
        service: Generation service (defaults to the configured LLM service)
        store: Day store (defaults to SqlDayStore)
        session_factory: Session factory for the default SqlDayStore

    Returns:
        WeekOrchestrator whose day_orchestrator shares the same store
    """
    store = store or SqlDayStore(session_factory)
    day_orchestrator = DayOrchestrator(store, build_pipeline(service))
    return WeekOrchestrator(store, day_orchestrator)


async def generate_day(
    profile: UserProfile,
    day: date,
    day_of_week_index: int,
    orchestrator: WeekOrchestrator | None = None,
) -> DayRecord:
    """Generate (or regenerate) the workout for one date."""
    orchestrator = orchestrator or build_week_orchestrator()
    return await orchestrator.day_orchestrator.generate_day(profile, day, day_of_week_index)


async def generate_week(
    profile: UserProfile,
    orchestrator: WeekOrchestrator | None = None,
    *,
    today: date | None = None,
    force: bool = False,
) -> WeekResult:
    """Generate the current week; raises WeekGenerationError if any day failed."""
    orchestrator = orchestrator or build_week_orchestrator()
    return await orchestrator.generate_week(profile, today=today, force=force)
