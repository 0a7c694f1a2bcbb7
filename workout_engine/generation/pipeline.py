"""Per-day generation pipeline: candidate selection then ladder generation."""

from __future__ import annotations

from loguru import logger

from workout_engine.catalog.catalog import ExerciseCatalog
from workout_engine.catalog.exercises import ContentUnit
from workout_engine.catalog.safety import SafetyFilter
from workout_engine.generation.client import GenerationClient
from workout_engine.generation.schemas import GeneratedPayload, WorkoutRequest

MIN_FOCUSED_CANDIDATES = 4

FOCUS_AREAS: dict[str, frozenset[str]] = {
    "push": frozenset({"chest", "shoulders", "triceps"}),
    "pull": frozenset({"back", "upper-back", "biceps"}),
    "legs": frozenset({"quads", "hamstrings", "glutes", "calves"}),
    "core": frozenset({"core", "obliques"}),
}

SUPPORT_STYLES = frozenset({"warmup", "cooldown"})


def select_candidates(catalog: ExerciseCatalog, safety: SafetyFilter, request: WorkoutRequest) -> list[ContentUnit]:
    """Main-block candidates for the requested type plus warm-up/cool-down units, safety filtered.

    A focus narrows the main block only when it leaves at least
    MIN_FOCUSED_CANDIDATES units.
    """
    profile = request.profile
    main = catalog.filter(
        category=request.workout_type,
        equipment=request.equipment,
        difficulty=profile.fitness_level,
    )
    areas = FOCUS_AREAS.get((request.focus or "").lower())
    if areas:
        focused = [unit for unit in main if unit.target_areas & areas]
        if len(focused) >= MIN_FOCUSED_CANDIDATES:
            main = focused

    support = [
        unit
        for unit in catalog.filter(equipment=request.equipment, difficulty=profile.fitness_level)
        if unit.styles & SUPPORT_STYLES
    ]
    seen: set[str] = set()
    combined: list[ContentUnit] = []
    for unit in [*main, *support]:
        if unit.id not in seen:
            seen.add(unit.id)
            combined.append(unit)

    return safety.exclude(combined, profile.limitations, profile.limitation_areas)


class WorkoutPipeline:
    """Selects safe candidates for a request and generates the workout."""

    def __init__(self, catalog: ExerciseCatalog, safety: SafetyFilter, client: GenerationClient):
        self.catalog = catalog
        self.safety = safety
        self.client = client

    def select_candidates(self, request: WorkoutRequest) -> list[ContentUnit]:
        return select_candidates(self.catalog, self.safety, request)

    async def generate(self, request: WorkoutRequest, context: str = "Workout Generation") -> GeneratedPayload:
        candidates = self.select_candidates(request)
        if not candidates:
            logger.warning(
                "No safe candidate exercises for request",
                workout_type=request.workout_type,
                user_id=request.profile.user_id,
            )
        return await self.client.generate(request, candidates, context=context)
