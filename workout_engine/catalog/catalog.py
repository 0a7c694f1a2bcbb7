"""Queryable exercise catalog.

The catalog is an immutable value handed to consumers rather than a module
global, so tests can build a restricted catalog and inject it.
"""

from __future__ import annotations

from collections.abc import Iterable

from workout_engine.catalog.exercises import EXERCISE_LIBRARY, ContentUnit
from workout_engine.profiles.models import FitnessLevel

FALLBACK_STYLES = frozenset({"strength"})

# Requested workout type -> style tags. Must stay total over SUPPORTED_WORKOUT_TYPES.
WORKOUT_TYPE_STYLES: dict[str, frozenset[str]] = {
    "hiit": frozenset({"hiit", "cardio"}),
    "upper body": frozenset({"upper-body"}),
    "lower body": frozenset({"lower-body"}),
    "full body": frozenset({"full-body"}),
    "cardio": frozenset({"cardio"}),
    "strength": frozenset({"strength"}),
    "yoga": frozenset({"yoga", "flexibility"}),
    "calisthenics": frozenset({"calisthenics"}),
    "core": frozenset({"core"}),
    "mobility": frozenset({"mobility", "flexibility"}),
    "active recovery": frozenset({"recovery", "mobility"}),
    "circuit": frozenset({"hiit", "strength"}),
}

SUPPORTED_WORKOUT_TYPES: tuple[str, ...] = (
    "HIIT",
    "Upper Body",
    "Lower Body",
    "Full Body",
    "Cardio",
    "Strength",
    "Yoga",
    "Calisthenics",
    "Core",
    "Mobility",
    "Active Recovery",
    "Circuit",
)


def styles_for_type(workout_type: str | None) -> frozenset[str]:
    """Resolve a requested workout type to catalog style tags.

    Unknown or empty types resolve to the strength tags.
    """
    if not workout_type:
        return FALLBACK_STYLES
    key = " ".join(workout_type.replace("-", " ").replace("_", " ").lower().split())
    return WORKOUT_TYPE_STYLES.get(key, FALLBACK_STYLES)


def _is_available(unit: ContentUnit, equipment: frozenset[str]) -> bool:
    return (unit.equipment - {"bodyweight"}) <= equipment


class ExerciseCatalog:
    """Static, in-memory exercise repository."""

    def __init__(self, units: Iterable[ContentUnit]):
        seen: set[str] = set()
        ordered: list[ContentUnit] = []
        for unit in units:
            if unit.id in seen:
                continue
            seen.add(unit.id)
            ordered.append(unit)
        self._units: tuple[ContentUnit, ...] = tuple(ordered)

    def __len__(self) -> int:
        return len(self._units)

    def __iter__(self):
        return iter(self._units)

    @property
    def units(self) -> tuple[ContentUnit, ...]:
        return self._units

    def get(self, unit_id: str) -> ContentUnit | None:
        for unit in self._units:
            if unit.id == unit_id:
                return unit
        return None

    def filter(
        self,
        category: str | None = None,
        target_areas: Iterable[str] | None = None,
        equipment: Iterable[str] | None = None,
        difficulty: FitnessLevel | str | None = None,
    ) -> list[ContentUnit]:
        """Return matching units in catalog order, de-duplicated by id.

        Args:
            category: Requested workout type, resolved through WORKOUT_TYPE_STYLES
            target_areas: Keep units hitting at least one of these areas
            equipment: Available equipment; bodyweight is always available
            difficulty: Keep units at or below this level

        Returns:
            List of matching ContentUnits (may be empty)
        """
        styles = styles_for_type(category) if category is not None else None
        areas = frozenset(a.lower() for a in target_areas) if target_areas else None
        inventory = frozenset(e.lower() for e in equipment) if equipment is not None else None
        max_rank = _difficulty_rank(difficulty)

        matches: list[ContentUnit] = []
        for unit in self._units:
            if styles is not None and not (unit.styles & styles):
                continue
            if areas is not None and not (unit.target_areas & areas):
                continue
            if inventory is not None and not _is_available(unit, inventory):
                continue
            if max_rank is not None and unit.difficulty.rank > max_rank:
                continue
            matches.append(unit)
        return matches


def _difficulty_rank(difficulty: FitnessLevel | str | None) -> int | None:
    if difficulty is None:
        return None
    try:
        return FitnessLevel(str(difficulty).lower()).rank
    except ValueError:
        return FitnessLevel.INTERMEDIATE.rank


def default_catalog() -> ExerciseCatalog:
    """Build the catalog over the built-in exercise library."""
    return ExerciseCatalog(EXERCISE_LIBRARY)
