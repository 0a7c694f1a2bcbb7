"""Tests for ExerciseCatalog filtering."""

import pytest

from workout_engine.catalog.catalog import ExerciseCatalog, default_catalog, styles_for_type
from workout_engine.catalog.exercises import ContentUnit
from workout_engine.profiles.models import FitnessLevel

CORE_TYPES = ["HIIT", "Upper Body", "Lower Body", "Full Body", "Cardio", "Strength", "Yoga", "Calisthenics"]


@pytest.fixture(scope="module")
def catalog() -> ExerciseCatalog:
    return default_catalog()


@pytest.mark.parametrize("workout_type", CORE_TYPES)
def test_every_supported_type_has_bodyweight_candidates(catalog, workout_type):
    units = catalog.filter(category=workout_type, equipment={"bodyweight"}, difficulty=FitnessLevel.ADVANCED)

    assert units
    assert all(unit.styles & styles_for_type(workout_type) for unit in units)


@pytest.mark.parametrize("workout_type", CORE_TYPES)
def test_category_lookup_is_case_insensitive(catalog, workout_type):
    assert catalog.filter(category=workout_type.lower()) == catalog.filter(category=workout_type.upper())


def test_unknown_type_falls_back_to_strength(catalog):
    assert styles_for_type("Underwater Basket Weaving") == frozenset({"strength"})
    assert catalog.filter(category="Underwater Basket Weaving") == catalog.filter(category="Strength")


def test_equipment_subset_rule(catalog):
    bodyweight_only = catalog.filter(equipment={"bodyweight"})
    with_dumbbells = catalog.filter(equipment={"bodyweight", "dumbbells"})

    assert all(unit.equipment <= {"bodyweight"} for unit in bodyweight_only)
    assert len(with_dumbbells) > len(bodyweight_only)
    assert catalog.get("goblet_squat") in with_dumbbells
    assert catalog.get("goblet_squat") not in bodyweight_only


def test_difficulty_keeps_units_at_or_below_level(catalog):
    beginner = catalog.filter(difficulty=FitnessLevel.BEGINNER)

    assert beginner
    assert all(unit.difficulty == FitnessLevel.BEGINNER for unit in beginner)
    assert catalog.get("pistol_squat") not in catalog.filter(difficulty="intermediate")
    assert catalog.get("pistol_squat") in catalog.filter(difficulty="advanced")


def test_target_area_overlap(catalog):
    units = catalog.filter(target_areas={"calves"})

    assert units
    assert all("calves" in unit.target_areas for unit in units)


def test_filter_is_pure_and_preserves_catalog_order(catalog):
    first = catalog.filter(category="Full Body")
    second = catalog.filter(category="Full Body")
    order = [unit.id for unit in catalog]

    assert first == second
    assert [unit.id for unit in first] == sorted((unit.id for unit in first), key=order.index)


def test_duplicate_ids_are_dropped():
    unit = ContentUnit(
        id="dup",
        name="Dup",
        target_areas=frozenset({"core"}),
        equipment=frozenset({"bodyweight"}),
        difficulty=FitnessLevel.BEGINNER,
        styles=frozenset({"core"}),
        instructions="Hold.",
    )
    catalog = ExerciseCatalog([unit, unit])

    assert len(catalog) == 1
    assert catalog.filter(category="Core") == [unit]
