"""End-to-end tests for candidate selection and generation."""

import pytest

from workout_engine.catalog.catalog import default_catalog
from workout_engine.catalog.safety import DEFAULT_RULES, SafetyFilter
from workout_engine.generation.pipeline import MIN_FOCUSED_CANDIDATES, FOCUS_AREAS, select_candidates
from workout_engine.generation.schemas import WorkoutRequest
from workout_engine.profiles.parsing import parse_profile

KNEE_PATTERNS = next(rule.patterns for rule in DEFAULT_RULES if rule.name == "knee")


def _mentions_knee_pattern(name: str, instructions: str | None) -> bool:
    text = f"{name} {instructions or ''}".lower()
    return any(pattern in text for pattern in KNEE_PATTERNS)


def _request(profile, workout_type, focus=None):
    return WorkoutRequest(
        profile=profile, workout_type=workout_type, duration=profile.session_duration, equipment=profile.equipment, focus=focus
    )


def test_candidates_include_warmup_and_cooldown_support(profile):
    units = select_candidates(default_catalog(), SafetyFilter(), _request(profile, "Upper Body"))
    styles = set().union(*(unit.styles for unit in units))

    assert "upper-body" in styles
    assert "warmup" in styles
    assert "cooldown" in styles
    assert len({unit.id for unit in units}) == len(units)


def test_focus_narrows_main_block(profile):
    units = select_candidates(default_catalog(), SafetyFilter(), _request(profile, "Upper Body", focus="push"))
    main = [unit for unit in units if "upper-body" in unit.styles]

    assert len(main) >= MIN_FOCUSED_CANDIDATES
    assert all(unit.target_areas & FOCUS_AREAS["push"] for unit in main)


def test_unmatched_focus_is_ignored(profile):
    catalog = default_catalog()
    plain = select_candidates(catalog, SafetyFilter(), _request(profile, "Yoga"))
    focused = select_candidates(catalog, SafetyFilter(), _request(profile, "Yoga", focus="unknown"))

    assert plain == focused


@pytest.mark.asyncio
async def test_knee_pain_lower_body_end_to_end(scripted_service, make_pipeline, valid_response):
    profile = parse_profile(
        {
            "userId": "knee-user",
            "fitnessLevel": "intermediate",
            "limitations": "knee pain",
            "equipment": "bodyweight",
            "sessionDuration": 35,
        }
    )
    response = dict(valid_response)
    response["exercises"] = [
        {"name": "Jump Squats", "sets": 3, "reps": 12, "restTime": 45, "instructions": "Explode upward."},
        {"name": "Walking Lunges", "sets": 3, "reps": 10, "restTime": 45, "instructions": "Alternate legs."},
        *valid_response["exercises"],
    ]
    service = scripted_service(response)
    pipeline = make_pipeline(service)
    request = _request(profile, "Lower Body")

    candidates = pipeline.select_candidates(request)
    payload = await pipeline.generate(request)

    assert candidates
    assert not any(_mentions_knee_pattern(unit.name, unit.instructions) for unit in candidates)
    sent = service.calls[0][0].user_prompt
    assert "Jump Squats" not in sent
    assert "Pistol Squat" not in sent
    assert payload.main
    assert not any(_mentions_knee_pattern(unit.name, unit.instructions) for unit in payload.all_units())
    assert payload.is_placeholder is False
