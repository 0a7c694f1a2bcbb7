"""Tests for PromptComposer detail levels."""

import pytest

from workout_engine.catalog.catalog import default_catalog
from workout_engine.generation.prompt_builder import (
    CONDENSED_CANDIDATE_LIMIT,
    OUTPUT_SCHEMA,
    OUTPUT_SCHEMA_COMPACT,
    PromptComposer,
)
from workout_engine.profiles.parsing import parse_profile


@pytest.fixture
def candidates():
    return default_catalog().filter(category="Full Body")


@pytest.fixture
def rich_profile():
    return parse_profile(
        {
            "userId": "u1",
            "name": "Alex",
            "age": 41,
            "fitnessLevel": "beginner",
            "goal": "lose weight",
            "limitations": "bad left knee",
            "equipment": ["dumbbells"],
            "sessionDuration": 30,
        }
    )


def _compose(profile, candidates, attempt):
    return PromptComposer().compose(
        profile, "Full Body", 30, profile.equipment, candidates, attempt, focus="legs", day_name="Monday"
    )


def test_compose_is_deterministic(rich_profile, candidates):
    assert _compose(rich_profile, candidates, 1) == _compose(rich_profile, candidates, 1)


def test_level_one_carries_everything(rich_profile, candidates):
    envelope = _compose(rich_profile, candidates, 1)

    assert envelope.detail_level == 1
    assert "- Name: Alex" in envelope.user_prompt
    assert "- Limitations/injuries: bad left knee" in envelope.user_prompt
    assert "Monday" in envelope.user_prompt
    assert OUTPUT_SCHEMA in envelope.user_prompt
    assert "4-6 main exercises" in envelope.user_prompt
    for unit in candidates:
        assert unit.name in envelope.user_prompt
    assert candidates[0].instructions in envelope.user_prompt


def test_absent_fields_are_omitted(candidates):
    sparse = parse_profile({"userId": "u2"})
    envelope = PromptComposer().compose(sparse, "Yoga", 20, sparse.equipment, candidates, 1)

    assert "None" not in envelope.user_prompt
    assert "- Name:" not in envelope.user_prompt
    assert "- Age:" not in envelope.user_prompt


def test_level_two_is_condensed(rich_profile, candidates):
    envelope = _compose(rich_profile, candidates, 2)

    assert envelope.detail_level == 2
    assert "- Name:" not in envelope.user_prompt
    assert "- Fitness level: beginner" in envelope.user_prompt
    assert candidates[0].instructions not in envelope.user_prompt
    assert OUTPUT_SCHEMA in envelope.user_prompt


def test_level_two_caps_candidate_names():
    many = default_catalog().units
    assert len(many) > CONDENSED_CANDIDATE_LIMIT
    profile = parse_profile({})
    envelope = PromptComposer().compose(profile, "Strength", 45, profile.equipment, many, 2)

    assert many[CONDENSED_CANDIDATE_LIMIT - 1].name in envelope.user_prompt
    assert f", {many[CONDENSED_CANDIDATE_LIMIT].name}," not in envelope.user_prompt


def test_level_three_keeps_only_constraints(rich_profile, candidates):
    envelope = _compose(rich_profile, candidates, 3)

    assert envelope.detail_level == 3
    assert "beginner" in envelope.user_prompt
    assert "bad left knee" in envelope.user_prompt
    assert "dumbbells" in envelope.user_prompt
    assert OUTPUT_SCHEMA_COMPACT in envelope.user_prompt
    assert "CANDIDATE EXERCISES" not in envelope.user_prompt


@pytest.mark.parametrize("attempt", [4, 5, 9])
def test_level_four_is_one_sentence(rich_profile, candidates, attempt):
    envelope = _compose(rich_profile, candidates, attempt)

    assert envelope.detail_level == 4
    assert envelope.user_prompt == "Create a simple 30-minute Full Body workout."


def test_envelopes_shrink_with_each_attempt(rich_profile, candidates):
    sizes = [_compose(rich_profile, candidates, attempt).size for attempt in (1, 2, 3, 4)]

    assert sizes == sorted(sizes, reverse=True)
    assert len(set(sizes)) == 4


def test_no_candidates_still_composes(rich_profile):
    envelope = PromptComposer().compose(rich_profile, "HIIT", 20, rich_profile.equipment, [], 1)

    assert "none matched" in envelope.user_prompt
