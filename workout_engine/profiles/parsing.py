"""Defensive parsing of loosely-structured profile payloads.

Profile data arrives from several collaborators (onboarding forms, stored
JSON columns, API bodies) with camelCase or snake_case keys, list fields
encoded as JSON strings or comma separated text, and numbers embedded in
strings like "45 min". parse_profile() is the only place that deals with
that. It never raises: every malformed field degrades to its default.
"""

from __future__ import annotations

import json
import re
from collections.abc import Iterable, Mapping
from typing import Any

from loguru import logger

from workout_engine.profiles.models import (
    DEFAULT_EQUIPMENT,
    DEFAULT_SESSION_MINUTES,
    DEFAULT_TRAINING_DAYS,
    FitnessLevel,
    UserProfile,
)

_NUMBER_RE = re.compile(r"-?\d+(?:\.\d+)?")

_WEEKDAYS = {
    "mon": 0,
    "tue": 1,
    "wed": 2,
    "thu": 3,
    "fri": 4,
    "sat": 5,
    "sun": 6,
}

# Whole-word aliases. Level names are checked before colloquial synonyms.
_LEVEL_ALIASES = {
    "beginner": FitnessLevel.BEGINNER,
    "intermediate": FitnessLevel.INTERMEDIATE,
    "advanced": FitnessLevel.ADVANCED,
    "novice": FitnessLevel.BEGINNER,
    "newbie": FitnessLevel.BEGINNER,
    "new": FitnessLevel.BEGINNER,
    "moderate": FitnessLevel.INTERMEDIATE,
    "expert": FitnessLevel.ADVANCED,
    "athlete": FitnessLevel.ADVANCED,
}
_WORD_RE = re.compile(r"[a-z]+")

# canonical field -> accepted source keys, first match wins
_KEYS: dict[str, tuple[str, ...]] = {
    "user_id": ("user_id", "userId", "id"),
    "name": ("name",),
    "age": ("age",),
    "gender": ("gender",),
    "fitness_level": ("fitness_level", "fitnessLevel", "experience", "difficulty"),
    "goal": ("goal", "primary_goal", "primaryGoal"),
    "fitness_goals": ("fitness_goals", "fitnessGoals", "goals"),
    "training_type": ("training_type", "trainingType"),
    "coaching_style": ("coaching_style", "coachingStyle", "coaching_tone", "coachingTone"),
    "limitations": ("limitations", "injuries"),
    "limitation_areas": ("limitation_areas", "limitationAreas", "injury_areas", "injuryAreas"),
    "equipment": ("equipment", "equipment_access", "equipmentAccess"),
    "session_duration": (
        "session_duration",
        "sessionDuration",
        "session_duration_preference",
        "sessionDurationPreference",
        "duration",
    ),
    "training_days_per_week": ("training_days_per_week", "trainingDaysPerWeek", "training_days", "trainingDays"),
    "preferred_training_days": ("preferred_training_days", "preferredTrainingDays", "selected_days", "selectedDays"),
    "preferred_training_time": ("preferred_training_time", "preferredTrainingTime"),
    "enjoyed_training": ("enjoyed_training", "enjoyedTraining"),
    "disliked_training": ("disliked_training", "dislikedTraining"),
    "weak_areas": ("weak_areas", "weakAreas"),
}


def _lookup(raw: Mapping[str, Any], field: str) -> Any:
    for key in _KEYS[field]:
        if key in raw and raw[key] is not None:
            return raw[key]
    # nested questionnaire answers
    questionnaire = raw.get("advanced_questionnaire") or raw.get("advancedQuestionnaire")
    if isinstance(questionnaire, Mapping):
        for key in _KEYS[field]:
            if key in questionnaire and questionnaire[key] is not None:
                return questionnaire[key]
    return None


def _as_text(value: Any) -> str | None:
    if value is None or isinstance(value, (dict, list, tuple, set)):
        return None
    text = str(value).strip()
    return text or None


def _as_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value == value and abs(value) != float("inf") else None
    if isinstance(value, str):
        match = _NUMBER_RE.search(value)
        if match:
            try:
                return int(float(match.group()))
            except (OverflowError, ValueError):
                return None
    return None


def _as_list(value: Any) -> list[str]:
    """Decode a list-ish value: real list, JSON list string or comma separated text."""
    if value is None:
        return []
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return []
        if stripped.startswith("["):
            try:
                decoded = json.loads(stripped)
            except ValueError:
                stripped = stripped.strip("[]")
            else:
                return _as_list(decoded) if isinstance(decoded, list) else []
        return [part.strip().strip("\"'") for part in stripped.split(",") if part.strip().strip("\"'")]
    if isinstance(value, Iterable) and not isinstance(value, Mapping):
        items: list[str] = []
        for item in value:
            text = _as_text(item)
            if text:
                items.append(text)
        return items
    return []


def _clamp(value: int | None, low: int, high: int, default: int) -> int:
    if value is None:
        return default
    return max(low, min(high, value))


def _parse_level(value: Any) -> FitnessLevel:
    text = _as_text(value)
    if text:
        words = set(_WORD_RE.findall(text.lower()))
        for alias, level in _LEVEL_ALIASES.items():
            if alias in words:
                return level
    return FitnessLevel.INTERMEDIATE


def _parse_equipment(value: Any) -> frozenset[str]:
    tags = {_normalize_tag(tag) for tag in _as_list(value)}
    tags.discard("")
    tags.discard("none")
    if not tags:
        return DEFAULT_EQUIPMENT
    return frozenset(tags | DEFAULT_EQUIPMENT)


def _normalize_tag(tag: str) -> str:
    return re.sub(r"[\s_]+", "-", tag.strip().lower())


def _parse_weekdays(value: Any) -> tuple[int, ...]:
    if isinstance(value, (list, tuple)) and all(isinstance(v, int) and not isinstance(v, bool) for v in value):
        return tuple(sorted({v for v in value if 0 <= v <= 6}))
    days: set[int] = set()
    for item in _as_list(value):
        key = item.lower()[:3]
        if key in _WEEKDAYS:
            days.add(_WEEKDAYS[key])
        else:
            number = _as_int(item)
            if number is not None and 0 <= number <= 6:
                days.add(number)
    return tuple(sorted(days))


def _parse_limitations(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return ", ".join(_as_list(value))
    text = _as_text(value)
    if text is None or text.lower() in {"none", "n/a", "no"}:
        return ""
    return text


def parse_profile(raw: Mapping[str, Any] | None) -> UserProfile:
    """Build a UserProfile from a loosely-typed mapping.

    Args:
        raw: Profile mapping from any collaborator; None is treated as empty

    Returns:
        UserProfile with documented defaults for every missing or malformed field
    """
    if not isinstance(raw, Mapping):
        logger.warning(f"Profile payload is not a mapping ({type(raw).__name__}); using defaults")
        raw = {}

    age = _as_int(_lookup(raw, "age"))
    profile = UserProfile(
        user_id=_as_text(_lookup(raw, "user_id")) or "anonymous",
        name=_as_text(_lookup(raw, "name")),
        age=age if age is not None and 0 < age < 120 else None,
        gender=_as_text(_lookup(raw, "gender")),
        fitness_level=_parse_level(_lookup(raw, "fitness_level")),
        goal=_as_text(_lookup(raw, "goal")),
        fitness_goals=tuple(_as_list(_lookup(raw, "fitness_goals"))),
        training_type=_as_text(_lookup(raw, "training_type")),
        coaching_style=_as_text(_lookup(raw, "coaching_style")),
        limitations=_parse_limitations(_lookup(raw, "limitations")),
        limitation_areas=tuple(_normalize_tag(a) for a in _as_list(_lookup(raw, "limitation_areas"))),
        equipment=_parse_equipment(_lookup(raw, "equipment")),
        session_duration=_clamp(_as_int(_lookup(raw, "session_duration")), 10, 180, DEFAULT_SESSION_MINUTES),
        training_days_per_week=_clamp(_as_int(_lookup(raw, "training_days_per_week")), 1, 7, DEFAULT_TRAINING_DAYS),
        preferred_training_days=_parse_weekdays(_lookup(raw, "preferred_training_days")),
        preferred_training_time=_as_text(_lookup(raw, "preferred_training_time")),
        enjoyed_training=_as_text(_lookup(raw, "enjoyed_training")),
        disliked_training=_as_text(_lookup(raw, "disliked_training")),
        weak_areas=_as_text(_lookup(raw, "weak_areas")),
    )
    logger.debug(
        "Parsed user profile",
        user_id=profile.user_id,
        fitness_level=profile.fitness_level.value,
        equipment=sorted(profile.equipment),
        session_duration=profile.session_duration,
    )
    return profile
