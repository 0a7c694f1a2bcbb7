"""Coercion of raw generation output into GeneratedPayload.

validate() is total: whatever the service returned (dict, pydantic model,
JSON text, list, None) it produces a schema-valid payload. Missing or
out-of-range fields are silently corrected, never reported as errors.
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from typing import Any

from loguru import logger
from pydantic import BaseModel

from workout_engine.generation.schemas import GeneratedPayload, GeneratedUnit
from workout_engine.profiles.models import DEFAULT_SESSION_MINUTES, FitnessLevel, UserProfile

DEFAULT_UNIT_NAME = "Exercise"
DEFAULT_INSTRUCTIONS = "Move with control through a comfortable range of motion, keeping good posture and steady breathing."
DEFAULT_COACH_NOTES = "Focus on quality movement today. Stop any exercise that causes sharp pain."
DEFAULT_PROGRESSION_TIPS = "When every set feels comfortable, add one or two reps per set next session."
CALORIES_PER_MINUTE = 8

DEFAULT_SETS = 3
DEFAULT_REPS = 10
DEFAULT_REST_SECONDS = 60
MAX_SETS = 10
MAX_REPS = 100
MAX_REST_SECONDS = 600
MIN_DURATION = 5
MAX_DURATION = 180

_WARMUP_KEYS = ("warmup", "warmUp", "warm_up", "warmupExercises")
_MAIN_KEYS = ("exercises", "main", "mainExercises", "main_exercises", "workout")
_COOLDOWN_KEYS = ("cooldown", "coolDown", "cool_down", "cooldownExercises")

_JSON_OBJECT_RE = re.compile(r"\{[\s\S]*\}")
_NUMBER_RE = re.compile(r"-?\d+(?:\.\d+)?")


def _to_mapping(raw: Any) -> dict[str, Any]:
    """Normalize any raw response into a dict, or {} if nothing usable."""
    if isinstance(raw, BaseModel):
        return raw.model_dump(by_alias=True, exclude_none=True)
    if isinstance(raw, Mapping):
        return dict(raw)
    if isinstance(raw, (str, bytes)):
        text = raw.decode("utf-8", "replace") if isinstance(raw, bytes) else raw
        match = _JSON_OBJECT_RE.search(text)
        if not match:
            return {}
        try:
            decoded = json.loads(match.group())
        except ValueError:
            return {}
        return decoded if isinstance(decoded, dict) else {}
    if isinstance(raw, list):
        # a bare list of exercises
        return {"exercises": raw}
    return {}


def _first(data: Mapping[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return None


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


def _bounded(value: Any, default: int, floor: int, ceiling: int) -> int:
    number = _as_int(value)
    if number is None:
        number = default
    return max(floor, min(ceiling, number))


def _as_text(value: Any) -> str | None:
    if value is None or isinstance(value, (Mapping, list, tuple, set, bool)):
        return None
    text = str(value).strip()
    return text or None


def _as_level(value: Any, default: FitnessLevel) -> FitnessLevel:
    text = _as_text(value)
    if text:
        try:
            return FitnessLevel(text.lower())
        except ValueError:
            pass
    return default


def _split_flat_list(units: list[Any]) -> tuple[list[Any], list[Any], list[Any]]:
    """Route a single exercises list by each item's category field."""
    warmup: list[Any] = []
    main: list[Any] = []
    cooldown: list[Any] = []
    for item in units:
        category = str(item.get("category", "")) if isinstance(item, Mapping) else ""
        category = re.sub(r"[\s_-]", "", category.lower())
        if category == "warmup":
            warmup.append(item)
        elif category == "cooldown":
            cooldown.append(item)
        else:
            main.append(item)
    return warmup, main, cooldown


def _sections(data: Mapping[str, Any]) -> tuple[list[Any], list[Any], list[Any]]:
    warmup = _first(data, _WARMUP_KEYS)
    main = _first(data, _MAIN_KEYS)
    cooldown = _first(data, _COOLDOWN_KEYS)
    warmup = warmup if isinstance(warmup, list) else []
    main = main if isinstance(main, list) else []
    cooldown = cooldown if isinstance(cooldown, list) else []

    if main and not warmup and not cooldown:
        return _split_flat_list(main)
    return warmup, main, cooldown


def has_usable_content(raw: Any) -> bool:
    """True when the raw response carries a non-empty main exercise list."""
    _, main, _ = _sections(_to_mapping(raw))
    return len(main) > 0


class PayloadValidator:
    """Coerces raw generation output into a strict GeneratedPayload."""

    def validate_unit(self, raw: Any, difficulty: FitnessLevel) -> GeneratedUnit:
        if isinstance(raw, BaseModel):
            raw = raw.model_dump(by_alias=True, exclude_none=True)
        if isinstance(raw, str):
            raw = {"name": raw}
        if not isinstance(raw, Mapping):
            raw = {}

        muscles = _first(raw, ("targetMuscles", "target_muscles", "muscleGroups"))
        return GeneratedUnit(
            name=_as_text(_first(raw, ("name", "exercise", "title"))) or DEFAULT_UNIT_NAME,
            sets=_bounded(raw.get("sets"), DEFAULT_SETS, 1, MAX_SETS),
            reps=_bounded(raw.get("reps"), DEFAULT_REPS, 1, MAX_REPS),
            rest_seconds=_bounded(
                _first(raw, ("restTime", "rest_time", "rest_seconds", "rest")), DEFAULT_REST_SECONDS, 0, MAX_REST_SECONDS
            ),
            instructions=_as_text(_first(raw, ("instructions", "description", "cues"))) or DEFAULT_INSTRUCTIONS,
            modification=_as_text(_first(raw, ("modification", "modifications"))),
            target_muscles=[t for t in (_as_text(m) for m in muscles) if t] if isinstance(muscles, list) else [],
            difficulty=_as_level(raw.get("difficulty"), difficulty),
        )

    def validate(
        self,
        raw: Any,
        *,
        workout_type: str | None = None,
        profile: UserProfile | None = None,
    ) -> GeneratedPayload:
        """Coerce any raw response into a GeneratedPayload. Never raises.

        Args:
            raw: Raw service output of any shape
            workout_type: Requested workout type, used for defaults
            profile: Requesting profile, used for defaults

        Returns:
            Schema-valid GeneratedPayload
        """
        data = _to_mapping(raw)
        if not data and raw is not None and not isinstance(raw, Mapping):
            logger.warning(f"Generation output had no decodable structure ({type(raw).__name__}); using defaults")

        default_level = profile.fitness_level if profile else FitnessLevel.INTERMEDIATE
        default_duration = profile.session_duration if profile else DEFAULT_SESSION_MINUTES
        kind = workout_type or _as_text(data.get("type")) or "Full Body"

        difficulty = _as_level(data.get("difficulty"), default_level)
        duration = _bounded(
            _first(data, ("estimatedDuration", "estimated_duration", "duration")),
            default_duration,
            MIN_DURATION,
            MAX_DURATION,
        )
        warmup, main, cooldown = _sections(data)

        return GeneratedPayload(
            title=_as_text(data.get("title")) or f"{kind} Workout",
            description=_as_text(_first(data, ("description", "overview")))
            or f"A {duration}-minute {kind.lower()} session for {difficulty.value} level.",
            workout_type=kind,
            estimated_duration=duration,
            difficulty=difficulty,
            warmup=[self.validate_unit(u, difficulty) for u in warmup],
            main=[self.validate_unit(u, difficulty) for u in main],
            cooldown=[self.validate_unit(u, difficulty) for u in cooldown],
            coach_notes=_as_text(_first(data, ("coachNotes", "coach_notes"))) or DEFAULT_COACH_NOTES,
            progression_tips=_as_text(_first(data, ("progressionTips", "progression_tips", "progressionNote")))
            or DEFAULT_PROGRESSION_TIPS,
            estimated_calories=duration * CALORIES_PER_MINUTE,
        )
