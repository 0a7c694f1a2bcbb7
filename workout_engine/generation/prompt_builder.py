"""Deterministic prompt composition for workout generation.

compose() renders the same inputs to the same envelope every time. The
attempt number selects how much detail goes in: the first attempt carries
the full profile, every candidate exercise and the full output contract;
each later attempt sends less, down to a one-sentence request.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from workout_engine.catalog.exercises import ContentUnit
from workout_engine.generation.profile_context import render_profile_context
from workout_engine.generation.schemas import RequestEnvelope
from workout_engine.profiles.models import UserProfile

MAX_DETAIL_LEVEL = 4
CONDENSED_CANDIDATE_LIMIT = 20

SYSTEM_PROMPT = """You are an expert personal trainer who designs safe, personalized workouts.

You MUST output a single JSON object and nothing else.
You MUST only use exercises from the provided candidate list when one is given.
You MUST respect every listed limitation or injury.
"""

SYSTEM_PROMPT_COMPACT = "You are a personal trainer. Respond only with a JSON workout object."

WORKOUT_CATEGORIES = """WORKOUT CATEGORIES (build the session from these blocks only):
1. Warm-up: dynamic mobility and light cardio
2. Push: chest, shoulders, triceps
3. Pull: back, biceps, rear shoulders
4. Legs: quads, hamstrings, glutes, calves
5. Core: trunk stability and anti-rotation
6. Conditioning/Recovery: intervals for intensive days, mobility and stretching for recovery days

STRUCTURE:
- 2-3 warm-up exercises
- 4-6 main exercises
- 2 cool-down exercises (static stretches)"""

OUTPUT_SCHEMA = """OUTPUT FORMAT:
{
  "title": "Workout name",
  "description": "One or two sentences",
  "estimatedDuration": 45,
  "difficulty": "beginner|intermediate|advanced",
  "warmup": [{"name": "...", "sets": 1, "reps": 10, "restTime": 0, "instructions": "...", "targetMuscles": ["..."]}],
  "exercises": [{"name": "...", "sets": 3, "reps": 10, "restTime": 60, "instructions": "...", "modification": "...", "targetMuscles": ["..."], "difficulty": "..."}],
  "cooldown": [{"name": "...", "sets": 1, "reps": 1, "restTime": 0, "instructions": "...", "targetMuscles": ["..."]}],
  "coachNotes": "...",
  "progressionTips": "..."
}
Rules:
- sets and reps are whole numbers of at least 1 (use reps for seconds on timed holds)
- restTime is whole seconds, 0 or more
- every exercise has non-empty instructions"""

OUTPUT_SCHEMA_COMPACT = (
    'Return JSON with "title", "estimatedDuration", "difficulty", "warmup", "exercises", "cooldown", '
    '"coachNotes"; each exercise has "name", "sets", "reps", "restTime", "instructions".'
)


def _range(values: tuple[int, int] | None) -> str | None:
    if values is None:
        return None
    low, high = values
    return str(low) if low == high else f"{low}-{high}"


def render_candidate(index: int, unit: ContentUnit) -> str:
    parts = [f"{index}. {unit.name} ({unit.difficulty.value})", f"   Instructions: {unit.instructions}"]
    parts.append(f"   Targets: {', '.join(sorted(unit.target_areas))}")
    parts.append(f"   Equipment: {', '.join(sorted(unit.equipment))}")
    sets = _range(unit.set_range)
    reps = _range(unit.rep_range)
    suggestion = []
    if sets:
        suggestion.append(f"{sets} sets")
    if reps:
        suggestion.append(f"{reps} reps")
    if unit.duration_seconds:
        suggestion.append(f"or {unit.duration_seconds}s holds")
    if unit.rest_seconds is not None:
        suggestion.append(f"{unit.rest_seconds}s rest")
    if suggestion:
        parts.append(f"   Suggested: {', '.join(suggestion)}")
    if unit.modification:
        parts.append(f"   Easier option: {unit.modification}")
    return "\n".join(parts)


def render_candidates(candidates: Sequence[ContentUnit], limit: int | None = None, names_only: bool = False) -> str:
    selected = candidates if limit is None else candidates[:limit]
    if not selected:
        return "CANDIDATE EXERCISES: none matched; choose gentle, low-impact bodyweight movements."
    if names_only:
        return "CANDIDATE EXERCISES: " + ", ".join(unit.name for unit in selected)
    body = "\n".join(render_candidate(i, unit) for i, unit in enumerate(selected, start=1))
    return f"CANDIDATE EXERCISES ({len(selected)}):\n{body}"


def _request_line(requested_type: str, duration: int, day_name: str | None, focus: str | None) -> str:
    line = f"Create a {duration}-minute {requested_type} workout"
    if day_name:
        line += f" for {day_name}"
    if focus:
        line += f" with a {focus} focus"
    return line + "."


class PromptComposer:
    """Renders profile + request + candidates into a RequestEnvelope."""

    def compose(
        self,
        profile: UserProfile,
        requested_type: str,
        duration: int,
        equipment: Iterable[str],
        candidates: Sequence[ContentUnit],
        attempt: int,
        focus: str | None = None,
        day_name: str | None = None,
    ) -> RequestEnvelope:
        """Compose the envelope for one attempt.

        Args:
            profile: Requesting user's profile
            requested_type: Workout type (e.g. "HIIT")
            duration: Target session length in minutes
            equipment: Equipment the session may use
            candidates: Safety-filtered candidate exercises, catalog order
            attempt: Attempt number; 1 is the richest, 4 and above the sparsest
            focus: Optional focus hint (e.g. "push", "recovery")
            day_name: Optional weekday name for the session

        Returns:
            RequestEnvelope for the generation service
        """
        level = max(1, min(MAX_DETAIL_LEVEL, attempt))
        equipment_text = ", ".join(sorted(set(equipment))) or "bodyweight"
        request = _request_line(requested_type, duration, day_name, focus)

        if level == 1:
            sections = [
                request,
                render_profile_context(profile),
                f"REQUEST:\n- Workout type: {requested_type}\n- Duration: {duration} minutes\n- Equipment: {equipment_text}"
                + (f"\n- Focus: {focus}" if focus else ""),
                render_candidates(candidates),
                WORKOUT_CATEGORIES,
                OUTPUT_SCHEMA,
            ]
            return RequestEnvelope(SYSTEM_PROMPT, "\n\n".join(sections), attempt, level)

        if level == 2:
            sections = [
                request,
                render_profile_context(profile, condensed=True),
                render_candidates(candidates, limit=CONDENSED_CANDIDATE_LIMIT, names_only=True),
                OUTPUT_SCHEMA,
            ]
            return RequestEnvelope(SYSTEM_PROMPT, "\n\n".join(sections), attempt, level)

        if level == 3:
            constraints = [f"Fitness level: {profile.fitness_level.value}.", f"Equipment: {equipment_text}."]
            if profile.limitations_text:
                constraints.append(f"Avoid anything that aggravates: {profile.limitations_text}.")
            sections = [request, " ".join(constraints), OUTPUT_SCHEMA_COMPACT]
            return RequestEnvelope(SYSTEM_PROMPT_COMPACT, "\n\n".join(sections), attempt, level)

        return RequestEnvelope(
            SYSTEM_PROMPT_COMPACT,
            f"Create a simple {duration}-minute {requested_type} workout.",
            attempt,
            level,
        )
