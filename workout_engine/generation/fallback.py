"""Synthetic placeholder workout used when every attempt has failed."""

from __future__ import annotations

from typing import Any

from workout_engine.generation.schemas import WorkoutRequest

PLACEHOLDER_TITLE_PREFIX = "Placeholder"
PLACEHOLDER_COACH_NOTES = (
    "This is a placeholder session because a personalized workout could not be generated right now. "
    "Regenerate this day to get your personalized plan."
)


def build_placeholder(request: WorkoutRequest) -> dict[str, Any]:
    """Raw payload for a gentle, low-skill session.

    Goes through PayloadValidator like any service response. Movements are
    chosen to pass every safety rule.
    """
    duration = max(10, min(request.duration, 20))
    return {
        "title": f"{PLACEHOLDER_TITLE_PREFIX}: Gentle Movement Session",
        "description": "A short, low-intensity session to keep you moving while your personalized workout is unavailable.",
        "estimatedDuration": duration,
        "difficulty": "beginner",
        "warmup": [
            {
                "name": "Gentle Marching in Place",
                "sets": 1,
                "reps": 60,
                "restTime": 15,
                "instructions": "Stand tall and march slowly, lifting each foot just off the floor. Hold a chair if needed.",
                "targetMuscles": ["legs"],
            },
        ],
        "exercises": [
            {
                "name": "Basic Side Steps",
                "sets": 2,
                "reps": 20,
                "restTime": 30,
                "instructions": "Step side to side at an easy pace with relaxed arms and steady breathing.",
                "modification": "Take smaller steps.",
                "targetMuscles": ["legs", "hips"],
            },
            {
                "name": "Wall Posture Hold",
                "sets": 2,
                "reps": 30,
                "restTime": 30,
                "instructions": "Stand with your back against a wall, head and shoulders relaxed, and breathe slowly for the count.",
                "targetMuscles": ["core"],
            },
        ],
        "cooldown": [
            {
                "name": "Seated Slow Breathing",
                "sets": 1,
                "reps": 60,
                "restTime": 0,
                "instructions": "Sit comfortably and breathe slowly in through the nose and out through the mouth.",
                "targetMuscles": [],
            },
        ],
        "coachNotes": PLACEHOLDER_COACH_NOTES,
        "progressionTips": "Regenerate this day once the service is available for a progression-aware plan.",
    }
