"""Rendering of a UserProfile into labeled prompt lines.

Only fields that carry a value are rendered; nothing is ever printed as
"None" or left blank.
"""

from __future__ import annotations

from workout_engine.profiles.models import UserProfile

_WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def _line(label: str, value: object) -> str | None:
    if value is None:
        return None
    if isinstance(value, (list, tuple, set, frozenset)):
        items = sorted(str(v) for v in value) if isinstance(value, (set, frozenset)) else [str(v) for v in value]
        if not items:
            return None
        value = ", ".join(items)
    text = str(value).strip()
    if not text:
        return None
    return f"- {label}: {text}"


def profile_lines(profile: UserProfile, condensed: bool = False) -> list[str]:
    """Labeled lines for every present profile field.

    Args:
        profile: Profile to render
        condensed: Only training-relevant fields (used by later retry attempts)

    Returns:
        List of "- Label: value" lines
    """
    fields: list[tuple[str, object]] = [
        ("Fitness level", profile.fitness_level.value),
        ("Primary goal", profile.goal),
        ("Limitations/injuries", profile.limitations_text),
        ("Equipment available", profile.equipment),
        ("Session duration", f"{profile.session_duration} minutes"),
    ]
    if not condensed:
        fields = [
            ("Name", profile.name),
            ("Age", profile.age),
            ("Gender", profile.gender),
            *fields,
            ("All goals", profile.fitness_goals),
            ("Preferred training style", profile.training_type),
            ("Coaching style", profile.coaching_style),
            ("Training days per week", profile.training_days_per_week),
            ("Preferred training days", [_WEEKDAY_NAMES[d] for d in profile.preferred_training_days]),
            ("Preferred training time", profile.preferred_training_time),
            ("Enjoys (include more)", profile.enjoyed_training),
            ("Dislikes (include less)", profile.disliked_training),
            ("Weak areas to focus on", profile.weak_areas),
        ]
    return [line for label, value in fields if (line := _line(label, value)) is not None]


def render_profile_context(profile: UserProfile, condensed: bool = False) -> str:
    return "\n".join(["USER PROFILE:", *profile_lines(profile, condensed=condensed)])
