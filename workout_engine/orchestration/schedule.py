"""Weekly split planning.

Decides, for a profile and weekday, which workout type the day gets. Training
days take split categories in week order so the hardest sessions land early;
the remaining days rotate through lower-intensity recovery work.
"""

from dataclasses import dataclass

from workout_engine.profiles.models import UserProfile

DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

RECOVERY_MAX_MINUTES = 25

# Default weekday spread (0=Mon) when the user has no preferred days.
DEFAULT_TRAINING_SPREAD: dict[int, tuple[int, ...]] = {
    1: (0,),
    2: (0, 3),
    3: (0, 2, 4),
    4: (0, 1, 3, 4),
    5: (0, 1, 2, 3, 4),
    6: (0, 1, 2, 3, 4, 5),
    7: (0, 1, 2, 3, 4, 5, 6),
}

# (workout_type, focus) per training session, by sessions per week.
SPLIT_TABLE: dict[int, tuple[tuple[str, str | None], ...]] = {
    1: (("Full Body", None),),
    2: (("Full Body", None), ("Full Body", None)),
    3: (("Upper Body", None), ("Lower Body", None), ("Full Body", None)),
    4: (("Upper Body", None), ("Lower Body", None), ("Upper Body", None), ("Lower Body", None)),
    5: (
        ("Upper Body", "push"),
        ("Lower Body", "legs"),
        ("Upper Body", "pull"),
        ("Lower Body", "legs"),
        ("Full Body", None),
    ),
    6: (
        ("Upper Body", "push"),
        ("Upper Body", "pull"),
        ("Lower Body", "legs"),
        ("Upper Body", "push"),
        ("Upper Body", "pull"),
        ("Lower Body", "legs"),
    ),
    7: (
        ("Upper Body", "push"),
        ("Upper Body", "pull"),
        ("Lower Body", "legs"),
        ("Upper Body", "push"),
        ("Upper Body", "pull"),
        ("Lower Body", "legs"),
        ("HIIT", None),
    ),
}

RECOVERY_ROTATION = ("Active Recovery", "Yoga", "Mobility")


@dataclass(frozen=True)
class DayPlan:
    day_index: int
    workout_type: str
    focus: str | None
    intensity: str
    is_training_day: bool
    duration: int

    @property
    def day_name(self) -> str:
        return DAY_NAMES[self.day_index]


def training_days(profile: UserProfile) -> tuple[int, ...]:
    """Weekday indexes the user trains on, sorted."""
    preferred = sorted({d for d in profile.preferred_training_days if 0 <= d <= 6})
    if preferred:
        return tuple(preferred)
    return DEFAULT_TRAINING_SPREAD[profile.training_days_per_week]


def plan_day(profile: UserProfile, day_index: int) -> DayPlan:
    """Plan the workout for one weekday.

    Args:
        profile: Requesting user's profile
        day_index: Weekday, 0=Monday .. 6=Sunday

    Returns:
        DayPlan for that weekday

    Raises:
        ValueError: If day_index is outside 0..6
    """
    if not 0 <= day_index <= 6:
        raise ValueError(f"day_index must be between 0 and 6, got {day_index}")

    days = training_days(profile)
    if day_index in days:
        position = days.index(day_index)
        split = SPLIT_TABLE[len(days)]
        workout_type, focus = split[position % len(split)]
        if profile.training_type and len(days) <= 2:
            # one or two sessions a week follow the user's own preferred style
            workout_type = profile.training_type
        return DayPlan(
            day_index=day_index,
            workout_type=workout_type,
            focus=focus,
            intensity="moderate" if workout_type in RECOVERY_ROTATION else "high",
            is_training_day=True,
            duration=profile.session_duration,
        )

    rest_days = [d for d in range(7) if d not in days]
    workout_type = RECOVERY_ROTATION[rest_days.index(day_index) % len(RECOVERY_ROTATION)]
    return DayPlan(
        day_index=day_index,
        workout_type=workout_type,
        focus=None,
        intensity="low",
        is_training_day=False,
        duration=min(profile.session_duration, RECOVERY_MAX_MINUTES),
    )
