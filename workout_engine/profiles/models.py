from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_EQUIPMENT = frozenset({"bodyweight"})
DEFAULT_SESSION_MINUTES = 45
DEFAULT_TRAINING_DAYS = 3


class FitnessLevel(StrEnum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"

    @property
    def rank(self) -> int:
        return _LEVEL_RANK[self]


_LEVEL_RANK = {
    FitnessLevel.BEGINNER: 0,
    FitnessLevel.INTERMEDIATE: 1,
    FitnessLevel.ADVANCED: 2,
}


class UserProfile(BaseModel):
    """Immutable per-request snapshot of the user's training profile.

    Built through parse_profile(); every optional field already carries its
    documented default, so consumers never re-check for missing values.
    """

    model_config = ConfigDict(frozen=True)

    user_id: str
    name: str | None = None
    age: int | None = None
    gender: str | None = None

    fitness_level: FitnessLevel = FitnessLevel.INTERMEDIATE
    goal: str | None = None
    fitness_goals: tuple[str, ...] = ()
    training_type: str | None = None
    coaching_style: str | None = None

    limitations: str = ""
    limitation_areas: tuple[str, ...] = ()
    equipment: frozenset[str] = DEFAULT_EQUIPMENT

    session_duration: int = Field(default=DEFAULT_SESSION_MINUTES, ge=10, le=180)
    training_days_per_week: int = Field(default=DEFAULT_TRAINING_DAYS, ge=1, le=7)
    preferred_training_days: tuple[int, ...] = ()  # 0=Mon ... 6=Sun
    preferred_training_time: str | None = None

    enjoyed_training: str | None = None
    disliked_training: str | None = None
    weak_areas: str | None = None

    @property
    def limitations_text(self) -> str:
        """Free-text limitations plus structured area tags, for keyword rules."""
        parts = [self.limitations, *self.limitation_areas]
        return " ".join(p for p in parts if p).strip()
