from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from workout_engine.profiles.models import FitnessLevel, UserProfile


class GeneratedUnit(BaseModel):
    name: str
    sets: int = Field(ge=1)
    reps: int = Field(ge=1)
    rest_seconds: int = Field(ge=0)
    instructions: str = Field(min_length=1)
    modification: str | None = None
    target_muscles: list[str] = Field(default_factory=list)
    difficulty: FitnessLevel = FitnessLevel.INTERMEDIATE


class GeneratedPayload(BaseModel):
    """Validated workout for one day. Only PayloadValidator constructs these."""

    title: str
    description: str
    workout_type: str
    estimated_duration: int = Field(ge=1)
    difficulty: FitnessLevel
    warmup: list[GeneratedUnit] = Field(default_factory=list)
    main: list[GeneratedUnit] = Field(default_factory=list)
    cooldown: list[GeneratedUnit] = Field(default_factory=list)
    coach_notes: str
    progression_tips: str
    estimated_calories: int = Field(ge=0)
    is_placeholder: bool = False
    attempts_used: int = 0

    def all_units(self) -> list[GeneratedUnit]:
        return [*self.warmup, *self.main, *self.cooldown]


@dataclass(frozen=True)
class WorkoutRequest:
    """Parameters for generating one workout."""

    profile: UserProfile
    workout_type: str
    duration: int
    equipment: frozenset[str]
    focus: str | None = None
    day_name: str | None = None


@dataclass(frozen=True)
class RequestEnvelope:
    """Bounded prompt bundle submitted to the generation service."""

    system_prompt: str
    user_prompt: str
    attempt: int
    detail_level: int

    @property
    def size(self) -> int:
        return len(self.system_prompt) + len(self.user_prompt)


class RawExercise(BaseModel):
    """Loose wire shape of one generated exercise. Every field is optional."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str | None = None
    sets: Any = None
    reps: Any = None
    rest_time: Any = Field(default=None, alias="restTime")
    instructions: str | None = None
    modification: str | None = None
    target_muscles: Any = Field(default=None, alias="targetMuscles")
    difficulty: str | None = None
    category: str | None = None


class RawWorkoutResponse(BaseModel):
    """Structured output type requested from the generation service.

    Deliberately permissive: the service is asked for this shape, but
    PayloadValidator is what makes the result trustworthy.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    title: str | None = None
    description: str | None = None
    estimated_duration: Any = Field(default=None, alias="estimatedDuration")
    difficulty: str | None = None
    warmup: list[RawExercise] | None = None
    exercises: list[RawExercise] | None = None
    cooldown: list[RawExercise] | None = None
    coach_notes: str | None = Field(default=None, alias="coachNotes")
    progression_tips: str | None = Field(default=None, alias="progressionTips")
