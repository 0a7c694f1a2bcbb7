from workout_engine.profiles.models import FitnessLevel, UserProfile
from workout_engine.profiles.parsing import parse_profile

__all__ = ["FitnessLevel", "UserProfile", "parse_profile"]
