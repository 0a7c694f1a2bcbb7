from workout_engine.catalog.catalog import ExerciseCatalog, default_catalog, styles_for_type
from workout_engine.catalog.exercises import ContentUnit
from workout_engine.catalog.safety import SafetyFilter

__all__ = ["ContentUnit", "ExerciseCatalog", "SafetyFilter", "default_catalog", "styles_for_type"]
