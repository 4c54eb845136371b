"""ORM models - import all so Base.metadata is complete for migrations."""

from app.models.exercise import Exercise
from app.models.user_settings import UserSettings
from app.models.workout import Workout, WorkoutSet

__all__ = [
    "Exercise",
    "UserSettings",
    "Workout",
    "WorkoutSet",
]
