"""Workout and WorkoutSet schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.core.enums import PRType, SetLabel


class ExerciseRef(BaseModel):
    """Minimal exercise info for embedding in set responses."""

    id: UUID
    name: str
    exercise_type: str

    model_config = ConfigDict(from_attributes=True)


class WorkoutSetBase(BaseModel):
    exercise_id: UUID
    set_order: int = 0
    weight: float | None = Field(None, ge=0)
    reps: int | None = Field(None, ge=0)
    partial_reps: int | None = Field(None, ge=0)
    duration_seconds: int | None = Field(None, ge=0)
    distance: float | None = Field(None, ge=0)
    assistance_weight: float | None = Field(None, ge=0)
    rpe: float | None = Field(None, ge=1, le=10)
    completed: bool = True
    rest_seconds_after: int | None = Field(None, ge=0)
    notes: str | None = Field(None, max_length=500)
    set_label: SetLabel | None = None


class WorkoutSetCreate(WorkoutSetBase):
    # Overrides the stored profile bodyweight for this set
    user_bodyweight: float | None = Field(None, ge=0)


class WorkoutSetRead(WorkoutSetBase):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    workout_id: UUID
    user_bodyweight: float | None = None
    effective_weight: float | None = None
    volume: float | None = None
    pace: float | None = None
    is_heaviest_weight: bool = False
    is_best_1rm: bool = False
    is_volume_record: bool = False
    pr_types: list[PRType] = []
    exercise: ExerciseRef | None = None


class WorkoutCreate(BaseModel):
    template_id: UUID | None = None
    notes: str | None = None


class WorkoutRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    template_id: UUID | None = None
    started_at: datetime
    ended_at: datetime | None = None
    notes: str | None = None
