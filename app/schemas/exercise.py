"""Exercise schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.core.enums import EquipmentType, ExerciseType


class ExerciseBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    exercise_type: ExerciseType = ExerciseType.WEIGHT_REPS
    equipment_type: EquipmentType | None = None
    primary_muscle_groups: list[str] = []
    secondary_muscle_groups: list[str] = []
    default_distance_unit: str = Field(default="km", max_length=20)


class ExerciseCreate(ExerciseBase):
    is_custom: bool = False
    created_by: str | None = Field(None, max_length=255)

    @model_validator(mode="after")
    def custom_needs_owner(self):
        if self.is_custom and not self.created_by:
            raise ValueError("created_by is required for custom exercises")
        return self


class ExerciseRead(BaseModel):
    """Read side keeps exercise_type as a string: legacy rows may hold unknown tags."""

    model_config = ConfigDict(from_attributes=True)
    id: UUID
    name: str
    description: str | None = None
    exercise_type: str
    equipment_type: str | None = None
    primary_muscle_groups: list[str] | None = None
    secondary_muscle_groups: list[str] | None = None
    default_distance_unit: str = "km"
    is_custom: bool = False
    created_by: str | None = None
    created_at: datetime | None = None
