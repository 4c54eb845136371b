"""User settings schemas."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.enums import PartialRepsVolumeWeight


class UserSettingsUpdate(BaseModel):
    """Partial update. Only `current_bodyweight` may be cleared with null."""

    current_bodyweight: float | None = Field(None, ge=0)
    weight_unit: str | None = Field(None, pattern="^(kg|lbs)$")
    distance_unit: str | None = Field(None, pattern="^(km|miles)$")
    partial_reps_volume_weight: PartialRepsVolumeWeight | None = None
    barbell_increment: float | None = Field(None, gt=0)
    dumbbell_increment: float | None = Field(None, gt=0)
    machine_increment: float | None = Field(None, gt=0)
    cable_increment: float | None = Field(None, gt=0)
    kettlebell_increment: float | None = Field(None, gt=0)
    plate_loaded_increment: float | None = Field(None, gt=0)
    default_increment: float | None = Field(None, gt=0)

    @field_validator(
        "weight_unit",
        "distance_unit",
        "partial_reps_volume_weight",
        "barbell_increment",
        "dumbbell_increment",
        "machine_increment",
        "cable_increment",
        "kettlebell_increment",
        "plate_loaded_increment",
        "default_increment",
    )
    @classmethod
    def not_null(cls, v, info):
        # Runs only for fields present in the request; omitted fields keep their default
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v


class UserSettingsRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    current_bodyweight: float | None = None
    weight_unit: str
    distance_unit: str
    partial_reps_volume_weight: str
    barbell_increment: float
    dumbbell_increment: float
    machine_increment: float
    cable_increment: float
    kettlebell_increment: float
    plate_loaded_increment: float
    default_increment: float
