"""Schemas for the stateless calculation endpoints."""

from pydantic import BaseModel, Field


class RequiredFieldsRead(BaseModel):
    exercise_type: str
    known_type: bool
    weight: bool = False
    reps: bool = False
    duration: bool = False
    distance: bool = False
    bodyweight: bool = False
    assistance: bool = False
    unit_suggestions: dict[str, list[str]] = {}


class SetInput(BaseModel):
    """Raw set fields. `exercise_type` is a plain string so unknown tags degrade instead of 422."""

    exercise_type: str
    weight: float | None = Field(None, ge=0)
    reps: int | None = Field(None, ge=0)
    duration_seconds: int | None = Field(None, ge=0)
    distance: float | None = Field(None, ge=0)
    assistance_weight: float | None = Field(None, ge=0)
    user_bodyweight: float | None = Field(None, ge=0)


class ValidationRead(BaseModel):
    is_valid: bool
    errors: list[str] = []


class DerivedSetRead(BaseModel):
    exercise_type: str
    effective_weight: float
    volume: float
    pace: float | None = None
    formatted_pace: str | None = None
    formatted_duration: str | None = None
    validation: ValidationRead


class DurationRead(BaseModel):
    seconds: int
    formatted: str


class PaceRead(BaseModel):
    pace: float
    unit: str
    formatted: str


class WeightIncrementRead(BaseModel):
    equipment_type: str | None = None
    increment: float
