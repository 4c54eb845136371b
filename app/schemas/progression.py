"""Progression, personal record and progress-analysis schemas."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.core.enums import (
    PRType,
    ProgressionRationale,
    ProgressTrend,
    RPETrend,
    SuggestionConfidence,
    SuggestionType,
)


class ProgressionSuggestionRead(BaseModel):
    exercise_id: UUID
    exercise_type: str
    rationale: ProgressionRationale
    is_progression: bool
    suggested_weight: float | None = None
    suggested_reps: int | None = None
    suggested_min_reps: int | None = None
    suggested_max_reps: int | None = None
    weight_increment: float | None = None
    previous_weight: float | None = None
    previous_reps: int | None = None
    muscle_groups: list[str] = []
    message: str


class PersonalRecordCheck(BaseModel):
    weight: float | None = Field(None, ge=0)
    reps: int | None = Field(None, ge=0)
    assistance_weight: float | None = Field(None, ge=0)
    user_bodyweight: float | None = Field(None, ge=0)


class PersonalRecordRead(BaseModel):
    exercise_id: UUID
    candidate_weight: float | None = None
    candidate_reps: int | None = None
    is_heaviest_weight: bool
    is_best_1rm: bool
    is_volume_record: bool
    pr_types: list[PRType] = []


class CurrentBestRead(BaseModel):
    weight: float
    reps: int
    volume: float
    one_rep_max: float


class OverloadSuggestionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    kind: SuggestionType
    current_value: float
    suggested_value: float
    increase: float
    percentage: float
    reasoning: str
    confidence: SuggestionConfidence
    priority: int


class ProgressAnalysisRead(BaseModel):
    exercise_id: UUID
    exercise_name: str
    current_best: CurrentBestRead
    trend: ProgressTrend
    weeks_since_progress: int
    rpe_trend: RPETrend
    ready_for_progression: bool
    sessions_analyzed: int
    suggestions: list[OverloadSuggestionRead] = []
