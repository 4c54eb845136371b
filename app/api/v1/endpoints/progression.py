"""Progressive overload endpoints - next-session suggestion, PR check, progress analysis."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.enums import ExerciseType, SuggestionType
from app.core.records import SetRecord
from app.db.session import get_db
from app.schemas.progression import (
    CurrentBestRead,
    OverloadSuggestionRead,
    PersonalRecordCheck,
    PersonalRecordRead,
    ProgressAnalysisRead,
    ProgressionSuggestionRead,
)
from app.services.pr_detection import detect_pr
from app.services.progressive_overload import (
    ProgressionTargets,
    analyze_progress,
    calculate_bodyweight_progression,
    calculate_progression,
    get_weight_increment,
    partial_rep_weight,
)
from app.services.set_history import (
    get_exercise,
    get_user_settings,
    increments_from_settings,
    load_set_history,
    record_for_comparison,
)

router = APIRouter()

# No adjustable load: bodyweight is fixed, and assistance is tuned by the user, not suggested
_REPS_ONLY_TYPES = (ExerciseType.BODYWEIGHT.value, ExerciseType.ASSISTED_BODYWEIGHT.value)


async def _exercise_or_404(db: AsyncSession, exercise_id: uuid.UUID):
    exercise = await get_exercise(db, exercise_id)
    if not exercise:
        raise HTTPException(status_code=404, detail="Exercise not found")
    return exercise


@router.get("/{exercise_id}/progression", response_model=ProgressionSuggestionRead)
async def exercise_progression(
    exercise_id: uuid.UUID,
    template_id: uuid.UUID | None = None,
    exclude_workout_id: uuid.UUID | None = None,
    min_reps: int | None = Query(None, ge=1),
    max_reps: int | None = Query(None, ge=1),
    weight_target: str | None = None,
    db: AsyncSession = Depends(get_db),
):
    """
    Suggested weight/reps for the next session of this exercise.
    template_id scopes history to one template; exclude_workout_id skips the
    workout in progress. Bodyweight exercises only ever get a rep target.
    """
    settings = get_settings()
    exercise = await _exercise_or_404(db, exercise_id)
    history = await load_set_history(
        db, exercise_id, template_id=template_id, exclude_workout_id=exclude_workout_id
    )
    if min_reps is None and max_reps is None:
        min_reps, max_reps = settings.default_min_reps, settings.default_max_reps
    targets = ProgressionTargets(min_reps=min_reps, max_reps=max_reps, weight_target=weight_target)

    if exercise.exercise_type in _REPS_ONLY_TYPES:
        suggestion = calculate_bodyweight_progression(history, targets)
    else:
        user_settings = await get_user_settings(db)
        increment = get_weight_increment(exercise.equipment_type, increments_from_settings(user_settings))
        suggestion = calculate_progression(
            history,
            targets,
            increment,
            (exercise.primary_muscle_groups or []) + (exercise.secondary_muscle_groups or []),
        )

    return ProgressionSuggestionRead(
        exercise_id=exercise.id,
        exercise_type=exercise.exercise_type,
        rationale=suggestion.rationale,
        is_progression=suggestion.is_progression,
        suggested_weight=suggestion.suggested_weight,
        suggested_reps=suggestion.suggested_reps,
        suggested_min_reps=suggestion.suggested_min_reps,
        suggested_max_reps=suggestion.suggested_max_reps,
        weight_increment=suggestion.weight_increment,
        previous_weight=suggestion.previous_weight,
        previous_reps=suggestion.previous_reps,
        muscle_groups=suggestion.muscle_groups,
        message=suggestion.message,
    )


@router.post("/{exercise_id}/personal-records/check", response_model=PersonalRecordRead)
async def personal_record_check(
    exercise_id: uuid.UUID,
    payload: PersonalRecordCheck,
    db: AsyncSession = Depends(get_db),
):
    """
    Would this set be a PR? Heaviest weight, best estimated 1RM and best
    single-set volume are checked independently; ties are not records.
    Bodyweight-relative exercises compare effective weights.
    """
    settings = get_settings()
    exercise = await _exercise_or_404(db, exercise_id)
    user_settings = await get_user_settings(db)
    bodyweight = user_settings.current_bodyweight
    record = SetRecord(
        weight=payload.weight,
        reps=payload.reps,
        assistance_weight=payload.assistance_weight,
        user_bodyweight=payload.user_bodyweight,
    )
    result = await detect_pr(
        db, exercise.id, exercise.exercise_type, record, bodyweight, settings.one_rm_formula
    )
    candidate = record_for_comparison(exercise.exercise_type, record, bodyweight)
    return PersonalRecordRead(
        exercise_id=exercise.id,
        candidate_weight=candidate.weight,
        candidate_reps=candidate.reps,
        is_heaviest_weight=result.is_heaviest_weight,
        is_best_1rm=result.is_best_1rm,
        is_volume_record=result.is_volume_record,
        pr_types=result.types(),
    )


@router.get("/{exercise_id}/progress-analysis", response_model=ProgressAnalysisRead)
async def progress_analysis(
    exercise_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """
    Trend (improving / plateauing / declining), weeks since progress, RPE trend,
    current best and ranked suggestions. Reps-only exercises get no weight suggestions.
    """
    settings = get_settings()
    exercise = await _exercise_or_404(db, exercise_id)
    user_settings = await get_user_settings(db)
    history = [
        record_for_comparison(exercise.exercise_type, r, user_settings.current_bodyweight)
        for r in await load_set_history(db, exercise_id)
    ]
    increment = get_weight_increment(exercise.equipment_type, increments_from_settings(user_settings))
    analysis = analyze_progress(
        history,
        settings.one_rm_formula,
        partial_rep_weight(user_settings.partial_reps_volume_weight),
        weight_increment=increment,
        rep_ceiling=settings.default_max_reps,
    )
    suggestions = analysis.suggestions
    if exercise.exercise_type in _REPS_ONLY_TYPES:
        suggestions = [s for s in suggestions if s.kind != SuggestionType.WEIGHT]
    best = analysis.current_best
    return ProgressAnalysisRead(
        exercise_id=exercise.id,
        exercise_name=exercise.name,
        current_best=CurrentBestRead(
            weight=best.weight,
            reps=best.reps,
            volume=best.volume,
            one_rep_max=best.one_rep_max,
        ),
        trend=analysis.trend,
        weeks_since_progress=analysis.weeks_since_progress,
        rpe_trend=analysis.rpe_trend,
        ready_for_progression=analysis.ready_for_progression,
        sessions_analyzed=analysis.sessions_analyzed,
        suggestions=[OverloadSuggestionRead.model_validate(s) for s in suggestions],
    )