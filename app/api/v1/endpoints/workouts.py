"""Workout endpoints: start a workout, log sets with derived fields and PR flags."""

from __future__ import annotations

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.config import get_settings
from app.core.records import SetRecord
from app.db.session import get_db
from app.models.workout import Workout, WorkoutSet
from app.schemas.workout import (
    WorkoutCreate,
    WorkoutRead,
    WorkoutSetCreate,
    WorkoutSetRead,
)
from app.services.exercise_calculations import derive_set
from app.services.pr_detection import detect_pr
from app.services.progressive_overload import PersonalRecordResult
from app.services.set_history import get_exercise, get_user_settings

logger = logging.getLogger(__name__)

router = APIRouter()


def _set_read(set_: WorkoutSet) -> WorkoutSetRead:
    prs = PersonalRecordResult(
        is_heaviest_weight=set_.is_heaviest_weight,
        is_best_1rm=set_.is_best_1rm,
        is_volume_record=set_.is_volume_record,
    )
    return WorkoutSetRead.model_validate(set_).model_copy(update={"pr_types": prs.types()})


@router.post("", response_model=WorkoutRead, status_code=201)
async def create_workout(
    payload: WorkoutCreate,
    db: AsyncSession = Depends(get_db),
):
    """Start a new workout (optionally from a template)."""
    workout = Workout(**payload.model_dump())
    db.add(workout)
    await db.flush()
    await db.refresh(workout)
    return workout


@router.get("/{workout_id}/sets", response_model=list[WorkoutSetRead])
async def list_workout_sets(
    workout_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Sets of a workout in logging order (with exercise info)."""
    result = await db.execute(
        select(WorkoutSet)
        .where(WorkoutSet.workout_id == workout_id)
        .options(selectinload(WorkoutSet.exercise))
        .order_by(WorkoutSet.set_order, WorkoutSet.created_at)
    )
    return [_set_read(s) for s in result.scalars().all()]


@router.post("/{workout_id}/sets", response_model=WorkoutSetRead, status_code=201)
async def add_set_to_workout(
    workout_id: uuid.UUID,
    payload: WorkoutSetCreate,
    db: AsyncSession = Depends(get_db),
):
    """
    Log a set. effective_weight, volume and pace are derived from the exercise
    type; PR flags are computed against history before saving. A completed set
    that fails validation is rejected with the validation messages.
    """
    result = await db.execute(select(Workout).where(Workout.id == workout_id))
    workout = result.scalar_one_or_none()
    if not workout:
        raise HTTPException(status_code=404, detail="Workout not found")
    exercise = await get_exercise(db, payload.exercise_id)
    if not exercise:
        raise HTTPException(status_code=404, detail="Exercise not found")

    user_settings = await get_user_settings(db)
    bodyweight = (
        payload.user_bodyweight
        if payload.user_bodyweight is not None
        else user_settings.current_bodyweight
    )
    record = SetRecord(
        weight=payload.weight,
        reps=payload.reps,
        duration_seconds=payload.duration_seconds,
        distance=payload.distance,
        assistance_weight=payload.assistance_weight,
        user_bodyweight=bodyweight,
        completed=payload.completed,
        partial_reps=payload.partial_reps,
        rpe=payload.rpe,
    )
    derived = derive_set(exercise.exercise_type, record)
    if payload.completed and not derived.validation.is_valid:
        raise HTTPException(status_code=422, detail=derived.validation.errors)

    prs = await detect_pr(
        db,
        exercise.id,
        exercise.exercise_type,
        record,
        bodyweight,
        get_settings().one_rm_formula,
    )
    if prs.is_record:
        logger.info(
            "PR on exercise %s: %s",
            exercise.id,
            ", ".join(t.value for t in prs.types()),
        )

    data = payload.model_dump(exclude={"user_bodyweight"})
    set_ = WorkoutSet(
        workout_id=workout_id,
        user_bodyweight=bodyweight,
        effective_weight=derived.effective_weight,
        volume=derived.volume,
        pace=derived.pace,
        is_heaviest_weight=prs.is_heaviest_weight,
        is_best_1rm=prs.is_best_1rm,
        is_volume_record=prs.is_volume_record,
        **data,
    )
    db.add(set_)
    await db.flush()

    # Reload with exercise for frontend display
    result = await db.execute(
        select(WorkoutSet)
        .where(WorkoutSet.id == set_.id)
        .options(selectinload(WorkoutSet.exercise))
    )
    return _set_read(result.scalar_one())
