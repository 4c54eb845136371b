"""Load set history and user settings from the DB as plain calculation inputs."""

from __future__ import annotations

import uuid
from dataclasses import replace

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.enums import BODYWEIGHT_TYPES
from app.core.records import SetRecord
from app.models.exercise import Exercise
from app.models.user_settings import UserSettings
from app.models.workout import Workout, WorkoutSet
from app.services.exercise_calculations import as_exercise_type, effective_weight, required_fields
from app.services.progressive_overload import WeightIncrements


def _num(value) -> float | None:
    return float(value) if value is not None else None


def set_record_from_row(row: WorkoutSet, started_at=None) -> SetRecord:
    """Numeric columns come back as Decimal; the calculations want floats."""
    return SetRecord(
        weight=_num(row.weight),
        reps=row.reps,
        duration_seconds=row.duration_seconds,
        distance=_num(row.distance),
        assistance_weight=_num(row.assistance_weight),
        user_bodyweight=_num(row.user_bodyweight),
        completed=row.completed,
        partial_reps=row.partial_reps,
        rpe=_num(row.rpe),
        performed_at=started_at,
        session_id=row.workout_id,
    )


def with_effective_weight(exercise_type: str, record: SetRecord, fallback_bodyweight: float | None) -> SetRecord:
    """
    For bodyweight-relative exercises, replace `weight` with the effective load
    so records compare across bodyweight changes. Other types pass through.
    """
    et = as_exercise_type(exercise_type)
    if et not in BODYWEIGHT_TYPES:
        return record
    bodyweight = record.user_bodyweight if record.user_bodyweight is not None else fallback_bodyweight
    if bodyweight is None:
        return record
    load = effective_weight(et, bodyweight, record.weight or 0, record.assistance_weight or 0)
    return replace(record, weight=load, user_bodyweight=bodyweight)


def record_for_comparison(
    exercise_type: str, record: SetRecord, fallback_bodyweight: float | None
) -> SetRecord:
    """
    Keep only the weight, reps and assistance this exercise type uses, then
    apply `with_effective_weight`. A duration set with a stray weight never
    competes on weight.
    """
    req = required_fields(exercise_type)
    masked = replace(
        record,
        weight=record.weight if req.weight else None,
        reps=record.reps if req.reps else None,
        assistance_weight=record.assistance_weight if req.assistance else None,
    )
    return with_effective_weight(exercise_type, masked, fallback_bodyweight)


async def get_exercise(db: AsyncSession, exercise_id: uuid.UUID) -> Exercise | None:
    result = await db.execute(select(Exercise).where(Exercise.id == exercise_id))
    return result.scalar_one_or_none()


async def load_set_history(
    db: AsyncSession,
    exercise_id: uuid.UUID,
    template_id: uuid.UUID | None = None,
    exclude_workout_id: uuid.UUID | None = None,
) -> list[SetRecord]:
    """
    All sets for an exercise, oldest first, as SetRecords.
    template_id limits history to workouts started from that template.
    """
    stmt = (
        select(WorkoutSet, Workout.started_at)
        .join(Workout, Workout.id == WorkoutSet.workout_id)
        .where(WorkoutSet.exercise_id == exercise_id)
    )
    if template_id is not None:
        stmt = stmt.where(Workout.template_id == template_id)
    if exclude_workout_id is not None:
        stmt = stmt.where(Workout.id != exclude_workout_id)
    stmt = stmt.order_by(Workout.started_at, WorkoutSet.set_order, WorkoutSet.created_at)
    result = await db.execute(stmt)
    return [set_record_from_row(s, started_at) for s, started_at in result.all()]


async def get_user_settings(db: AsyncSession) -> UserSettings:
    """The singleton settings row, created with defaults on first use."""
    result = await db.execute(select(UserSettings).limit(1))
    settings = result.scalar_one_or_none()
    if settings is None:
        settings = UserSettings()
        db.add(settings)
        await db.flush()
        await db.refresh(settings)
    return settings


def increments_from_settings(settings: UserSettings) -> WeightIncrements:
    return WeightIncrements(
        barbell=settings.barbell_increment,
        dumbbell=settings.dumbbell_increment,
        machine=settings.machine_increment,
        cable=settings.cable_increment,
        kettlebell=settings.kettlebell_increment,
        plate_loaded=settings.plate_loaded_increment,
        default_increment=settings.default_increment,
    )
