"""Exercise catalogue endpoints."""

import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.models.exercise import Exercise
from app.schemas.exercise import ExerciseCreate, ExerciseRead

router = APIRouter()


@router.get("", response_model=list[ExerciseRead])
async def list_exercises(
    db: AsyncSession = Depends(get_db),
    custom: bool | None = None,
    skip: int = 0,
    limit: int = 100,
):
    """List exercises; `custom` filters to user-created (true) or catalogue (false) exercises."""
    stmt = select(Exercise)
    if custom is not None:
        stmt = stmt.where(Exercise.is_custom.is_(custom))
    result = await db.execute(stmt.order_by(Exercise.name).offset(skip).limit(limit))
    return list(result.scalars().all())


@router.post("", response_model=ExerciseRead, status_code=201)
async def create_exercise(
    payload: ExerciseCreate,
    db: AsyncSession = Depends(get_db),
):
    """Create a catalogue exercise, or a custom one (requires created_by)."""
    exercise = Exercise(**payload.model_dump(mode="json"))
    db.add(exercise)
    await db.flush()
    await db.refresh(exercise)
    return exercise


@router.get("/{exercise_id}", response_model=ExerciseRead)
async def get_exercise(
    exercise_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    result = await db.execute(select(Exercise).where(Exercise.id == exercise_id))
    exercise = result.scalar_one_or_none()
    if not exercise:
        raise HTTPException(status_code=404, detail="Exercise not found")
    return exercise
