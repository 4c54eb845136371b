"""Set calculations: required fields, derived numbers, duration/pace formatting (pure logic, no DB except increments)."""

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.records import SetRecord
from app.db.session import get_db
from app.schemas.calculations import (
    DerivedSetRead,
    DurationRead,
    PaceRead,
    RequiredFieldsRead,
    SetInput,
    ValidationRead,
    WeightIncrementRead,
)
from app.services.exercise_calculations import (
    derive_set,
    format_duration,
    format_pace,
    is_known_exercise_type,
    parse_duration,
    required_fields,
    unit_suggestions,
)
from app.services.progressive_overload import get_weight_increment
from app.services.set_history import get_user_settings, increments_from_settings

logger = logging.getLogger(__name__)

router = APIRouter()


def _warn_unknown(exercise_type: str) -> bool:
    known = is_known_exercise_type(exercise_type)
    if not known:
        logger.warning("Unknown exercise type %r; calculations fall back to zero", exercise_type)
    return known


@router.get("/required-fields/{exercise_type}", response_model=RequiredFieldsRead)
async def get_required_fields(exercise_type: str):
    """
    Which inputs a set of this exercise type needs, plus suggested units.
    Unknown types return all-false flags rather than an error.
    """
    known = _warn_unknown(exercise_type)
    return RequiredFieldsRead(
        exercise_type=exercise_type,
        known_type=known,
        unit_suggestions=unit_suggestions(exercise_type),
        **required_fields(exercise_type).as_dict(),
    )


@router.post("/derive", response_model=DerivedSetRead)
async def derive(payload: SetInput):
    """
    Effective weight, volume and pace for one set, with advisory validation.
    Invalid input is reported in `validation`, never rejected.
    """
    _warn_unknown(payload.exercise_type)
    record = SetRecord(
        weight=payload.weight,
        reps=payload.reps,
        duration_seconds=payload.duration_seconds,
        distance=payload.distance,
        assistance_weight=payload.assistance_weight,
        user_bodyweight=payload.user_bodyweight,
    )
    derived = derive_set(payload.exercise_type, record)
    req = required_fields(payload.exercise_type)
    return DerivedSetRead(
        exercise_type=payload.exercise_type,
        effective_weight=derived.effective_weight,
        volume=derived.volume,
        pace=derived.pace,
        formatted_pace=format_pace(derived.pace) if derived.pace else None,
        formatted_duration=(
            format_duration(payload.duration_seconds)
            if req.duration and payload.duration_seconds is not None
            else None
        ),
        validation=ValidationRead(
            is_valid=derived.validation.is_valid,
            errors=derived.validation.errors,
        ),
    )


@router.get("/duration/format", response_model=DurationRead)
async def duration_format(seconds: int = Query(..., ge=0)):
    return DurationRead(seconds=seconds, formatted=format_duration(seconds))


@router.get("/duration/parse", response_model=DurationRead)
async def duration_parse(value: str):
    """Parse "M:SS". Malformed input gives 0 seconds."""
    seconds = parse_duration(value)
    return DurationRead(seconds=seconds, formatted=format_duration(seconds))


@router.get("/pace/format", response_model=PaceRead)
async def pace_format(
    pace: float = Query(..., ge=0),
    unit: str = Query("miles", pattern="^(miles|km)$"),
):
    return PaceRead(pace=pace, unit=unit, formatted=format_pace(pace, unit))


@router.get("/weight-increment", response_model=WeightIncrementRead)
async def weight_increment(
    equipment_type: str | None = None,
    db: AsyncSession = Depends(get_db),
):
    """Increment for an equipment type from the user's settings (default when unmapped)."""
    settings = await get_user_settings(db)
    increment = get_weight_increment(equipment_type, increments_from_settings(settings))
    return WeightIncrementRead(equipment_type=equipment_type, increment=increment)
