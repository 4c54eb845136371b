"""PR detection: flag a set as PR if it beats the all-time bests for that exercise."""

from __future__ import annotations

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.enums import OneRepMaxFormula
from app.core.records import SetRecord
from app.services.progressive_overload import PersonalRecordResult, check_personal_records
from app.services.set_history import load_set_history, record_for_comparison


async def detect_pr(
    db: AsyncSession,
    exercise_id: uuid.UUID,
    exercise_type: str,
    record: SetRecord,
    profile_bodyweight: float | None,
    formula: OneRepMaxFormula | str = OneRepMaxFormula.BRZYCKI,
) -> PersonalRecordResult:
    """
    Compare this set's weight, estimated 1RM and volume to all-time bests.
    (History in the DB is the previous best since the new set isn't saved yet.)
    Incomplete sets are never records, and fields the exercise type does not
    use never count, on either side of the comparison.
    """
    if not record.completed:
        return PersonalRecordResult()
    history = [
        record_for_comparison(exercise_type, r, profile_bodyweight)
        for r in await load_set_history(db, exercise_id)
        if r.completed
    ]
    candidate = record_for_comparison(exercise_type, record, profile_bodyweight)
    return check_personal_records(history, candidate.weight, candidate.reps, formula)
