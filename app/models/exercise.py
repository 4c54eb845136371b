"""Exercise model - system and user-created exercises with measurement type and equipment."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, String, Text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.enums import ExerciseType
from app.db.base import Base


class Exercise(Base):
    """Exercise definition. `is_custom` separates user-created exercises from the shared catalogue."""

    __tablename__ = "exercises"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Plain string column: rows with an unrecognised type still load (and calculate to 0)
    exercise_type: Mapped[str] = mapped_column(
        String(32), nullable=False, default=ExerciseType.WEIGHT_REPS.value
    )
    equipment_type: Mapped[str | None] = mapped_column(String(32), nullable=True)  # barbell, dumbbell, ...
    primary_muscle_groups: Mapped[list | None] = mapped_column(JSONB, nullable=True)
    secondary_muscle_groups: Mapped[list | None] = mapped_column(JSONB, nullable=True)
    default_distance_unit: Mapped[str] = mapped_column(String(20), default="km")

    is_custom: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_by: Mapped[str | None] = mapped_column(String(255), nullable=True)  # set when is_custom
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    workout_sets: Mapped[list["WorkoutSet"]] = relationship(
        "WorkoutSet", back_populates="exercise", cascade="all, delete-orphan"
    )
