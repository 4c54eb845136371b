"""Workout and WorkoutSet models."""

from __future__ import annotations

from datetime import datetime, timezone
from sqlalchemy import Boolean, DateTime, Enum, ForeignKey, Index, Integer, Numeric, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship
import uuid

from app.core.enums import SetLabel
from app.db.base import Base


class Workout(Base):
    """A single workout session, optionally started from a template."""

    __tablename__ = "workouts"
    __table_args__ = (
        Index("ix_workouts_started_at", "started_at"),
        Index("ix_workouts_template_id", "template_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    # Templates live outside this service; only the id is kept for scoping history
    template_id: Mapped[uuid.UUID | None] = mapped_column(UUID(as_uuid=True), nullable=True)
    started_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    ended_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    sets: Mapped[list["WorkoutSet"]] = relationship(
        "WorkoutSet", back_populates="workout", cascade="all, delete-orphan"
    )


class WorkoutSet(Base):
    """One set. Raw fields as entered; effective_weight, volume and pace derived at write time.
    PR flags are computed against history before the set is saved."""

    __tablename__ = "workout_sets"
    __table_args__ = (
        Index("ix_workout_sets_workout_id", "workout_id"),
        Index("ix_workout_sets_exercise_id", "exercise_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    workout_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), ForeignKey("workouts.id", ondelete="CASCADE"), nullable=False)
    exercise_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), ForeignKey("exercises.id", ondelete="CASCADE"), nullable=False)
    set_order: Mapped[int] = mapped_column(Integer, default=0)

    # Raw measurements (which ones matter depends on Exercise.exercise_type)
    weight: Mapped[float | None] = mapped_column(Numeric(8, 2), nullable=True)
    reps: Mapped[int | None] = mapped_column(Integer, nullable=True)
    partial_reps: Mapped[int | None] = mapped_column(Integer, nullable=True)
    duration_seconds: Mapped[int | None] = mapped_column(Integer, nullable=True)
    distance: Mapped[float | None] = mapped_column(Numeric(8, 2), nullable=True)
    assistance_weight: Mapped[float | None] = mapped_column(Numeric(8, 2), nullable=True)
    user_bodyweight: Mapped[float | None] = mapped_column(Numeric(6, 2), nullable=True)  # snapshot at log time
    rpe: Mapped[float | None] = mapped_column(Numeric(3, 1), nullable=True)  # 1-10, half steps
    completed: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    rest_seconds_after: Mapped[int | None] = mapped_column(Integer, nullable=True)
    notes: Mapped[str | None] = mapped_column(String(500), nullable=True)
    set_label: Mapped[SetLabel | None] = mapped_column(Enum(SetLabel), nullable=True)

    # Derived
    effective_weight: Mapped[float | None] = mapped_column(Numeric(8, 2), nullable=True)
    volume: Mapped[float | None] = mapped_column(Numeric(12, 2), nullable=True)
    pace: Mapped[float | None] = mapped_column(Numeric(8, 2), nullable=True)  # minutes per distance unit

    is_heaviest_weight: Mapped[bool] = mapped_column(default=False, nullable=False)
    is_best_1rm: Mapped[bool] = mapped_column(default=False, nullable=False)
    is_volume_record: Mapped[bool] = mapped_column(default=False, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    workout: Mapped["Workout"] = relationship("Workout", back_populates="sets")
    exercise: Mapped["Exercise"] = relationship("Exercise", back_populates="workout_sets")
