"""Initial schema: exercises, workouts, workout_sets, user_settings.

Revision ID: 001
Revises:
Create Date: 2026-10-16

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

set_label = postgresql.ENUM("WARMUP", "WORKING", "FAILURE", "DROP_SET", name="setlabel", create_type=False)


def upgrade() -> None:
    op.create_table(
        "exercises",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("exercise_type", sa.String(length=32), nullable=False, server_default="weight_reps"),
        sa.Column("equipment_type", sa.String(length=32), nullable=True),
        sa.Column("primary_muscle_groups", postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column("secondary_muscle_groups", postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column("default_distance_unit", sa.String(length=20), nullable=False, server_default="km"),
        sa.Column("is_custom", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_by", sa.String(length=255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_exercises_name"), "exercises", ["name"], unique=False)

    op.create_table(
        "workouts",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("template_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("ended_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_workouts_started_at", "workouts", ["started_at"], unique=False)
    op.create_index("ix_workouts_template_id", "workouts", ["template_id"], unique=False)

    set_label.create(op.get_bind(), checkfirst=True)
    op.create_table(
        "workout_sets",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("workout_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("exercise_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("set_order", sa.Integer(), nullable=True),
        sa.Column("weight", sa.Numeric(precision=8, scale=2), nullable=True),
        sa.Column("reps", sa.Integer(), nullable=True),
        sa.Column("partial_reps", sa.Integer(), nullable=True),
        sa.Column("duration_seconds", sa.Integer(), nullable=True),
        sa.Column("distance", sa.Numeric(precision=8, scale=2), nullable=True),
        sa.Column("assistance_weight", sa.Numeric(precision=8, scale=2), nullable=True),
        sa.Column("user_bodyweight", sa.Numeric(precision=6, scale=2), nullable=True),
        sa.Column("rpe", sa.Numeric(precision=3, scale=1), nullable=True),
        sa.Column("completed", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("rest_seconds_after", sa.Integer(), nullable=True),
        sa.Column("notes", sa.String(length=500), nullable=True),
        sa.Column("set_label", set_label, nullable=True),
        sa.Column("effective_weight", sa.Numeric(precision=8, scale=2), nullable=True),
        sa.Column("volume", sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column("pace", sa.Numeric(precision=8, scale=2), nullable=True),
        sa.Column("is_heaviest_weight", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_best_1rm", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_volume_record", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["exercise_id"], ["exercises.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["workout_id"], ["workouts.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_workout_sets_workout_id", "workout_sets", ["workout_id"], unique=False)
    op.create_index("ix_workout_sets_exercise_id", "workout_sets", ["exercise_id"], unique=False)

    # Singleton profile row, created lazily by the API
    op.create_table(
        "user_settings",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("current_bodyweight", sa.Float(), nullable=True),
        sa.Column("weight_unit", sa.String(length=10), nullable=True),
        sa.Column("distance_unit", sa.String(length=10), nullable=True),
        sa.Column("partial_reps_volume_weight", sa.String(length=10), nullable=True),
        sa.Column("barbell_increment", sa.Float(), nullable=True),
        sa.Column("dumbbell_increment", sa.Float(), nullable=True),
        sa.Column("machine_increment", sa.Float(), nullable=True),
        sa.Column("cable_increment", sa.Float(), nullable=True),
        sa.Column("kettlebell_increment", sa.Float(), nullable=True),
        sa.Column("plate_loaded_increment", sa.Float(), nullable=True),
        sa.Column("default_increment", sa.Float(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )


def downgrade() -> None:
    op.drop_table("user_settings")
    op.drop_index("ix_workout_sets_exercise_id", table_name="workout_sets")
    op.drop_index("ix_workout_sets_workout_id", table_name="workout_sets")
    op.drop_table("workout_sets")
    set_label.drop(op.get_bind(), checkfirst=True)
    op.drop_index("ix_workouts_template_id", table_name="workouts")
    op.drop_index("ix_workouts_started_at", table_name="workouts")
    op.drop_table("workouts")
    op.drop_index(op.f("ix_exercises_name"), table_name="exercises")
    op.drop_table("exercises")
