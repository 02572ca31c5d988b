"""create WorkoutSessions and WorkoutExercises tables

Revision ID: 3f9c1a7d2b10
Revises:
Create Date: 2026-10-16 10:12:40.218311

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f9c1a7d2b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "WorkoutSessions",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("userId", sa.String(length=255), nullable=False),
        sa.Column("title", sa.Text(), nullable=True),
        sa.Column("workoutDate", sa.DateTime(timezone=True), nullable=False),
        sa.Column("startTime", sa.DateTime(timezone=True), nullable=True),
        sa.Column("endTime", sa.DateTime(timezone=True), nullable=True),
        sa.Column("workoutType", sa.Text(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("totalDurationMinutes", sa.Integer(), nullable=True),
        sa.Column("totalCalories", sa.Integer(), nullable=True),
        sa.Column("createdAt", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updatedAt", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_WorkoutSessions_userId", "WorkoutSessions", ["userId"])

    op.create_table(
        "WorkoutExercises",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column(
            "sessionId",
            sa.String(length=36),
            sa.ForeignKey("WorkoutSessions.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("userId", sa.String(length=255), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("category", sa.Text(), nullable=True),
        sa.Column("sets", sa.Integer(), nullable=True),
        sa.Column("repsPerSet", sa.Integer(), nullable=True),
        sa.Column("weightPerRep", sa.Float(), nullable=True),
        sa.Column("distanceKm", sa.Float(), nullable=True),
        sa.Column("durationMinutes", sa.Float(), nullable=True),
        sa.Column("caloriesBurned", sa.Float(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("createdAt", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_WorkoutExercises_sessionId", "WorkoutExercises", ["sessionId"])
    op.create_index("ix_WorkoutExercises_userId", "WorkoutExercises", ["userId"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_WorkoutExercises_userId", table_name="WorkoutExercises")
    op.drop_index("ix_WorkoutExercises_sessionId", table_name="WorkoutExercises")
    op.drop_table("WorkoutExercises")

    op.drop_index("ix_WorkoutSessions_userId", table_name="WorkoutSessions")
    op.drop_table("WorkoutSessions")
