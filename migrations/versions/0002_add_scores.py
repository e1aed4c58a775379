"""add scores table

Revision ID: 0002
Revises: 0001
Create Date: 2026-10-12

Derived cache of per-day habit scores, filled lazily by ScoreStore.
Unique constraint (habit_id, timestamp): at most one score per habit per day.
Composite index serves the per-habit range scans ordered by timestamp.
"""
from alembic import op
import sqlalchemy as sa

revision = "0002"
down_revision = "0001"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "scores",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "habit_id",
            sa.Integer(),
            sa.ForeignKey("habits.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "timestamp",
            sa.BigInteger(),
            nullable=False,
            comment="Day-aligned instant, epoch milliseconds",
        ),
        sa.Column("score", sa.Integer(), nullable=False),
    )
    op.create_index("ix_score_habit_timestamp", "scores", ["habit_id", "timestamp"])
    op.create_unique_constraint(
        "uq_score_habit_timestamp",
        "scores",
        ["habit_id", "timestamp"],
    )


def downgrade() -> None:
    op.drop_constraint("uq_score_habit_timestamp", "scores", type_="unique")
    op.drop_index("ix_score_habit_timestamp", table_name="scores")
    op.drop_table("scores")
