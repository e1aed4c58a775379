"""habits and repetitions

Revision ID: 0001
Revises:
Create Date: 2026-10-12 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "habits",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(128), nullable=False),
        sa.Column("freq_num", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("freq_den", sa.Integer(), nullable=False, server_default="1"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.CheckConstraint("freq_num > 0", name="ck_habit_freq_num_positive"),
        sa.CheckConstraint("freq_den > 0", name="ck_habit_freq_den_positive"),
    )

    op.create_table(
        "repetitions",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "habit_id",
            sa.Integer(),
            sa.ForeignKey("habits.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("timestamp", sa.BigInteger(), nullable=False),
    )
    op.create_index("ix_repetitions_habit_id", "repetitions", ["habit_id"])
    op.create_unique_constraint(
        "uq_repetition_habit_timestamp",
        "repetitions",
        ["habit_id", "timestamp"],
    )


def downgrade() -> None:
    op.drop_constraint("uq_repetition_habit_timestamp", "repetitions", type_="unique")
    op.drop_index("ix_repetitions_habit_id", table_name="repetitions")
    op.drop_table("repetitions")
    op.drop_table("habits")
