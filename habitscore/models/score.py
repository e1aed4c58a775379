"""
ScoreRecord — persisted habit score for one day.

Derived cache: the repetitions table is the source of truth, and rows here
are only written by ScoreStore.add and only removed by
ScoreStore.invalidate_newer_than. Never updated in place.

One row per (habit_id, timestamp).
"""
from sqlalchemy import BigInteger, Integer, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from habitscore.db.base import Base


class ScoreRecord(Base):
    __tablename__ = "scores"
    __table_args__ = (
        UniqueConstraint("habit_id", "timestamp", name="uq_score_habit_timestamp"),
        Index("ix_score_habit_timestamp", "habit_id", "timestamp"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    habit_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("habits.id", ondelete="CASCADE"), nullable=False
    )
    timestamp: Mapped[int] = mapped_column(
        BigInteger, nullable=False, comment="Day-aligned instant, epoch milliseconds"
    )
    score: Mapped[int] = mapped_column(Integer, nullable=False)
