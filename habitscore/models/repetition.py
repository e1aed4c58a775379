"""
Repetition — one raw check-in of a habit on a day.

timestamp is a day-aligned instant (see habitscore/services/timeutils.py).
Adding or removing a row must invalidate the habit's scores from that day on.
"""
from sqlalchemy import BigInteger, Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from habitscore.db.base import Base


class Repetition(Base):
    __tablename__ = "repetitions"
    __table_args__ = (
        UniqueConstraint("habit_id", "timestamp", name="uq_repetition_habit_timestamp"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    habit_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("habits.id", ondelete="CASCADE"), nullable=False, index=True
    )
    timestamp: Mapped[int] = mapped_column(BigInteger, nullable=False)
