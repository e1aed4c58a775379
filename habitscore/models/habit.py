from datetime import datetime
from sqlalchemy import CheckConstraint, Integer, String, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column

from habitscore.db.base import Base


class Habit(Base):
    """A tracked habit. Target frequency is freq_num check-ins every freq_den days."""

    __tablename__ = "habits"
    __table_args__ = (
        CheckConstraint("freq_num > 0", name="ck_habit_freq_num_positive"),
        CheckConstraint("freq_den > 0", name="ck_habit_freq_den_positive"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    freq_num: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    freq_den: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    @property
    def frequency(self) -> float:
        if self.freq_den is None or self.freq_den <= 0:
            raise ValueError(f"habit frequency denominator must be positive, got {self.freq_den}")
        return self.freq_num / self.freq_den
