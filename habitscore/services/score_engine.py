"""
Score computation engine — exponential-decay habit strength.

Definition
----------
Every day the previous score decays by a multiplier that depends on the
habit's target frequency; a day with a check-in also adds the complement
of the multiplier times MAX_VALUE:

    multiplier = 0.5 ** (1 / (14 / freq - 1))
    score      = previous * multiplier + checked * (1 - multiplier) * MAX_VALUE

A daily habit (freq = 1) loses half of its score after 13 missed days.
Repeating the habit every day converges to MAX_VALUE.

The engine only reads: habits, repetitions. Persisting the result is the
ScoreStore's job (habitscore/services/score_store.py).

Public API
----------
Score                                            value object
CheckmarkScoreEngine(db).first_timestamp(habit)  -> int | None
CheckmarkScoreEngine(db).compute(habit, from_ts, to_ts, previous_value)
                                                 -> list[Score] (oldest first)
compute_score(frequency, previous, checked)      -> int
score_to_percent(value)                          -> float
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from habitscore.models.habit import Habit
from habitscore.models.repetition import Repetition
from habitscore.services.timeutils import DAY_LENGTH


# ---------------------------------------------------------------------------
# Value object
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Score:
    habit_id: int
    timestamp: int   # day-aligned instant, epoch ms
    value: int


# ---------------------------------------------------------------------------
# Formula
# ---------------------------------------------------------------------------

MAX_VALUE = 19_259_478

# Decay half-life base, in days, for a once-a-day habit (plus one).
_HALF_LIFE_DAYS = 14.0


def _multiplier(frequency: float) -> float:
    if frequency <= 0:
        raise ValueError(f"habit frequency must be positive, got {frequency}")
    exponent_base = _HALF_LIFE_DAYS / frequency - 1
    if exponent_base <= 0:
        return 0.0
    return 0.5 ** (1.0 / exponent_base)


def compute_score(frequency: float, previous: int, checked: bool) -> int:
    """Score for one day given the previous day's score."""
    multiplier = _multiplier(frequency)
    value = previous * multiplier
    if checked:
        value += (1 - multiplier) * MAX_VALUE
    return int(value)


def score_to_percent(value: int) -> float:
    return value / MAX_VALUE


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

class CheckmarkScoreEngine:
    """Computes scores from the repetitions table."""

    def __init__(self, db: Session):
        self._db = db

    def first_timestamp(self, habit: Habit) -> Optional[int]:
        """Oldest check-in of the habit; None when it was never checked."""
        return self._db.execute(
            select(func.min(Repetition.timestamp)).where(Repetition.habit_id == habit.id)
        ).scalar()

    def _checked_days(self, habit: Habit, from_ts: int, to_ts: int) -> set[int]:
        rows = self._db.execute(
            select(Repetition.timestamp).where(
                Repetition.habit_id == habit.id,
                Repetition.timestamp >= from_ts,
                Repetition.timestamp <= to_ts,
            )
        ).scalars()
        return set(rows)

    def compute(
        self,
        habit: Habit,
        from_ts: int,
        to_ts: int,
        previous_value: int,
    ) -> list[Score]:
        """
        One Score per day in [from_ts, to_ts], oldest first.
        previous_value is the score of the day before from_ts.
        """
        if from_ts > to_ts:
            return []

        frequency = habit.frequency
        checked = self._checked_days(habit, from_ts, to_ts)

        scores: list[Score] = []
        value = previous_value
        for timestamp in range(from_ts, to_ts + 1, DAY_LENGTH):
            value = compute_score(frequency, value, timestamp in checked)
            scores.append(Score(habit_id=habit.id, timestamp=timestamp, value=value))
        return scores
