"""
Score store — lazily computed, persisted score series of one habit.

Reads that need a complete answer (get_by_interval, get_value,
get_today_value, to_list) first fill the missing days through the score
engine and persist them, then read back from the `scores` table, which is
the single source of truth. Reads that only ask what is already known
(get_computed_by_timestamp, get_newest_computed, get_oldest_computed) never
trigger computation.

Computed rows always form one contiguous run of days per habit: gaps are
filled before the oldest row (starting from 0, nothing was checked earlier)
or after the newest row (continuing from its value).

Writes
------
add(scores)                     one transaction, all rows or none
invalidate_newer_than(ts)       delete rows >= ts, drop today cache, notify

Not thread-safe: one store per habit per Session, callers serialize writes.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from sqlalchemy import delete, insert, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from habitscore.core.errors import NotFoundError, NotPersistedError, StorageError
from habitscore.models.habit import Habit
from habitscore.models.score import ScoreRecord
from habitscore.services.observable import Observable
from habitscore.services.score_engine import CheckmarkScoreEngine, Score
from habitscore.services.timeutils import DAY_LENGTH, is_day_aligned, start_of_today

logger = logging.getLogger(__name__)


@dataclass
class TodayValueCache:
    """Today's score, valid while the day boundary has not moved."""
    value: int
    today: int

    def expired(self, today: int) -> bool:
        return self.today != today


class ScoreStore:
    def __init__(
        self,
        db: Session,
        habit: Habit,
        engine: Optional[CheckmarkScoreEngine] = None,
        today: Optional[Callable[[], int]] = None,
    ):
        self._db = db
        self._habit = habit
        self._engine = engine or CheckmarkScoreEngine(db)
        self._today = today or start_of_today
        self._habit_record: Optional[Habit] = None
        self._cache: Optional[TodayValueCache] = None
        self.observable = Observable()

    # ── Habit resolution ──────────────────────────────────────────────────

    def _check(self) -> Habit:
        """Return the persisted habit row, loading it on first use."""
        habit_id = self._habit.id
        if habit_id is None:
            raise NotPersistedError()
        if self._habit_record is not None:
            return self._habit_record
        record = self._db.get(Habit, habit_id)
        if record is None:
            raise NotFoundError(habit_id)
        self._habit_record = record
        return record

    def get_habit(self) -> Habit:
        return self._check()

    # ── Writes ────────────────────────────────────────────────────────────

    def add(self, scores: Sequence[Score]) -> None:
        """
        Insert every score as a new row in a single transaction.

        An existing (habit, timestamp) row is never overwritten: the unique
        constraint fails the whole batch and StorageError is raised after
        rollback.
        """
        habit = self._check()
        if not scores:
            return
        rows = [
            {"habit_id": habit.id, "timestamp": s.timestamp, "score": s.value}
            for s in scores
        ]
        try:
            self._db.execute(insert(ScoreRecord), rows)
            self._db.commit()
        except SQLAlchemyError as exc:
            self._db.rollback()
            logger.exception("add: failed to persist %d scores for habit %s", len(rows), habit.id)
            raise StorageError(f"Could not persist {len(rows)} scores.", habit_id=habit.id) from exc

    def invalidate_newer_than(self, timestamp: int) -> None:
        """Delete every score at or after timestamp. Idempotent."""
        habit = self._check()
        self._cache = None
        try:
            result = self._db.execute(
                delete(ScoreRecord)
                .where(ScoreRecord.habit_id == habit.id, ScoreRecord.timestamp >= timestamp)
                .execution_options(synchronize_session=False)
            )
            self._db.commit()
        except SQLAlchemyError as exc:
            self._db.rollback()
            logger.exception("invalidate: delete failed for habit %s", habit.id)
            raise StorageError("Could not invalidate scores.", habit_id=habit.id) from exc

        logger.info(
            "invalidated %d scores for habit %s from %d", result.rowcount, habit.id, timestamp
        )
        self.observable.notify_listeners()

    # ── Computation ───────────────────────────────────────────────────────

    def _force_recompute(self, from_ts: int, to_ts: int, previous_value: int) -> None:
        if from_ts > to_ts:
            return
        habit = self._check()
        logger.debug("computing scores for habit %s in [%d, %d]", habit.id, from_ts, to_ts)
        self.add(self._engine.compute(habit, from_ts, to_ts, previous_value))

    def _ensure_computed(self, from_ts: int, to_ts: int) -> None:
        """Fill the days of [from_ts, to_ts] that have no row yet."""
        if not (is_day_aligned(from_ts) and is_day_aligned(to_ts)):
            raise ValueError(f"timestamps must be day-aligned: {from_ts}, {to_ts}")
        habit = self._check()

        newest = self.get_newest_computed()
        oldest = self.get_oldest_computed()

        if newest is None or oldest is None:
            # Start at the first check-in when it is older than from_ts.
            first = self._engine.first_timestamp(habit)
            start = from_ts if first is None else min(from_ts, first)
            self._force_recompute(start, to_ts, 0)
            return

        self._force_recompute(from_ts, oldest.timestamp - DAY_LENGTH, 0)
        self._force_recompute(newest.timestamp + DAY_LENGTH, to_ts, newest.value)

    def _compute_all(self) -> None:
        first = self._engine.first_timestamp(self._check())
        if first is None:
            return
        self._ensure_computed(first, self._today())

    # ── Reads ─────────────────────────────────────────────────────────────

    def _query(self, *criteria, descending: bool = True, limit: Optional[int] = None) -> list[Score]:
        habit = self._check()
        order = ScoreRecord.timestamp.desc() if descending else ScoreRecord.timestamp.asc()
        stmt = (
            select(ScoreRecord.timestamp, ScoreRecord.score)
            .where(ScoreRecord.habit_id == habit.id, *criteria)
            .order_by(order)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        return [
            Score(habit_id=habit.id, timestamp=row.timestamp, value=row.score)
            for row in self._db.execute(stmt)
        ]

    def _query_single(self, *criteria, descending: bool = True) -> Optional[Score]:
        scores = self._query(*criteria, descending=descending, limit=1)
        return scores[0] if scores else None

    def get_by_interval(self, from_ts: int, to_ts: int) -> list[Score]:
        """Scores in [from_ts, to_ts], newest first, computing missing days."""
        self._check()
        if from_ts > to_ts:
            return []
        self._ensure_computed(from_ts, to_ts)
        return self._query(
            ScoreRecord.timestamp >= from_ts,
            ScoreRecord.timestamp <= to_ts,
        )

    def get_computed_by_timestamp(self, timestamp: int) -> Optional[Score]:
        return self._query_single(ScoreRecord.timestamp == timestamp)

    def get_newest_computed(self) -> Optional[Score]:
        return self._query_single()

    def get_oldest_computed(self) -> Optional[Score]:
        return self._query_single(descending=False)

    def get_value(self, timestamp: int) -> int:
        """Score value at timestamp, computing it when missing."""
        self._ensure_computed(timestamp, timestamp)
        score = self.get_computed_by_timestamp(timestamp)
        return score.value if score is not None else 0

    def get_today_value(self) -> int:
        today = self._today()
        if self._cache is None or self._cache.expired(today):
            self._cache = TodayValueCache(value=self.get_value(today), today=today)
        return self._cache.value

    def to_list(self) -> list[Score]:
        """Whole history up to today, newest first."""
        self._compute_all()
        return self._query()
