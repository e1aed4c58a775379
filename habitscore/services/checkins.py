"""
Check-in service: toggles raw repetitions and keeps the score series honest.

Any change to the repetitions of a habit on day D makes every score at or
after D stale, so the toggle is always followed by
ScoreStore.invalidate_newer_than(D).
"""
from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from habitscore.models.habit import Habit
from habitscore.models.repetition import Repetition
from habitscore.services.score_store import ScoreStore
from habitscore.services.timeutils import is_day_aligned

logger = logging.getLogger(__name__)


def toggle_checkin(
    db: Session,
    habit: Habit,
    timestamp: int,
    store: Optional[ScoreStore] = None,
) -> bool:
    """
    Add the check-in at timestamp if missing, remove it otherwise.
    Returns True when the day is checked after the call.
    """
    if not is_day_aligned(timestamp):
        raise ValueError(f"check-in timestamp must be day-aligned: {timestamp}")

    store = store or ScoreStore(db, habit)
    habit_id = store.get_habit().id

    existing = db.execute(
        select(Repetition).where(
            Repetition.habit_id == habit_id,
            Repetition.timestamp == timestamp,
        )
    ).scalar_one_or_none()

    if existing is None:
        db.add(Repetition(habit_id=habit_id, timestamp=timestamp))
        checked = True
    else:
        db.delete(existing)
        checked = False
    db.commit()

    logger.info("habit %s: check-in at %d %s", habit_id, timestamp, "added" if checked else "removed")
    store.invalidate_newer_than(timestamp)
    return checked
