"""
Scores router.

GET    /habits/{habit_id}/scores           — history or day range, newest first
GET    /habits/{habit_id}/scores/today     — today's score (cached per day)
GET    /habits/{habit_id}/scores/{day}     — already-computed score, no computation
DELETE /habits/{habit_id}/scores           — invalidate scores from a day on
"""
from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from habitscore.core.errors import NotFoundError, ScoreNotComputedError
from habitscore.db.base import get_db
from habitscore.models.habit import Habit
from habitscore.schemas.common import ErrorResponse
from habitscore.schemas.score import (
    InvalidateResponse,
    ScoreListResponse,
    ScoreResponse,
    TodayScoreResponse,
)
from habitscore.services.score_engine import Score, score_to_percent
from habitscore.services.score_store import ScoreStore
from habitscore.services.timeutils import day_to_timestamp, start_of_today, timestamp_to_day

router = APIRouter(prefix="/habits/{habit_id}/scores", tags=["scores"])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def get_store(habit_id: int, db: Session) -> ScoreStore:
    habit = db.get(Habit, habit_id)
    if habit is None:
        raise NotFoundError(habit_id)
    return ScoreStore(db, habit)


def _score_to_response(s: Score) -> ScoreResponse:
    return ScoreResponse(
        habit_id=s.habit_id,
        day=str(timestamp_to_day(s.timestamp)),
        timestamp=s.timestamp,
        value=s.value,
        percent=score_to_percent(s.value),
    )


# ---------------------------------------------------------------------------
# GET /habits/{habit_id}/scores
# ---------------------------------------------------------------------------

@router.get(
    "",
    response_model=ScoreListResponse,
    summary="Score series, newest first",
    responses={404: {"model": ErrorResponse, "description": "Unknown habit."}},
)
def list_scores(
    habit_id: int,
    from_day: Optional[date] = Query(
        default=None,
        description="First day (inclusive). Omit both bounds for the whole history.",
        examples=["2026-02-01"],
    ),
    to_day: Optional[date] = Query(
        default=None,
        description="Last day (inclusive). Defaults to today.",
        examples=["2026-02-21"],
    ),
    db: Session = Depends(get_db),
):
    """
    Missing days in the range are computed and persisted before reading, so
    the response always covers every day the habit has a score for.
    """
    store = get_store(habit_id, db)
    if from_day is None and to_day is None:
        scores = store.to_list()
    else:
        to_ts = day_to_timestamp(to_day) if to_day else start_of_today()
        from_ts = day_to_timestamp(from_day) if from_day else to_ts
        scores = store.get_by_interval(from_ts, to_ts)
    return ScoreListResponse(
        habit_id=habit_id,
        total=len(scores),
        items=[_score_to_response(s) for s in scores],
    )


# ---------------------------------------------------------------------------
# GET /habits/{habit_id}/scores/today
# ---------------------------------------------------------------------------

@router.get(
    "/today",
    response_model=TodayScoreResponse,
    summary="Today's score",
    responses={404: {"model": ErrorResponse, "description": "Unknown habit."}},
)
def today_score(habit_id: int, db: Session = Depends(get_db)):
    store = get_store(habit_id, db)
    value = store.get_today_value()
    return TodayScoreResponse(
        habit_id=habit_id,
        day=str(timestamp_to_day(start_of_today())),
        value=value,
        percent=score_to_percent(value),
    )


# ---------------------------------------------------------------------------
# GET /habits/{habit_id}/scores/{day}
# ---------------------------------------------------------------------------

@router.get(
    "/{day}",
    response_model=ScoreResponse,
    summary="Already-computed score for one day",
    responses={
        404: {
            "model": ErrorResponse,
            "description": "Unknown habit, or no score computed for that day yet.",
        },
    },
)
def computed_score(habit_id: int, day: date, db: Session = Depends(get_db)):
    """Pure lookup: never triggers computation."""
    store = get_store(habit_id, db)
    timestamp = day_to_timestamp(day)
    score = store.get_computed_by_timestamp(timestamp)
    if score is None:
        raise ScoreNotComputedError(habit_id, timestamp)
    return _score_to_response(score)


# ---------------------------------------------------------------------------
# DELETE /habits/{habit_id}/scores
# ---------------------------------------------------------------------------

@router.delete(
    "",
    response_model=InvalidateResponse,
    summary="Invalidate scores on and after a day",
    responses={404: {"model": ErrorResponse, "description": "Unknown habit."}},
)
def invalidate_scores(
    habit_id: int,
    from_day: date = Query(description="First day to drop (inclusive)."),
    db: Session = Depends(get_db),
):
    store = get_store(habit_id, db)
    store.invalidate_newer_than(day_to_timestamp(from_day))
    return InvalidateResponse(habit_id=habit_id, invalidated_from=str(from_day))
