"""
Check-ins router.

POST /habits/{habit_id}/checkins   — toggle the check-in of a day
"""
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from habitscore.db.base import get_db
from habitscore.routers.scores import get_store
from habitscore.schemas.common import ErrorResponse
from habitscore.schemas.score import CheckinRequest, CheckinResponse
from habitscore.services.checkins import toggle_checkin
from habitscore.services.timeutils import day_to_timestamp

router = APIRouter(prefix="/habits/{habit_id}/checkins", tags=["checkins"])


@router.post(
    "",
    response_model=CheckinResponse,
    summary="Toggle a check-in",
    responses={404: {"model": ErrorResponse, "description": "Unknown habit."}},
)
def toggle(habit_id: int, payload: CheckinRequest, db: Session = Depends(get_db)):
    """
    Checks the day if it was unchecked, unchecks it otherwise.
    Scores on and after that day are dropped and recomputed on next read.
    """
    store = get_store(habit_id, db)
    checked = toggle_checkin(
        db, store.get_habit(), day_to_timestamp(payload.day), store=store
    )
    return CheckinResponse(habit_id=habit_id, day=str(payload.day), checked=checked)
