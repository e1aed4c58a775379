"""
Error envelope shared by every router.

HabitScoreException.to_dict() and the validation handler in
habitscore/core/errors.py produce exactly these shapes.
"""
from typing import Any, Optional
from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """One rejected request field, as listed under details.errors of a 422."""
    field: str = Field(description='Dotted location, e.g. "from_day" or "day".')
    message: str
    type: str = Field(description="Pydantic error type, e.g. \"date_from_datetime_parsing\".")


class ErrorResponse(BaseModel):
    """`{code, message, details}` body of every 4xx/5xx response."""
    code: str = Field(
        description='"HABIT_NOT_FOUND" | "SCORE_NOT_COMPUTED" | "VALIDATION_ERROR" | ...'
    )
    message: str
    details: Optional[dict[str, Any]] = None
