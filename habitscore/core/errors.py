"""
Custom exception hierarchy for the habit score service.

Rule: every error has a machine-readable `code` string so clients
can branch on it without parsing English messages.
"""
from __future__ import annotations

from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status

from habitscore.schemas.common import ErrorDetail


# ---------------------------------------------------------------------------
# Exception classes
# ---------------------------------------------------------------------------

class HabitScoreException(Exception):
    """Base class for all application-level errors."""
    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class NotPersistedError(HabitScoreException):
    """The habit has no database id yet. Caller misuse, never retried."""
    http_status = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "HABIT_NOT_PERSISTED"

    def __init__(self):
        super().__init__(message="Habit is not saved.")


class NotFoundError(HabitScoreException):
    http_status = status.HTTP_404_NOT_FOUND
    code = "HABIT_NOT_FOUND"

    def __init__(self, habit_id: int):
        super().__init__(
            message=f"Habit {habit_id} not found.",
            details={"habit_id": habit_id},
        )


class StorageError(HabitScoreException):
    """A backing-store operation failed; the transaction was rolled back."""
    http_status = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "STORAGE_ERROR"

    def __init__(self, message: str, habit_id: int | None = None):
        super().__init__(
            message=message,
            details={"habit_id": habit_id} if habit_id is not None else {},
        )


class ScoreNotComputedError(HabitScoreException):
    http_status = status.HTTP_404_NOT_FOUND
    code = "SCORE_NOT_COMPUTED"

    def __init__(self, habit_id: int, timestamp: int):
        super().__init__(
            message=f"No computed score for habit {habit_id} at {timestamp}.",
            details={"habit_id": habit_id, "timestamp": timestamp},
        )


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

async def habit_score_exception_handler(
    request: Request, exc: HabitScoreException
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.http_status,
        content=exc.to_dict(),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return structured 422 with machine-readable field errors."""
    field_errors = [
        ErrorDetail(
            field=".".join(str(loc) for loc in error["loc"] if loc != "body"),
            message=error["msg"],
            type=error["type"],
        ).model_dump()
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "code": "VALIDATION_ERROR",
            "message": "Request validation failed.",
            "details": {"errors": field_errors},
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "code": "INTERNAL_ERROR",
            "message": "An unexpected error occurred.",
        },
    )
