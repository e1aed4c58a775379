"""
Score schemas.

GET    /habits/{id}/scores         → ScoreListResponse
GET    /habits/{id}/scores/today   → TodayScoreResponse
GET    /habits/{id}/scores/{day}   → ScoreResponse
DELETE /habits/{id}/scores         → InvalidateResponse
POST   /habits/{id}/checkins       → CheckinResponse
"""
from datetime import date
from pydantic import BaseModel, ConfigDict, Field


class ScoreResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    habit_id: int
    day: str = Field(description="ISO calendar day of the score.")
    timestamp: int = Field(description="Day-aligned instant, epoch milliseconds.")
    value: int = Field(description="Raw score, 0 to 19259478.")
    percent: float = Field(description="value / max value. Range: 0.0–1.0.")


class ScoreListResponse(BaseModel):
    habit_id: int
    total: int
    items: list[ScoreResponse] = Field(description="Newest first.")


class TodayScoreResponse(BaseModel):
    habit_id: int
    day: str
    value: int
    percent: float


class InvalidateResponse(BaseModel):
    habit_id: int
    invalidated_from: str = Field(description="Scores on and after this day were dropped.")


class CheckinRequest(BaseModel):
    day: date


class CheckinResponse(BaseModel):
    habit_id: int
    day: str
    checked: bool = Field(description="True if the day is checked after the toggle.")
