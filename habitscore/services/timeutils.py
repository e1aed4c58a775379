"""
Day-aligned timestamps.

A score timestamp is the epoch-millisecond value of midnight UTC on the
calendar day as seen in the reference timezone (settings.SCORE_TIMEZONE).
Two instants on the same local day therefore map to the same integer, and
consecutive days differ by exactly DAY_LENGTH.
"""
from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from habitscore.core.config import settings

DAY_LENGTH = 86_400_000

_EPOCH = date(1970, 1, 1)


def _zone(name: str):
    return timezone.utc if name.upper() == "UTC" else ZoneInfo(name)


def day_to_timestamp(day: date) -> int:
    return (day - _EPOCH).days * DAY_LENGTH


def timestamp_to_day(timestamp: int) -> date:
    return _EPOCH + timedelta(days=timestamp // DAY_LENGTH)


def is_day_aligned(timestamp: int) -> bool:
    return timestamp % DAY_LENGTH == 0


def start_of_today(tz_name: Optional[str] = None) -> int:
    """Timestamp of the current day in the reference timezone."""
    now = datetime.now(tz=_zone(tz_name or settings.SCORE_TIMEZONE))
    return day_to_timestamp(now.date())
