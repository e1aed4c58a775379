from .habit import Habit
from .repetition import Repetition
from .score import ScoreRecord

__all__ = [
    "Habit",
    "Repetition",
    "ScoreRecord",
]
