"""Domain models and DTOs."""

from src.domain.challenge import Challenge, DateLabelSetting, Preferences
from src.domain.progress import DayStatus, MotivationalTier
from src.domain.state import TrackerState
from src.domain.task import Task, TaskPriority


__all__ = [
    "Challenge",
    "DateLabelSetting",
    "DayStatus",
    "MotivationalTier",
    "Preferences",
    "Task",
    "TaskPriority",
    "TrackerState",
]
