"""Pydantic models returned by the view projection.

These models carry everything a renderer needs, already computed, so the
presentation layer holds no logic of its own.
"""

from enum import StrEnum

from pydantic import BaseModel

from src.domain.progress import DayStatus, MotivationalTier
from src.domain.task import TaskPriority


class CellKind(StrEnum):
    """Visual class of a calendar cell, by precedence."""

    CURRENT = "current"
    COMPLETE = "complete"
    PARTIAL = "partial"
    TODAY = "today"
    EMPTY = "empty"


class CalendarCell(BaseModel):
    """One day of the challenge calendar."""

    day: int
    kind: CellKind
    percent: int
    is_current: bool
    is_today: bool
    is_complete: bool
    date_label: str = ""
    tooltip: str


class CalendarHeader(BaseModel):
    """Context line shown above the calendar."""

    title: str
    month: str
    today: str


class TaskEntry(BaseModel):
    """A task as listed for one day."""

    id: str
    name: str
    done: bool
    reminder_time: str | None = None


class TaskGroup(BaseModel):
    """Tasks of one priority visible on a day."""

    priority: TaskPriority
    title: str
    tasks: list[TaskEntry]


class ProgressOverview(BaseModel):
    """Aggregate progress of the whole challenge."""

    total_days: int
    days_complete: int
    days_remaining: int
    tasks_started: int
    overall_percent: float
    tier: MotivationalTier
    message: str
    current_day: int
    current_day_status: DayStatus
    current_day_completed: int
    current_day_total: int
    current_day_percent: int
    daily_percents: list[int]
