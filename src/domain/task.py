"""Task domain models and enums."""

import uuid
from collections.abc import Iterable
from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


class TaskPriority(StrEnum):
    """Priority bucket a task is filed under."""

    MOST_IMPORTANT = "most_important"  # Scoped to the day it was created for
    DAILY_ROUTINE = "daily_routine"
    FOR_LATER = "for_later"


def new_task_id() -> str:
    """Generate a fresh task identifier."""
    return uuid.uuid4().hex


class Task(BaseModel):
    """A recurring task and the challenge days on which it was done."""

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    id: str = Field(default_factory=new_task_id, description="Unique, stable task ID")
    name: str = Field(..., description="Display name (trimmed, never empty)")
    priority: TaskPriority = Field(default=TaskPriority.DAILY_ROUTINE, description="Priority bucket")
    reminder_time: str | None = Field(
        default=None,
        alias="reminderTime",
        description="Time-of-day string; stored only, never scheduled",
    )
    assigned_day: int | None = Field(
        default=None,
        alias="assignedDay",
        description="Day a most-important task was created for",
    )
    completed_days: set[int] = Field(
        default_factory=set,
        alias="completedDays",
        description="1-based day indices on which the task was done",
    )
    created_at: str = Field(
        default_factory=lambda: datetime.now().isoformat(),
        alias="createdAt",
        description="Creation timestamp (ISO format)",
    )

    @field_validator("name")
    @classmethod
    def validate_name_not_blank(cls, v: str) -> str:
        """Trim the name and reject blank ones."""
        v = v.strip()
        if not v:
            raise ValueError("Task name cannot be empty")
        return v

    @field_validator("completed_days", mode="before")
    @classmethod
    def drop_invalid_days(cls, v: object) -> set[int]:
        """Keep only positive integer day indices."""
        if v is None:
            return set()
        if not isinstance(v, Iterable) or isinstance(v, str | bytes):
            raise ValueError("completedDays must be a list of day numbers")
        return {d for d in v if isinstance(d, int) and not isinstance(d, bool) and d >= 1}

    @field_serializer("completed_days")
    def serialize_completed_days(self, days: set[int]) -> list[int]:
        return sorted(days)

    def is_done_on(self, day: int) -> bool:
        """Return True if the task was marked done on the given day."""
        return day in self.completed_days

    def to_record(self) -> dict[str, object]:
        """Serialize to the persisted camelCase record shape."""
        return self.model_dump(mode="json", by_alias=True)
