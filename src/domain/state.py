"""Tracker state container."""

from pydantic import BaseModel, Field

from src.domain.challenge import Challenge, Preferences
from src.domain.task import Task


class TrackerState(BaseModel):
    """Everything the tracker persists, owned by the caller.

    Services take this object explicitly and mutate it in place; there is no
    module-level state.
    """

    tasks: list[Task] = Field(default_factory=list, description="Tasks in creation order")
    challenge: Challenge = Field(default_factory=Challenge, description="Challenge bounds")
    preferences: Preferences = Field(default_factory=Preferences, description="Presentation settings")
