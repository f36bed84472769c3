"""Pytest configuration and fixtures for unit tests."""

from datetime import date

import pytest

from src.core.kv_store import InMemoryKeyValueStore
from src.domain.challenge import Challenge
from src.domain.state import TrackerState
from src.domain.task import Task, TaskPriority
from src.services.tracker_service import Tracker
from tests.unit.mocks import RecordingKeyValueStore


START_DATE = "2024-01-01"


@pytest.fixture
def state() -> TrackerState:
    """Provides a fresh 100-day challenge starting 2024-01-01 with no tasks."""
    return TrackerState(challenge=Challenge(total_days=100, start_date=START_DATE, current_day=1))


@pytest.fixture
def in_memory_store() -> InMemoryKeyValueStore:
    """Provides an empty in-memory key-value store."""
    return InMemoryKeyValueStore()


@pytest.fixture
def recording_store() -> RecordingKeyValueStore:
    """Provides an in-memory store that counts writes."""
    return RecordingKeyValueStore()


@pytest.fixture
def tracker(recording_store: RecordingKeyValueStore, state: TrackerState) -> Tracker:
    """Provides a tracker over the fresh challenge, saving to recording_store."""
    return Tracker(recording_store, state)


@pytest.fixture
def task_factory():
    """Factory for tasks with preset completion days."""

    def _create_task(
        name: str = "Exercise",
        *,
        days: set[int] | None = None,
        priority: TaskPriority = TaskPriority.DAILY_ROUTINE,
        assigned_day: int | None = None,
    ) -> Task:
        return Task(name=name, priority=priority, assigned_day=assigned_day, completed_days=days or set())

    return _create_task


@pytest.fixture
def today() -> date:
    """A fixed 'today' inside the sample challenge (day 10)."""
    return date(2024, 1, 10)
