"""Tracker facade: the public surface offered to a presentation layer.

A Tracker owns one TrackerState and one key-value store. Mutations run one at
a time under a lock and are saved right after they are applied
(write-through), so a process killed between actions loses nothing.
Queries are recomputed from the current state on every call.
"""

import logging
import threading
from collections.abc import Callable
from datetime import date
from typing import TypeVar

from src.core.errors import ErrorCategory
from src.core.kv_store import KeyValueStore
from src.core.logging import log_with_context
from src.domain.challenge import DateLabelSetting
from src.domain.state import TrackerState
from src.domain.task import Task, TaskPriority
from src.services import (
    challenge_service,
    completion_service,
    date_mapper,
    persistence_service,
    task_service,
)


logger = logging.getLogger(__name__)

T = TypeVar("T")


class Tracker:
    """Stateful wrapper that applies core operations and persists after each one."""

    def __init__(self, store: KeyValueStore, state: TrackerState | None = None) -> None:
        self._store = store
        self._state = state if state is not None else TrackerState()
        self._lock = threading.Lock()

    @classmethod
    def load(cls, store: KeyValueStore, *, today: date | None = None) -> "Tracker":
        """Create a tracker from the snapshot held in store."""
        return cls(store, persistence_service.load_state(store, today=today))

    @property
    def state(self) -> TrackerState:
        return self._state

    @property
    def tasks(self) -> list[Task]:
        return self._state.tasks

    @property
    def current_day(self) -> int:
        return self._state.challenge.current_day

    @property
    def total_days(self) -> int:
        return self._state.challenge.total_days

    @property
    def start_date(self) -> str | None:
        return self._state.challenge.start_date

    def _mutate(self, operation: Callable[[TrackerState], T]) -> T:
        """Apply operation to the state and save the result."""
        with self._lock:
            result = operation(self._state)
            persistence_service.save_state(self._store, self._state)
            return result

    # Task store

    def add_task(
        self,
        name: str,
        priority: TaskPriority = TaskPriority.DAILY_ROUTINE,
        reminder_time: str | None = None,
    ) -> Task | None:
        """Add a task created on the current day. Blank names are ignored."""
        with self._lock:
            task = task_service.add_task(
                self._state,
                name=name,
                priority=priority,
                reminder_time=reminder_time,
                current_day=self._state.challenge.current_day,
            )
            if task is not None:
                persistence_service.save_state(self._store, self._state)
            return task

    def toggle_completion(self, task_id: str, day: int | None = None) -> Task | None:
        """Flip a task's completion for day (default: the current day)."""
        return self._mutate(
            lambda s: task_service.toggle_completion(
                s, task_id=task_id, day=s.challenge.current_day if day is None else day
            )
        )

    def delete_task(self, task_id: str) -> bool:
        """Delete a task permanently. Callers confirm with the user beforehand."""
        return self._mutate(lambda s: task_service.delete_task(s, task_id=task_id))

    # Challenge bounds

    def set_total_days(self, value: object = None) -> int:
        return self._mutate(lambda s: challenge_service.set_total_days(s, value))

    def set_current_day(self, value: object) -> int:
        return self._mutate(lambda s: challenge_service.set_current_day(s, value))

    def next_day(self) -> int:
        return self._mutate(challenge_service.next_day)

    def previous_day(self) -> int:
        return self._mutate(challenge_service.previous_day)

    def set_start_date(self, value: date | str | None) -> str | None:
        return self._mutate(lambda s: challenge_service.set_start_date(s, value))

    def set_preferences(
        self,
        *,
        date_label_setting: DateLabelSetting | None = None,
        dark_mode: bool | None = None,
    ) -> None:
        """Update presentation preferences; None or an invalid value leaves a setting unchanged."""

        def apply(state: TrackerState) -> None:
            if date_label_setting is not None:
                try:
                    state.preferences.date_label_setting = DateLabelSetting(date_label_setting)
                except ValueError:
                    log_with_context(
                        logger,
                        "info",
                        "Ignored unknown date label setting",
                        value=repr(date_label_setting),
                        error_category=ErrorCategory.INVALID_INPUT.value,
                    )
            if isinstance(dark_mode, bool):
                state.preferences.dark_mode = dark_mode
            elif dark_mode is not None:
                log_with_context(
                    logger,
                    "info",
                    "Ignored non-boolean dark mode value",
                    value=repr(dark_mode),
                    error_category=ErrorCategory.INVALID_INPUT.value,
                )

        self._mutate(apply)

    # Derived metrics

    def tasks_on(self, day: int | None = None) -> list[Task]:
        """Return the tasks visible on day (default: the current day)."""
        return task_service.tasks_for_day(self._state.tasks, self._day(day))

    def day_completion_percent(self, day: int | None = None) -> int:
        day = self._day(day)
        return completion_service.day_completion_percent(day, self.tasks_on(day))

    def is_day_fully_complete(self, day: int | None = None) -> bool:
        day = self._day(day)
        return completion_service.is_day_fully_complete(day, self.tasks_on(day))

    def days_complete(self) -> int:
        return completion_service.count_complete_days(self._state.tasks, self.total_days)

    def tasks_started(self) -> int:
        return completion_service.count_started_tasks(self._state.tasks)

    def overall_progress_percent(self) -> float:
        return completion_service.overall_progress_percent(self.days_complete(), self.total_days)

    def date_for_day(self, day: int | None = None) -> date | None:
        return date_mapper.date_for_day(self._day(day), self.start_date)

    def day_for_date(self, target: date) -> int | None:
        return date_mapper.day_for_date(target, self.start_date, self.total_days)

    def today_index(self, today: date | None = None) -> int | None:
        return date_mapper.today_index(self.start_date, self.total_days, today)

    def _day(self, day: int | None) -> int:
        return self._state.challenge.current_day if day is None else day
