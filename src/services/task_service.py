"""Task store operations on an explicit TrackerState.

Functions mutate the given state in place and return the affected task.
Persistence is not handled here; the tracker facade saves after each call.
"""

import logging
from collections.abc import Sequence

from pydantic import ValidationError

from src.core.errors import ErrorCategory
from src.core.logging import log_with_context, span
from src.domain.state import TrackerState
from src.domain.task import Task, TaskPriority


logger = logging.getLogger(__name__)


def add_task(
    state: TrackerState,
    *,
    name: str,
    current_day: int,
    priority: TaskPriority = TaskPriority.DAILY_ROUTINE,
    reminder_time: str | None = None,
) -> Task | None:
    """Create a task and append it to the state.

    Args:
        state: Tracker state to mutate
        name: Display name; trimmed, blank names are ignored
        current_day: Day the task is being created on
        priority: Priority bucket (default: daily routine)
        reminder_time: Optional opaque time-of-day string

    Returns:
        The new task, or None if the name was blank or a field was invalid
    """
    with span("task_service.add_task"):
        try:
            task = Task(
                name=name,
                priority=priority,
                reminder_time=reminder_time or None,
                assigned_day=current_day if priority == TaskPriority.MOST_IMPORTANT else None,
            )
        except ValidationError as e:
            log_with_context(
                logger,
                "info",
                "Ignored invalid task",
                fields=", ".join(str(err["loc"][0]) for err in e.errors() if err["loc"]),
                error=str(e),
                error_category=ErrorCategory.INVALID_INPUT.value,
            )
            return None

        state.tasks.append(task)
        logger.info("Added task %s '%s' (%s)", task.id, task.name, task.priority)
        return task


def get_task(state: TrackerState, *, task_id: str) -> Task | None:
    """Return the task with the given ID, or None."""
    for task in state.tasks:
        if task.id == task_id:
            return task
    return None


def toggle_completion(state: TrackerState, *, task_id: str, day: int) -> Task | None:
    """Flip whether a task is done on a day.

    Unknown task IDs are ignored. A day can only be marked done while it lies
    in [1, total_days]; unmarking always works, so entries left behind by a
    shrunken challenge stay removable.

    Returns:
        The task, or None if no task has that ID
    """
    with span("task_service.toggle_completion"):
        task = get_task(state, task_id=task_id)
        if task is None:
            logger.debug("Toggle ignored: no task %s", task_id)
            return None

        if day in task.completed_days:
            task.completed_days.discard(day)
            logger.info("Task %s marked not done on day %d", task_id, day)
        elif not 1 <= day <= state.challenge.total_days:
            log_with_context(
                logger,
                "info",
                "Ignored completion outside the challenge",
                task_id=task_id,
                day=day,
                error_category=ErrorCategory.OUT_OF_RANGE.value,
            )
        else:
            task.completed_days.add(day)
            logger.info("Task %s marked done on day %d", task_id, day)
        return task


def delete_task(state: TrackerState, *, task_id: str) -> bool:
    """Remove a task and its completion history permanently.

    Returns:
        True if a task was removed
    """
    with span("task_service.delete_task"):
        remaining = [t for t in state.tasks if t.id != task_id]
        if len(remaining) == len(state.tasks):
            logger.debug("Delete ignored: no task %s", task_id)
            return False

        state.tasks = remaining
        logger.info("Deleted task %s", task_id)
        return True


def tasks_for_day(tasks: Sequence[Task], day: int) -> list[Task]:
    """Return the tasks shown on a day.

    Most-important tasks only belong to the day they were created for; all
    other tasks recur every day.
    """
    return [
        t
        for t in tasks
        if t.priority != TaskPriority.MOST_IMPORTANT or t.assigned_day is None or t.assigned_day == day
    ]
