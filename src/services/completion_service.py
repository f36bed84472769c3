"""Completion metrics derived from the task completion record.

Key Concepts:
- Day completion percent: share of the given tasks done on a day, rounded to
  the nearest whole percent (halves round up) but kept inside [1, 99] for a
  partially done day.
- Fully complete day: a day on which every given task is done. A day with no
  tasks at all is never complete, so untouched days are not shown as done.
- Days complete: number of fully complete days inside the challenge. An older
  reading of this stat counted tasks with any completion at all; that number is
  still available as "tasks started" but no longer drives overall progress.

All functions are pure and recomputed on demand after every mutation.
"""

import math
from collections.abc import Sequence

from src.domain.progress import DayStatus, MotivationalTier
from src.domain.task import Task
from src.services.task_service import tasks_for_day


MOTIVATIONAL_MESSAGES: dict[MotivationalTier, str] = {
    MotivationalTier.START: "Start your journey! Every great achievement begins with a single step.",
    MotivationalTier.EARLY: "Great start! Building habits takes time, keep going!",
    MotivationalTier.QUARTER: "You're building momentum! A quarter of the way there.",
    MotivationalTier.HALF: "Halfway there! Your consistency is paying off.",
    MotivationalTier.ALMOST: "Almost there! The finish line is in sight.",
    MotivationalTier.COMPLETE: "Congratulations! You've completed your challenge!",
}


def day_task_counts(day: int, tasks: Sequence[Task]) -> tuple[int, int]:
    """Return (tasks done on day, total tasks)."""
    done = sum(1 for t in tasks if day in t.completed_days)
    return done, len(tasks)


def day_completion_percent(day: int, tasks: Sequence[Task]) -> int:
    """Return the whole-number percentage of tasks done on a day (0 when there are no tasks).

    Rounding never reaches 100 while a task is still open, nor 0 once one is
    done, so 100 always means fully complete and 0 always means not started.
    """
    done, total = day_task_counts(day, tasks)
    if total == 0:
        return 0
    percent = math.floor(100 * done / total + 0.5)
    if done < total:
        percent = min(percent, 99)  # noqa: PLR2004
    if done > 0:
        percent = max(percent, 1)
    return percent


def is_day_fully_complete(day: int, tasks: Sequence[Task]) -> bool:
    """Return True if there is at least one task and every task is done on day."""
    return bool(tasks) and all(day in t.completed_days for t in tasks)


def is_day_partially_complete(day: int, tasks: Sequence[Task]) -> bool:
    """Return True if some, but not all, tasks are done on day."""
    done, total = day_task_counts(day, tasks)
    return 0 < done < total


def day_status(day: int, tasks: Sequence[Task]) -> DayStatus:
    """Classify a day as complete, in progress or not started."""
    if is_day_fully_complete(day, tasks):
        return DayStatus.COMPLETE
    if is_day_partially_complete(day, tasks):
        return DayStatus.IN_PROGRESS
    return DayStatus.NOT_STARTED


def count_complete_days(tasks: Sequence[Task], total_days: int) -> int:
    """Count fully complete days in [1, total_days].

    Each day is judged on the tasks visible that day, so a most-important task
    only counts towards the day it was created for. Completion entries beyond
    total_days (left over after the challenge was shortened) are ignored.
    """
    if not tasks:
        return 0
    return sum(
        1 for day in range(1, total_days + 1) if is_day_fully_complete(day, tasks_for_day(tasks, day))
    )


def count_started_tasks(tasks: Sequence[Task]) -> int:
    """Count tasks with at least one completed day (the legacy "Days Complete" figure)."""
    return sum(1 for t in tasks if t.completed_days)


def overall_progress_percent(completed_day_count: int, total_days: int) -> float:
    """Return completed_day_count as a percentage of total_days."""
    if total_days <= 0:
        return 0.0
    return 100 * completed_day_count / total_days


def motivational_tier(percent: float) -> MotivationalTier:
    """Map an overall progress percentage to its band.

    Bands: 0 start, (0, 25) early, [25, 50) quarter, [50, 75) half,
    [75, 100) almost, 100 and above complete.
    """
    if percent <= 0:
        return MotivationalTier.START
    if percent < 25:  # noqa: PLR2004
        return MotivationalTier.EARLY
    if percent < 50:  # noqa: PLR2004
        return MotivationalTier.QUARTER
    if percent < 75:  # noqa: PLR2004
        return MotivationalTier.HALF
    if percent < 100:  # noqa: PLR2004
        return MotivationalTier.ALMOST
    return MotivationalTier.COMPLETE


def motivational_message(percent: float) -> str:
    """Return the encouragement text for an overall progress percentage."""
    return MOTIVATIONAL_MESSAGES[motivational_tier(percent)]
