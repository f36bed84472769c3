"""View projection: calendar cells, grouped task lists and progress overview.

Thin layer over the core services. It adds no rules of its own; it only picks
which computed values a renderer shows and in what order.
"""

from datetime import date

from src.domain.state import TrackerState
from src.domain.task import Task, TaskPriority
from src.models.view_models import (
    CalendarCell,
    CalendarHeader,
    CellKind,
    ProgressOverview,
    TaskEntry,
    TaskGroup,
)
from src.services import completion_service, date_mapper
from src.services.task_service import tasks_for_day


GROUP_TITLES: dict[TaskPriority, str] = {
    TaskPriority.MOST_IMPORTANT: "Most Important",
    TaskPriority.DAILY_ROUTINE: "Daily Routine",
    TaskPriority.FOR_LATER: "For Later",
}


def classify_cell(*, percent: int, is_current: bool, is_complete: bool, is_today: bool) -> CellKind:
    """Pick a cell's visual class: current, then complete, partial, today, empty."""
    if is_current:
        return CellKind.CURRENT
    if is_complete:
        return CellKind.COMPLETE
    if percent > 0:
        return CellKind.PARTIAL
    if is_today:
        return CellKind.TODAY
    return CellKind.EMPTY


def build_calendar(state: TrackerState, *, today: date | None = None) -> list[CalendarCell]:
    """Build one cell per challenge day."""
    challenge = state.challenge
    today_day = date_mapper.today_index(challenge.start_date, challenge.total_days, today)
    setting = state.preferences.date_label_setting

    cells = []
    for day in range(1, challenge.total_days + 1):
        visible = tasks_for_day(state.tasks, day)
        percent = completion_service.day_completion_percent(day, visible)
        is_complete = completion_service.is_day_fully_complete(day, visible)
        is_current = day == challenge.current_day
        is_today = day == today_day
        day_date = date_mapper.date_for_day(day, challenge.start_date)
        cells.append(
            CalendarCell(
                day=day,
                kind=classify_cell(
                    percent=percent,
                    is_current=is_current,
                    is_complete=is_complete,
                    is_today=is_today,
                ),
                percent=percent,
                is_current=is_current,
                is_today=is_today,
                is_complete=is_complete,
                date_label=date_mapper.format_day_label(day, challenge.start_date, setting),
                tooltip=f"{day_date.isoformat()} - {percent}% completed" if day_date else f"{percent}% completed",
            )
        )
    return cells


def build_calendar_header(state: TrackerState, *, today: date | None = None) -> CalendarHeader:
    """Build the title, month of the selected day and where today falls."""
    challenge = state.challenge
    return CalendarHeader(
        title=f"{challenge.total_days}-Day Calendar",
        month=date_mapper.month_label(challenge.current_day, challenge.start_date),
        today=date_mapper.today_label(challenge.start_date, challenge.total_days, today),
    )


def group_tasks_by_priority(tasks: list[Task], day: int) -> list[TaskGroup]:
    """Group the tasks visible on day by priority, in fixed order.

    Empty groups are kept so a renderer can show their headings.
    """
    visible = tasks_for_day(tasks, day)
    return [
        TaskGroup(
            priority=priority,
            title=title,
            tasks=[
                TaskEntry(id=t.id, name=t.name, done=t.is_done_on(day), reminder_time=t.reminder_time)
                for t in visible
                if t.priority == priority
            ],
        )
        for priority, title in GROUP_TITLES.items()
    ]


def build_progress_overview(state: TrackerState) -> ProgressOverview:
    """Summarize the whole challenge and the selected day.

    daily_percents feeds the per-day progress bar chart and matches the
    percentages shown on the calendar cells.
    """
    challenge = state.challenge
    days_complete = completion_service.count_complete_days(state.tasks, challenge.total_days)
    overall = completion_service.overall_progress_percent(days_complete, challenge.total_days)
    visible = tasks_for_day(state.tasks, challenge.current_day)
    done, total = completion_service.day_task_counts(challenge.current_day, visible)

    return ProgressOverview(
        total_days=challenge.total_days,
        days_complete=days_complete,
        days_remaining=challenge.total_days - days_complete,
        tasks_started=completion_service.count_started_tasks(state.tasks),
        overall_percent=overall,
        tier=completion_service.motivational_tier(overall),
        message=completion_service.motivational_message(overall),
        current_day=challenge.current_day,
        current_day_status=completion_service.day_status(challenge.current_day, visible),
        current_day_completed=done,
        current_day_total=total,
        current_day_percent=completion_service.day_completion_percent(challenge.current_day, visible),
        daily_percents=[
            completion_service.day_completion_percent(day, tasks_for_day(state.tasks, day))
            for day in range(1, challenge.total_days + 1)
        ],
    )
