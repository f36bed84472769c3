"""Unit tests for view_service module."""

import pytest

from src.domain.progress import DayStatus, MotivationalTier
from src.domain.task import TaskPriority
from src.models.view_models import CellKind
from src.services import view_service


@pytest.mark.unit
class TestClassifyCell:
    """Tests for classify_cell precedence."""

    def test_current_wins_over_everything(self):
        kind = view_service.classify_cell(percent=100, is_current=True, is_complete=True, is_today=True)
        assert kind == CellKind.CURRENT

    def test_complete_before_partial(self):
        kind = view_service.classify_cell(percent=100, is_current=False, is_complete=True, is_today=True)
        assert kind == CellKind.COMPLETE

    def test_partial_before_today(self):
        kind = view_service.classify_cell(percent=40, is_current=False, is_complete=False, is_today=True)
        assert kind == CellKind.PARTIAL

    def test_today(self):
        kind = view_service.classify_cell(percent=0, is_current=False, is_complete=False, is_today=True)
        assert kind == CellKind.TODAY

    def test_empty(self):
        kind = view_service.classify_cell(percent=0, is_current=False, is_complete=False, is_today=False)
        assert kind == CellKind.EMPTY


@pytest.mark.unit
class TestBuildCalendar:
    """Tests for build_calendar and build_calendar_header functions."""

    @pytest.fixture
    def calendar_state(self, state, task_factory):
        state.tasks.extend([task_factory("A", days={2, 3}), task_factory("B", days={2})])
        return state

    def test_one_cell_per_day(self, calendar_state, today):
        cells = view_service.build_calendar(calendar_state, today=today)
        assert [c.day for c in cells] == list(range(1, 101))

    def test_cell_kinds(self, calendar_state, today):
        cells = {c.day: c for c in view_service.build_calendar(calendar_state, today=today)}

        assert cells[1].kind == CellKind.CURRENT
        assert cells[2].kind == CellKind.COMPLETE
        assert cells[3].kind == CellKind.PARTIAL
        assert cells[3].percent == 50
        assert cells[4].kind == CellKind.EMPTY
        assert cells[10].kind == CellKind.TODAY
        assert cells[10].is_today is True

    def test_current_day_overrides_complete(self, calendar_state, today):
        calendar_state.challenge.current_day = 2

        cell = view_service.build_calendar(calendar_state, today=today)[1]

        assert cell.kind == CellKind.CURRENT
        assert cell.is_complete is True

    def test_labels_and_tooltip(self, calendar_state, today):
        cell = view_service.build_calendar(calendar_state, today=today)[1]

        assert cell.date_label == "Jan 2"
        assert cell.tooltip == "2024-01-02 - 100% completed"

    def test_without_start_date(self, calendar_state, today):
        calendar_state.challenge.start_date = None

        cells = view_service.build_calendar(calendar_state, today=today)

        assert cells[3].date_label == ""
        assert cells[3].tooltip == "0% completed"
        assert not any(c.is_today for c in cells)

    def test_header(self, calendar_state, today):
        header = view_service.build_calendar_header(calendar_state, today=today)

        assert header.title == "100-Day Calendar"
        assert header.month == "January 2024"
        assert header.today == "Day 10"


@pytest.mark.unit
class TestGroupTasksByPriority:
    """Tests for group_tasks_by_priority function."""

    def test_fixed_order_with_empty_groups(self, task_factory):
        tasks = [task_factory("Read", days={1}), task_factory("Taxes", priority=TaskPriority.FOR_LATER)]

        groups = view_service.group_tasks_by_priority(tasks, 1)

        assert [g.title for g in groups] == ["Most Important", "Daily Routine", "For Later"]
        assert groups[0].tasks == []
        assert [(e.name, e.done) for e in groups[1].tasks] == [("Read", True)]
        assert [(e.name, e.done) for e in groups[2].tasks] == [("Taxes", False)]

    def test_most_important_only_on_its_day(self, task_factory):
        tasks = [task_factory("Ship", priority=TaskPriority.MOST_IMPORTANT, assigned_day=5)]

        assert [e.name for e in view_service.group_tasks_by_priority(tasks, 5)[0].tasks] == ["Ship"]
        assert view_service.group_tasks_by_priority(tasks, 6)[0].tasks == []


@pytest.mark.unit
class TestBuildProgressOverview:
    """Tests for build_progress_overview function."""

    def test_exercise_scenario(self, state, task_factory):
        state.tasks.append(task_factory("Exercise", days=set(range(1, 51))))
        state.challenge.current_day = 51

        overview = view_service.build_progress_overview(state)

        assert overview.days_complete == 50
        assert overview.days_remaining == 50
        assert overview.tasks_started == 1
        assert overview.overall_percent == 50.0
        assert overview.tier == MotivationalTier.HALF
        assert overview.current_day_status == DayStatus.NOT_STARTED
        assert (overview.current_day_completed, overview.current_day_total) == (0, 1)
        assert overview.current_day_percent == 0
        assert len(overview.daily_percents) == 100
        assert overview.daily_percents[:50] == [100] * 50
        assert overview.daily_percents[50:] == [0] * 50

    def test_no_tasks(self, state):
        overview = view_service.build_progress_overview(state)

        assert overview.days_complete == 0
        assert overview.tier == MotivationalTier.START
        assert overview.current_day_status == DayStatus.NOT_STARTED

    def test_daily_percents_match_calendar(self, state, task_factory, today):
        state.tasks.extend(
            [
                task_factory("A", days={1, 2}),
                task_factory("B", days={1}),
                task_factory("Ship", priority=TaskPriority.MOST_IMPORTANT, assigned_day=3),
            ]
        )

        overview = view_service.build_progress_overview(state)
        cells = view_service.build_calendar(state, today=today)

        assert overview.daily_percents == [c.percent for c in cells]
        assert overview.daily_percents[:4] == [100, 50, 0, 0]
