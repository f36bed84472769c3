"""Unit tests for persistence_service module."""

import json
from datetime import date

import pytest

from src.core.kv_store import InMemoryKeyValueStore
from src.domain.challenge import DateLabelSetting
from src.domain.task import TaskPriority
from src.services import persistence_service, task_service
from tests.unit.mocks import FailingKeyValueStore


TODAY = date(2024, 3, 15)


def _store(**values: object) -> InMemoryKeyValueStore:
    """Build a store holding the JSON encoding of each value."""
    return InMemoryKeyValueStore({key: json.dumps(value) for key, value in values.items()})


@pytest.mark.unit
class TestLoadDefaults:
    """Tests for load_state on empty or broken stores."""

    def test_empty_store_gives_defaults(self, in_memory_store):
        state = persistence_service.load_state(in_memory_store, today=TODAY)

        assert state.tasks == []
        assert state.challenge.total_days == 100
        assert state.challenge.current_day == 1
        assert state.challenge.start_date == "2024-03-15"
        assert state.preferences.date_label_setting == DateLabelSetting.SHORT
        assert state.preferences.dark_mode is False

    def test_malformed_json_falls_back_per_key(self):
        store = InMemoryKeyValueStore({"totalDays": "{oops", "day": "12", "tasks": "[not json"})

        state = persistence_service.load_state(store, today=TODAY)

        assert state.challenge.total_days == 100
        assert state.challenge.current_day == 12
        assert state.tasks == []

    @pytest.mark.parametrize("raw", ['"abc"', "NaN", "Infinity", "true", "null", "[30]"])
    def test_non_numeric_total_days_uses_default(self, raw):
        store = InMemoryKeyValueStore({"totalDays": raw})
        assert persistence_service.load_state(store, today=TODAY).challenge.total_days == 100

    def test_loaded_bounds_are_clamped(self):
        store = _store(totalDays=5, day=500)

        state = persistence_service.load_state(store, today=TODAY)

        assert state.challenge.total_days == 10
        assert state.challenge.current_day == 10

    def test_unknown_date_label_setting_uses_default(self):
        store = _store(dateLabelSetting="weird", darkMode="yes")

        state = persistence_service.load_state(store, today=TODAY)

        assert state.preferences.date_label_setting == DateLabelSetting.SHORT
        assert state.preferences.dark_mode is False

    def test_non_string_start_date_defaults_to_today(self):
        store = _store(startDate=20240101)
        assert persistence_service.load_state(store, today=TODAY).challenge.start_date == "2024-03-15"

    def test_unparseable_start_date_is_kept_verbatim(self):
        store = _store(startDate="someday")
        assert persistence_service.load_state(store, today=TODAY).challenge.start_date == "someday"

    def test_tasks_not_a_list_gives_empty(self):
        store = _store(tasks={"name": "Exercise"})
        assert persistence_service.load_state(store, today=TODAY).tasks == []

    def test_read_failure_gives_defaults(self):
        store = FailingKeyValueStore({"totalDays": "30"}, fail_reads=True)

        state = persistence_service.load_state(store, today=TODAY)

        assert state.challenge.total_days == 100
        assert state.tasks == []


@pytest.mark.unit
class TestLoadTasks:
    """Tests for task record loading and migration."""

    def test_legacy_record_is_migrated(self):
        store = _store(tasks=[{"name": "Read", "completedDays": [1, 2]}])

        [task] = persistence_service.load_state(store, today=TODAY).tasks

        assert task.name == "Read"
        assert task.id
        assert task.priority == TaskPriority.DAILY_ROUTINE
        assert task.completed_days == {1, 2}

    def test_record_without_completed_days(self):
        store = _store(tasks=[{"id": "a1", "name": "Read", "priority": "for_later"}])

        [task] = persistence_service.load_state(store, today=TODAY).tasks

        assert task.id == "a1"
        assert task.priority == TaskPriority.FOR_LATER
        assert task.completed_days == set()

    def test_unknown_priority_becomes_daily_routine(self):
        store = _store(tasks=[{"id": "a1", "name": "Read", "priority": "urgent"}])
        [task] = persistence_service.load_state(store, today=TODAY).tasks
        assert task.priority == TaskPriority.DAILY_ROUTINE

    def test_invalid_day_entries_are_dropped(self):
        store = _store(tasks=[{"id": "a1", "name": "Read", "completedDays": [1, "2", 0, -4, 3.5, True, 7]}])
        [task] = persistence_service.load_state(store, today=TODAY).tasks
        assert task.completed_days == {1, 7}

    def test_malformed_records_are_skipped(self):
        store = _store(
            tasks=[
                "Exercise",
                {"name": "   "},
                {"completedDays": [1]},
                {"name": "Read", "completedDays": "1,2"},
                {"name": "Write", "completedDays": [3]},
            ]
        )

        tasks = persistence_service.load_state(store, today=TODAY).tasks

        assert [t.name for t in tasks] == ["Write"]

    def test_duplicate_ids_are_reassigned(self):
        store = _store(tasks=[{"id": "same", "name": "Read"}, {"id": "same", "name": "Write"}])

        tasks = persistence_service.load_state(store, today=TODAY).tasks

        assert tasks[0].id == "same"
        assert tasks[1].id != "same"
        assert len({t.id for t in tasks}) == 2


@pytest.mark.unit
class TestSaveState:
    """Tests for snapshot and save_state functions."""

    def test_snapshot_uses_storage_keys(self, state, task_factory):
        state.tasks.append(task_factory("Read", days={3, 1}))

        data = persistence_service.snapshot(state)

        assert set(data) == {"tasks", "day", "totalDays", "startDate", "dateLabelSetting", "darkMode"}
        record = data["tasks"][0]
        assert record["completedDays"] == [1, 3]
        assert "reminderTime" in record
        assert "assignedDay" in record

    def test_round_trip(self, state, in_memory_store):
        task = task_service.add_task(
            state,
            name="Ship",
            current_day=4,
            priority=TaskPriority.MOST_IMPORTANT,
            reminder_time="09:00",
        )
        task_service.toggle_completion(state, task_id=task.id, day=4)
        state.challenge.total_days = 60
        state.challenge.current_day = 12
        state.preferences.date_label_setting = DateLabelSetting.LONG
        state.preferences.dark_mode = True

        assert persistence_service.save_state(in_memory_store, state) is True
        loaded = persistence_service.load_state(in_memory_store, today=TODAY)

        assert loaded == state

    def test_stored_values_are_json_text(self, state, in_memory_store):
        persistence_service.save_state(in_memory_store, state)

        assert in_memory_store.get("totalDays") == "100"
        assert in_memory_store.get("startDate") == '"2024-01-01"'
        assert in_memory_store.get("darkMode") == "false"
        assert in_memory_store.get("tasks") == "[]"

    def test_save_failure_is_reported_not_raised(self, state):
        store = FailingKeyValueStore()

        assert persistence_service.save_state(store, state) is False
        assert len(store.failed_writes) == 6
