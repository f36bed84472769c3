"""Loading and saving tracker snapshots through a key-value store.

Each piece of state lives under its own key as JSON text:

| Key              | Value                                   |
|------------------|-----------------------------------------|
| tasks            | list of task records (camelCase fields) |
| day              | current day index                       |
| totalDays        | challenge length                        |
| startDate        | ISO date string                         |
| dateLabelSetting | short, long or always-mobile            |
| darkMode         | boolean                                 |

Loading never fails: every key that is missing or malformed falls back to its
default on its own, and malformed task records are skipped. Saving is
fire-and-forget: failures are logged and reported but never raised.
"""

import json
import logging
from collections.abc import Callable
from datetime import date
from typing import Any

from pydantic import ValidationError

from src.core.config import constants
from src.core.errors import ErrorCategory, StorageError, classify_error
from src.core.kv_store import KeyValueStore
from src.core.logging import log_with_context, span
from src.domain.challenge import Challenge, DateLabelSetting, Preferences
from src.domain.state import TrackerState
from src.domain.task import Task, TaskPriority, new_task_id
from src.services import challenge_service


logger = logging.getLogger(__name__)

_MISSING = object()


def _read_key(store: KeyValueStore, key: str) -> Any:
    """Read and decode one key, returning _MISSING when absent or unreadable."""
    try:
        raw = store.get(key)
    except StorageError as e:
        log_with_context(
            logger,
            "warning",
            "Failed to read key from store",
            key=key,
            error=str(e),
            error_category=ErrorCategory.STORAGE_FAILURE.value,
        )
        return _MISSING
    if raw is None:
        return _MISSING
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        log_with_context(
            logger,
            "warning",
            "Malformed value in store, using default",
            key=key,
            error=str(e),
            error_category=ErrorCategory.MALFORMED_STATE.value,
        )
        return _MISSING


def _coerce(key: str, value: Any, convert: Callable[[Any], Any], default: Any) -> Any:
    """Apply convert to a decoded value, falling back to default when it does not fit."""
    if value is _MISSING:
        return default
    try:
        return convert(value)
    except (TypeError, ValueError, OverflowError) as e:
        log_with_context(
            logger,
            "warning",
            "Unexpected value in store, using default",
            key=key,
            value=repr(value),
            error_category=classify_error(e).value,
        )
        return default


def _as_int(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise TypeError(f"expected a number, got {type(value).__name__}")
    return int(value)


def _as_bool(value: Any) -> bool:
    if not isinstance(value, bool):
        raise TypeError(f"expected a boolean, got {type(value).__name__}")
    return value


def _as_start_date(value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError(f"expected an ISO date string, got {type(value).__name__}")
    return value


def _migrate_task_record(record: dict[str, Any]) -> dict[str, Any]:
    """Fill in fields missing from records written by older versions.

    The earliest format stored only {"name", "completedDays"}.
    """
    migrated = dict(record)
    if not migrated.get("id"):
        migrated["id"] = new_task_id()
    if migrated.get("priority") not in {p.value for p in TaskPriority}:
        migrated["priority"] = TaskPriority.DAILY_ROUTINE
    migrated.setdefault("completedDays", [])
    return migrated


def _load_tasks(value: Any) -> list[Task]:
    if value is _MISSING:
        return []
    if not isinstance(value, list):
        log_with_context(
            logger,
            "warning",
            "Stored tasks are not a list, starting empty",
            error_category=ErrorCategory.MALFORMED_STATE.value,
        )
        return []

    tasks: list[Task] = []
    seen_ids: set[str] = set()
    for index, record in enumerate(value):
        if not isinstance(record, dict):
            logger.warning("Skipping task record %d: not an object", index)
            continue
        try:
            task = Task.model_validate(_migrate_task_record(record))
        except ValidationError as e:
            log_with_context(
                logger,
                "warning",
                "Skipping malformed task record",
                index=index,
                error=str(e),
                error_category=ErrorCategory.MALFORMED_STATE.value,
            )
            continue
        if task.id in seen_ids:
            task.id = new_task_id()
        seen_ids.add(task.id)
        tasks.append(task)
    return tasks


def load_state(store: KeyValueStore, *, today: date | None = None) -> TrackerState:
    """Build tracker state from the store, defaulting anything missing or malformed.

    Args:
        store: Key-value store to read
        today: Start date used when none is stored (default: local current date)

    Returns:
        A TrackerState with bounds already clamped
    """
    with span("persistence_service.load_state"):
        defaults = Challenge()
        tasks = _load_tasks(_read_key(store, constants.KEY_TASKS))
        challenge = Challenge(
            total_days=_coerce(
                constants.KEY_TOTAL_DAYS,
                _read_key(store, constants.KEY_TOTAL_DAYS),
                _as_int,
                defaults.total_days,
            ),
            current_day=_coerce(
                constants.KEY_DAY,
                _read_key(store, constants.KEY_DAY),
                _as_int,
                defaults.current_day,
            ),
            start_date=_coerce(
                constants.KEY_START_DATE,
                _read_key(store, constants.KEY_START_DATE),
                _as_start_date,
                (today or date.today()).isoformat(),
            ),
        )
        preferences = Preferences(
            date_label_setting=_coerce(
                constants.KEY_DATE_LABEL_SETTING,
                _read_key(store, constants.KEY_DATE_LABEL_SETTING),
                DateLabelSetting,
                DateLabelSetting.SHORT,
            ),
            dark_mode=_coerce(
                constants.KEY_DARK_MODE,
                _read_key(store, constants.KEY_DARK_MODE),
                _as_bool,
                False,
            ),
        )

        state = TrackerState(tasks=tasks, challenge=challenge, preferences=preferences)
        challenge_service.normalize_bounds(state)
        logger.info(
            "Loaded %d tasks, day %d of %d",
            len(state.tasks),
            state.challenge.current_day,
            state.challenge.total_days,
        )
        return state


def snapshot(state: TrackerState) -> dict[str, Any]:
    """Return the persisted representation of state, keyed by storage key."""
    return {
        constants.KEY_TASKS: [task.to_record() for task in state.tasks],
        constants.KEY_DAY: state.challenge.current_day,
        constants.KEY_TOTAL_DAYS: state.challenge.total_days,
        constants.KEY_START_DATE: state.challenge.start_date,
        constants.KEY_DATE_LABEL_SETTING: state.preferences.date_label_setting.value,
        constants.KEY_DARK_MODE: state.preferences.dark_mode,
    }


def save_state(store: KeyValueStore, state: TrackerState) -> bool:
    """Write every key of the snapshot to the store.

    Returns:
        True if all keys were written; failures are logged, not raised
    """
    with span("persistence_service.save_state"):
        ok = True
        for key, value in snapshot(state).items():
            try:
                store.set(key, json.dumps(value))
            except (StorageError, OSError) as e:
                ok = False
                log_with_context(
                    logger,
                    "error",
                    "Failed to save key",
                    key=key,
                    error=str(e),
                    error_category=ErrorCategory.STORAGE_FAILURE.value,
                )
        if ok:
            logger.debug("Saved tracker snapshot (%d tasks)", len(state.tasks))
        return ok
