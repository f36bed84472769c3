"""daystreak - day-indexed challenge tracker core.

Startup wiring: configure observability, open the configured store and load
the persisted snapshot into a Tracker.
"""

import logging
from pathlib import Path

from src.core.config import settings
from src.core.kv_store import JsonFileKeyValueStore
from src.core.logging import configure_logfire
from src.services.tracker_service import Tracker


logger = logging.getLogger(__name__)


def create_tracker(data_file: Path | str | None = None) -> Tracker:
    """Load the tracker persisted at data_file (default: settings.data_file).

    Never fails on bad or missing data; the tracker starts from defaults instead.
    """
    store = JsonFileKeyValueStore(data_file or settings.data_file)
    tracker = Tracker.load(store)
    logger.info(
        "startup",
        extra={"data_file": str(store.path), "tasks": len(tracker.tasks), "day": tracker.current_day},
    )
    return tracker


def startup(data_file: Path | str | None = None) -> Tracker:
    """Configure Logfire, then load the tracker."""
    configure_logfire()
    return create_tracker(data_file)
