"""Progress classification enums."""

from enum import StrEnum


class DayStatus(StrEnum):
    """Completion status of a single day."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"


class MotivationalTier(StrEnum):
    """Overall-progress bands used for encouragement."""

    START = "start"
    EARLY = "early"
    QUARTER = "quarter"
    HALF = "half"
    ALMOST = "almost"
    COMPLETE = "complete"
