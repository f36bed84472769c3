"""Challenge bounds management: total days, current day and start date.

Every write clamps instead of failing. total_days lives in [10, 365] and
current_day in [1, total_days]; changing either bound re-clamps current_day.
"""

import logging
import math
from datetime import date

from src.core.config import constants, settings
from src.core.errors import ErrorCategory
from src.core.logging import log_with_context, span
from src.domain.state import TrackerState


logger = logging.getLogger(__name__)


def _to_int(value: object) -> int | None:
    """Convert a number or numeric string to int, or None if it is not a finite number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return int(number)


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def clamp_total_days(value: object) -> int:
    """Clamp a requested challenge length to [10, 365].

    Missing, non-numeric or NaN values fall back to the configured default.
    """
    number = _to_int(value)
    if number is None:
        log_with_context(
            logger,
            "info",
            "Invalid challenge length, using default",
            value=repr(value),
            error_category=ErrorCategory.INVALID_INPUT.value,
        )
        number = settings.default_total_days
    return _clamp(number, constants.MIN_TOTAL_DAYS, constants.MAX_TOTAL_DAYS)


def clamp_day(value: int, total_days: int) -> int:
    """Clamp a day index to [1, total_days]."""
    return _clamp(value, constants.FIRST_DAY, total_days)


def set_total_days(state: TrackerState, value: object = None) -> int:
    """Set the challenge length and pull the current day back inside it.

    Returns:
        The stored challenge length
    """
    with span("challenge_service.set_total_days"):
        challenge = state.challenge
        challenge.total_days = clamp_total_days(value)
        previous_day = challenge.current_day
        challenge.current_day = clamp_day(previous_day, challenge.total_days)
        if challenge.current_day != previous_day:
            logger.info("Current day moved from %d to %d", previous_day, challenge.current_day)
        logger.info("Challenge length set to %d days", challenge.total_days)
        return challenge.total_days


def set_current_day(state: TrackerState, value: object) -> int:
    """Select a day, clamped to the challenge. Non-numeric input leaves the day unchanged.

    Returns:
        The selected day
    """
    challenge = state.challenge
    number = _to_int(value)
    if number is None:
        log_with_context(
            logger,
            "info",
            "Ignored non-numeric day",
            value=repr(value),
            error_category=ErrorCategory.INVALID_INPUT.value,
        )
        return challenge.current_day
    challenge.current_day = clamp_day(number, challenge.total_days)
    return challenge.current_day


def next_day(state: TrackerState) -> int:
    """Move forward one day; stays put on the last day."""
    challenge = state.challenge
    if challenge.current_day < challenge.total_days:
        challenge.current_day += 1
    return challenge.current_day


def previous_day(state: TrackerState) -> int:
    """Move back one day; stays put on day 1."""
    challenge = state.challenge
    if challenge.current_day > constants.FIRST_DAY:
        challenge.current_day -= 1
    return challenge.current_day


def set_start_date(state: TrackerState, value: date | str | None) -> str | None:
    """Store the start date verbatim.

    Dates are stored as ISO text. Existing completion entries and assigned days
    are left untouched, since they are day indices rather than dates.
    """
    stored = value.isoformat() if isinstance(value, date) else value
    state.challenge.start_date = stored
    logger.info("Start date set to %s", stored)
    return stored


def normalize_bounds(state: TrackerState) -> None:
    """Re-apply both clamps, e.g. after loading values from storage."""
    challenge = state.challenge
    challenge.total_days = clamp_total_days(challenge.total_days)
    challenge.current_day = clamp_day(challenge.current_day, challenge.total_days)
