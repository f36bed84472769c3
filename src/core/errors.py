"""Error taxonomy for the tracker core.

Nothing in the core is fatal. Each category names a way input or state can be
wrong, and the service that meets it degrades to a safe default and logs the
category in its structured context.
"""

from enum import Enum


class ErrorCategory(Enum):
    """Categories of recoverable problems met by the tracker core."""

    INVALID_INPUT = "invalid_input"
    OUT_OF_RANGE = "out_of_range"
    MALFORMED_STATE = "malformed_state"
    UNPARSEABLE_DATE = "unparseable_date"
    STORAGE_FAILURE = "storage_failure"


class StorageError(Exception):
    """Raised by key-value store adapters when reading or writing fails."""

    category = ErrorCategory.STORAGE_FAILURE

    def __init__(self, message: str, *, key: str | None = None) -> None:
        super().__init__(message)
        self.key = key


def classify_error(exception: Exception) -> ErrorCategory:
    """Map an exception raised while handling tracker data to its category.

    Args:
        exception: The exception caught by a service

    Returns:
        The ErrorCategory used when logging the degradation
    """
    if isinstance(exception, StorageError | OSError):
        return ErrorCategory.STORAGE_FAILURE
    if isinstance(exception, OverflowError):
        return ErrorCategory.OUT_OF_RANGE
    # JSON decode errors and pydantic ValidationError are both ValueErrors
    return ErrorCategory.MALFORMED_STATE
