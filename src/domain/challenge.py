"""Challenge domain models and presentation preferences."""

from enum import StrEnum

from pydantic import BaseModel, Field


class DateLabelSetting(StrEnum):
    """How calendar cells label their dates."""

    SHORT = "short"
    LONG = "long"
    ALWAYS_MOBILE = "always-mobile"


class Challenge(BaseModel):
    """Bounds of the date-anchored challenge.

    Values are stored as given; clamping is the job of challenge_service so
    that every write path applies the same rules.
    """

    total_days: int = Field(default=100, description="Challenge length in days, clamped to [10, 365]")
    start_date: str | None = Field(
        default=None,
        description="ISO date (YYYY-MM-DD) of day 1, stored verbatim",
    )
    current_day: int = Field(default=1, description="Selected day index, clamped to [1, total_days]")


class Preferences(BaseModel):
    """Presentation-only settings passed through unchanged."""

    date_label_setting: DateLabelSetting = Field(
        default=DateLabelSetting.SHORT,
        description="Calendar date label style",
    )
    dark_mode: bool = Field(default=False, description="Dark theme toggle")
