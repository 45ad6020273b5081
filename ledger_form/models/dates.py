"""
Calendar Data Models for Ledger Form

These models describe the values the date selector works with:
- Year and Day are plain integers
- Month is a closed enumeration with display names
- DateRange bounds which dates can be picked

DESIGN DECISION: Instants are timezone-aware datetimes with a fixed offset.
Year, month and day are always read in the instant's own offset.
We never convert between zones.
"""

from datetime import datetime
from enum import IntEnum

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field


Year = int
Day = int


class Month(IntEnum):
    """
    Calendar month, numbered 1-12.

    The integer value is what travels through select options;
    the display name is what the user reads.
    """
    JANUARY = 1
    FEBRUARY = 2
    MARCH = 3
    APRIL = 4
    MAY = 5
    JUNE = 6
    JULY = 7
    AUGUST = 8
    SEPTEMBER = 9
    OCTOBER = 10
    NOVEMBER = 11
    DECEMBER = 12

    @classmethod
    def from_int(cls, number: int) -> "Month":
        """
        Build a month from any integer.

        NOTE: This wraps instead of rejecting values outside 1-12:
        0 -> December, 13 -> January, 24 -> December, 678 -> June.
        Callers passing arbitrary integers get a month back, never an error.
        """
        return cls(((number - 1) % 12) + 1)

    @property
    def display_name(self) -> str:
        """Human-readable month name (e.g. "February")."""
        return self.name.capitalize()

    def __str__(self) -> str:
        return self.display_name


class DateRange(BaseModel):
    """
    Inclusive [start, end] range of selectable instants.

    CRITICAL: start <= end is NOT enforced. An inverted range is valid
    data meaning "no selectable date"; everything built on top of it
    degrades to empty results instead of failing.
    """
    model_config = ConfigDict(frozen=True)

    start: AwareDatetime = Field(
        ...,
        description="First selectable instant (inclusive)"
    )
    end: AwareDatetime = Field(
        ...,
        description="Last selectable instant (inclusive)"
    )

    @classmethod
    def between(cls, start: datetime, end: datetime) -> "DateRange":
        """Shorthand constructor."""
        return cls(start=start, end=end)

    @property
    def is_inverted(self) -> bool:
        """True when start is after end (nothing can be selected)."""
        return self.start > self.end
