# schedulekit/core/enums.py
"""
Core enums for the scheduling engine.

Values are stable strings/integers so records loaded from any store can be
validated directly into the schemas.
"""

from datetime import date
from enum import Enum, IntEnum


class DayOfWeek(IntEnum):
    """
    Day of week as stored on weekly availability records.

    Numbering starts at Sunday (0) and ends at Saturday (6).
    """

    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6

    @classmethod
    def from_date(cls, value: date) -> "DayOfWeek":
        # date.weekday() is Monday=0
        return cls((value.weekday() + 1) % 7)

    @property
    def is_weekend(self) -> bool:
        return self in (DayOfWeek.SATURDAY, DayOfWeek.SUNDAY)


class BookingStatus(str, Enum):
    """Lifecycle states of a booking. Only CONFIRMED occupies time."""

    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"
    NO_SHOW = "no_show"


class LocationType(str, Enum):
    """Where a meeting takes place."""

    IN_PERSON = "in_person"
    PHONE = "phone"
    ZOOM = "zoom"
    GOOGLE_MEET = "google_meet"
    MICROSOFT_TEAMS = "microsoft_teams"
    CUSTOM = "custom"
