# schedulekit/schemas/slots.py
"""
Slot output schemas.

``CalculatedSlot`` is what the calculator returns. The remaining models are
what ``AvailabilityService`` hands to guest-facing callers.
"""

import datetime
from typing import List, Optional

from pydantic import ConfigDict, Field

from ..core.enums import DayOfWeek
from ._strict_base import StrictModel

DateType = datetime.date
DateTimeType = datetime.datetime


class CalculatedSlot(StrictModel):
    """A bookable window in both host-local and UTC form."""

    start_time: DateTimeType = Field(description="Slot start in the host timezone")
    end_time: DateTimeType = Field(description="Slot end in the host timezone")
    start_time_utc: DateTimeType
    end_time_utc: DateTimeType
    is_available: bool = True


class GuestSlot(StrictModel):
    """A slot rendered in the guest's timezone."""

    start_time: str = Field(description="Start time in HH:MM format, guest timezone")
    end_time: str = Field(description="End time in HH:MM format, guest timezone")
    start_time_utc: DateTimeType
    end_time_utc: DateTimeType
    is_available: bool = True

    model_config = ConfigDict(
        extra="forbid",
        validate_assignment=True,
        json_schema_extra={
            "example": {
                "start_time": "09:00",
                "end_time": "09:30",
                "start_time_utc": "2026-10-19T13:00:00Z",
                "end_time_utc": "2026-10-19T13:30:00Z",
                "is_available": True,
            }
        },
    )


class AvailableSlotsResponse(StrictModel):
    """Slots for one host-local date."""

    date: DateType
    timezone: str = Field(description="Timezone the HH:MM strings are rendered in")
    event_type_id: Optional[str] = None
    slots: List[GuestSlot] = Field(default_factory=list)


class DateAvailability(StrictModel):
    """Whether a host-local date has any bookable slot."""

    date: DateType
    day_of_week: DayOfWeek
    has_availability: bool
    available_slot_count: int = Field(ge=0)


class AvailableDatesResponse(StrictModel):
    """Per-date availability across the booking window."""

    event_type_id: Optional[str] = None
    from_date: DateType
    to_date: DateType
    timezone: str
    dates: List[DateAvailability] = Field(default_factory=list)
