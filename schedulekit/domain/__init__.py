"""Scheduling domain model: value objects and the Result type."""

from .event_type import EventTypeRules
from .result import Result, first_failure
from .value_objects import (
    BookingWindow,
    BufferTime,
    Duration,
    MeetingLocation,
    MinimumNotice,
    Slug,
    TimeSlot,
)

__all__ = [
    "BookingWindow",
    "BufferTime",
    "Duration",
    "EventTypeRules",
    "MeetingLocation",
    "MinimumNotice",
    "Result",
    "Slug",
    "TimeSlot",
    "first_failure",
]
