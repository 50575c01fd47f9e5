"""
schedulekit: a stateless slot calculator for a scheduling service.

Given an event type's rules, a host's weekly template, date overrides and
existing bookings, it lists bookable slots for a date and answers whether a
proposed start time can be booked.
"""

from .domain import (
    BookingWindow,
    BufferTime,
    Duration,
    EventTypeRules,
    MeetingLocation,
    MinimumNotice,
    Result,
    Slug,
    TimeSlot,
)
from .schemas import AvailabilityOverride, Booking, CalculatedSlot, WeeklyAvailability
from .services import AvailabilityService, SlotCalculator, TimezoneService

__version__ = "0.1.0"

__all__ = [
    "AvailabilityOverride",
    "AvailabilityService",
    "Booking",
    "BookingWindow",
    "BufferTime",
    "CalculatedSlot",
    "Duration",
    "EventTypeRules",
    "MeetingLocation",
    "MinimumNotice",
    "Result",
    "SlotCalculator",
    "Slug",
    "TimeSlot",
    "TimezoneService",
    "WeeklyAvailability",
]
