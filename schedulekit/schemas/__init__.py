"""Pydantic records exchanged with the slot engine."""

from .availability import AvailabilityOverride, WeeklyAvailability, default_week
from .booking import Booking
from .slots import (
    AvailableDatesResponse,
    AvailableSlotsResponse,
    CalculatedSlot,
    DateAvailability,
    GuestSlot,
)

__all__ = [
    "AvailabilityOverride",
    "AvailableDatesResponse",
    "AvailableSlotsResponse",
    "Booking",
    "CalculatedSlot",
    "DateAvailability",
    "GuestSlot",
    "WeeklyAvailability",
    "default_week",
]
