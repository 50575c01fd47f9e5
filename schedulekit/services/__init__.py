"""Service layer: slot calculation, guest-facing availability, timezones."""

from .availability_service import AvailabilityService
from .base import BaseService
from .slot_calculator import SlotCalculator
from .timezone_service import NonExistentLocalTimeError, TimezoneService

__all__ = [
    "AvailabilityService",
    "BaseService",
    "NonExistentLocalTimeError",
    "SlotCalculator",
    "TimezoneService",
]
