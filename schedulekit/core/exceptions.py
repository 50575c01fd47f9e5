# schedulekit/core/exceptions.py
"""
Domain-specific exceptions for the scheduling engine.

Two families matter to callers:

- Configuration errors (``SchedulingConfigurationException`` and subclasses)
  mean the supplied availability, override, booking or timezone data is
  corrupt. They are never used to signal "no slots".
- Booking-gate errors (``BookingConflictException`` and friends) are raised
  only by the validation helpers callers run right before persisting a
  booking.
"""

from typing import Any, Dict, Optional


class DomainException(Exception):
    """Base exception for all domain-specific errors."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Serializable form for callers that surface errors over a wire."""
        return {
            "message": self.message,
            "code": self.code,
            "details": self.details,
        }


class ValidationException(DomainException):
    """Raised when business validation fails."""


class ConflictException(DomainException):
    """Raised when there's a conflict with existing data."""


class BusinessRuleException(DomainException):
    """Raised when a business rule is violated."""


class SchedulingConfigurationException(DomainException):
    """
    Raised when scheduling inputs are malformed.

    Distinct from an empty result: a fully booked day returns ``[]``, while
    corrupt configuration raises this (or a subclass).
    """


# Specific configuration errors


class InvalidTimezoneException(SchedulingConfigurationException):
    """Raised when a timezone identifier is not in the IANA database."""

    def __init__(self, timezone_str: Optional[str]):
        super().__init__(
            message=f"Unknown timezone identifier: {timezone_str!r}",
            code="INVALID_TIMEZONE",
            details={"timezone": timezone_str},
        )


class InvalidAvailabilityException(SchedulingConfigurationException):
    """Raised when a weekly availability or override record is malformed."""

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            code="INVALID_AVAILABILITY",
            details=details or {},
        )


class DuplicateOverrideException(SchedulingConfigurationException):
    """Raised when more than one override exists for the same date."""

    def __init__(self, specific_date: str, count: int):
        super().__init__(
            message=f"Expected at most one override on {specific_date}, found {count}",
            code="DUPLICATE_OVERRIDE",
            details={"date": specific_date, "count": count},
        )


class InvalidBookingException(SchedulingConfigurationException):
    """Raised when an existing booking has an impossible time range."""

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            code="INVALID_BOOKING",
            details=details or {},
        )


# Booking gate errors


class BookingConflictException(ConflictException):
    """Raised when a booking conflicts with existing bookings."""

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message or "This time slot conflicts with an existing booking",
            code="BOOKING_CONFLICT",
            details=details or {},
        )


class InsufficientNoticeException(BusinessRuleException):
    """Raised when booking doesn't meet minimum advance notice."""

    def __init__(self, required_minutes: int, provided_minutes: float):
        super().__init__(
            message=f"Bookings must be made at least {required_minutes} minutes in advance",
            code="INSUFFICIENT_NOTICE",
            details={
                "required_minutes": required_minutes,
                "provided_minutes": provided_minutes,
            },
        )


class OutsideBookingWindowException(BusinessRuleException):
    """Raised when a requested date or time falls outside the booking window."""

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            code="OUTSIDE_BOOKING_WINDOW",
            details=details or {},
        )
