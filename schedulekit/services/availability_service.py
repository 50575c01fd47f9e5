# schedulekit/services/availability_service.py
"""
Availability Service for schedulekit

Guest-facing wrapper around SlotCalculator:
- Slots for one date rendered in the guest's timezone
- Per-date availability across the booking window
- The pre-booking / reschedule gate, which raises typed errors

Callers load the event type, template, overrides and bookings; this service
never reads storage.
"""

from datetime import date, datetime, timedelta, timezone
from typing import List, Optional, Sequence

from ..core.config import settings
from ..core.enums import DayOfWeek
from ..core.exceptions import (
    BookingConflictException,
    InsufficientNoticeException,
    OutsideBookingWindowException,
)
from ..domain.event_type import EventTypeRules
from ..monitoring.prometheus_metrics import prometheus_metrics
from ..schemas.availability import AvailabilityOverride, WeeklyAvailability
from ..schemas.booking import Booking
from ..schemas.slots import (
    AvailableDatesResponse,
    AvailableSlotsResponse,
    CalculatedSlot,
    DateAvailability,
    GuestSlot,
)
from .base import BaseService
from .slot_calculator import SlotCalculator
from .timezone_service import TimezoneService


class AvailabilityService(BaseService):
    """
    Service for guest-facing availability queries.

    All methods take an optional ``now`` so that callers (and tests) can pin
    the reference instant.
    """

    def __init__(self, calculator: Optional[SlotCalculator] = None):
        super().__init__()
        self.calculator = calculator or SlotCalculator()

    @BaseService.measure_operation("get_available_slots")
    def get_available_slots(
        self,
        event_type: EventTypeRules,
        weekly_availability: Sequence[WeeklyAvailability],
        overrides: Sequence[AvailabilityOverride],
        existing_bookings: Sequence[Booking],
        target_date: date,
        host_timezone: str,
        guest_timezone: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> AvailableSlotsResponse:
        """
        Slots for a host-local date, with HH:MM strings in the guest timezone.

        Args:
            guest_timezone: IANA zone for display; defaults to settings.default_timezone

        Raises:
            OutsideBookingWindowException: date is before host-local today or past the window
            SchedulingConfigurationException: malformed records or unknown timezone
        """
        now_utc = self._resolve_now(now)
        display_tz_name = guest_timezone or settings.default_timezone
        display_tz = TimezoneService.get_timezone(display_tz_name)

        host_today = TimezoneService.local_date_of(now_utc, host_timezone)
        last_date = host_today + timedelta(days=event_type.booking_window.days)
        if target_date < host_today or target_date > last_date:
            raise OutsideBookingWindowException(
                f"{target_date.isoformat()} is outside the booking window",
                details={
                    "date": target_date.isoformat(),
                    "earliest_date": host_today.isoformat(),
                    "latest_date": last_date.isoformat(),
                },
            )

        slots = self.calculator.calculate_slots_for_date(
            event_type,
            weekly_availability,
            overrides,
            existing_bookings,
            target_date,
            host_timezone,
            now=now_utc,
        )
        guest_slots = [
            GuestSlot(
                start_time=slot.start_time_utc.astimezone(display_tz).strftime("%H:%M"),
                end_time=slot.end_time_utc.astimezone(display_tz).strftime("%H:%M"),
                start_time_utc=slot.start_time_utc,
                end_time_utc=slot.end_time_utc,
                is_available=slot.is_available,
            )
            for slot in slots
        ]

        if settings.metrics_enabled:
            prometheus_metrics.record_slots_generated("available_slots", len(guest_slots))
        self.logger.debug(
            f"{len(guest_slots)} slots on {target_date} for event type {event_type.id}"
        )

        return AvailableSlotsResponse(
            date=target_date,
            timezone=display_tz_name,
            event_type_id=event_type.id,
            slots=guest_slots,
        )

    @BaseService.measure_operation("get_available_dates")
    def get_available_dates(
        self,
        event_type: EventTypeRules,
        weekly_availability: Sequence[WeeklyAvailability],
        overrides: Sequence[AvailabilityOverride],
        existing_bookings: Sequence[Booking],
        host_timezone: str,
        now: Optional[datetime] = None,
    ) -> AvailableDatesResponse:
        """
        Per-date availability from host-local today through the end of the booking window.
        """
        now_utc = self._resolve_now(now)
        host_today = TimezoneService.local_date_of(now_utc, host_timezone)
        last_date = host_today + timedelta(days=event_type.booking_window.days)

        dates: List[DateAvailability] = []
        total_slots = 0
        current = host_today
        while current <= last_date:
            slots = self.calculator.calculate_slots_for_date(
                event_type,
                weekly_availability,
                overrides,
                existing_bookings,
                current,
                host_timezone,
                now=now_utc,
            )
            total_slots += len(slots)
            dates.append(
                DateAvailability(
                    date=current,
                    day_of_week=DayOfWeek.from_date(current),
                    has_availability=bool(slots),
                    available_slot_count=len(slots),
                )
            )
            current += timedelta(days=1)

        if settings.metrics_enabled:
            prometheus_metrics.record_slots_generated("available_dates", total_slots)

        return AvailableDatesResponse(
            event_type_id=event_type.id,
            from_date=host_today,
            to_date=last_date,
            timezone=host_timezone,
            dates=dates,
        )

    @BaseService.measure_operation("ensure_slot_available")
    def ensure_slot_available(
        self,
        event_type: EventTypeRules,
        weekly_availability: Sequence[WeeklyAvailability],
        overrides: Sequence[AvailabilityOverride],
        existing_bookings: Sequence[Booking],
        proposed_start_utc: datetime,
        host_timezone: str,
        now: Optional[datetime] = None,
    ) -> CalculatedSlot:
        """
        Gate a booking or reschedule on ``proposed_start_utc``.

        Returns:
            The matching slot

        Raises:
            InsufficientNoticeException: start is inside the minimum notice period
            OutsideBookingWindowException: start is beyond the booking window
            BookingConflictException: start is not a listed slot (booked, blocked or off-grid)
        """
        now_utc = self._resolve_now(now)
        proposed = TimezoneService.ensure_utc(proposed_start_utc)

        lead = proposed - now_utc
        if lead < event_type.minimum_notice.to_timedelta():
            self._record_check(False)
            raise InsufficientNoticeException(
                required_minutes=event_type.minimum_notice.minutes,
                provided_minutes=round(lead.total_seconds() / 60, 2),
            )

        if lead > event_type.booking_window.to_timedelta():
            self._record_check(False)
            raise OutsideBookingWindowException(
                f"Bookings can only be made up to {event_type.booking_window} in advance",
                details={
                    "proposed_start_utc": proposed.isoformat(),
                    "booking_window_days": event_type.booking_window.days,
                },
            )

        slot = self.calculator.find_slot(
            event_type,
            weekly_availability,
            overrides,
            existing_bookings,
            proposed,
            host_timezone,
            now=now_utc,
        )
        if slot is not None:
            self._record_check(True)
            return slot

        self._record_check(False)
        local_date = TimezoneService.local_date_of(proposed, host_timezone)
        self.log_operation(
            "slot_rejected",
            proposed_start_utc=proposed.isoformat(),
            event_type_id=event_type.id,
            host_timezone=host_timezone,
        )
        raise BookingConflictException(
            details={
                "proposed_start_utc": proposed.isoformat(),
                "host_timezone": host_timezone,
                "date": local_date.isoformat(),
            }
        )

    @staticmethod
    def _resolve_now(now: Optional[datetime]) -> datetime:
        if now is None:
            return datetime.now(timezone.utc)
        return TimezoneService.ensure_utc(now)

    @staticmethod
    def _record_check(available: bool) -> None:
        if settings.metrics_enabled:
            prometheus_metrics.record_slot_check(available)
