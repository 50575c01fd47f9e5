# schedulekit/services/slot_calculator.py
"""
Slot Calculator for the scheduling engine.

Pure computation over caller-supplied snapshots:
- Builds the host's local availability for a date (weekly template + override)
- Converts interval boundaries to UTC with the IANA database
- Steps through each interval at the event duration
- Drops candidates that collide with confirmed bookings (buffers included),
  violate minimum notice, or fall beyond the booking window

The listing and the single-slot check share one code path, so they can never
disagree. Nothing here touches storage, and no state is kept between calls.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

import pytz

from ..core.enums import DayOfWeek
from ..core.exceptions import (
    DuplicateOverrideException,
    InvalidAvailabilityException,
    InvalidBookingException,
)
from ..domain.event_type import EventTypeRules
from ..schemas.availability import AvailabilityOverride, WeeklyAvailability
from ..schemas.booking import Booking
from ..schemas.slots import CalculatedSlot
from ..utils.intervals import (
    Interval,
    merge_intervals,
    overlaps,
    subtract_intervals,
    union_intervals,
)
from ..utils.time_utils import format_time_range, is_whole_minute, time_to_minutes
from .timezone_service import TimezoneService

UtcInterval = Tuple[datetime, datetime]


class SlotCalculator:
    """
    Computes bookable slots for a single host and event type.

    Instances hold no state; one calculator can serve any number of
    concurrent callers.
    """

    def calculate_slots_for_date(
        self,
        event_type: EventTypeRules,
        weekly_availability: Sequence[WeeklyAvailability],
        overrides: Sequence[AvailabilityOverride],
        existing_bookings: Sequence[Booking],
        target_date: date,
        host_timezone: str,
        now: Optional[datetime] = None,
    ) -> List[CalculatedSlot]:
        """
        Available slots on a host-local calendar date, ascending by start.

        Args:
            event_type: Duration, buffers, notice, window and daily cap
            weekly_availability: Host's weekly template (one record per weekday)
            overrides: Host's date overrides (only ``target_date`` is consulted)
            existing_bookings: Host's bookings around the date; only confirmed ones block
            target_date: Calendar date in the host timezone
            host_timezone: IANA zone name, e.g. "America/New_York"
            now: Reference instant for notice/window checks (defaults to current UTC)

        Returns:
            Slots with ``is_available=True``; empty when the day has no availability

        Raises:
            SchedulingConfigurationException: malformed records or unknown timezone
        """
        tz = TimezoneService.get_timezone(host_timezone)
        now_utc = TimezoneService.ensure_utc(now) if now else datetime.now(timezone.utc)

        weekly = self._weekly_for_date(weekly_availability, target_date)
        day_override = self._override_for_date(overrides, target_date)
        confirmed = self._confirmed_bookings(existing_bookings)

        if day_override is not None and day_override.is_full_day_block:
            return []

        if self._daily_cap_reached(event_type, confirmed, target_date, tz):
            return []

        local_intervals = self._raw_local_intervals(weekly, day_override)
        if not local_intervals:
            return []

        earliest_start = now_utc + event_type.minimum_notice.to_timedelta()
        latest_start = now_utc + event_type.booking_window.to_timedelta()
        duration = event_type.duration.to_timedelta()

        slots: List[CalculatedSlot] = []
        for interval_start, interval_end in self._to_utc_intervals(local_intervals, target_date, tz):
            for slot_start in self._candidate_starts(interval_start, interval_end, duration):
                if slot_start < earliest_start or slot_start > latest_start:
                    continue
                if self._conflicts_with_bookings(slot_start, event_type, confirmed):
                    continue
                slot_end = slot_start + duration
                slots.append(
                    CalculatedSlot(
                        start_time=slot_start.astimezone(tz),
                        end_time=slot_end.astimezone(tz),
                        start_time_utc=slot_start,
                        end_time_utc=slot_end,
                        is_available=True,
                    )
                )

        slots.sort(key=lambda s: s.start_time_utc)
        return slots

    def find_slot(
        self,
        event_type: EventTypeRules,
        weekly_availability: Sequence[WeeklyAvailability],
        overrides: Sequence[AvailabilityOverride],
        existing_bookings: Sequence[Booking],
        proposed_start_utc: datetime,
        host_timezone: str,
        now: Optional[datetime] = None,
    ) -> Optional[CalculatedSlot]:
        """
        The listed slot starting exactly at ``proposed_start_utc``, or None.

        The instant is mapped to its host-local date and that date's listing
        is searched. Naive datetimes are taken as UTC.
        """
        proposed = TimezoneService.ensure_utc(proposed_start_utc)
        local_date = TimezoneService.local_date_of(proposed, host_timezone)

        slots = self.calculate_slots_for_date(
            event_type,
            weekly_availability,
            overrides,
            existing_bookings,
            local_date,
            host_timezone,
            now=now,
        )
        for slot in slots:
            if slot.start_time_utc == proposed and slot.is_available:
                return slot
        return None

    def is_slot_available(
        self,
        event_type: EventTypeRules,
        weekly_availability: Sequence[WeeklyAvailability],
        overrides: Sequence[AvailabilityOverride],
        existing_bookings: Sequence[Booking],
        proposed_start_utc: datetime,
        host_timezone: str,
        now: Optional[datetime] = None,
    ) -> bool:
        """
        Whether ``proposed_start_utc`` is one of the listed slots for its host-local date.

        Used as the pre-booking gate and for reschedule validation.
        """
        return (
            self.find_slot(
                event_type,
                weekly_availability,
                overrides,
                existing_bookings,
                proposed_start_utc,
                host_timezone,
                now=now,
            )
            is not None
        )

    # Input resolution

    @staticmethod
    def _weekly_for_date(
        weekly_availability: Sequence[WeeklyAvailability], target_date: date
    ) -> Optional[WeeklyAvailability]:
        """Validate the template and return the record for the date's weekday."""
        seen: Dict[DayOfWeek, WeeklyAvailability] = {}
        for record in weekly_availability:
            if record.day_of_week in seen:
                raise InvalidAvailabilityException(
                    f"Multiple weekly availability records for {record.day_of_week.name.title()}",
                    details={"day_of_week": int(record.day_of_week)},
                )
            seen[record.day_of_week] = record

            if record.is_enabled and not (
                is_whole_minute(record.start_time) and is_whole_minute(record.end_time)
            ):
                raise InvalidAvailabilityException(
                    "Weekly availability times must be whole minutes",
                    details={
                        "day_of_week": int(record.day_of_week),
                        "start_time": record.start_time.isoformat(),
                        "end_time": record.end_time.isoformat(),
                    },
                )
            if record.is_enabled and record.duration_minutes <= 0:
                raise InvalidAvailabilityException(
                    "Weekly availability end time must be after start time",
                    details={
                        "day_of_week": int(record.day_of_week),
                        "range": format_time_range(record.start_time, record.end_time),
                    },
                )

        return seen.get(DayOfWeek.from_date(target_date))

    @staticmethod
    def _override_for_date(
        overrides: Sequence[AvailabilityOverride], target_date: date
    ) -> Optional[AvailabilityOverride]:
        matching = [o for o in overrides if o.specific_date == target_date]
        if not matching:
            return None
        if len(matching) > 1:
            raise DuplicateOverrideException(target_date.isoformat(), len(matching))

        override = matching[0]
        if override.is_full_day_block:
            return override

        if override.start_time is None or override.end_time is None:
            raise InvalidAvailabilityException(
                "Override must set both start and end time unless it blocks the full day",
                details={"date": target_date.isoformat()},
            )
        if not (is_whole_minute(override.start_time) and is_whole_minute(override.end_time)):
            raise InvalidAvailabilityException(
                "Override times must be whole minutes",
                details={
                    "date": target_date.isoformat(),
                    "start_time": override.start_time.isoformat(),
                    "end_time": override.end_time.isoformat(),
                },
            )
        start = time_to_minutes(override.start_time)
        end = time_to_minutes(override.end_time, is_end_time=True)
        if end <= start:
            raise InvalidAvailabilityException(
                "Override end time must be after start time",
                details={
                    "date": target_date.isoformat(),
                    "range": format_time_range(override.start_time, override.end_time),
                },
            )
        return override

    @staticmethod
    def _confirmed_bookings(existing_bookings: Sequence[Booking]) -> List[Booking]:
        confirmed = []
        for booking in existing_bookings:
            if not booking.occupies_time:
                continue
            if booking.end_time_utc <= booking.start_time_utc:
                raise InvalidBookingException(
                    "Booking end time must be after start time",
                    details={
                        "booking_id": booking.id,
                        "start_time_utc": booking.start_time_utc.isoformat(),
                        "end_time_utc": booking.end_time_utc.isoformat(),
                    },
                )
            confirmed.append(booking)
        return confirmed

    # Interval construction

    @staticmethod
    def _raw_local_intervals(
        weekly: Optional[WeeklyAvailability],
        day_override: Optional[AvailabilityOverride],
    ) -> List[Interval]:
        """Local minute-of-day intervals after applying the override."""
        intervals: List[Interval] = []
        if weekly is not None and weekly.is_enabled:
            intervals.append(
                (
                    time_to_minutes(weekly.start_time),
                    time_to_minutes(weekly.end_time, is_end_time=True),
                )
            )

        if day_override is None:
            return merge_intervals(intervals)

        override_range = (
            time_to_minutes(day_override.start_time),
            time_to_minutes(day_override.end_time, is_end_time=True),
        )
        if day_override.is_extra_availability:
            return union_intervals(intervals, [override_range])
        return subtract_intervals(intervals, [override_range])

    @staticmethod
    def _to_utc_intervals(
        local_intervals: Sequence[Interval], target_date: date, tz: pytz.BaseTzInfo
    ) -> List[UtcInterval]:
        """Convert each boundary independently so DST shifts inside an interval are honoured."""
        utc_intervals: List[UtcInterval] = []
        for start_minutes, end_minutes in local_intervals:
            start_utc = TimezoneService.boundary_to_utc(target_date, start_minutes, tz)
            end_utc = TimezoneService.boundary_to_utc(target_date, end_minutes, tz)
            if end_utc > start_utc:
                utc_intervals.append((start_utc, end_utc))
        return utc_intervals

    @staticmethod
    def _candidate_starts(
        interval_start: datetime, interval_end: datetime, duration: timedelta
    ) -> Iterator[datetime]:
        """Back-to-back starts; the last one must finish by ``interval_end``."""
        current = interval_start
        while current + duration <= interval_end:
            yield current
            current += duration

    # Filters

    @staticmethod
    def _booking_buffers(
        booking: Booking, event_type: EventTypeRules
    ) -> Tuple[timedelta, timedelta]:
        """
        Buffers around an existing booking.

        Explicit minutes on the booking win; otherwise a booking of this same
        event type gets its buffers; anything else is taken as exact.
        """
        same_event_type = event_type.id is not None and booking.event_type_id == event_type.id
        before = booking.buffer_before_minutes
        after = booking.buffer_after_minutes
        if before is None:
            before = event_type.buffer_before.minutes if same_event_type else 0
        if after is None:
            after = event_type.buffer_after.minutes if same_event_type else 0
        return timedelta(minutes=before), timedelta(minutes=after)

    def _conflicts_with_bookings(
        self,
        slot_start: datetime,
        event_type: EventTypeRules,
        confirmed: Sequence[Booking],
    ) -> bool:
        occupied_start = slot_start - event_type.buffer_before.to_timedelta()
        occupied_end = (
            slot_start + event_type.duration.to_timedelta() + event_type.buffer_after.to_timedelta()
        )
        for booking in confirmed:
            booking_start, booking_end = booking.occupied_window(
                *self._booking_buffers(booking, event_type)
            )
            if overlaps(occupied_start, occupied_end, booking_start, booking_end):
                return True
        return False

    @staticmethod
    def _daily_cap_reached(
        event_type: EventTypeRules,
        confirmed: Sequence[Booking],
        target_date: date,
        tz: pytz.BaseTzInfo,
    ) -> bool:
        """
        True when ``max_bookings_per_day`` confirmed bookings of this event
        type already start on the host-local date.

        Bookings without an event type id (or rules without one) are counted,
        since the caller is expected to pass only relevant bookings.
        """
        cap = event_type.max_bookings_per_day
        if cap is None:
            return False

        count = 0
        for booking in confirmed:
            if (
                event_type.id is not None
                and booking.event_type_id is not None
                and booking.event_type_id != event_type.id
            ):
                continue
            if booking.start_time_utc.astimezone(tz).date() == target_date:
                count += 1
        return count >= cap
