# schedulekit/domain/event_type.py
"""Event-type rules consumed by the slot calculator."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Optional

from .result import Result, first_failure
from .value_objects import (
    BookingWindow,
    BufferTime,
    Duration,
    MeetingLocation,
    MinimumNotice,
    Slug,
)

DEFAULT_MINIMUM_NOTICE_MINUTES = 60
DEFAULT_BOOKING_WINDOW_DAYS = 60


@dataclass(frozen=True)
class EventTypeRules:
    """
    Bookable meeting template as seen by the calculator.

    ``id`` links the rules to existing bookings: bookings carrying the same
    ``event_type_id`` count towards ``max_bookings_per_day`` and get these
    buffers applied around them.
    """

    duration: Duration
    buffer_before: BufferTime = field(default_factory=BufferTime.none)
    buffer_after: BufferTime = field(default_factory=BufferTime.none)
    minimum_notice: MinimumNotice = field(default_factory=MinimumNotice.none)
    booking_window: BookingWindow = field(default_factory=BookingWindow)
    max_bookings_per_day: Optional[int] = None
    id: Optional[str] = None
    name: Optional[str] = None
    slug: Optional[Slug] = None
    location: Optional[MeetingLocation] = None

    @classmethod
    def create(
        cls,
        duration_minutes: int,
        *,
        buffer_before_minutes: int = 0,
        buffer_after_minutes: int = 0,
        minimum_notice_minutes: int = DEFAULT_MINIMUM_NOTICE_MINUTES,
        booking_window_days: int = DEFAULT_BOOKING_WINDOW_DAYS,
        max_bookings_per_day: Optional[int] = None,
        id: Optional[str] = None,
        name: Optional[str] = None,
        slug: Optional[str] = None,
        location: Optional[MeetingLocation] = None,
    ) -> Result["EventTypeRules"]:
        """Validate raw settings and build the rules, returning the first failure."""
        duration = Duration.create(duration_minutes)
        before = BufferTime.create(buffer_before_minutes)
        after = BufferTime.create(buffer_after_minutes)
        notice = MinimumNotice.create(minimum_notice_minutes)
        window = BookingWindow.create(booking_window_days)

        failed = first_failure(duration, before, after, notice, window)
        if failed is not None:
            return Result.failure(failed.error)

        if max_bookings_per_day is not None and max_bookings_per_day < 1:
            return Result.failure("Maximum bookings per day must be at least 1.")

        slug_value: Optional[Slug] = None
        if slug is not None:
            slug_result = Slug.create(slug)
            if slug_result.is_failure:
                return Result.failure(slug_result.error)
            slug_value = slug_result.value
        elif name:
            slug_result = Slug.from_name(name)
            if slug_result.is_success:
                slug_value = slug_result.value

        return Result.success(
            cls(
                duration=duration.value,
                buffer_before=before.value,
                buffer_after=after.value,
                minimum_notice=notice.value,
                booking_window=window.value,
                max_bookings_per_day=max_bookings_per_day,
                id=id,
                name=name,
                slug=slug_value,
                location=location,
            )
        )

    @property
    def total_blocked_time(self) -> timedelta:
        """Duration plus both buffers."""
        return (
            self.duration.to_timedelta()
            + self.buffer_before.to_timedelta()
            + self.buffer_after.to_timedelta()
        )
