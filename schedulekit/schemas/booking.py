"""Existing bookings as the calculator sees them."""

from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

from pydantic import Field, field_validator

from ..core.enums import BookingStatus
from ._strict_base import SnapshotModel


class Booking(SnapshotModel):
    """
    A booking already on the host's calendar.

    Buffers are optional: when absent the calculator falls back to the event
    type's buffers if ``event_type_id`` matches, otherwise to the exact range.
    """

    id: Optional[str] = None
    start_time_utc: datetime
    end_time_utc: datetime
    status: BookingStatus = BookingStatus.CONFIRMED
    event_type_id: Optional[str] = None
    buffer_before_minutes: Optional[int] = Field(default=None, ge=0)
    buffer_after_minutes: Optional[int] = Field(default=None, ge=0)

    @field_validator("start_time_utc", "end_time_utc")
    @classmethod
    def normalize_to_utc(cls, v: datetime) -> datetime:
        """Store aware UTC datetimes; naive values are taken as UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)

    @property
    def occupies_time(self) -> bool:
        return self.status == BookingStatus.CONFIRMED

    def occupied_window(
        self, buffer_before: timedelta = timedelta(0), buffer_after: timedelta = timedelta(0)
    ) -> Tuple[datetime, datetime]:
        """``[start - before, end + after)`` in UTC."""
        return (self.start_time_utc - buffer_before, self.end_time_utc + buffer_after)
