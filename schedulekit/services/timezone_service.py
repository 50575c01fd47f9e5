"""
Centralized timezone handling for the scheduling engine.

Rules:
- Availability and overrides: host's wall-clock time in the host's IANA zone
- All comparisons: UTC
- Slot output: both host-local and UTC
- Unknown zones are configuration errors, never silently replaced
"""

from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Tuple

import pytz

from ..core.exceptions import InvalidTimezoneException

# Longest real-world gap is a skipped calendar day (Pacific/Apia, 2011).
_MAX_GAP_MINUTES = 48 * 60


class NonExistentLocalTimeError(ValueError):
    """Raised when a wall-clock time falls in a DST spring-forward gap."""


class TimezoneService:
    """Handles all timezone conversions consistently."""

    @staticmethod
    def is_valid_timezone(tz_str: Optional[str]) -> bool:
        return bool(tz_str) and tz_str in pytz.all_timezones_set

    @staticmethod
    def get_timezone(tz_str: Optional[str]) -> pytz.BaseTzInfo:
        """Get timezone object; raise InvalidTimezoneException when unknown."""
        if not tz_str:
            raise InvalidTimezoneException(tz_str)
        try:
            return pytz.timezone(tz_str)
        except pytz.UnknownTimeZoneError:
            raise InvalidTimezoneException(tz_str)

    @staticmethod
    def ensure_utc(dt: datetime) -> datetime:
        """Normalize to an aware UTC datetime; naive input is assumed to be UTC."""
        if dt.tzinfo is None:
            return dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(timezone.utc)

    @staticmethod
    def _localize_earliest(tz: pytz.BaseTzInfo, naive_dt: datetime) -> datetime:
        """
        Localize a wall-clock time, resolving a repeated (fall back) time to the
        earlier UTC instant.

        Raises pytz.exceptions.NonExistentTimeError for spring-forward gaps.
        """
        try:
            return tz.localize(naive_dt, is_dst=None)
        except pytz.exceptions.AmbiguousTimeError:
            first = tz.localize(naive_dt, is_dst=True)
            second = tz.localize(naive_dt, is_dst=False)
            return min(first, second, key=lambda d: d.astimezone(timezone.utc))

    @staticmethod
    def local_to_utc(booking_date: date, start_time: time, timezone_str: str) -> datetime:
        """
        Convert local date/time to UTC.

        Uses the timezone rules valid on the booking_date (not today).

        Raises:
            NonExistentLocalTimeError: If the time doesn't exist (DST spring-forward gap)
            InvalidTimezoneException: If the zone is unknown
        """
        tz = TimezoneService.get_timezone(timezone_str)
        naive_dt = datetime.combine(booking_date, start_time)

        try:
            local_dt = TimezoneService._localize_earliest(tz, naive_dt)
        except pytz.exceptions.NonExistentTimeError:
            raise NonExistentLocalTimeError(
                f"The time {start_time.strftime('%I:%M %p')} does not exist on "
                f"{booking_date} in {timezone_str} due to Daylight Saving Time."
            )

        return local_dt.astimezone(timezone.utc)

    @staticmethod
    def boundary_to_utc(local_date: date, minutes: int, tz: pytz.BaseTzInfo) -> datetime:
        """
        Convert an interval boundary (minutes after local midnight, 0-1440) to UTC.

        Repeated wall-clock times resolve to the earlier instant. A boundary
        inside a spring-forward gap moves to the first instant after the gap,
        so intervals never cover local times that do not exist.
        """
        naive_dt = datetime.combine(local_date, time.min) + timedelta(minutes=minutes)
        for shift in range(_MAX_GAP_MINUTES + 1):
            try:
                candidate = naive_dt + timedelta(minutes=shift)
                return TimezoneService._localize_earliest(tz, candidate).astimezone(timezone.utc)
            except pytz.exceptions.NonExistentTimeError:
                continue
        raise NonExistentLocalTimeError(
            f"No valid local time found after {naive_dt.isoformat()} in {tz.zone}"
        )

    @staticmethod
    def utc_to_local(utc_dt: datetime, timezone_str: str) -> datetime:
        """Convert UTC datetime to local timezone."""
        tz = TimezoneService.get_timezone(timezone_str)
        return TimezoneService.ensure_utc(utc_dt).astimezone(tz)

    @staticmethod
    def local_date_of(utc_dt: datetime, timezone_str: str) -> date:
        """Calendar date in ``timezone_str`` that contains the UTC instant."""
        return TimezoneService.utc_to_local(utc_dt, timezone_str).date()

    @staticmethod
    def validate_time_exists(
        booking_date: date, start_time: time, timezone_str: str
    ) -> Tuple[bool, Optional[str]]:
        """
        Validate that a time exists in a timezone on a given date.

        Returns:
            (is_valid, error_message)
        """
        try:
            TimezoneService.local_to_utc(booking_date, start_time, timezone_str)
            return (True, None)
        except NonExistentLocalTimeError as exc:
            return (False, str(exc))

    @staticmethod
    def format_for_display(
        utc_dt: datetime, timezone_str: str, include_tz_abbrev: bool = True
    ) -> str:
        """
        Format a UTC datetime for display in a specific timezone.

        Returns: e.g., "Dec 25, 2025 at 02:00 PM EST"
        """
        local_dt = TimezoneService.utc_to_local(utc_dt, timezone_str)

        if include_tz_abbrev:
            return local_dt.strftime("%b %d, %Y at %I:%M %p %Z")
        return local_dt.strftime("%b %d, %Y at %I:%M %p")
