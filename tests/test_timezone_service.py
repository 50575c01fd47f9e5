"""Tests for TimezoneService."""

from datetime import date, datetime, time, timezone

import pytest
import pytz

from schedulekit.core.exceptions import InvalidTimezoneException
from schedulekit.services.timezone_service import NonExistentLocalTimeError, TimezoneService

NEW_YORK = "America/New_York"


class TestGetTimezone:
    """Strict zone lookup."""

    def test_known_zone(self):
        assert TimezoneService.get_timezone(NEW_YORK).zone == NEW_YORK

    @pytest.mark.parametrize("tz_str", ["Invalid/Timezone", "", None])
    def test_unknown_zone_raises(self, tz_str):
        with pytest.raises(InvalidTimezoneException) as exc_info:
            TimezoneService.get_timezone(tz_str)
        assert exc_info.value.code == "INVALID_TIMEZONE"

    def test_is_valid_timezone(self):
        assert TimezoneService.is_valid_timezone("Europe/Berlin")
        assert not TimezoneService.is_valid_timezone("Europe/Atlantis")
        assert not TimezoneService.is_valid_timezone(None)


class TestLocalToUtc:
    """Test local_to_utc conversion."""

    def test_est_to_utc_winter(self):
        """11:00 AM EST (winter) = 16:00 UTC."""
        result = TimezoneService.local_to_utc(date(2025, 12, 25), time(11, 0), NEW_YORK)
        assert result == datetime(2025, 12, 25, 16, 0, tzinfo=timezone.utc)

    def test_edt_to_utc_summer(self):
        """11:00 AM EDT (summer) = 15:00 UTC."""
        result = TimezoneService.local_to_utc(date(2025, 6, 15), time(11, 0), NEW_YORK)
        assert result.hour == 15

    def test_dst_spring_forward_gap_raises(self):
        """Time during spring forward gap raises NonExistentLocalTimeError."""
        with pytest.raises(NonExistentLocalTimeError, match="does not exist"):
            TimezoneService.local_to_utc(date(2025, 3, 9), time(2, 30), NEW_YORK)

    def test_gap_error_is_a_value_error(self):
        assert issubclass(NonExistentLocalTimeError, ValueError)

    def test_dst_fall_back_uses_first_occurrence(self):
        """01:30 on fall-back day exists twice; the EDT occurrence comes first."""
        result = TimezoneService.local_to_utc(date(2025, 11, 2), time(1, 30), NEW_YORK)
        assert (result.hour, result.minute) == (5, 30)

    def test_unknown_zone_raises(self):
        with pytest.raises(InvalidTimezoneException):
            TimezoneService.local_to_utc(date(2025, 12, 25), time(11, 0), "Invalid/Timezone")


class TestBoundaryToUtc:
    """Interval boundaries as minutes after local midnight."""

    tz = pytz.timezone(NEW_YORK)

    def test_midnight_end_is_next_day(self):
        result = TimezoneService.boundary_to_utc(date(2025, 1, 6), 1440, self.tz)
        assert result == datetime(2025, 1, 7, 5, 0, tzinfo=timezone.utc)

    def test_gap_boundary_moves_to_gap_end(self):
        result = TimezoneService.boundary_to_utc(date(2025, 3, 9), 150, self.tz)
        assert result == datetime(2025, 3, 9, 7, 0, tzinfo=timezone.utc)

    def test_repeated_boundary_takes_earlier_instant(self):
        result = TimezoneService.boundary_to_utc(date(2025, 11, 2), 90, self.tz)
        assert result == datetime(2025, 11, 2, 5, 30, tzinfo=timezone.utc)


class TestUtcToLocal:
    """Test utc_to_local conversion."""

    def test_utc_to_est(self):
        """16:00 UTC = 11:00 AM EST."""
        utc_dt = datetime(2025, 12, 25, 16, 0, tzinfo=timezone.utc)
        assert TimezoneService.utc_to_local(utc_dt, NEW_YORK).hour == 11

    def test_naive_input_is_utc(self):
        result = TimezoneService.utc_to_local(datetime(2025, 12, 25, 16, 0), "America/Los_Angeles")
        assert result.hour == 8

    def test_local_date_of_crosses_midnight(self):
        """02:00 UTC on Jan 7 is still Jan 6 in New York."""
        utc_dt = datetime(2025, 1, 7, 2, 0, tzinfo=timezone.utc)
        assert TimezoneService.local_date_of(utc_dt, NEW_YORK) == date(2025, 1, 6)

    def test_ensure_utc_converts_offsets(self):
        aware = pytz.timezone("Asia/Tokyo").localize(datetime(2025, 1, 6, 9, 0))
        result = TimezoneService.ensure_utc(aware)
        assert result == datetime(2025, 1, 6, 0, 0, tzinfo=timezone.utc)
        assert result.tzinfo == timezone.utc


class TestValidateTimeExists:
    """Test validate_time_exists."""

    def test_normal_time(self):
        assert TimezoneService.validate_time_exists(date(2025, 3, 9), time(4, 0), NEW_YORK) == (
            True,
            None,
        )

    def test_gap_time(self):
        ok, message = TimezoneService.validate_time_exists(date(2025, 3, 9), time(2, 15), NEW_YORK)
        assert ok is False
        assert "Daylight Saving Time" in message


class TestFormatForDisplay:
    """Test format_for_display."""

    def test_with_abbreviation(self):
        utc_dt = datetime(2025, 12, 25, 19, 0, tzinfo=timezone.utc)
        assert (
            TimezoneService.format_for_display(utc_dt, NEW_YORK) == "Dec 25, 2025 at 02:00 PM EST"
        )

    def test_without_abbreviation(self):
        utc_dt = datetime(2025, 7, 4, 19, 0, tzinfo=timezone.utc)
        assert (
            TimezoneService.format_for_display(utc_dt, NEW_YORK, include_tz_abbrev=False)
            == "Jul 04, 2025 at 03:00 PM"
        )
