# schedulekit/schemas/availability.py
"""
Availability records: the weekly template and date-specific overrides.

Times are whole minutes: the models reject seconds and microseconds on
construction. Ordering invariants (start before end, minimum window length)
are enforced by the ``create``-style factories; the slot calculator re-checks
them and raises a configuration error for records that bypassed the
factories or validation.
"""

import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from ..core.config import settings
from ..core.enums import DayOfWeek
from ..domain.result import Result
from ..utils.time_utils import format_time_range, is_whole_minute, time_to_minutes
from ._strict_base import SnapshotModel

DateType = datetime.date
TimeType = datetime.time

MIN_WINDOW_MINUTES = 15
MAX_REASON_LENGTH = 200
WHOLE_MINUTES_ERROR = "Times must be whole minutes (no seconds)."

DEFAULT_DAY_START = datetime.time(9, 0)
DEFAULT_DAY_END = datetime.time(17, 0)


def _window_minutes(start_time: TimeType, end_time: TimeType) -> int:
    return time_to_minutes(end_time, is_end_time=True) - time_to_minutes(start_time)


def _require_whole_minutes(value: Optional[TimeType]) -> Optional[TimeType]:
    if value is not None and not is_whole_minute(value):
        raise ValueError(WHOLE_MINUTES_ERROR)
    return value


class WeeklyAvailability(SnapshotModel):
    """
    Recurring availability for one day of the week.

    ``end_time`` of 00:00 means the window runs until midnight.
    """

    day_of_week: DayOfWeek = Field(description="0=Sunday ... 6=Saturday")
    start_time: TimeType
    end_time: TimeType
    is_enabled: bool = True

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_whole_minutes(cls, v: TimeType) -> TimeType:
        return _require_whole_minutes(v)

    @classmethod
    def create(
        cls,
        day_of_week: DayOfWeek,
        start_time: TimeType,
        end_time: TimeType,
        is_enabled: bool = True,
    ) -> Result["WeeklyAvailability"]:
        if not (is_whole_minute(start_time) and is_whole_minute(end_time)):
            return Result.failure(WHOLE_MINUTES_ERROR)
        window = _window_minutes(start_time, end_time)
        if window <= 0:
            return Result.failure("End time must be after start time.")
        if window < MIN_WINDOW_MINUTES:
            return Result.failure(
                f"Availability window must be at least {MIN_WINDOW_MINUTES} minutes."
            )
        return Result.success(
            cls(
                day_of_week=day_of_week,
                start_time=start_time,
                end_time=end_time,
                is_enabled=is_enabled,
            )
        )

    @property
    def duration_minutes(self) -> int:
        return _window_minutes(self.start_time, self.end_time)

    def __str__(self) -> str:
        state = "Enabled" if self.is_enabled else "Disabled"
        return (
            f"{self.day_of_week.name.title()}: "
            f"{format_time_range(self.start_time, self.end_time)} ({state})"
        )


def default_week(
    start_time: TimeType = DEFAULT_DAY_START,
    end_time: TimeType = DEFAULT_DAY_END,
) -> List[WeeklyAvailability]:
    """Standard business week: weekdays enabled, weekends disabled."""
    return [
        WeeklyAvailability(
            day_of_week=day,
            start_time=start_time,
            end_time=end_time,
            is_enabled=not day.is_weekend,
        )
        for day in DayOfWeek
    ]


class AvailabilityOverride(SnapshotModel):
    """
    Date-specific exception to the weekly template.

    Three shapes:
    - full-day block: ``is_blocked`` with no times
    - time-range block: ``is_blocked`` with ``start_time``/``end_time``
    - extra availability: not blocked, with ``start_time``/``end_time``
    """

    specific_date: DateType
    start_time: Optional[TimeType] = None
    end_time: Optional[TimeType] = None
    is_blocked: bool = True
    reason: Optional[str] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_whole_minutes(cls, v: Optional[TimeType]) -> Optional[TimeType]:
        return _require_whole_minutes(v)

    @property
    def is_full_day_block(self) -> bool:
        return self.is_blocked and self.start_time is None and self.end_time is None

    @property
    def is_time_range_block(self) -> bool:
        return self.is_blocked and not self.is_full_day_block

    @property
    def is_extra_availability(self) -> bool:
        return not self.is_blocked

    def affects_time(self, value: TimeType) -> bool:
        """True when the override covers the local wall-clock time."""
        if self.is_full_day_block:
            return True
        if self.start_time is None or self.end_time is None:
            return False
        minutes = time_to_minutes(value)
        return (
            time_to_minutes(self.start_time)
            <= minutes
            < time_to_minutes(self.end_time, is_end_time=True)
        )

    @classmethod
    def _check_common(
        cls,
        specific_date: DateType,
        reason: Optional[str],
        today: Optional[DateType],
    ) -> Optional[str]:
        if settings.reject_past_override_dates:
            reference = today or datetime.datetime.now(datetime.timezone.utc).date()
            if specific_date < reference:
                return "Cannot create override for past dates."
        if reason is not None and len(reason) > MAX_REASON_LENGTH:
            return "Reason is too long."
        return None

    @classmethod
    def blocked_day(
        cls,
        specific_date: DateType,
        reason: Optional[str] = None,
        *,
        today: Optional[DateType] = None,
    ) -> Result["AvailabilityOverride"]:
        """Block the whole date (vacation, holiday)."""
        error = cls._check_common(specific_date, reason, today)
        if error:
            return Result.failure(error)
        return Result.success(
            cls(
                specific_date=specific_date,
                is_blocked=True,
                reason=reason.strip() if reason else None,
            )
        )

    @classmethod
    def blocked_range(
        cls,
        specific_date: DateType,
        start_time: TimeType,
        end_time: TimeType,
        reason: Optional[str] = None,
        *,
        today: Optional[DateType] = None,
    ) -> Result["AvailabilityOverride"]:
        """Block part of the date."""
        error = cls._check_common(specific_date, reason, today)
        if error:
            return Result.failure(error)
        if not (is_whole_minute(start_time) and is_whole_minute(end_time)):
            return Result.failure(WHOLE_MINUTES_ERROR)
        if _window_minutes(start_time, end_time) <= 0:
            return Result.failure("End time must be after start time.")
        return Result.success(
            cls(
                specific_date=specific_date,
                start_time=start_time,
                end_time=end_time,
                is_blocked=True,
                reason=reason.strip() if reason else None,
            )
        )

    @classmethod
    def extra_availability(
        cls,
        specific_date: DateType,
        start_time: TimeType,
        end_time: TimeType,
        reason: Optional[str] = None,
        *,
        today: Optional[DateType] = None,
    ) -> Result["AvailabilityOverride"]:
        """Open extra hours on the date, e.g. working a normally-off day."""
        error = cls._check_common(specific_date, reason, today)
        if error:
            return Result.failure(error)
        if not (is_whole_minute(start_time) and is_whole_minute(end_time)):
            return Result.failure(WHOLE_MINUTES_ERROR)
        window = _window_minutes(start_time, end_time)
        if window <= 0:
            return Result.failure("End time must be after start time.")
        if window < MIN_WINDOW_MINUTES:
            return Result.failure(
                f"Extra availability must be at least {MIN_WINDOW_MINUTES} minutes."
            )
        return Result.success(
            cls(
                specific_date=specific_date,
                start_time=start_time,
                end_time=end_time,
                is_blocked=False,
                reason=reason.strip() if reason else None,
            )
        )

    def __str__(self) -> str:
        reason = self.reason or "No reason"
        if self.is_full_day_block:
            return f"{self.specific_date.isoformat()}: Blocked (Full Day) - {reason}"
        kind = "Blocked" if self.is_blocked else "Available"
        time_range = (
            format_time_range(self.start_time, self.end_time)
            if self.start_time is not None and self.end_time is not None
            else "?"
        )
        return f"{self.specific_date.isoformat()}: {kind} {time_range} - {reason}"
