# schedulekit/domain/value_objects.py
"""
Scheduling value objects.

Each value object is immutable and built through a ``create`` factory that
returns a ``Result`` instead of raising. ``from_minutes`` / ``from_days`` /
``from_string`` skip validation and are meant for values that were validated
when they were first stored.

The slot calculator trusts these values without re-validating them.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
import re
from typing import ClassVar, Optional

from ..core.enums import LocationType
from .result import Result


@dataclass(frozen=True)
class Duration:
    """Length of a meeting in minutes (15-480, 5-minute increments)."""

    MIN_MINUTES: ClassVar[int] = 15
    MAX_MINUTES: ClassVar[int] = 480

    minutes: int

    @classmethod
    def create(cls, minutes: int) -> Result["Duration"]:
        if minutes < cls.MIN_MINUTES:
            return Result.failure(f"Duration must be at least {cls.MIN_MINUTES} minutes.")
        if minutes > cls.MAX_MINUTES:
            return Result.failure(f"Duration cannot exceed {cls.MAX_MINUTES} minutes (8 hours).")
        if minutes % 5 != 0:
            return Result.failure("Duration must be in 5-minute increments.")
        return Result.success(cls(minutes))

    @classmethod
    def from_minutes(cls, minutes: int) -> "Duration":
        return cls(minutes)

    def to_timedelta(self) -> timedelta:
        return timedelta(minutes=self.minutes)

    def __str__(self) -> str:
        if self.minutes < 60:
            return f"{self.minutes} min"
        if self.minutes == 60:
            return "1 hour"
        if self.minutes % 60 == 0:
            return f"{self.minutes // 60} hours"
        return f"{self.minutes // 60}h {self.minutes % 60}m"


@dataclass(frozen=True)
class BufferTime:
    """Protected gap before or after a meeting (0-120 minutes, 5-minute increments)."""

    MAX_MINUTES: ClassVar[int] = 120

    minutes: int = 0

    @classmethod
    def create(cls, minutes: int) -> Result["BufferTime"]:
        if minutes < 0:
            return Result.failure("Buffer time cannot be negative.")
        if minutes > cls.MAX_MINUTES:
            return Result.failure(f"Buffer time cannot exceed {cls.MAX_MINUTES} minutes.")
        if minutes % 5 != 0:
            return Result.failure("Buffer time must be in 5-minute increments.")
        return Result.success(cls(minutes))

    @classmethod
    def from_minutes(cls, minutes: int) -> "BufferTime":
        return cls(minutes)

    @classmethod
    def none(cls) -> "BufferTime":
        return cls(0)

    def to_timedelta(self) -> timedelta:
        return timedelta(minutes=self.minutes)

    def __str__(self) -> str:
        return "No buffer" if self.minutes == 0 else f"{self.minutes} min buffer"


@dataclass(frozen=True)
class MinimumNotice:
    """Lead time required between "now" and the earliest bookable start (max 7 days)."""

    MAX_MINUTES: ClassVar[int] = 10080

    minutes: int = 0

    @classmethod
    def create(cls, minutes: int) -> Result["MinimumNotice"]:
        if minutes < 0:
            return Result.failure("Minimum notice cannot be negative.")
        if minutes > cls.MAX_MINUTES:
            return Result.failure(
                f"Minimum notice cannot exceed {cls.MAX_MINUTES} minutes (7 days)."
            )
        return Result.success(cls(minutes))

    @classmethod
    def from_minutes(cls, minutes: int) -> "MinimumNotice":
        return cls(minutes)

    @classmethod
    def none(cls) -> "MinimumNotice":
        return cls(0)

    def to_timedelta(self) -> timedelta:
        return timedelta(minutes=self.minutes)

    def __str__(self) -> str:
        if self.minutes == 0:
            return "No minimum notice"
        if self.minutes < 60:
            return f"{self.minutes} minutes"
        if self.minutes == 60:
            return "1 hour"
        if self.minutes < 1440:
            return f"{self.minutes // 60} hours"
        if self.minutes == 1440:
            return "1 day"
        return f"{self.minutes // 1440} days"


@dataclass(frozen=True)
class BookingWindow:
    """How many days ahead slots may be offered (1-365)."""

    MIN_DAYS: ClassVar[int] = 1
    MAX_DAYS: ClassVar[int] = 365

    days: int = 60

    @classmethod
    def create(cls, days: int) -> Result["BookingWindow"]:
        if days < cls.MIN_DAYS:
            return Result.failure(f"Booking window must be at least {cls.MIN_DAYS} day.")
        if days > cls.MAX_DAYS:
            return Result.failure(f"Booking window cannot exceed {cls.MAX_DAYS} days.")
        return Result.success(cls(days))

    @classmethod
    def from_days(cls, days: int) -> "BookingWindow":
        return cls(days)

    def to_timedelta(self) -> timedelta:
        return timedelta(days=self.days)

    def __str__(self) -> str:
        labels = {
            7: "1 week",
            14: "2 weeks",
            30: "30 days",
            60: "60 days",
            90: "90 days",
            180: "6 months",
            365: "1 year",
        }
        return labels.get(self.days, f"{self.days} days")


_SLUG_RE = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")
_SLUG_INVALID_CHARS_RE = re.compile(r"[^a-z0-9\-]")
_SLUG_MULTI_HYPHEN_RE = re.compile(r"-+")


@dataclass(frozen=True)
class Slug:
    """URL-friendly identifier used in public booking links."""

    MIN_LENGTH: ClassVar[int] = 3
    MAX_LENGTH: ClassVar[int] = 100

    value: str

    @classmethod
    def create(cls, slug: Optional[str]) -> Result["Slug"]:
        if slug is None or not slug.strip():
            return Result.failure("Slug is required.")
        slug = slug.strip().lower()
        if len(slug) < cls.MIN_LENGTH:
            return Result.failure(f"Slug must be at least {cls.MIN_LENGTH} characters.")
        if len(slug) > cls.MAX_LENGTH:
            return Result.failure(f"Slug cannot exceed {cls.MAX_LENGTH} characters.")
        if slug.startswith("-") or slug.endswith("-"):
            return Result.failure("Slug cannot start or end with a hyphen.")
        if "--" in slug:
            return Result.failure("Slug cannot contain consecutive hyphens.")
        if not _SLUG_RE.match(slug):
            return Result.failure("Slug can only contain lowercase letters, numbers, and hyphens.")
        return Result.success(cls(slug))

    @classmethod
    def from_name(cls, name: Optional[str]) -> Result["Slug"]:
        """Generate a slug from a display name such as "30 Minute Consultation"."""
        if name is None or not name.strip():
            return Result.failure("Name is required to generate slug.")

        slug = name.strip().lower().replace(" ", "-").replace("_", "-")
        slug = _SLUG_INVALID_CHARS_RE.sub("", slug)
        slug = _SLUG_MULTI_HYPHEN_RE.sub("-", slug).strip("-")

        if len(slug) < cls.MIN_LENGTH:
            return Result.failure(f"Generated slug is too short. Original name: {name}")
        if len(slug) > cls.MAX_LENGTH:
            slug = slug[: cls.MAX_LENGTH].rstrip("-")
        return cls.create(slug)

    @classmethod
    def from_string(cls, slug: str) -> "Slug":
        return cls(slug)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class MeetingLocation:
    """Where a meeting happens: type plus optional details (address, link, number)."""

    MAX_ADDRESS_LENGTH: ClassVar[int] = 500

    type: LocationType
    details: Optional[str] = None
    display_name: Optional[str] = None

    @classmethod
    def in_person(cls, address: Optional[str]) -> Result["MeetingLocation"]:
        if address is None or not address.strip():
            return Result.failure("Address is required for in-person meetings.")
        if len(address) > cls.MAX_ADDRESS_LENGTH:
            return Result.failure("Address is too long.")
        return Result.success(cls(LocationType.IN_PERSON, address, "In Person"))

    @classmethod
    def phone(cls, phone_number: Optional[str]) -> Result["MeetingLocation"]:
        if phone_number is None or not phone_number.strip():
            return Result.failure("Phone number is required.")
        return Result.success(cls(LocationType.PHONE, phone_number, "Phone Call"))

    @classmethod
    def zoom(cls, meeting_link: Optional[str] = None) -> "MeetingLocation":
        return cls(LocationType.ZOOM, meeting_link, "Zoom")

    @classmethod
    def google_meet(cls, meeting_link: Optional[str] = None) -> "MeetingLocation":
        return cls(LocationType.GOOGLE_MEET, meeting_link, "Google Meet")

    @classmethod
    def microsoft_teams(cls, meeting_link: Optional[str] = None) -> "MeetingLocation":
        return cls(LocationType.MICROSOFT_TEAMS, meeting_link, "Microsoft Teams")

    @classmethod
    def custom(cls, display_name: Optional[str], details: Optional[str] = None) -> Result["MeetingLocation"]:
        if display_name is None or not display_name.strip():
            return Result.failure("Display name is required for custom location.")
        return Result.success(cls(LocationType.CUSTOM, details, display_name))

    def __str__(self) -> str:
        return self.display_name or self.type.value


def _is_utc(value: datetime) -> bool:
    return value.tzinfo is not None and value.utcoffset() == timedelta(0)


@dataclass(frozen=True)
class TimeSlot:
    """Half-open ``[start_utc, end_utc)`` interval of UTC instants."""

    start_utc: datetime
    end_utc: datetime

    @classmethod
    def create(cls, start_utc: datetime, end_utc: datetime) -> Result["TimeSlot"]:
        if not _is_utc(start_utc):
            return Result.failure("Start time must be in UTC.")
        if not _is_utc(end_utc):
            return Result.failure("End time must be in UTC.")
        if end_utc <= start_utc:
            return Result.failure("End time must be after start time.")
        return Result.success(cls(start_utc, end_utc))

    @classmethod
    def starting_at(cls, start_utc: datetime, duration: Duration) -> Result["TimeSlot"]:
        if not _is_utc(start_utc):
            return Result.failure("Start time must be in UTC.")
        return Result.success(cls(start_utc, start_utc + duration.to_timedelta()))

    @property
    def duration(self) -> timedelta:
        return self.end_utc - self.start_utc

    def overlaps_with(self, other: "TimeSlot") -> bool:
        return self.start_utc < other.end_utc and self.end_utc > other.start_utc

    def contains(self, instant: datetime) -> bool:
        return self.start_utc <= instant < self.end_utc

    def is_before(self, instant: datetime) -> bool:
        return self.end_utc <= instant

    def is_after(self, instant: datetime) -> bool:
        return self.start_utc >= instant

    def with_buffers(self, before: BufferTime, after: BufferTime) -> "TimeSlot":
        """Widen the slot by the given buffers on each side."""
        return TimeSlot(
            self.start_utc - before.to_timedelta(),
            self.end_utc + after.to_timedelta(),
        )

    def __str__(self) -> str:
        return f"{self.start_utc:%Y-%m-%d %H:%M} - {self.end_utc:%H:%M} UTC"
