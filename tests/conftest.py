# tests/conftest.py
"""
Shared fixtures for the schedulekit test suite.

Reference scenario: host in America/New_York, Monday 2025-01-06 (EST, UTC-5),
weekday template 09:00-17:00, "now" pinned to 2025-01-01 12:00 UTC so that
notice and booking-window checks are deterministic.
"""

from datetime import date, datetime, time, timezone

import pytest

from schedulekit.core.config import settings
from schedulekit.core.enums import DayOfWeek
from schedulekit.domain.event_type import EventTypeRules
from schedulekit.schemas.availability import WeeklyAvailability, default_week
from schedulekit.services.slot_calculator import SlotCalculator

HOST_TZ = "America/New_York"
MONDAY = date(2025, 1, 6)
FIXED_NOW = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)


def utc(*args: int) -> datetime:
    """Aware UTC datetime shorthand."""
    return datetime(*args, tzinfo=timezone.utc)


def make_rules(duration_minutes: int = 30, **kwargs) -> EventTypeRules:
    kwargs.setdefault("minimum_notice_minutes", 0)
    return EventTypeRules.create(duration_minutes, **kwargs).unwrap()


@pytest.fixture
def calculator() -> SlotCalculator:
    return SlotCalculator()


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def monday() -> date:
    return MONDAY


@pytest.fixture
def host_tz() -> str:
    return HOST_TZ


@pytest.fixture
def monday_template():
    """Only Monday enabled, 09:00-17:00."""
    return [
        WeeklyAvailability(
            day_of_week=DayOfWeek.MONDAY,
            start_time=time(9, 0),
            end_time=time(17, 0),
        )
    ]


@pytest.fixture
def business_week():
    return default_week()


@pytest.fixture
def thirty_minute_rules() -> EventTypeRules:
    return make_rules(30, id="evt-30", name="30 Minute Meeting")


@pytest.fixture
def metrics_disabled(monkeypatch):
    monkeypatch.setattr(settings, "metrics_enabled", False)
