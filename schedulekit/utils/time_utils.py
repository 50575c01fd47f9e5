from __future__ import annotations

from datetime import time

MINUTES_PER_DAY = 24 * 60


def is_whole_minute(t: time) -> bool:
    """True when the time carries no seconds or microseconds."""
    return t.second == 0 and t.microsecond == 0


def time_to_minutes(t: time, *, is_end_time: bool = False) -> int:
    """
    Convert time to minutes since midnight.

    Seconds are not representable; availability records reject them at
    construction (see `is_whole_minute`).

    Args:
        t: Time object.
        is_end_time: If True, treat time(0, 0) as 1440 (end of day).

    Returns:
        Minutes since midnight (0-1440).
    """
    minutes = t.hour * 60 + t.minute
    if is_end_time and minutes == 0:
        return MINUTES_PER_DAY
    return minutes


def minutes_to_time_str(minutes: int) -> str:
    """
    Convert minutes since midnight to HH:MM.

    1440 is rendered as "24:00".
    """
    if not 0 <= minutes <= MINUTES_PER_DAY:
        raise ValueError(f"minutes out of range: {minutes}")
    if minutes == MINUTES_PER_DAY:
        return "24:00"
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def format_time_range(start: time, end: time) -> str:
    """Render a local range as "HH:MM-HH:MM", with a midnight end shown as 24:00."""
    return (
        f"{minutes_to_time_str(time_to_minutes(start))}-"
        f"{minutes_to_time_str(time_to_minutes(end, is_end_time=True))}"
    )
