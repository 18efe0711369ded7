"""Helpers for "HH:MM" time-of-day strings.

All pricing arithmetic is done in minutes since midnight. A day spans
[0, 1440); the end of day is rendered as "24:00".
"""
import re
from datetime import time as dt_time
from typing import List, Tuple

MINUTES_PER_DAY = 24 * 60

_TIME_PATTERN = re.compile(r"^([01]?[0-9]|2[0-3]):([0-5][0-9])$")


def is_valid_time(value) -> bool:
    """Return True for "H:MM" or "HH:MM" within 00:00-23:59."""
    return isinstance(value, str) and bool(_TIME_PATTERN.match(value))


def parse_time(value: str) -> dt_time:
    """Parse an "HH:MM" string into a time object."""
    match = _TIME_PATTERN.match(value or "")
    if not match:
        raise ValueError(f"Invalid time '{value}', expected HH:MM")
    return dt_time(hour=int(match.group(1)), minute=int(match.group(2)))


def normalize_time(value: str) -> str:
    """Zero-pad a valid time string, e.g. "9:05" -> "09:05"."""
    return parse_time(value).strftime("%H:%M")


def time_to_minutes(value: str) -> int:
    """Minutes since midnight. Accepts "24:00" as the end of the day."""
    if value == "24:00":
        return MINUTES_PER_DAY
    parsed = parse_time(value)
    return parsed.hour * 60 + parsed.minute


def minutes_to_time(minutes: int) -> str:
    """Inverse of time_to_minutes for 0..1440."""
    if minutes < 0 or minutes > MINUTES_PER_DAY:
        raise ValueError(f"Minutes out of range: {minutes}")
    hours, mins = divmod(minutes, 60)
    return f"{hours:02d}:{mins:02d}"


def window_minutes(start: str, end: str) -> List[Tuple[int, int]]:
    """
    The [start, end) minute ranges of a daily window.

    A window whose end is not after its start runs past midnight and is
    split into [start, 24:00) and [00:00, end).
    """
    start_minutes, end_minutes = time_to_minutes(start), time_to_minutes(end)
    if start_minutes < end_minutes:
        return [(start_minutes, end_minutes)]

    ranges = [(start_minutes, MINUTES_PER_DAY)]
    if end_minutes > 0:
        ranges.append((0, end_minutes))
    return ranges


def time_ranges_overlap(start_a: str, end_a: str, start_b: str, end_b: str) -> bool:
    """Whether daily windows [start_a, end_a) and [start_b, end_b) share any minute."""
    return any(
        a_start < b_end and b_start < a_end
        for a_start, a_end in window_minutes(start_a, end_a)
        for b_start, b_end in window_minutes(start_b, end_b)
    )
