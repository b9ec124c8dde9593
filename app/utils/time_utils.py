# app/utils/time_utils.py
"""
Wall-clock time arithmetic for opening hours and bookings.

Times travel through the system as "HH:MM" strings with no date attached.
A window whose end is earlier than its start closes after midnight, so its
end is moved to the next day (+1440 minutes) before any comparison.

Late-night businesses also produce start times in the early-morning band
(00:00-05:59) that belong to the previous evening's service. Those are
shifted by a full day as well, so that a 01:00 slot is compared against a
22:00-02:00 booking on the same timeline.
"""
from typing import Tuple

MINUTES_PER_DAY = 24 * 60

# Start times before 06:00 are treated as the tail of the previous evening
EARLY_MORNING_CUTOFF = 6 * 60


def to_minutes(value: str) -> int:
    """Convert "HH:MM" (or "HH:MM:SS") into minutes since midnight"""
    hours, minutes = value.split(":")[:2]
    return int(hours) * 60 + int(minutes)


def format_minutes(minutes: int) -> str:
    """Convert minutes (any day offset) back into an "HH:MM" wall-clock string"""
    minutes %= MINUTES_PER_DAY
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def add_minutes(value: str, minutes: int) -> str:
    """Wall-clock time `minutes` after `value`, wrapping past midnight"""
    return format_minutes(to_minutes(value) + minutes)


def normalize_time(value: str) -> str:
    """Canonical "HH:MM" form of a time string"""
    return format_minutes(to_minutes(value))


def normalize_window(start: int, end: int) -> Tuple[int, int]:
    """Move `end` to the next day when the window crosses midnight"""
    if end < start:
        end += MINUTES_PER_DAY
    return start, end


def overlaps(start_a: int, end_a: int, start_b: int, end_b: int) -> bool:
    """
    Half-open interval overlap of two windows given in minutes.
    Touching windows ([20:00, 22:00) and [22:00, 23:00)) do not overlap.
    """
    start_a, end_a = normalize_window(start_a, end_a)
    start_b, end_b = normalize_window(start_b, end_b)
    return start_a < end_b and end_a > start_b


def effective_minutes(minutes: int, cutoff: int = EARLY_MORNING_CUTOFF) -> int:
    """Minutes on the service-day timeline: early-morning times land after the evening"""
    if minutes < cutoff:
        return minutes + MINUTES_PER_DAY
    return minutes


def effective_window(start: str, end: str, cutoff: int = EARLY_MORNING_CUTOFF) -> Tuple[int, int]:
    """Normalized window in minutes, shifted a full day when it starts in the early-morning band"""
    start_min, end_min = normalize_window(to_minutes(start), to_minutes(end))
    shift = MINUTES_PER_DAY if start_min < cutoff else 0
    return start_min + shift, end_min + shift


def windows_conflict(
        start_a: str,
        end_a: str,
        start_b: str,
        end_b: str,
        cutoff: int = EARLY_MORNING_CUTOFF
) -> bool:
    """
    True when two "HH:MM" windows on the same booking date overlap.

    Both windows are compared on the service-day timeline (early-morning
    starts shifted) and on the plain clock; a clash on either counts, so a
    05:00-07:00 breakfast booking still blocks a 06:00 slot.
    """
    a = effective_window(start_a, end_a, cutoff)
    b = effective_window(start_b, end_b, cutoff)
    if overlaps(a[0], a[1], b[0], b[1]):
        return True

    return overlaps(to_minutes(start_a), to_minutes(end_a), to_minutes(start_b), to_minutes(end_b))


def slot_sort_key(value: str, cutoff: int = EARLY_MORNING_CUTOFF) -> Tuple[int, str]:
    """Sort key placing post-midnight slots after the evening ones, ties broken by the string"""
    return effective_minutes(to_minutes(value), cutoff), value
