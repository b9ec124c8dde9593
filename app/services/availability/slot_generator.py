# ===== app/services/availability/slot_generator.py =====
"""Expand weekly opening-hour rules into bookable start times for one date"""
from datetime import date
from typing import Iterable, List

from app.utils.time_utils import (
    EARLY_MORNING_CUTOFF,
    format_minutes,
    normalize_window,
    slot_sort_key,
    to_minutes,
)


def day_of_week(target_date: date) -> int:
    """Day-of-week in the 0=Sunday..6=Saturday convention used by availability rules"""
    return (target_date.weekday() + 1) % 7


def expand_window(start_time: str, end_time: str, slot_duration: int) -> List[str]:
    """
    Every start time from `start_time` up to (not including) `end_time`,
    `slot_duration` minutes apart. Windows crossing midnight keep going into
    the next day; an empty window (start == end) yields nothing.
    """
    if slot_duration <= 0:
        raise ValueError(f"slot_duration must be positive, got {slot_duration}")

    current, end = normalize_window(to_minutes(start_time), to_minutes(end_time))

    slots = []
    while current < end:
        slots.append(format_minutes(current))
        current += slot_duration

    return slots


def sort_slots(slots: Iterable[str], cutoff: int = EARLY_MORNING_CUTOFF) -> List[str]:
    """Order slots with the post-midnight band after the evening"""
    return sorted(slots, key=lambda slot: slot_sort_key(slot, cutoff))


def generate_slots(
        rules: Iterable,
        target_date: date,
        slot_duration: int,
        cutoff: int = EARLY_MORNING_CUTOFF
) -> List[str]:
    """
    Candidate start times of a business on `target_date`.

    `rules` are availability rules (anything with day_of_week, start_time and
    end_time). Several rules on the same day (lunch + dinner) are unioned.
    A day without rules is a closed day and yields an empty list.
    """
    weekday = day_of_week(target_date)

    slots = set()
    for rule in rules:
        if rule.day_of_week != weekday:
            continue
        slots.update(expand_window(rule.start_time, rule.end_time, slot_duration))

    return sort_slots(slots, cutoff)
