# ===== app/services/availability/table_matcher.py =====
"""Decide which table, if any, can host a party for a given window"""
from collections import defaultdict
from datetime import date
from typing import Dict, Iterable, List, Optional, Tuple

from app.models.booking import RELEASED_STATUSES
from app.utils.time_utils import EARLY_MORNING_CUTOFF, windows_conflict


def occupied_windows(
        bookings: Iterable,
        booking_date: date,
        exclude_booking_id=None
) -> Dict[object, List[Tuple[str, str]]]:
    """
    Group the windows held on `booking_date` by table id.

    Unassigned bookings and bookings in a released state (cancelled,
    completed, rejected, no-show) hold nothing.
    """
    windows = defaultdict(list)

    for booking in bookings:
        if booking.table_id is None or booking.status in RELEASED_STATUSES:
            continue
        if booking.booking_date != booking_date:
            continue
        if exclude_booking_id is not None and booking.id == exclude_booking_id:
            continue
        windows[booking.table_id].append((booking.start_time, booking.end_time))

    return windows


def is_table_free(
        windows: List[Tuple[str, str]],
        start_time: str,
        end_time: str,
        cutoff: int = EARLY_MORNING_CUTOFF
) -> bool:
    """True when none of the table's held windows clashes with [start_time, end_time)"""
    return not any(
        windows_conflict(start_time, end_time, held_start, held_end, cutoff)
        for held_start, held_end in windows
    )


def candidate_tables(tables: Iterable, party_size: int) -> List:
    """Tables large enough for the party, smallest first (exact fits lead)"""
    return sorted(
        (table for table in tables if table.max_capacity >= party_size),
        key=lambda table: (table.max_capacity, table.table_number),
    )


def find_table(
        tables: Iterable,
        bookings: Iterable,
        booking_date: date,
        start_time: str,
        end_time: str,
        party_size: int,
        exclude_booking_id=None,
        cutoff: int = EARLY_MORNING_CUTOFF
):
    """
    Pick the smallest free table that seats `party_size` for the window.

    Returns the table, or None when every large-enough table is taken
    (or no table is large enough at all).
    """
    held = occupied_windows(bookings, booking_date, exclude_booking_id)

    for table in candidate_tables(tables, party_size):
        if is_table_free(held.get(table.id, []), start_time, end_time, cutoff):
            return table

    return None
