import uuid
from types import SimpleNamespace

from app.models.booking import BookingStatus
from app.services.availability.table_matcher import candidate_tables, find_table, occupied_windows
from tests.conftest import FRIDAY, MONDAY


def table(number, capacity):
    return SimpleNamespace(id=uuid.uuid4(), table_number=number, max_capacity=capacity)


def booking(table_obj, start, end, status=BookingStatus.RESERVED.value, booking_date=MONDAY):
    return SimpleNamespace(
        id=uuid.uuid4(),
        table_id=table_obj.id if table_obj else None,
        booking_date=booking_date,
        start_time=start,
        end_time=end,
        status=status,
    )


def test_smallest_sufficient_table_wins():
    tables = [table(3, 6), table(1, 2), table(2, 4)]
    chosen = find_table(tables, [], MONDAY, "20:00", "21:00", 3)
    assert chosen.max_capacity == 4


def test_exact_fit_is_preferred():
    tables = [table(1, 6), table(2, 4), table(3, 2)]
    assert find_table(tables, [], MONDAY, "20:00", "21:00", 2).table_number == 3


def test_equal_capacity_falls_back_to_table_number():
    tables = [table(7, 4), table(2, 4)]
    assert [t.table_number for t in candidate_tables(tables, 4)] == [2, 7]


def test_party_too_large_gets_nothing():
    assert find_table([table(1, 2), table(2, 4)], [], MONDAY, "20:00", "21:00", 5) is None


def test_busy_table_is_skipped():
    small, large = table(1, 4), table(2, 6)
    held = [booking(small, "20:00", "22:00")]
    assert find_table([small, large], held, MONDAY, "21:00", "23:00", 3) is large


def test_touching_booking_does_not_block():
    only = table(1, 4)
    held = [booking(only, "20:00", "22:00")]
    assert find_table([only], held, MONDAY, "22:00", "23:00", 2) is only


def test_released_and_unassigned_bookings_hold_nothing():
    only = table(1, 4)
    bookings = [
        booking(only, "20:00", "22:00", status=BookingStatus.CANCELLED.value),
        booking(only, "20:00", "22:00", status=BookingStatus.NO_SHOW.value),
        booking(only, "20:00", "22:00", status=BookingStatus.REJECTED.value),
        booking(None, "20:00", "22:00"),
        booking(only, "20:00", "22:00", booking_date=FRIDAY),
    ]
    assert occupied_windows(bookings, MONDAY) == {}
    assert find_table([only], bookings, MONDAY, "20:00", "21:00", 2) is only


def test_pending_booking_with_table_still_holds_it():
    only = table(1, 4)
    held = [booking(only, "20:00", "22:00", status=BookingStatus.PENDING.value)]
    assert find_table([only], held, MONDAY, "21:00", "22:00", 2) is None


def test_excluded_booking_does_not_block_itself():
    only = table(1, 4)
    own = booking(only, "20:00", "22:00")
    assert find_table([only], [own], MONDAY, "20:30", "22:30", 2) is None
    assert find_table([only], [own], MONDAY, "20:30", "22:30", 2, exclude_booking_id=own.id) is only
