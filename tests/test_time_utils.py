import pytest

from app.utils.time_utils import (
    add_minutes,
    effective_window,
    format_minutes,
    normalize_time,
    normalize_window,
    overlaps,
    slot_sort_key,
    to_minutes,
    windows_conflict,
)


def test_to_minutes_and_back():
    assert to_minutes("00:00") == 0
    assert to_minutes("13:45") == 825
    assert to_minutes("09:30:00") == 570
    assert format_minutes(825) == "13:45"


def test_format_minutes_wraps_past_midnight():
    assert format_minutes(1440) == "00:00"
    assert format_minutes(1500) == "01:00"


def test_add_minutes_wraps():
    assert add_minutes("23:30", 60) == "00:30"
    assert add_minutes("12:00", 90) == "13:30"


def test_normalize_time_drops_seconds():
    assert normalize_time("9:05") == "09:05"
    assert normalize_time("21:00:00") == "21:00"


def test_normalize_window_moves_end_to_next_day():
    assert normalize_window(to_minutes("22:00"), to_minutes("02:00")) == (1320, 1560)
    assert normalize_window(600, 900) == (600, 900)


@pytest.mark.parametrize(
    "a, b, expected",
    [
        (("20:00", "22:00"), ("21:00", "23:00"), True),
        (("20:00", "22:00"), ("22:00", "23:00"), False),
        (("20:00", "22:00"), ("19:00", "20:00"), False),
        (("20:00", "22:00"), ("20:30", "21:00"), True),
        (("22:00", "02:00"), ("23:00", "00:00"), True),
    ],
)
def test_overlaps_is_half_open(a, b, expected):
    assert overlaps(to_minutes(a[0]), to_minutes(a[1]), to_minutes(b[0]), to_minutes(b[1])) is expected


def test_effective_window_shifts_early_morning_starts():
    assert effective_window("01:00", "02:00") == (1500, 1560)
    assert effective_window("22:00", "02:00") == (1320, 1560)
    assert effective_window("12:00", "13:00") == (720, 780)


def test_late_night_booking_blocks_post_midnight_slot():
    assert windows_conflict("01:00", "02:00", "22:00", "02:00")
    assert windows_conflict("00:00", "01:00", "23:30", "00:30")
    assert not windows_conflict("02:00", "03:00", "22:00", "02:00")


def test_early_opening_conflicts_on_the_plain_clock():
    assert windows_conflict("05:30", "06:30", "06:00", "07:00")
    assert not windows_conflict("05:00", "06:00", "06:00", "07:00")


def test_slot_sort_key_places_post_midnight_after_evening():
    slots = ["00:00", "23:00", "01:00", "22:00"]
    assert sorted(slots, key=slot_sort_key) == ["22:00", "23:00", "00:00", "01:00"]
