from types import SimpleNamespace

import pytest

from app.services.availability.slot_generator import day_of_week, expand_window, generate_slots
from tests.conftest import FRIDAY, MONDAY, SUNDAY


def rule(day, start, end):
    return SimpleNamespace(day_of_week=day, start_time=start, end_time=end)


def test_day_of_week_counts_from_sunday():
    assert day_of_week(SUNDAY) == 0
    assert day_of_week(MONDAY) == 1
    assert day_of_week(FRIDAY) == 5


def test_closed_day_has_no_slots():
    assert generate_slots([rule(2, "09:00", "17:00")], MONDAY, 60) == []
    assert generate_slots([], MONDAY, 60) == []


def test_last_slot_starts_before_closing():
    slots = generate_slots([rule(1, "09:00", "17:00")], MONDAY, 60)
    assert slots == ["09:00", "10:00", "11:00", "12:00", "13:00", "14:00", "15:00", "16:00"]


def test_midnight_crossing_window_sorts_after_evening():
    slots = generate_slots([rule(5, "22:00", "02:00")], FRIDAY, 60)
    assert slots == ["22:00", "23:00", "00:00", "01:00"]


def test_lunch_and_dinner_rules_are_unioned():
    rules = [rule(1, "20:00", "22:00"), rule(1, "13:00", "15:00"), rule(1, "14:00", "16:00")]
    slots = generate_slots(rules, MONDAY, 60)
    assert slots == ["13:00", "14:00", "15:00", "20:00", "21:00"]


def test_duration_that_does_not_divide_the_window():
    assert expand_window("12:00", "13:00", 45) == ["12:00", "12:45"]


def test_empty_window_yields_nothing():
    assert expand_window("12:00", "12:00", 30) == []


def test_non_positive_duration_is_rejected():
    with pytest.raises(ValueError):
        expand_window("12:00", "14:00", 0)
