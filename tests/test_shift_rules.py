"""Tests for break entitlement, Dayforce cell classification and schedule ordering."""
import pytest

from app.services.shift_rules import (
    calculate_breaks_from_net_duration,
    classify_day_cell,
    extract_start_time,
    get_shift_type,
    schedule_sort_key,
    time_to_minutes,
    toggle_break,
)


@pytest.mark.parametrize("net, expected", [
    ("8:30", 1),
    ("9:15", 2),
    ("5:00", 0),
    ("6:00", 1),
    ("9:00", 2),
    ("5:59", 0),
    ("abc", 0),
    ("8", 0),
    ("", 0),
    (None, 0),
])
def test_calculate_breaks(net, expected):
    assert calculate_breaks_from_net_duration(net) == expected


def test_extract_start_time():
    assert extract_start_time("06:00-14:30") == "06:00"
    assert extract_start_time("Vezető: 9:00-17:00") == "9:00"
    assert extract_start_time("P") is None
    assert extract_start_time(None) is None


def test_get_shift_type():
    assert get_shift_type("06:00") == 1
    assert get_shift_type("13:30") == 2
    assert get_shift_type("18:00") == 3
    assert get_shift_type("22:00") == 4
    assert get_shift_type(None) == 4


def test_time_to_minutes_missing_sorts_last():
    assert time_to_minutes("10:15") == 615
    assert time_to_minutes(None) > time_to_minutes("23:59")


def test_classify_shift_cell():
    cell = classify_day_cell("10:00-19:00", "8:30")
    assert cell == {
        "status": "muszak",
        "shift_text": "10:00-19:00",
        "start_time": "10:00",
        "net_shift_duration": "8:30",
    }


@pytest.mark.parametrize("text, status, label", [
    ("P", "pihenonap", "Pihenőnap"),
    ("S", "szabadsag", "Szabadság"),
    ("Munkaszüneti nap", "munkaszuneti_nap", "Munkaszüneti nap"),
    ("Táppénz", "betegseg", "Betegség"),
    ("Fizetett szabadság", "szabadsag", "Szabadság"),
    ("pihenőnap", "pihenonap", "Pihenőnap"),
])
def test_classify_status_cells(text, status, label):
    cell = classify_day_cell(text, "8:00")
    assert cell["status"] == status
    assert cell["shift_text"] == label
    assert cell["start_time"] is None
    assert cell["net_shift_duration"] is None


def test_classify_unknown_text_is_shift():
    cell = classify_day_cell("Leltár")
    assert cell["status"] == "muszak"
    assert cell["shift_text"] == "Leltár"
    assert cell["start_time"] is None


def test_toggle_break():
    assert toggle_break(0, 1) == 1
    assert toggle_break(1, 1) == 0
    assert toggle_break(1, 2) == 2
    assert toggle_break(2, 2) == 1
    assert toggle_break(None, 2) == 2


def test_schedule_sort_key_orders_status_time_role():
    rows = [
        {"status": "pihenonap", "start_time": None, "employee_role": "uzletvezeto"},
        {"status": "muszak", "start_time": "10:00", "employee_role": "uzletvezeto"},
        {"status": "muszak", "start_time": "06:00", "employee_role": "bolti_dolgozo"},
        {"status": "muszak", "start_time": "06:00", "employee_role": "uzletvezeto"},
        {"status": "munkaszuneti_nap", "start_time": None, "employee_role": "bolti_dolgozo"},
    ]
    ordered = sorted(rows, key=schedule_sort_key)
    assert [(r["status"], r["start_time"], r["employee_role"]) for r in ordered] == [
        ("muszak", "06:00", "uzletvezeto"),
        ("muszak", "06:00", "bolti_dolgozo"),
        ("muszak", "10:00", "uzletvezeto"),
        ("pihenonap", None, "uzletvezeto"),
        ("munkaszuneti_nap", None, "bolti_dolgozo"),
    ]
