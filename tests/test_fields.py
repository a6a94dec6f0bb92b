"""Tests for the field extractors."""

import pytest

from routeprep.domain.errors import ErrorKind, InputError
from routeprep.domain.models import Coordinates, ForcedService, TimeWindow
from routeprep.parsing.fields import (
    get_amount,
    get_break_time_windows,
    get_coordinates,
    get_forced_service,
    get_job_time_windows,
    get_priority,
    get_service,
    get_skills,
    get_string,
    get_time_window,
    get_vehicle_time_window,
    is_number,
    is_uint,
    is_uint64,
)

DEFAULT_TW = TimeWindow(0, 2**32 - 1)


def test_predicates_reject_booleans():
    assert not is_number(True)
    assert not is_uint(False)
    assert not is_uint64(True)
    assert is_number(1.5)
    assert is_uint(0)


def test_numbers_must_be_finite_doubles():
    assert not is_number(float("nan"))
    assert not is_number(float("inf"))
    assert not is_number(10**400)
    assert is_number(-(2**64))


def test_uint_bounds():
    assert is_uint(2**32 - 1)
    assert not is_uint(2**32)
    assert not is_uint(-1)
    assert not is_uint(3.0)
    assert is_uint64(2**64 - 1)
    assert not is_uint64(2**64)


def test_coordinates_accepts_int_and_float():
    coords = get_coordinates({"location": [2, 48.5, 99]}, "location")
    assert coords == Coordinates(lon=2.0, lat=48.5)


@pytest.mark.parametrize(
    "node",
    [
        {},
        {"location": "2,48"},
        {"location": [2.0]},
        {"location": [2.0, "48"]},
        {"location": [True, 48.0]},
    ],
)
def test_coordinates_invalid(node):
    with pytest.raises(InputError) as exc_info:
        get_coordinates(node, "location")
    assert exc_info.value.message == "Invalid location array."
    assert exc_info.value.kind is ErrorKind.INPUT


def test_string_default_and_type_check():
    assert get_string({}, "description") == ""
    assert get_string({"description": "depot"}, "description") == "depot"
    with pytest.raises(InputError, match="Invalid description value."):
        get_string({"description": 3}, "description")


def test_amount_defaults_to_zero_vector():
    assert get_amount({}, "delivery", 3) == (0, 0, 0)
    assert get_amount({}, "delivery", 0) == ()


def test_amount_values():
    assert get_amount({"pickup": [1, 0, 7]}, "pickup", 3) == (1, 0, 7)


def test_amount_length_mismatch():
    with pytest.raises(InputError) as exc_info:
        get_amount({"capacity": [1, 2]}, "capacity", 3)
    assert exc_info.value.message == "Inconsistent capacity length: 2 and 3."
    assert exc_info.value.key == "capacity"


@pytest.mark.parametrize(
    "value, message",
    [
        ({"a": 1}, "Invalid delivery array."),
        ([1, -1], "Invalid delivery value."),
        ([1, 2.5], "Invalid delivery value."),
    ],
)
def test_amount_invalid(value, message):
    with pytest.raises(InputError) as exc_info:
        get_amount({"delivery": value}, "delivery", 2)
    assert exc_info.value.message == message


def test_skills_collapse_duplicates():
    assert get_skills({}) == frozenset()
    assert get_skills({"skills": [3, 1, 3]}) == frozenset({1, 3})


def test_skills_invalid():
    with pytest.raises(InputError, match="Invalid skills object."):
        get_skills({"skills": 1})
    with pytest.raises(InputError, match="Invalid skill value."):
        get_skills({"skills": [1, -2]})


def test_service():
    assert get_service({}) == 0
    assert get_service({"service": 300}) == 300
    with pytest.raises(InputError, match="Invalid service value."):
        get_service({"service": -5})


def test_priority_range():
    assert get_priority({}, 100) == 0
    assert get_priority({"priority": 100}, 100) == 100
    with pytest.raises(InputError, match="Invalid priority value."):
        get_priority({"priority": 101}, 100)
    with pytest.raises(InputError, match="Invalid priority value."):
        get_priority({"priority": "high"}, 100)


def test_time_window():
    assert get_time_window([10, 20]) == TimeWindow(10, 20)
    for value in ([10], [10, -1], "10-20", [1.5, 3]):
        with pytest.raises(InputError, match="Invalid time-window."):
            get_time_window(value)


def test_vehicle_time_window_default():
    assert get_vehicle_time_window({}, DEFAULT_TW) == DEFAULT_TW
    assert get_vehicle_time_window({"time_window": [5, 9]}, DEFAULT_TW) == TimeWindow(5, 9)


def test_job_time_windows_are_sorted():
    node = {"id": 4, "time_windows": [[50, 60], [10, 40], [10, 20]]}
    assert get_job_time_windows(node, DEFAULT_TW) == [
        TimeWindow(10, 20),
        TimeWindow(10, 40),
        TimeWindow(50, 60),
    ]


def test_job_time_windows_default_and_empty():
    assert get_job_time_windows({"id": 4}, DEFAULT_TW) == [DEFAULT_TW]
    with pytest.raises(InputError) as exc_info:
        get_job_time_windows({"id": 4, "time_windows": []}, DEFAULT_TW)
    assert exc_info.value.message == "Invalid time_windows array for job 4."


def test_break_time_windows_are_mandatory():
    with pytest.raises(InputError) as exc_info:
        get_break_time_windows({"id": 8})
    assert exc_info.value.message == "Invalid time_windows array for break 8."
    assert get_break_time_windows({"id": 8, "time_windows": [[5, 6], [1, 2]]}) == [
        TimeWindow(1, 2),
        TimeWindow(5, 6),
    ]


def test_forced_service():
    assert get_forced_service({}) == ForcedService()
    forced = get_forced_service(
        {"service_at": 10, "service_after": 5, "service_before": 20}
    )
    assert forced == ForcedService(at=10, after=5, before=20)
    with pytest.raises(InputError, match="Invalid service_after value."):
        get_forced_service({"service_after": "soon"})
