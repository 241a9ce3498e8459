"""Tests for business-day time window resolution."""

from datetime import date, datetime, timedelta, timezone

import pytest

from cashbook.domain.errors import InvalidDateError, ValidationError
from cashbook.domain.time_window import (
    WINDOW_RESOLUTION,
    resolve_time_window,
    to_calendar_date,
)
from cashbook.utils.date_parser import BUSINESS_TIMEZONE, business_today


def test_window_bounds_for_date():
    window = resolve_time_window(date(2024, 3, 15))

    assert window.date == date(2024, 3, 15)
    assert window.start == datetime(2024, 3, 15, 5, 0, 0, tzinfo=timezone.utc)
    assert window.end == datetime(2024, 3, 16, 4, 59, 59, 999000, tzinfo=timezone.utc)


def test_window_spans_one_day_minus_resolution():
    window = resolve_time_window(date(2024, 7, 1))
    assert window.end - window.start == timedelta(days=1) - WINDOW_RESOLUTION


def test_window_ignores_time_and_timezone_of_datetime():
    late_local = datetime(2024, 3, 15, 23, 30, tzinfo=BUSINESS_TIMEZONE)
    early_utc = datetime(2024, 3, 15, 1, 0, tzinfo=timezone.utc)
    naive = datetime(2024, 3, 15, 12, 0)

    expected = resolve_time_window(date(2024, 3, 15))
    assert resolve_time_window(late_local) == expected
    assert resolve_time_window(early_utc) == expected
    assert resolve_time_window(naive) == expected


def test_window_from_string():
    window = resolve_time_window("2024-03-15")
    assert window.start == datetime(2024, 3, 15, 5, 0, tzinfo=timezone.utc)


def test_window_today_uses_business_offset():
    window = resolve_time_window("today")
    assert window.date == business_today()


def test_consecutive_days_are_contiguous():
    first = resolve_time_window(date(2024, 12, 31))
    second = resolve_time_window(date(2025, 1, 1))

    assert second.start - first.end == WINDOW_RESOLUTION
    assert second.start == datetime(2025, 1, 1, 5, 0, tzinfo=timezone.utc)


def test_window_contains_is_inclusive():
    window = resolve_time_window(date(2024, 3, 15))

    assert window.contains(window.start)
    assert window.contains(window.end)
    assert not window.contains(window.start - timedelta(microseconds=1))
    assert not window.contains(window.end + WINDOW_RESOLUTION)


def test_leap_day_window():
    window = resolve_time_window(date(2024, 2, 29))
    assert window.end == datetime(2024, 3, 1, 4, 59, 59, 999000, tzinfo=timezone.utc)


def test_invalid_date_string_raises():
    with pytest.raises(InvalidDateError) as excinfo:
        resolve_time_window("banana")
    assert "Invalid date" in str(excinfo.value)


def test_impossible_calendar_date_raises():
    with pytest.raises(InvalidDateError):
        resolve_time_window("2024-02-30")


def test_invalid_type_raises():
    with pytest.raises(InvalidDateError):
        to_calendar_date(12345)


def test_invalid_date_error_is_validation_error():
    with pytest.raises(ValidationError):
        to_calendar_date(None)


def test_last_representable_day_raises_invalid_date():
    with pytest.raises(InvalidDateError) as excinfo:
        resolve_time_window(date(9999, 12, 31))
    assert isinstance(excinfo.value.__cause__, OverflowError)


def test_first_representable_day_resolves():
    window = resolve_time_window(date(1, 1, 1))
    assert window.start == datetime(1, 1, 1, 5, 0, tzinfo=timezone.utc)
