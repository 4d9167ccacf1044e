# -*- coding: utf-8 -*-
"""Tests for 12-hour clock parsing and day keys."""
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from voice_planner.core import iso_utc, parse_time_of_day, resolve_timezone, to_24_hour, today_key
from voice_planner.errors import TimeParseError, ValidationError


def at(hour: int, minute: int = 0, second: int = 0) -> datetime:
    return datetime(2026, 10, 16, hour, minute, second, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    ("hour", "period", "expected"),
    [(12, "AM", 0), (1, "AM", 1), (11, "AM", 11), (12, "PM", 12), (1, "pm", 13), (11, "PM", 23)],
)
def test_to_24_hour_conversion(hour: int, period: str, expected: int) -> None:
    assert to_24_hour(hour, period) == expected


def test_future_time_is_scheduled_today() -> None:
    """8:00 AM at 07:00 resolves to today."""
    result = parse_time_of_day("8:00 AM", now=at(7))
    assert result == at(8)


def test_past_time_rolls_to_tomorrow() -> None:
    """8:00 AM at 09:00 resolves to tomorrow."""
    result = parse_time_of_day("8:00 AM", now=at(9))
    assert result == at(8) + timedelta(days=1)


def test_exactly_now_rolls_to_tomorrow() -> None:
    result = parse_time_of_day("8:00 AM", now=at(8))
    assert result.date().isoformat() == "2026-10-17"
    assert (result.hour, result.minute, result.second, result.microsecond) == (8, 0, 0, 0)


def test_one_second_before_stays_today() -> None:
    result = parse_time_of_day("8:00 AM", now=at(7, 59, 59))
    assert result == at(8)


def test_meridiem_is_case_insensitive_and_spacing_optional() -> None:
    assert parse_time_of_day("7:30pm", now=at(7)) == at(19, 30)
    assert parse_time_of_day("12:15 am", now=at(7)) == at(0, 15) + timedelta(days=1)


def test_result_uses_reference_timezone() -> None:
    eastern = timezone(timedelta(hours=-4))
    # 07:00 UTC is 03:00 at UTC-4, so 8:00 AM local is still ahead.
    result = parse_time_of_day("8:00 AM", now=at(7), tz=eastern)
    assert result.utcoffset() == timedelta(hours=-4)
    assert iso_utc(result) == "2026-10-16T12:00:00.000Z"


@pytest.mark.parametrize(
    "text",
    ["25:00 AM", "8:00", "noon", "0:30 AM", "13:00 PM", "8:60 PM", "8:5 AM", "08:00:00 AM", "", "8.00 AM"],
)
def test_malformed_times_fail(text: str) -> None:
    with pytest.raises(TimeParseError):
        parse_time_of_day(text, now=at(7))


def test_non_string_time_fails_as_validation_error() -> None:
    with pytest.raises(ValidationError):
        parse_time_of_day(800, now=at(7))  # type: ignore[arg-type]


def test_unknown_timezone_is_rejected() -> None:
    with pytest.raises(TimeParseError):
        resolve_timezone("Mars/Olympus_Mons")


def test_today_key_uses_utc_date() -> None:
    late_evening = datetime(2026, 10, 16, 23, 30, tzinfo=timezone(timedelta(hours=-5)))
    assert today_key(late_evening) == "2026-10-17"
    assert today_key(at(0)) == "2026-10-16"


def test_repeated_hour_resolves_to_second_pass() -> None:
    """At 01:30 EST on the fall-back night, 1:45 AM is still ahead (06:45 UTC)."""
    new_york = ZoneInfo("America/New_York")
    now = datetime(2026, 11, 1, 6, 30, tzinfo=timezone.utc)
    result = parse_time_of_day("1:45 AM", now=now, tz=new_york)
    assert result > now
    assert iso_utc(result) == "2026-11-01T06:45:00.000Z"


def test_repeated_hour_fully_passed_rolls_to_tomorrow() -> None:
    new_york = ZoneInfo("America/New_York")
    now = datetime(2026, 11, 1, 6, 50, tzinfo=timezone.utc)
    result = parse_time_of_day("1:45 AM", now=now, tz=new_york)
    assert iso_utc(result) == "2026-11-02T06:45:00.000Z"


def test_first_pass_of_repeated_hour_stays_first() -> None:
    new_york = ZoneInfo("America/New_York")
    now = datetime(2026, 11, 1, 5, 30, tzinfo=timezone.utc)
    result = parse_time_of_day("1:45 AM", now=now, tz=new_york)
    assert iso_utc(result) == "2026-11-01T05:45:00.000Z"


def test_non_ascii_digits_are_rejected() -> None:
    with pytest.raises(TimeParseError):
        parse_time_of_day("٨:٠٠ AM", now=at(7))
