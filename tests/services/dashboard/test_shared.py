"""Tests for shared number/instant helpers."""
from datetime import date, datetime, timezone

import pytest

from staffdesk.services.dashboard.shared import (
    format_display_date,
    format_number,
    half_up,
    parse_instant,
    relative_time,
)


@pytest.mark.parametrize("value,expected", [(85.0, "85"), (66.5, "66.5"), (3, "3")])
def test_format_number(value, expected):
    assert format_number(value) == expected


def test_half_up_rounds_halves_up():
    assert half_up(2.5) == 3
    assert half_up(0.49) == 0


def test_parse_instant_variants():
    assert parse_instant("2025-01-02T03:04:05Z") == datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    assert parse_instant("2025-01-02") == datetime(2025, 1, 2, tzinfo=timezone.utc)
    assert parse_instant(0) == datetime(1970, 1, 1, tzinfo=timezone.utc)
    assert parse_instant(date(2024, 2, 29)) == datetime(2024, 2, 29, tzinfo=timezone.utc)


@pytest.mark.parametrize("value", [None, "", "garbage", True, [], {"a": 1}, float("nan")])
def test_parse_instant_rejects_without_raising(value):
    assert parse_instant(value) is None


def test_format_display_date():
    assert format_display_date("2025-12-25T08:00:00Z") == "12/25/2025"
    assert format_display_date("whenever") == "whenever"
    assert format_display_date(None) is None


def test_relative_time_unknown():
    assert relative_time("nope") == "Unknown time"
    assert relative_time(None) == "Unknown time"


@pytest.mark.parametrize("value", ["0001-01-01T00:00:00+05:00", "9999-12-31T23:59:59-05:00"])
def test_relative_time_out_of_range_instant(value):
    now = datetime(2025, 6, 1, tzinfo=timezone.utc)
    assert relative_time(value, now) == "Unknown time"
