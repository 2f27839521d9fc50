from datetime import date

import pytest

from productive_mcp.errors import MalformedDate, MalformedDuration
from productive_mcp.parsing import format_duration, parse_date, parse_duration


@pytest.mark.parametrize(
    "value, minutes",
    [
        ("2h", 120),
        ("2.5h", 150),
        ("2 hours", 120),
        ("1 hour", 60),
        ("  1.5H ", 90),
        ("120m", 120),
        ("45 minutes", 45),
        ("1 minute", 1),
        ("2.5", 150),
        ("0", 0),
        (".5", 30),
    ],
)
def test_parse_duration(value, minutes):
    assert parse_duration(value) == minutes


def test_parse_duration_rounds_half_away_from_zero():
    # 0.0125h = 0.75 min, 0.075h = 4.5 min, 0.0416h = 2.496 min
    assert parse_duration("0.0125h") == 1
    assert parse_duration("0.075") == 5
    assert parse_duration("0.0416h") == 2


@pytest.mark.parametrize(
    "value",
    ["abc", "", "2x", "1.5m", "-2h", "2 h 30 m", "h", "1" + "0" * 27 + "h", "9" * 30, "9" * 5000 + "m"],
)
def test_parse_duration_rejects(value):
    with pytest.raises(MalformedDuration) as exc:
        parse_duration(value)
    assert f'"{value}"' in str(exc.value)


@pytest.mark.parametrize(
    "minutes, text",
    [(0, "0m"), (45, "45m"), (60, "1h"), (90, "1h 30m"), (150, "2h 30m")],
)
def test_format_duration(minutes, text):
    assert format_duration(minutes) == text


def test_parse_date_relative():
    today = date(2024, 3, 1)
    assert parse_date("today", today) == "2024-03-01"
    assert parse_date("TODAY", today) == "2024-03-01"
    assert parse_date("yesterday", today) == "2024-02-29"
    assert parse_date(" Yesterday ", date(2024, 1, 1)) == "2023-12-31"


def test_parse_date_iso_passes_through():
    assert parse_date("2024-01-15", date(2030, 6, 6)) == "2024-01-15"


def test_parse_date_only_range_checks_day():
    # no days-in-month check
    assert parse_date("2024-02-31", date(2024, 1, 1)) == "2024-02-31"


@pytest.mark.parametrize("value", ["2024-13-01", "2024-00-10", "2024-01-32", "2024-01-00", "not-a-date", "15/01/2024", "tomorrow", ""])
def test_parse_date_rejects(value):
    with pytest.raises(MalformedDate):
        parse_date(value, date(2024, 1, 1))
