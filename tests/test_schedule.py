from datetime import date, timedelta

import pytest

from tuitionboard.services.schedule import (
    NO_MATCH,
    Weekday,
    day_of_week,
    is_scheduled_day,
    normalize_teaching_days,
    parse_weekday,
    weekday_index,
)


@pytest.mark.parametrize(
    "name,expected",
    [
        ("sunday", 0),
        ("monday", 1),
        ("Tuesday", 2),
        ("WED", 3),
        ("thu", 4),
        (" friday ", 5),
        ("Sat", 6),
    ],
)
def test_weekday_index_accepts_names_and_abbreviations(name, expected):
    assert weekday_index(name) == expected


@pytest.mark.parametrize("name", ["funday", "", "mo", "thurs", None, 3])
def test_unknown_weekday_maps_to_no_match(name):
    assert weekday_index(name) == NO_MATCH
    assert parse_weekday(name) is None


def test_day_of_week_uses_sunday_zero():
    assert day_of_week(date(2024, 5, 5)) == 0  # Sunday
    assert day_of_week(date(2024, 5, 6)) == 1  # Monday
    assert day_of_week(date(2024, 5, 11)) == 6  # Saturday


def test_weekday_order_starts_on_saturday():
    assert [d.abbreviation for d in Weekday] == ["sat", "sun", "mon", "tue", "wed", "thu", "fri"]


def test_monday_wednesday_schedule_across_months():
    teaching_days = ["monday", "wednesday"]
    start = date(2023, 12, 1)
    for offset in range(120):
        day = start + timedelta(days=offset)
        assert is_scheduled_day(teaching_days, day) == (day.weekday() in (0, 2)), day


def test_empty_schedule_is_never_scheduled():
    for offset in range(7):
        day = date(2024, 5, 6) + timedelta(days=offset)
        assert not is_scheduled_day([], day)
        assert not is_scheduled_day(None, day)


def test_malformed_entries_are_ignored():
    teaching_days = ["mondy", "Friday", "holiday"]
    assert not is_scheduled_day(teaching_days, date(2024, 5, 6))  # Monday
    assert is_scheduled_day(teaching_days, date(2024, 5, 10))  # Friday


def test_normalize_teaching_days_canonicalises_and_dedupes():
    assert normalize_teaching_days(["fri", "Monday", "SAT", "mon"]) == [
        "saturday",
        "monday",
        "friday",
    ]


def test_normalize_teaching_days_rejects_unknown_names():
    with pytest.raises(ValueError, match="funday"):
        normalize_teaching_days(["monday", "funday"])
