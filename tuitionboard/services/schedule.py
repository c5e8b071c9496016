"""Weekday schedule parsing and scheduled-day checks.

Teaching days are stored as weekday names. Lookups are case-insensitive and
accept the three-letter abbreviations. Anything unrecognised maps to
``NO_MATCH`` so a malformed schedule simply has no scheduled days.
"""

import enum
from collections.abc import Iterable
from datetime import date

NO_MATCH = -1


class Weekday(str, enum.Enum):
    """Weekday names in display order, Saturday first."""

    SATURDAY = "saturday"
    SUNDAY = "sunday"
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"

    @property
    def abbreviation(self) -> str:
        return self.value[:3]

    @property
    def day_number(self) -> int:
        """Day of week, 0=Sunday .. 6=Saturday."""
        return _DAY_INDEX[self.value]


_DAY_INDEX = {
    "sunday": 0,
    "monday": 1,
    "tuesday": 2,
    "wednesday": 3,
    "thursday": 4,
    "friday": 5,
    "saturday": 6,
}

# Full names and abbreviations -> Weekday
_LOOKUP: dict[str, Weekday] = {}
for _day in Weekday:
    _LOOKUP[_day.value] = _day
    _LOOKUP[_day.abbreviation] = _day


def parse_weekday(name: str | None) -> Weekday | None:
    """Resolve a weekday name or abbreviation, or None if unknown."""
    if not isinstance(name, str):
        return None
    return _LOOKUP.get(name.strip().lower())


def weekday_index(name: str | None) -> int:
    """Map a weekday name to 0=Sunday..6=Saturday, NO_MATCH if unknown."""
    day = parse_weekday(name)
    return day.day_number if day else NO_MATCH


def day_of_week(day: date) -> int:
    """Day of week of a date on the same 0=Sunday scale."""
    # date.weekday() is 0=Monday
    return (day.weekday() + 1) % 7


def scheduled_indexes(teaching_days: Iterable[str] | None) -> set[int]:
    """Set of day-of-week indexes a schedule covers."""
    if not teaching_days:
        return set()
    return {i for i in (weekday_index(d) for d in teaching_days) if i != NO_MATCH}


def is_scheduled_day(teaching_days: Iterable[str] | None, day: date) -> bool:
    """True iff ``day`` falls on one of the teaching days."""
    return day_of_week(day) in scheduled_indexes(teaching_days)


def normalize_teaching_days(values: Iterable[str]) -> list[str]:
    """Canonicalise a schedule for storage.

    Returns full lowercase names, de-duplicated, Saturday first. Raises
    ValueError naming the first unrecognised value.
    """
    seen: set[Weekday] = set()
    for value in values:
        day = parse_weekday(value)
        if day is None:
            raise ValueError(f"Invalid teaching day: {value!r}")
        seen.add(day)
    return [d.value for d in Weekday if d in seen]
