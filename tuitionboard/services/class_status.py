"""Conducted-class derivation and monthly day classification.

Everything here is pure: callers fetch attendance and class logs, these
functions turn them into per-day statuses and month counts.
"""

import calendar
from collections import defaultdict
from collections.abc import Iterable, Mapping
from datetime import date
from typing import Protocol

from tuitionboard.schemas.calendar import (
    ConductedSource,
    DayEntry,
    DayStatus,
    MonthlyStats,
    MonthOverview,
)
from tuitionboard.services.schedule import day_of_week, scheduled_indexes


class HasPresence(Protocol):
    is_present: bool


class HasConducted(Protocol):
    was_conducted: bool


def was_conducted(records: Iterable[HasPresence]) -> bool:
    """A class was conducted iff at least one student was present.

    No records and nobody present are the same answer: False.
    """
    return any(r.is_present for r in records)


def resolve_conducted(
    attendance_conducted: bool | None,
    log_conducted: bool | None,
    source: ConductedSource = ConductedSource.COMBINED,
) -> bool:
    """Pick the conducted flag for a date from the two raw signals.

    ``None`` means the signal has no data for the date (no attendance rows,
    or no class log).
    """
    if source == ConductedSource.ATTENDANCE:
        return bool(attendance_conducted)
    if source == ConductedSource.LOGS:
        return bool(log_conducted)
    if attendance_conducted is not None:
        return attendance_conducted
    return bool(log_conducted)


def classify_day(scheduled: bool, conducted: bool, day: date, today: date) -> DayStatus:
    """Status precedence: conducted, missed (strictly past), scheduled, none."""
    if conducted:
        return DayStatus.CONDUCTED
    if scheduled and day < today:
        return DayStatus.MISSED
    if scheduled:
        return DayStatus.SCHEDULED
    return DayStatus.NONE


def month_dates(year: int, month: int) -> list[date]:
    """Every date of a calendar month."""
    _, days_in_month = calendar.monthrange(year, month)
    return [date(year, month, d) for d in range(1, days_in_month + 1)]


def group_by_date(records: Iterable, attr: str = "attendance_date") -> dict[date, list]:
    """Bucket rows by one of their date attributes."""
    grouped: dict[date, list] = defaultdict(list)
    for record in records:
        grouped[getattr(record, attr)].append(record)
    return dict(grouped)


def classify_month(
    teaching_days: Iterable[str] | None,
    year: int,
    month: int,
    today: date,
    attendance: Mapping[date, Iterable[HasPresence]] | None = None,
    logs: Mapping[date, HasConducted] | None = None,
    source: ConductedSource = ConductedSource.COMBINED,
    tuition_id: int | None = None,
) -> MonthOverview:
    """Classify every day of a month and roll up the counts.

    ``attendance`` maps a date to that day's attendance rows, ``logs`` maps
    a date to its class log. Dates outside the month are ignored.
    """
    attendance = attendance or {}
    logs = logs or {}
    schedule = scheduled_indexes(teaching_days)

    days: list[DayEntry] = []
    stats = MonthlyStats()
    for day in month_dates(year, month):
        scheduled = day_of_week(day) in schedule

        rows = list(attendance.get(day, ()))
        attendance_conducted = was_conducted(rows) if rows else None
        log = logs.get(day)
        log_conducted = log.was_conducted if log is not None else None

        conducted = resolve_conducted(attendance_conducted, log_conducted, source)
        status = classify_day(scheduled, conducted, day, today)

        if scheduled:
            stats.scheduled += 1
            if day >= today:
                stats.remaining += 1
        if status == DayStatus.CONDUCTED:
            stats.conducted += 1
            if not scheduled:
                stats.extra += 1
        elif status == DayStatus.MISSED:
            stats.missed += 1

        days.append(
            DayEntry(
                date=day,
                status=status,
                scheduled=scheduled,
                conducted=conducted,
                attendance_conducted=attendance_conducted,
                log_conducted=log_conducted,
                has_log=log is not None,
            )
        )

    return MonthOverview(
        tuition_id=tuition_id,
        year=year,
        month=month,
        today=today,
        source=source,
        days=days,
        stats=stats,
    )
