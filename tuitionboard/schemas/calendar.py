"""Calendar and monthly statistics schemas."""

import enum
from datetime import date

from pydantic import Field

from tuitionboard.schemas.common import BaseSchema


class DayStatus(str, enum.Enum):
    """Derived classification of one calendar date."""

    SCHEDULED = "scheduled"
    CONDUCTED = "conducted"
    MISSED = "missed"
    NONE = "none"


class ConductedSource(str, enum.Enum):
    """Which signal decides whether a class was conducted."""

    ATTENDANCE = "attendance"
    LOGS = "logs"
    # Attendance when any exists for the date, else the class log flag
    COMBINED = "combined"


class DayEntry(BaseSchema):
    """Status of a single date plus the raw signals behind it."""

    date: date
    status: DayStatus
    scheduled: bool
    conducted: bool
    attendance_conducted: bool | None = Field(
        None, description="Derived from attendance; null when nobody was marked"
    )
    log_conducted: bool | None = Field(
        None, description="Class log flag; null when no log exists"
    )
    has_log: bool = False


class MonthlyStats(BaseSchema):
    """Schedule-vs-actual counts for one month."""

    scheduled: int = 0
    conducted: int = 0
    missed: int = 0
    remaining: int = 0
    extra: int = Field(0, description="Conducted on a day that was not scheduled")


class MonthOverview(BaseSchema):
    """Per-day statuses and summary counts for a tuition's month."""

    tuition_id: int | None = None
    year: int
    month: int
    today: date
    source: ConductedSource
    days: list[DayEntry]
    stats: MonthlyStats

    def day(self, value: date) -> DayEntry | None:
        """Entry for a date in this month."""
        for entry in self.days:
            if entry.date == value:
                return entry
        return None

    @property
    def per_day(self) -> dict[date, DayStatus]:
        return {entry.date: entry.status for entry in self.days}
