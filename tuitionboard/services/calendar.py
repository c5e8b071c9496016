"""Calendar service: month overviews for a tuition."""

from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session

from tuitionboard.models.attendance import AttendanceRecord
from tuitionboard.models.tuition import Tuition
from tuitionboard.schemas.calendar import ConductedSource, DayEntry, MonthOverview
from tuitionboard.services.class_log import ClassLogService
from tuitionboard.services.class_status import classify_month, group_by_date, month_dates


class CalendarService:
    """Fetches a month of attendance and logs and classifies each day."""

    def __init__(self, db: Session):
        self.db = db

    def attendance_for_month(
        self,
        tuition_id: int,
        year: int,
        month: int,
    ) -> dict[date, list[AttendanceRecord]]:
        """Attendance rows of a month grouped by date."""
        dates = month_dates(year, month)
        result = self.db.execute(
            select(AttendanceRecord).where(
                AttendanceRecord.tuition_id == tuition_id,
                AttendanceRecord.attendance_date >= dates[0],
                AttendanceRecord.attendance_date <= dates[-1],
            )
        )
        return group_by_date(result.scalars().all())

    def month_overview(
        self,
        tuition: Tuition,
        year: int,
        month: int,
        source: ConductedSource = ConductedSource.COMBINED,
        today: date | None = None,
    ) -> MonthOverview:
        """Per-day statuses and monthly stats for one tuition."""
        today = today or date.today()
        attendance = None
        logs = None
        if source != ConductedSource.LOGS:
            attendance = self.attendance_for_month(tuition.id, year, month)
        if source != ConductedSource.ATTENDANCE:
            logs = ClassLogService(self.db).logs_by_date(tuition.id, year, month)

        return classify_month(
            tuition.teaching_days,
            year,
            month,
            today,
            attendance=attendance,
            logs=logs,
            source=source,
            tuition_id=tuition.id,
        )

    def day_entry(
        self,
        tuition: Tuition,
        day: date,
        source: ConductedSource = ConductedSource.COMBINED,
        today: date | None = None,
    ) -> DayEntry:
        """Status of a single date."""
        overview = self.month_overview(tuition, day.year, day.month, source, today)
        return overview.day(day)
