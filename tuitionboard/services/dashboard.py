"""Dashboard data aggregation service."""

from datetime import date
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from tuitionboard.models.attendance import AttendanceRecord
from tuitionboard.models.base import RecordStatus
from tuitionboard.models.class_log import ClassLog
from tuitionboard.models.student import Student
from tuitionboard.models.tuition import Tuition
from tuitionboard.schemas.dashboard import DashboardResponse, TodayClass
from tuitionboard.services.class_status import resolve_conducted, was_conducted
from tuitionboard.services.schedule import is_scheduled_day


class DashboardService:
    """Dashboard data aggregation service."""

    def __init__(self, db: Session):
        self.db = db

    def get_dashboard(self, tutor_id: int, today: date | None = None) -> DashboardResponse:
        """Counts across the tutor's active tuitions plus today's classes."""
        today = today or date.today()

        tuitions = list(
            self.db.execute(
                select(Tuition)
                .where(
                    Tuition.tutor_id == tutor_id,
                    Tuition.status == RecordStatus.ACTIVE,
                )
                .order_by(Tuition.name)
            ).scalars().all()
        )
        tuition_ids = [t.id for t in tuitions]

        active_students = 0
        expected_fees = Decimal("0")
        if tuition_ids:
            row = self.db.execute(
                select(
                    func.count(Student.id).label("student_count"),
                    func.coalesce(func.sum(Student.fee_per_month), 0).label("fees"),
                ).where(
                    Student.tuition_id.in_(tuition_ids),
                    Student.status == RecordStatus.ACTIVE,
                )
            ).one()
            active_students = row.student_count or 0
            expected_fees = Decimal(str(row.fees or 0))

        return DashboardResponse(
            date=today,
            active_tuitions=len(tuitions),
            active_students=active_students,
            expected_monthly_fees=expected_fees,
            todays_classes=self._get_todays_classes(tuitions, today),
        )

    def _get_todays_classes(self, tuitions: list[Tuition], today: date) -> list[TodayClass]:
        """Tuitions scheduled for today with their conducted state so far."""
        scheduled = [t for t in tuitions if is_scheduled_day(t.teaching_days, today)]
        if not scheduled:
            return []
        ids = [t.id for t in scheduled]

        attendance: dict[int, list[AttendanceRecord]] = {}
        for record in self.db.execute(
            select(AttendanceRecord).where(
                AttendanceRecord.tuition_id.in_(ids),
                AttendanceRecord.attendance_date == today,
            )
        ).scalars():
            attendance.setdefault(record.tuition_id, []).append(record)

        logs = {
            log.tuition_id: log
            for log in self.db.execute(
                select(ClassLog).where(
                    ClassLog.tuition_id.in_(ids),
                    ClassLog.class_date == today,
                )
            ).scalars()
        }

        classes = []
        for tuition in scheduled:
            rows = attendance.get(tuition.id)
            log = logs.get(tuition.id)
            conducted = None
            if rows or log:
                conducted = resolve_conducted(
                    was_conducted(rows) if rows else None,
                    log.was_conducted if log else None,
                )
            classes.append(
                TodayClass(
                    tuition_id=tuition.id,
                    name=tuition.name,
                    subject=tuition.subject,
                    student_count=tuition.active_student_count,
                    conducted=conducted,
                )
            )
        return classes
