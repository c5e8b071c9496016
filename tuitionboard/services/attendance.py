"""Attendance service: marking and the reconciliation pipeline."""

import logging
from datetime import date

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tuitionboard.core.exceptions import (
    NotFoundError,
    PartialPipelineError,
    PersistenceError,
    ValidationError,
)
from tuitionboard.models.attendance import AttendanceRecord
from tuitionboard.models.base import RecordStatus
from tuitionboard.models.student import Student
from tuitionboard.models.tuition import Tuition
from tuitionboard.schemas.attendance import (
    AttendanceActionResult,
    AttendanceRecordResponse,
    AttendanceRoster,
    RosterEntry,
)
from tuitionboard.schemas.class_log import ClassLogResponse
from tuitionboard.services.calendar import CalendarService
from tuitionboard.services.class_log import ClassLogService
from tuitionboard.services.class_status import was_conducted
from tuitionboard.services.schedule import is_scheduled_day

logger = logging.getLogger(__name__)


class AttendanceService:
    """Attendance management service."""

    def __init__(self, db: Session):
        self.db = db
        self.logs = ClassLogService(db)

    def _record_to_response(self, record: AttendanceRecord) -> dict:
        """Convert AttendanceRecord to response dict."""
        return {
            "id": record.id,
            "student_id": record.student_id,
            "student_name": record.student_name,
            "tuition_id": record.tuition_id,
            "attendance_date": record.attendance_date,
            "is_present": record.is_present,
            "created_at": record.created_at,
            "updated_at": record.updated_at,
        }

    # ==========================================
    # Reads
    # ==========================================

    def list_attendance(
        self,
        tuition_id: int,
        date_from: date,
        date_to: date | None = None,
        student_id: int | None = None,
    ) -> list[AttendanceRecordResponse]:
        """Attendance rows for a date or an inclusive date range."""
        date_to = date_to or date_from
        query = select(AttendanceRecord).where(
            AttendanceRecord.tuition_id == tuition_id,
            AttendanceRecord.attendance_date >= date_from,
            AttendanceRecord.attendance_date <= date_to,
        )
        if student_id:
            query = query.where(AttendanceRecord.student_id == student_id)
        query = query.order_by(AttendanceRecord.attendance_date, AttendanceRecord.student_id)

        result = self.db.execute(query)
        return [
            AttendanceRecordResponse.model_validate(self._record_to_response(r))
            for r in result.scalars().all()
        ]

    def records_for_date(self, tuition_id: int, attendance_date: date) -> list[AttendanceRecord]:
        """Every attendance row of a tuition on a date."""
        result = self.db.execute(
            select(AttendanceRecord).where(
                AttendanceRecord.tuition_id == tuition_id,
                AttendanceRecord.attendance_date == attendance_date,
            )
        )
        return list(result.scalars().all())

    def get_roster(self, tuition: Tuition, attendance_date: date) -> AttendanceRoster:
        """All active students with their attendance on a date."""
        students = self._get_students(tuition.id)
        records = {r.student_id: r for r in self.records_for_date(tuition.id, attendance_date)}

        entries = []
        present_count = 0
        absent_count = 0
        for student in students:
            record = records.get(student.id)
            if record and record.is_present:
                present_count += 1
            elif record:
                absent_count += 1
            entries.append(
                RosterEntry(
                    student_id=student.id,
                    student_name=student.name,
                    class_level=student.class_level,
                    is_present=record.is_present if record else None,
                    record_id=record.id if record else None,
                )
            )

        log = self.logs.find_log(tuition.id, attendance_date)
        return AttendanceRoster(
            tuition_id=tuition.id,
            attendance_date=attendance_date,
            scheduled=is_scheduled_day(tuition.teaching_days, attendance_date),
            students=entries,
            total_students=len(students),
            present_count=present_count,
            absent_count=absent_count,
            unmarked_count=len(students) - present_count - absent_count,
            was_conducted=was_conducted(records.values()),
            class_log=ClassLogResponse.model_validate(log) if log else None,
        )

    # ==========================================
    # Marking
    # ==========================================

    def mark_attendance(
        self,
        tuition: Tuition,
        student_id: int,
        attendance_date: date,
        is_present: bool,
        today: date | None = None,
    ) -> AttendanceActionResult:
        """Mark one student and reconcile the day's class log."""
        student = self._get_student(tuition.id, student_id)
        if student.status != RecordStatus.ACTIVE:
            raise ValidationError(f"Student {student.name} is archived")
        return self._run_pipeline(tuition, [student.id], attendance_date, is_present, today)

    def mark_all(
        self,
        tuition: Tuition,
        attendance_date: date,
        is_present: bool,
        student_ids: list[int] | None = None,
        today: date | None = None,
    ) -> AttendanceActionResult:
        """Mark several students (default: every active one) at once."""
        students = self._get_students(tuition.id)
        active_ids = [s.id for s in students]

        if student_ids is None:
            target_ids = active_ids
        else:
            unknown = sorted(set(student_ids) - set(active_ids))
            if unknown:
                raise ValidationError(
                    "Some students are not active in this tuition. No records were saved.",
                    details={"student_ids": unknown},
                )
            target_ids = list(dict.fromkeys(student_ids))

        if not target_ids:
            raise ValidationError("No students to mark")
        return self._run_pipeline(tuition, target_ids, attendance_date, is_present, today)

    def upsert_attendance(
        self,
        tuition_id: int,
        student_ids: list[int],
        attendance_date: date,
        is_present: bool,
    ) -> int:
        """Create or update one row per student for the date."""
        result = self.db.execute(
            select(AttendanceRecord).where(
                AttendanceRecord.tuition_id == tuition_id,
                AttendanceRecord.attendance_date == attendance_date,
                AttendanceRecord.student_id.in_(student_ids),
            )
        )
        existing = {r.student_id: r for r in result.scalars().all()}

        for student_id in student_ids:
            record = existing.get(student_id)
            if record:
                record.is_present = is_present
            else:
                self.db.add(
                    AttendanceRecord(
                        student_id=student_id,
                        tuition_id=tuition_id,
                        attendance_date=attendance_date,
                        is_present=is_present,
                    )
                )
        self.db.flush()
        return len(student_ids)

    def _run_pipeline(
        self,
        tuition: Tuition,
        student_ids: list[int],
        attendance_date: date,
        is_present: bool,
        today: date | None,
    ) -> AttendanceActionResult:
        """Write attendance, derive, reconcile the log, refresh the month.

        Attendance and the class log are committed separately; a failure
        after the first commit leaves attendance saved.
        """
        if tuition.status != RecordStatus.ACTIVE:
            raise ValidationError("Tuition is archived")

        tuition_id = tuition.id
        try:
            updated = self.upsert_attendance(tuition_id, student_ids, attendance_date, is_present)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Attendance write failed for tuition {tuition_id} on {attendance_date}: {e}")
            raise PersistenceError("Could not save attendance") from e

        try:
            conducted = was_conducted(self.records_for_date(tuition_id, attendance_date))
        except SQLAlchemyError as e:
            logger.error(f"Conducted recompute failed for tuition {tuition_id}: {e}")
            raise PartialPipelineError("derive_conducted") from e

        try:
            log = self.logs.sync_log_from_attendance(tuition_id, attendance_date, conducted)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Class log reconcile failed for tuition {tuition_id} on {attendance_date}: {e}")
            raise PartialPipelineError("reconcile_log") from e

        try:
            month = CalendarService(self.db).month_overview(
                tuition,
                attendance_date.year,
                attendance_date.month,
                today=today,
            )
        except SQLAlchemyError as e:
            logger.error(f"Month refresh failed for tuition {tuition_id}: {e}")
            raise PartialPipelineError(
                "refresh_month",
                message="Attendance and class log saved but the calendar could not be refreshed",
                details={"log_saved": True},
            ) from e

        logger.info(
            f"Marked {updated} student(s) {'present' if is_present else 'absent'} "
            f"for tuition {tuition_id} on {attendance_date}; conducted={conducted}"
        )
        return AttendanceActionResult(
            tuition_id=tuition_id,
            attendance_date=attendance_date,
            updated_records=updated,
            was_conducted=conducted,
            class_log=ClassLogResponse.model_validate(log),
            month=month,
        )

    # ==========================================
    # Helpers
    # ==========================================

    def _get_student(self, tuition_id: int, student_id: int) -> Student:
        """Get student by ID, validating tuition membership."""
        result = self.db.execute(
            select(Student).where(
                Student.id == student_id,
                Student.tuition_id == tuition_id,
            )
        )
        student = result.scalar_one_or_none()
        if not student:
            raise NotFoundError("Student", str(student_id))
        return student

    def _get_students(self, tuition_id: int) -> list[Student]:
        """Active students of a tuition ordered by name."""
        result = self.db.execute(
            select(Student)
            .where(
                Student.tuition_id == tuition_id,
                Student.status == RecordStatus.ACTIVE,
            )
            .order_by(Student.name, Student.id)
        )
        return list(result.scalars().all())
