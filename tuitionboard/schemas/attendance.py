"""Attendance schemas."""

from datetime import date, datetime

from pydantic import Field

from tuitionboard.schemas.calendar import MonthOverview
from tuitionboard.schemas.class_log import ClassLogResponse
from tuitionboard.schemas.common import BaseSchema


class AttendanceMark(BaseSchema):
    """Mark one student present or absent."""

    attendance_date: date
    is_present: bool


class AttendanceMarkAll(BaseSchema):
    """Mark many students at once."""

    attendance_date: date
    is_present: bool
    student_ids: list[int] | None = Field(
        None, description="Defaults to every active student of the tuition"
    )


class AttendanceRecordResponse(BaseSchema):
    """Attendance record response schema."""

    id: int
    student_id: int
    student_name: str
    tuition_id: int
    attendance_date: date
    is_present: bool
    created_at: datetime
    updated_at: datetime


class RosterEntry(BaseSchema):
    """One student's attendance on a date."""

    student_id: int
    student_name: str
    class_level: str
    is_present: bool | None = Field(None, description="Null when not yet marked")
    record_id: int | None = None


class AttendanceRoster(BaseSchema):
    """Every active student of a tuition with their status on a date."""

    tuition_id: int
    attendance_date: date
    scheduled: bool
    students: list[RosterEntry]
    total_students: int
    present_count: int
    absent_count: int
    unmarked_count: int
    was_conducted: bool
    class_log: ClassLogResponse | None = None


class AttendanceActionResult(BaseSchema):
    """Fresh derived state returned after any attendance change."""

    tuition_id: int
    attendance_date: date
    updated_records: int
    was_conducted: bool
    class_log: ClassLogResponse
    month: MonthOverview
