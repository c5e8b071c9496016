"""Attendance endpoints, nested under a tuition."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from tuitionboard.core.database import get_db
from tuitionboard.core.dependencies import OwnedTuition
from tuitionboard.core.exceptions import ValidationError
from tuitionboard.schemas.attendance import (
    AttendanceActionResult,
    AttendanceMark,
    AttendanceMarkAll,
    AttendanceRecordResponse,
    AttendanceRoster,
)
from tuitionboard.services.attendance import AttendanceService

router = APIRouter()


@router.get("", response_model=list[AttendanceRecordResponse])
def list_attendance(
    tuition: OwnedTuition,
    db: Annotated[Session, Depends(get_db)],
    date_from: date,
    date_to: date | None = None,
    student_id: int | None = None,
):
    """Attendance rows for a date or an inclusive date range."""
    if date_to and date_to < date_from:
        raise ValidationError("date_to must not be before date_from")
    service = AttendanceService(db)
    return service.list_attendance(tuition.id, date_from, date_to, student_id)


@router.get("/roster", response_model=AttendanceRoster)
def get_roster(
    tuition: OwnedTuition,
    db: Annotated[Session, Depends(get_db)],
    attendance_date: date,
):
    """
    Every active student with their mark on a date.
    Unmarked students are returned with `is_present: null`.
    """
    service = AttendanceService(db)
    return service.get_roster(tuition, attendance_date)


@router.put("/students/{student_id}", response_model=AttendanceActionResult)
def mark_attendance(
    student_id: int,
    request: AttendanceMark,
    tuition: OwnedTuition,
    db: Annotated[Session, Depends(get_db)],
):
    """
    Mark one student present or absent.

    The day's class log is updated to match and the month overview is
    returned so the calendar can refresh without another request.
    """
    service = AttendanceService(db)
    return service.mark_attendance(
        tuition,
        student_id,
        request.attendance_date,
        request.is_present,
    )


@router.post("/mark-all", response_model=AttendanceActionResult)
def mark_all(
    request: AttendanceMarkAll,
    tuition: OwnedTuition,
    db: Annotated[Session, Depends(get_db)],
):
    """Mark every active student (or the listed ones) with the same status."""
    service = AttendanceService(db)
    return service.mark_all(
        tuition,
        request.attendance_date,
        request.is_present,
        student_ids=request.student_ids,
    )
