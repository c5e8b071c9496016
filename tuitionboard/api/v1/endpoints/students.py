"""Student management endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from tuitionboard.core.database import get_db
from tuitionboard.core.dependencies import CurrentUser
from tuitionboard.models.base import RecordStatus
from tuitionboard.schemas.common import MessageResponse
from tuitionboard.schemas.student import (
    PaginatedStudentResponse,
    StudentCreate,
    StudentFilter,
    StudentResponse,
    StudentUpdate,
)
from tuitionboard.services.student import StudentService

router = APIRouter()


@router.post("", response_model=StudentResponse)
def create_student(
    request: StudentCreate,
    current_user: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
):
    """Enroll a new student in one of the tutor's tuitions."""
    service = StudentService(db)
    return service.create_student(current_user.id, request)


@router.get("", response_model=PaginatedStudentResponse)
def list_students(
    current_user: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
    page: int = Query(1, ge=1),
    page_size: int = Query(50, ge=1, le=500),
    tuition_id: int | None = None,
    status: RecordStatus | None = RecordStatus.ACTIVE,
    search: str | None = None,
):
    """List students with filtering and pagination."""
    service = StudentService(db)
    filters = StudentFilter(tuition_id=tuition_id, status=status, search=search)
    return service.list_students(current_user.id, filters, page, page_size)


@router.get("/{student_id}", response_model=StudentResponse)
def get_student(
    student_id: int,
    current_user: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
):
    """Get a student by ID."""
    service = StudentService(db)
    return StudentResponse.model_validate(service.get_student(current_user.id, student_id))


@router.patch("/{student_id}", response_model=StudentResponse)
def update_student(
    student_id: int,
    request: StudentUpdate,
    current_user: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
):
    """Update a student."""
    service = StudentService(db)
    return service.update_student(current_user.id, student_id, request)


@router.post("/{student_id}/archive", response_model=StudentResponse)
def archive_student(
    student_id: int,
    current_user: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
):
    """Archive a student. Past attendance is kept."""
    service = StudentService(db)
    return service.set_status(current_user.id, student_id, RecordStatus.ARCHIVED)


@router.post("/{student_id}/restore", response_model=StudentResponse)
def restore_student(
    student_id: int,
    current_user: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
):
    """Restore an archived student."""
    service = StudentService(db)
    return service.set_status(current_user.id, student_id, RecordStatus.ACTIVE)


@router.delete("/{student_id}", response_model=MessageResponse)
def delete_student(
    student_id: int,
    current_user: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
):
    """Permanently delete an archived student and their attendance."""
    service = StudentService(db)
    service.delete_student(current_user.id, student_id)
    return MessageResponse(message="Student deleted successfully")
