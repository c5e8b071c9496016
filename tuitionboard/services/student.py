"""Student management service."""

import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from tuitionboard.core.exceptions import NotFoundError, ValidationError
from tuitionboard.models.base import RecordStatus
from tuitionboard.models.student import Student
from tuitionboard.models.tuition import Tuition
from tuitionboard.schemas.student import (
    PaginatedStudentResponse,
    StudentCreate,
    StudentFilter,
    StudentResponse,
    StudentUpdate,
)

logger = logging.getLogger(__name__)


class StudentService:
    """Student management service, scoped through the owning tutor."""

    def __init__(self, db: Session):
        self.db = db

    def create_student(self, tutor_id: int, request: StudentCreate) -> StudentResponse:
        """Enroll a new student in one of the tutor's tuitions."""
        tuition = self._get_tuition(tutor_id, request.tuition_id)
        if tuition.status != RecordStatus.ACTIVE:
            raise ValidationError("Cannot add students to an archived tuition")

        student = Student(
            tuition_id=tuition.id,
            name=request.name,
            phone=request.phone or None,
            parent_phone=request.parent_phone or None,
            class_level=request.class_level,
            fee_per_month=request.fee_per_month,
            status=RecordStatus.ACTIVE,
        )
        tuition.students.append(student)
        self.db.flush()
        self.db.refresh(student)
        return StudentResponse.model_validate(student)

    def get_student(self, tutor_id: int, student_id: int) -> Student:
        """Get student by ID."""
        result = self.db.execute(
            select(Student)
            .join(Tuition, Tuition.id == Student.tuition_id)
            .where(
                Student.id == student_id,
                Tuition.tutor_id == tutor_id,
            )
        )
        student = result.scalar_one_or_none()
        if not student:
            raise NotFoundError("Student", str(student_id))
        return student

    def update_student(
        self,
        tutor_id: int,
        student_id: int,
        request: StudentUpdate,
    ) -> StudentResponse:
        """Update a student."""
        student = self.get_student(tutor_id, student_id)
        update_data = request.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            if field in ("name", "class_level", "fee_per_month") and value is None:
                continue
            setattr(student, field, value)
        self.db.flush()
        self.db.refresh(student)
        return StudentResponse.model_validate(student)

    def set_status(
        self,
        tutor_id: int,
        student_id: int,
        status: RecordStatus,
    ) -> StudentResponse:
        """Archive or restore a student."""
        student = self.get_student(tutor_id, student_id)
        student.status = status
        self.db.flush()
        self.db.refresh(student)
        logger.info(f"Student {student_id} is now {status.value}")
        return StudentResponse.model_validate(student)

    def delete_student(self, tutor_id: int, student_id: int) -> None:
        """Permanently delete an archived student."""
        student = self.get_student(tutor_id, student_id)
        if student.status != RecordStatus.ARCHIVED:
            raise ValidationError("Archive the student before deleting")
        # delete-orphan removes the row
        student.tuition.students.remove(student)
        self.db.flush()

    def list_students(
        self,
        tutor_id: int,
        filters: StudentFilter | None = None,
        page: int = 1,
        page_size: int = 50,
    ) -> PaginatedStudentResponse:
        """List students with filtering and pagination."""
        query = (
            select(Student)
            .join(Tuition, Tuition.id == Student.tuition_id)
            .where(Tuition.tutor_id == tutor_id)
        )

        if filters:
            if filters.tuition_id:
                query = query.where(Student.tuition_id == filters.tuition_id)
            if filters.status:
                query = query.where(Student.status == filters.status)
            if filters.search:
                query = query.where(Student.name.ilike(f"%{filters.search}%"))

        # Get total count
        count_query = select(func.count()).select_from(query.subquery())
        total = self.db.execute(count_query).scalar() or 0

        # Apply pagination
        offset = (page - 1) * page_size
        query = query.order_by(Student.name, Student.id).offset(offset).limit(page_size)
        students = self.db.execute(query).scalars().all()

        return PaginatedStudentResponse.build(
            [StudentResponse.model_validate(s) for s in students],
            total,
            page,
            page_size,
        )

    def _get_tuition(self, tutor_id: int, tuition_id: int) -> Tuition:
        result = self.db.execute(
            select(Tuition).where(
                Tuition.id == tuition_id,
                Tuition.tutor_id == tutor_id,
            )
        )
        tuition = result.scalar_one_or_none()
        if not tuition:
            raise NotFoundError("Tuition", str(tuition_id))
        return tuition
