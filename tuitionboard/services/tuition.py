"""Tuition management service."""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from tuitionboard.core.exceptions import NotFoundError, ValidationError
from tuitionboard.models.base import RecordStatus
from tuitionboard.models.tuition import Tuition
from tuitionboard.schemas.tuition import TuitionCreate, TuitionResponse, TuitionUpdate

logger = logging.getLogger(__name__)


class TuitionService:
    """Tuition management service, always scoped to one tutor."""

    def __init__(self, db: Session):
        self.db = db

    def create_tuition(self, tutor_id: int, request: TuitionCreate) -> TuitionResponse:
        """Create a new active tuition."""
        tuition = Tuition(
            tutor_id=tutor_id,
            name=request.name,
            subject=request.subject,
            description=request.description,
            address=request.address,
            teaching_days=request.teaching_days,
            days_per_week=len(request.teaching_days),
            status=RecordStatus.ACTIVE,
        )
        self.db.add(tuition)
        self.db.flush()
        self.db.refresh(tuition)
        logger.info(f"Tuition {tuition.id} created for tutor {tutor_id}")
        return TuitionResponse.model_validate(tuition)

    def get_tuition(self, tutor_id: int, tuition_id: int) -> Tuition:
        """Get a tuition owned by the tutor."""
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

    def list_tuitions(
        self,
        tutor_id: int,
        status: RecordStatus | None = RecordStatus.ACTIVE,
    ) -> list[TuitionResponse]:
        """List the tutor's tuitions, newest first."""
        query = select(Tuition).where(Tuition.tutor_id == tutor_id)
        if status:
            query = query.where(Tuition.status == status)
        query = query.order_by(Tuition.created_at.desc(), Tuition.id.desc())

        result = self.db.execute(query)
        return [TuitionResponse.model_validate(t) for t in result.scalars().all()]

    def update_tuition(
        self,
        tutor_id: int,
        tuition_id: int,
        request: TuitionUpdate,
    ) -> TuitionResponse:
        """Update a tuition; days_per_week follows teaching_days."""
        tuition = self.get_tuition(tutor_id, tuition_id)
        update_data = request.model_dump(exclude_unset=True)
        if "teaching_days" in update_data and update_data["teaching_days"] is None:
            raise ValidationError("Select at least one teaching day")
        for field, value in update_data.items():
            if field in ("name", "subject") and value is None:
                continue
            setattr(tuition, field, value)
        tuition.days_per_week = len(tuition.teaching_days or [])

        self.db.flush()
        self.db.refresh(tuition)
        return TuitionResponse.model_validate(tuition)

    def set_status(
        self,
        tutor_id: int,
        tuition_id: int,
        status: RecordStatus,
    ) -> TuitionResponse:
        """Archive or restore a tuition."""
        tuition = self.get_tuition(tutor_id, tuition_id)
        tuition.status = status
        self.db.flush()
        self.db.refresh(tuition)
        logger.info(f"Tuition {tuition_id} is now {status.value}")
        return TuitionResponse.model_validate(tuition)

    def delete_tuition(self, tutor_id: int, tuition_id: int) -> None:
        """Permanently delete an archived tuition."""
        tuition = self.get_tuition(tutor_id, tuition_id)
        if tuition.status != RecordStatus.ARCHIVED:
            raise ValidationError("Archive the tuition before deleting it")
        self.db.delete(tuition)
        self.db.flush()
