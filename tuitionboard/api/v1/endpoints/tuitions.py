"""Tuition management endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from tuitionboard.core.database import get_db
from tuitionboard.core.dependencies import CurrentUser, OwnedTuition
from tuitionboard.models.base import RecordStatus
from tuitionboard.schemas.common import MessageResponse
from tuitionboard.schemas.tuition import TuitionCreate, TuitionResponse, TuitionUpdate
from tuitionboard.services.tuition import TuitionService

router = APIRouter()

@router.post("", response_model=TuitionResponse)
def create_tuition(
    request: TuitionCreate,
    current_user: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
):
    """Create a new tuition with its weekly teaching days."""
    service = TuitionService(db)
    return service.create_tuition(current_user.id, request)

@router.get("", response_model=list[TuitionResponse])
def list_tuitions(
    current_user: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
    status: RecordStatus | None = RecordStatus.ACTIVE,
):
    """List tuitions. Pass `status=archived` for the archive screen."""
    service = TuitionService(db)
    return service.list_tuitions(current_user.id, status)

@router.get("/{tuition_id}", response_model=TuitionResponse)
def get_tuition(tuition: OwnedTuition):
    """Get a tuition by ID."""
    return TuitionResponse.model_validate(tuition)

@router.patch("/{tuition_id}", response_model=TuitionResponse)
def update_tuition(
    tuition_id: int,
    request: TuitionUpdate,
    current_user: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
):
    """Update a tuition."""
    service = TuitionService(db)
    return service.update_tuition(current_user.id, tuition_id, request)

@router.post("/{tuition_id}/archive", response_model=TuitionResponse)
def archive_tuition(
    tuition_id: int,
    current_user: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
):
    """Archive a tuition. Its students and history are kept."""
    service = TuitionService(db)
    return service.set_status(current_user.id, tuition_id, RecordStatus.ARCHIVED)

@router.post("/{tuition_id}/restore", response_model=TuitionResponse)
def restore_tuition(
    tuition_id: int,
    current_user: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
):
    """Restore an archived tuition."""
    service = TuitionService(db)
    return service.set_status(current_user.id, tuition_id, RecordStatus.ACTIVE)

@router.delete("/{tuition_id}", response_model=MessageResponse)
def delete_tuition(
    tuition_id: int,
    current_user: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
):
    """Permanently delete an archived tuition with its students, attendance and logs."""
    service = TuitionService(db)
    service.delete_tuition(current_user.id, tuition_id)
    return MessageResponse(message="Tuition deleted successfully")
