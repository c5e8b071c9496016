"""Class log endpoints, nested under a tuition."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from tuitionboard.core.database import get_db
from tuitionboard.core.dependencies import CurrentUser, OwnedTuition
from tuitionboard.core.exceptions import ValidationError
from tuitionboard.schemas.class_log import ClassLogResponse, ClassLogUpdate, ClassLogUpsert
from tuitionboard.schemas.common import MessageResponse
from tuitionboard.services.class_log import ClassLogService

router = APIRouter()


@router.get("", response_model=list[ClassLogResponse])
def list_class_logs(
    tuition: OwnedTuition,
    db: Annotated[Session, Depends(get_db)],
    year: int | None = Query(None, ge=1, le=9999),
    month: int | None = Query(None, ge=1, le=12),
):
    """List class logs newest first. Pass both year and month to limit to one month."""
    if (year is None) != (month is None):
        raise ValidationError("year and month must be given together")
    service = ClassLogService(db)
    return service.list_logs(tuition.id, year, month)


@router.get("/by-date/{class_date}", response_model=ClassLogResponse | None)
def get_class_log_by_date(
    class_date: date,
    tuition: OwnedTuition,
    db: Annotated[Session, Depends(get_db)],
):
    """Get the log for a date, or null when nothing was recorded."""
    service = ClassLogService(db)
    return service.find_log(tuition.id, class_date)


@router.put("", response_model=ClassLogResponse)
def upsert_class_log(
    request: ClassLogUpsert,
    tuition: OwnedTuition,
    current_user: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
):
    """Create the log for a date, or overwrite the one already there."""
    service = ClassLogService(db)
    return service.upsert_manual_log(
        tuition.id,
        request.class_date,
        request,
        created_by=current_user.id,
    )


@router.patch("/{log_id}", response_model=ClassLogResponse)
def update_class_log(
    log_id: int,
    request: ClassLogUpdate,
    tuition: OwnedTuition,
    db: Annotated[Session, Depends(get_db)],
):
    """Edit a class log."""
    service = ClassLogService(db)
    return service.update_log(tuition.id, log_id, request)


@router.delete("/{log_id}", response_model=MessageResponse)
def delete_class_log(
    log_id: int,
    tuition: OwnedTuition,
    db: Annotated[Session, Depends(get_db)],
):
    """Delete a class log. Attendance for the date is untouched."""
    service = ClassLogService(db)
    service.delete_log(tuition.id, log_id)
    return MessageResponse(message="Class log deleted successfully")
