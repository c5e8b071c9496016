"""Dashboard endpoints."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from tuitionboard.core.database import get_db
from tuitionboard.core.dependencies import CurrentUser
from tuitionboard.schemas.dashboard import DashboardResponse
from tuitionboard.services.dashboard import DashboardService

router = APIRouter()


@router.get("", response_model=DashboardResponse)
def get_dashboard(
    current_user: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
    today: date | None = None,
):
    """
    Headline numbers for the home screen.

    Active tuition and student counts, expected monthly fees, and the
    tuitions scheduled for today with whether each class has happened yet.
    """
    service = DashboardService(db)
    return service.get_dashboard(current_user.id, today=today)
