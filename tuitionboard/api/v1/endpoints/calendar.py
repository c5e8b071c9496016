"""Monthly calendar endpoints, nested under a tuition."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from tuitionboard.core.database import get_db
from tuitionboard.core.dependencies import OwnedTuition
from tuitionboard.schemas.calendar import ConductedSource, DayEntry, MonthOverview
from tuitionboard.services.calendar import CalendarService

router = APIRouter()


@router.get("", response_model=MonthOverview)
def get_month_overview(
    tuition: OwnedTuition,
    db: Annotated[Session, Depends(get_db)],
    year: int = Query(..., ge=1, le=9999),
    month: int = Query(..., ge=1, le=12),
    source: ConductedSource = ConductedSource.COMBINED,
    today: date | None = Query(None, description="Defaults to the server's current date"),
):
    """
    Status of every date in a month plus the monthly counters.

    `source` picks the conducted signal: attendance, class logs, or
    attendance falling back to the log when nobody was marked.
    """
    service = CalendarService(db)
    return service.month_overview(tuition, year, month, source=source, today=today)


@router.get("/days/{day}", response_model=DayEntry)
def get_day(
    day: date,
    tuition: OwnedTuition,
    db: Annotated[Session, Depends(get_db)],
    source: ConductedSource = ConductedSource.COMBINED,
    today: date | None = None,
):
    """Status of a single date."""
    service = CalendarService(db)
    return service.day_entry(tuition, day, source=source, today=today)
