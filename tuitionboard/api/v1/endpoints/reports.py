"""Report export endpoints, nested under a tuition."""

from datetime import date
from io import BytesIO
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from tuitionboard.core.database import get_db
from tuitionboard.core.dependencies import OwnedTuition
from tuitionboard.services.report import ReportService

router = APIRouter()


@router.get("/monthly")
def export_monthly_report(
    tuition: OwnedTuition,
    db: Annotated[Session, Depends(get_db)],
    year: int = Query(..., ge=1, le=9999),
    month: int = Query(..., ge=1, le=12),
    today: date | None = None,
):
    """Download the month's attendance grid and summary as an Excel file."""
    service = ReportService(db)
    content = service.export_month(tuition, year, month, today=today)

    filename = f"attendance_{tuition.id}_{year}_{month:02d}.xlsx"
    return StreamingResponse(
        BytesIO(content),
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
