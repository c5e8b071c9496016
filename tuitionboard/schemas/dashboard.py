"""Dashboard schemas."""

from datetime import date
from decimal import Decimal

from pydantic import Field

from tuitionboard.schemas.common import BaseSchema


class TodayClass(BaseSchema):
    """A tuition whose schedule includes today."""

    tuition_id: int
    name: str
    subject: str
    student_count: int
    conducted: bool | None = Field(
        None, description="Null until attendance or a log exists for today"
    )


class DashboardResponse(BaseSchema):
    """Headline numbers for the tutor's home screen."""

    date: date
    active_tuitions: int = 0
    active_students: int = 0
    expected_monthly_fees: Decimal = Decimal("0")
    todays_classes: list[TodayClass] = []
