"""Student schemas."""

from decimal import Decimal

from pydantic import Field

from tuitionboard.models.base import RecordStatus
from tuitionboard.schemas.common import BaseSchema, PaginatedResponse, TimestampSchema


class StudentBase(BaseSchema):
    """Base student schema."""

    name: str = Field(..., min_length=1, max_length=255)
    phone: str | None = Field(None, max_length=50)
    parent_phone: str | None = Field(None, max_length=50)
    class_level: str = Field(..., min_length=1, max_length=50)
    fee_per_month: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)


class StudentCreate(StudentBase):
    """Student creation schema."""

    tuition_id: int


class StudentUpdate(BaseSchema):
    """Student update schema."""

    name: str | None = Field(None, min_length=1, max_length=255)
    phone: str | None = Field(None, max_length=50)
    parent_phone: str | None = Field(None, max_length=50)
    class_level: str | None = Field(None, min_length=1, max_length=50)
    fee_per_month: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)


class StudentResponse(StudentBase, TimestampSchema):
    """Student response schema."""

    id: int
    tuition_id: int
    status: RecordStatus


class StudentFilter(BaseSchema):
    """Student filter options."""

    tuition_id: int | None = None
    status: RecordStatus | None = RecordStatus.ACTIVE
    search: str | None = None  # Search by name


class PaginatedStudentResponse(PaginatedResponse):
    """Paginated student list."""

    items: list[StudentResponse]
