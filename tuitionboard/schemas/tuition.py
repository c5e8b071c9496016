"""Tuition schemas."""

from pydantic import Field, field_validator

from tuitionboard.models.base import RecordStatus
from tuitionboard.schemas.common import BaseSchema, OptionalText, TimestampSchema
from tuitionboard.services.schedule import normalize_teaching_days


class TuitionBase(BaseSchema):
    """Base tuition schema."""

    name: str = Field(..., min_length=1, max_length=255)
    subject: str = Field(..., min_length=1, max_length=100)
    description: OptionalText = None
    address: OptionalText = None


class TuitionCreate(TuitionBase):
    """Tuition creation schema."""

    teaching_days: list[str] = Field(..., min_length=1)

    @field_validator("teaching_days")
    @classmethod
    def validate_teaching_days(cls, v: list[str]) -> list[str]:
        return normalize_teaching_days(v)


class TuitionUpdate(BaseSchema):
    """Tuition update schema."""

    name: str | None = Field(None, min_length=1, max_length=255)
    subject: str | None = Field(None, min_length=1, max_length=100)
    description: OptionalText = None
    address: OptionalText = None
    teaching_days: list[str] | None = Field(None, min_length=1)

    @field_validator("teaching_days")
    @classmethod
    def validate_teaching_days(cls, v: list[str] | None) -> list[str] | None:
        if v is None:
            return v
        return normalize_teaching_days(v)


class TuitionResponse(TuitionBase, TimestampSchema):
    """Tuition response schema."""

    id: int
    tutor_id: int
    teaching_days: list[str]
    days_per_week: int
    status: RecordStatus
    active_student_count: int = 0
