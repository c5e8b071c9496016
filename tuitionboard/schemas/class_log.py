"""Class log schemas."""

from datetime import date

from tuitionboard.schemas.common import BaseSchema, OptionalText, TimestampSchema


class ClassLogFields(BaseSchema):
    """Fields a tutor records for a class."""

    was_conducted: bool = False
    topic_covered: OptionalText = None
    notes: OptionalText = None


class ClassLogUpsert(ClassLogFields):
    """Create or replace the log for a date."""

    class_date: date


class ClassLogUpdate(BaseSchema):
    """Partial edit of an existing log."""

    was_conducted: bool | None = None
    topic_covered: OptionalText = None
    notes: OptionalText = None


class ClassLogResponse(TimestampSchema):
    """Class log response schema."""

    id: int
    tuition_id: int
    class_date: date
    was_conducted: bool
    topic_covered: str | None
    notes: str | None
    created_by: int | None
