"""Shared schema base classes and field types."""

from collections.abc import Sequence
from datetime import datetime
from typing import Annotated, Any, Generic, TypeVar

from pydantic import AfterValidator, BaseModel, ConfigDict


def _blank_to_none(v: str | None) -> str | None:
    if v is None:
        return None
    v = v.strip()
    return v or None


# Empty form fields are stored as NULL
OptionalText = Annotated[str | None, AfterValidator(_blank_to_none)]


class BaseSchema(BaseModel):
    """Base for request and response bodies; reads ORM objects directly."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class TimestampSchema(BaseSchema):
    created_at: datetime
    updated_at: datetime


T = TypeVar("T")


class PaginatedResponse(BaseSchema, Generic[T]):
    """One page of a listing."""

    items: list[T]
    total: int
    page: int
    page_size: int
    total_pages: int

    @classmethod
    def build(cls, items: Sequence[Any], total: int, page: int, page_size: int):
        return cls(
            items=list(items),
            total=total,
            page=page,
            page_size=page_size,
            total_pages=(total + page_size - 1) // page_size,
        )


class ErrorDetail(BaseSchema):
    """Payload of an ``AppException``."""

    code: str
    message: str
    details: dict[str, Any] = {}


class ErrorResponse(BaseSchema):
    """Error body returned by every failing request."""

    success: bool = False
    error: ErrorDetail


class MessageResponse(BaseSchema):
    message: str
