"""Tutor identity schemas."""

from datetime import datetime

from pydantic import Field

from tuitionboard.models.user import UserRole
from tuitionboard.schemas.common import BaseSchema


class UserResponse(BaseSchema):
    """Current tutor profile."""

    id: int
    external_id: str
    email: str
    name: str
    phone: str | None
    role: UserRole
    is_active: bool
    created_at: datetime
    updated_at: datetime


class UserUpdate(BaseSchema):
    """Profile fields the tutor may change."""

    name: str | None = Field(None, min_length=1, max_length=255)
    phone: str | None = Field(None, max_length=50)
