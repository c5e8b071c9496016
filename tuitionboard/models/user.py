"""Tutor (user) model."""

import enum

from sqlalchemy import Boolean, Enum, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tuitionboard.core.database import Base
from tuitionboard.models.base import IDMixin, TimestampMixin


class UserRole(str, enum.Enum):
    """Role recorded when the tutor is first provisioned."""

    ADMIN = "admin"
    TUTOR = "tutor"
    COACHING_CENTER = "coaching_center"


class User(Base, IDMixin, TimestampMixin):
    """Local mirror of an identity-provider account.

    Credentials live with the provider; this row only anchors ownership
    of tuitions.
    """

    __tablename__ = "users"

    external_id: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole),
        default=UserRole.TUTOR,
        nullable=False,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    # Relationships
    tuitions: Mapped[list["Tuition"]] = relationship(
        "Tuition",
        back_populates="tutor",
        lazy="selectin",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, external_id={self.external_id})>"
