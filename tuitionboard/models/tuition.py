"""Tuition (class group) model."""

from sqlalchemy import JSON, BigInteger, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tuitionboard.core.database import Base
from tuitionboard.models.base import IDMixin, RecordStatus, TimestampMixin


class Tuition(Base, IDMixin, TimestampMixin):
    """A recurring teaching engagement with a weekly schedule."""

    __tablename__ = "tuitions"

    tutor_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    subject: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Canonical weekday names, see services.schedule
    teaching_days: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    days_per_week: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    status: Mapped[RecordStatus] = mapped_column(
        Enum(RecordStatus),
        default=RecordStatus.ACTIVE,
        nullable=False,
        index=True,
    )

    # Relationships
    tutor: Mapped["User"] = relationship("User", back_populates="tuitions")
    students: Mapped[list["Student"]] = relationship(
        "Student",
        back_populates="tuition",
        lazy="selectin",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def active_student_count(self) -> int:
        return sum(1 for s in self.students if s.status == RecordStatus.ACTIVE)

    def __repr__(self) -> str:
        return f"<Tuition(id={self.id}, name={self.name})>"
