"""Attendance record model."""

from datetime import date

from sqlalchemy import BigInteger, Boolean, Date, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tuitionboard.core.database import Base
from tuitionboard.models.base import IDMixin, TimestampMixin


class AttendanceRecord(Base, IDMixin, TimestampMixin):
    """Per-student presence flag for one tuition on one date."""

    __tablename__ = "attendance"

    student_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("students.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    tuition_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("tuitions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    attendance_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    is_present: Mapped[bool] = mapped_column(Boolean, nullable=False)

    # Relationships
    student: Mapped["Student"] = relationship(
        "Student",
        back_populates="attendance_records",
        lazy="selectin",
    )

    __table_args__ = (
        UniqueConstraint(
            "student_id", "tuition_id", "attendance_date",
            name="uq_attendance_student_tuition_date",
        ),
    )

    @property
    def student_name(self) -> str:
        """Get student name from relationship."""
        return self.student.name if self.student else ""

    def __repr__(self) -> str:
        return f"<AttendanceRecord(student_id={self.student_id}, date={self.attendance_date})>"
