"""Student model."""

from decimal import Decimal

from sqlalchemy import BigInteger, Enum, ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tuitionboard.core.database import Base
from tuitionboard.models.base import IDMixin, RecordStatus, TimestampMixin


class Student(Base, IDMixin, TimestampMixin):
    """Student enrolled in exactly one tuition."""

    __tablename__ = "students"

    tuition_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("tuitions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    parent_phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    class_level: Mapped[str] = mapped_column(String(50), nullable=False)
    fee_per_month: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, default=0)
    status: Mapped[RecordStatus] = mapped_column(
        Enum(RecordStatus),
        default=RecordStatus.ACTIVE,
        nullable=False,
        index=True,
    )

    # Relationships
    tuition: Mapped["Tuition"] = relationship("Tuition", back_populates="students")
    attendance_records: Mapped[list["AttendanceRecord"]] = relationship(
        "AttendanceRecord",
        back_populates="student",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Student(id={self.id}, name={self.name}, tuition={self.tuition_id})>"
