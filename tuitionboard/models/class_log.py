"""Class log model."""

from datetime import date

from sqlalchemy import BigInteger, Boolean, Date, ForeignKey, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from tuitionboard.core.database import Base
from tuitionboard.models.base import IDMixin, TimestampMixin


class ClassLog(Base, IDMixin, TimestampMixin):
    """Whether a tuition's class happened on a date and what was covered."""

    __tablename__ = "class_logs"

    tuition_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("tuitions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    class_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    was_conducted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    topic_covered: Mapped[str | None] = mapped_column(Text, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by: Mapped[int | None] = mapped_column(
        BigInteger,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )

    __table_args__ = (
        UniqueConstraint("tuition_id", "class_date", name="uq_class_log_tuition_date"),
    )

    def __repr__(self) -> str:
        return f"<ClassLog(tuition_id={self.tuition_id}, date={self.class_date})>"
