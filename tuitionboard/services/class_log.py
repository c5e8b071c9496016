"""Class log service: attendance reconciliation and manual logs."""

import logging
from datetime import date, datetime, timezone
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from tuitionboard.core.exceptions import NotFoundError
from tuitionboard.models.class_log import ClassLog
from tuitionboard.schemas.class_log import ClassLogFields, ClassLogUpdate
from tuitionboard.services.class_status import month_dates

logger = logging.getLogger(__name__)


class ClassLogService:
    """Keeps one class log per (tuition, date)."""

    def __init__(self, db: Session):
        self.db = db

    def find_log(self, tuition_id: int, class_date: date) -> ClassLog | None:
        """Get the log for a tuition on a date, if any."""
        result = self.db.execute(
            select(ClassLog).where(
                ClassLog.tuition_id == tuition_id,
                ClassLog.class_date == class_date,
            )
        )
        return result.scalar_one_or_none()

    def get_log(self, tuition_id: int, log_id: int) -> ClassLog:
        """Get a log by ID within a tuition."""
        result = self.db.execute(
            select(ClassLog).where(
                ClassLog.id == log_id,
                ClassLog.tuition_id == tuition_id,
            )
        )
        log = result.scalar_one_or_none()
        if not log:
            raise NotFoundError("Class log", str(log_id))
        return log

    def list_logs(
        self,
        tuition_id: int,
        year: int | None = None,
        month: int | None = None,
    ) -> list[ClassLog]:
        """List logs newest first, optionally limited to one month."""
        query = select(ClassLog).where(ClassLog.tuition_id == tuition_id)
        if year and month:
            dates = month_dates(year, month)
            query = query.where(
                ClassLog.class_date >= dates[0],
                ClassLog.class_date <= dates[-1],
            )
        query = query.order_by(ClassLog.class_date.desc())
        result = self.db.execute(query)
        return list(result.scalars().all())

    def logs_by_date(self, tuition_id: int, year: int, month: int) -> dict[date, ClassLog]:
        """Map each logged date of a month to its log."""
        return {log.class_date: log for log in self.list_logs(tuition_id, year, month)}

    def sync_log_from_attendance(
        self,
        tuition_id: int,
        class_date: date,
        was_conducted: bool,
    ) -> ClassLog:
        """Record the attendance-derived conducted flag on the date's log.

        An existing log keeps its topic and notes. Always writes, even when
        the flag is unchanged.
        """
        log = self._upsert(tuition_id, class_date, {"was_conducted": was_conducted})
        logger.debug(
            f"Class log {log.id} synced for tuition {tuition_id} on {class_date}: "
            f"was_conducted={was_conducted}"
        )
        return log

    def upsert_manual_log(
        self,
        tuition_id: int,
        class_date: date,
        fields: ClassLogFields,
        created_by: int | None = None,
    ) -> ClassLog:
        """Create or overwrite the tutor-entered log for a date."""
        values = {
            "was_conducted": fields.was_conducted,
            "topic_covered": fields.topic_covered,
            "notes": fields.notes,
        }
        return self._upsert(tuition_id, class_date, values, created_by=created_by)

    def update_log(
        self,
        tuition_id: int,
        log_id: int,
        request: ClassLogUpdate,
    ) -> ClassLog:
        """Edit an existing log in place."""
        log = self.get_log(tuition_id, log_id)
        update_data = request.model_dump(exclude_unset=True)
        if update_data.get("was_conducted") is None:
            update_data.pop("was_conducted", None)
        for field, value in update_data.items():
            setattr(log, field, value)
        self.db.flush()
        self.db.refresh(log)
        return log

    def delete_log(self, tuition_id: int, log_id: int) -> None:
        """Hard delete a log. There is no undo."""
        log = self.get_log(tuition_id, log_id)
        self.db.delete(log)
        self.db.flush()
        logger.info(f"Class log {log_id} deleted from tuition {tuition_id}")

    def _upsert(
        self,
        tuition_id: int,
        class_date: date,
        values: dict[str, Any],
        created_by: int | None = None,
    ) -> ClassLog:
        existing = self.find_log(tuition_id, class_date)
        if existing:
            return self._apply(existing, values)

        log = ClassLog(
            tuition_id=tuition_id,
            class_date=class_date,
            created_by=created_by,
            **values,
        )
        try:
            # A conflict rolls back only this insert
            with self.db.begin_nested():
                self.db.add(log)
                self.db.flush()
        except IntegrityError:
            logger.info(
                f"Class log for tuition {tuition_id} on {class_date} was created concurrently; updating it"
            )
            existing = self.find_log(tuition_id, class_date)
            if existing is None:
                raise
            return self._apply(existing, values)
        return log

    def _apply(self, log: ClassLog, values: dict[str, Any]) -> ClassLog:
        for field, value in values.items():
            setattr(log, field, value)
        # Touch the row so an unchanged flag is still written
        log.updated_at = datetime.now(timezone.utc)
        self.db.flush()
        return log
