from datetime import date

import pytest
from sqlalchemy import func, select

from tuitionboard.core.exceptions import NotFoundError
from tuitionboard.models.class_log import ClassLog
from tuitionboard.models.user import User, UserRole
from tuitionboard.schemas.class_log import ClassLogFields, ClassLogUpdate
from tuitionboard.services.class_log import ClassLogService

CLASS_DAY = date(2024, 5, 6)


def count_logs(db_session, tuition_id: int, class_date: date) -> int:
    return db_session.execute(
        select(func.count(ClassLog.id)).where(
            ClassLog.tuition_id == tuition_id,
            ClassLog.class_date == class_date,
        )
    ).scalar_one()


def test_sync_creates_log_without_topic(db_session, tuition):
    service = ClassLogService(db_session)

    log = service.sync_log_from_attendance(tuition.id, CLASS_DAY, True)

    assert log.id is not None
    assert log.was_conducted is True
    assert log.topic_covered is None
    assert log.notes is None


def test_sync_twice_keeps_one_row_and_manual_fields(db_session, tutor, tuition):
    service = ClassLogService(db_session)
    service.upsert_manual_log(
        tuition.id,
        CLASS_DAY,
        ClassLogFields(was_conducted=False, topic_covered="Fractions", notes="Bring graph paper"),
        created_by=tutor.id,
    )

    service.sync_log_from_attendance(tuition.id, CLASS_DAY, True)
    service.sync_log_from_attendance(tuition.id, CLASS_DAY, True)
    db_session.commit()

    assert count_logs(db_session, tuition.id, CLASS_DAY) == 1
    log = service.find_log(tuition.id, CLASS_DAY)
    assert log.was_conducted is True
    assert log.topic_covered == "Fractions"
    assert log.notes == "Bring graph paper"
    assert log.created_by == tutor.id


def test_manual_upsert_overwrites_and_blanks_become_null(db_session, tuition):
    service = ClassLogService(db_session)
    first = service.upsert_manual_log(
        tuition.id, CLASS_DAY, ClassLogFields(was_conducted=True, topic_covered="Ratios")
    )

    second = service.upsert_manual_log(
        tuition.id, CLASS_DAY, ClassLogFields(was_conducted=False, topic_covered="   ", notes="")
    )

    assert second.id == first.id
    assert second.was_conducted is False
    assert second.topic_covered is None
    assert second.notes is None
    assert count_logs(db_session, tuition.id, CLASS_DAY) == 1


def test_update_log_changes_only_given_fields(db_session, tuition):
    service = ClassLogService(db_session)
    log = service.upsert_manual_log(
        tuition.id, CLASS_DAY, ClassLogFields(was_conducted=True, topic_covered="Ratios")
    )

    updated = service.update_log(tuition.id, log.id, ClassLogUpdate(notes="Test next week"))

    assert updated.was_conducted is True
    assert updated.topic_covered == "Ratios"
    assert updated.notes == "Test next week"


def test_delete_log_is_permanent(db_session, tuition):
    service = ClassLogService(db_session)
    log = service.sync_log_from_attendance(tuition.id, CLASS_DAY, False)

    service.delete_log(tuition.id, log.id)

    assert service.find_log(tuition.id, CLASS_DAY) is None
    with pytest.raises(NotFoundError):
        service.get_log(tuition.id, log.id)


def test_log_lookup_is_scoped_to_tuition(db_session, tuition):
    service = ClassLogService(db_session)
    log = service.sync_log_from_attendance(tuition.id, CLASS_DAY, True)

    with pytest.raises(NotFoundError):
        service.get_log(tuition.id + 1, log.id)


def test_list_logs_newest_first_within_month(db_session, tuition):
    service = ClassLogService(db_session)
    for day in (date(2024, 4, 29), date(2024, 5, 3), date(2024, 5, 10), date(2024, 5, 6)):
        service.sync_log_from_attendance(tuition.id, day, True)

    logs = service.list_logs(tuition.id, 2024, 5)

    assert [log.class_date for log in logs] == [
        date(2024, 5, 10),
        date(2024, 5, 6),
        date(2024, 5, 3),
    ]
    assert len(service.list_logs(tuition.id)) == 4


def test_concurrent_insert_is_retried_as_update(db_session, tutor, tuition, monkeypatch):
    # Another session already stored a log for the date
    db_session.add(
        ClassLog(
            tuition_id=tuition.id,
            class_date=CLASS_DAY,
            was_conducted=False,
            topic_covered="Fractions",
            notes="Bring graph paper",
        )
    )
    db_session.commit()

    # Uncommitted work of the same request must survive the conflict
    newcomer = User(external_id="user_newcomer", email="", name="Newcomer", role=UserRole.TUTOR)
    db_session.add(newcomer)
    db_session.flush()

    real_find_log = ClassLogService.find_log
    lookups = []

    def stale_first_lookup(self, tuition_id, class_date):
        lookups.append(class_date)
        if len(lookups) == 1:
            return None
        return real_find_log(self, tuition_id, class_date)

    monkeypatch.setattr(ClassLogService, "find_log", stale_first_lookup)

    log = ClassLogService(db_session).sync_log_from_attendance(tuition.id, CLASS_DAY, True)
    db_session.commit()

    assert len(lookups) == 2
    assert count_logs(db_session, tuition.id, CLASS_DAY) == 1
    assert log.was_conducted is True
    assert log.topic_covered == "Fractions"
    assert log.notes == "Bring graph paper"
    assert db_session.execute(
        select(func.count(User.id)).where(User.external_id == "user_newcomer")
    ).scalar_one() == 1
