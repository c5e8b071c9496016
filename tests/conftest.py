"""Shared fixtures: in-memory SQLite database, sample data and an API client."""

import os
from datetime import datetime, timedelta, timezone
from decimal import Decimal

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AUTH_JWT_KEY"] = "test-identity-key"
os.environ["AUTO_PROVISION_TUTORS"] = "true"

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

import tuitionboard.models  # noqa: F401
from tuitionboard.core.config import settings
from tuitionboard.core.database import Base, get_db
from tuitionboard.main import app
from tuitionboard.models.tuition import Tuition
from tuitionboard.models.user import User, UserRole
from tuitionboard.schemas.student import StudentCreate
from tuitionboard.schemas.tuition import TuitionCreate
from tuitionboard.services.student import StudentService
from tuitionboard.services.tuition import TuitionService

TUTOR_SUBJECT = "user_tutor_1"

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


@event.listens_for(engine, "connect")
def _enable_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
def db_session():
    Base.metadata.create_all(engine)
    session = Session(bind=engine, expire_on_commit=False, autoflush=False)
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(engine)


@pytest.fixture
def tutor(db_session) -> User:
    user = User(
        external_id=TUTOR_SUBJECT,
        email="tutor@example.com",
        name="Test Tutor",
        role=UserRole.TUTOR,
        is_active=True,
    )
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture
def tuition(db_session, tutor) -> Tuition:
    """Maths tuition held on Monday, Wednesday and Friday."""
    service = TuitionService(db_session)
    created = service.create_tuition(
        tutor.id,
        TuitionCreate(
            name="Class 8 Maths",
            subject="Mathematics",
            teaching_days=["monday", "wednesday", "friday"],
        ),
    )
    db_session.commit()
    return service.get_tuition(tutor.id, created.id)


@pytest.fixture
def students(db_session, tutor, tuition):
    """Three active students, returned in name order."""
    service = StudentService(db_session)
    created = [
        service.create_student(
            tutor.id,
            StudentCreate(
                tuition_id=tuition.id,
                name=name,
                class_level="8",
                fee_per_month=Decimal("500"),
            ),
        )
        for name in ("Asha", "Bilal", "Chen")
    ]
    db_session.commit()
    return created


def make_token(subject: str = TUTOR_SUBJECT, **claims) -> str:
    payload = {
        "sub": subject,
        "email": f"{subject}@example.com",
        "name": "Test Tutor",
        "exp": datetime.now(timezone.utc) + timedelta(hours=1),
    }
    payload.update(claims)
    return jwt.encode(payload, settings.AUTH_JWT_KEY, algorithm="HS256")


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token()}"}


@pytest.fixture
def client(db_session):
    def override_get_db():
        try:
            yield db_session
            db_session.commit()
        except Exception:
            db_session.rollback()
            raise

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def headers_for():
    """Authorization headers for an arbitrary identity-provider subject."""

    def build(subject: str, **claims) -> dict[str, str]:
        return {"Authorization": f"Bearer {make_token(subject, **claims)}"}

    return build
