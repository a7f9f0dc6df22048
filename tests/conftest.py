import os

# Set testing environment before the application is imported
os.environ["TESTING"] = "1"
os.environ["TEST_DATABASE_URL"] = "sqlite:///./test.db"

import smtplib

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from treatment_booking.main import app
from treatment_booking.api.deps import get_notifier
from treatment_booking.core.database import Base, RedisMock, get_db, get_redis
from treatment_booking.models.patient import Patient

# Create test database
SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(
    SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False}
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

def override_get_db():
    try:
        db = TestingSessionLocal()
        yield db
    finally:
        db.close()

app.dependency_overrides[get_db] = override_get_db


class RecordingNotifier:
    """Collects notifications instead of sending email."""

    def __init__(self):
        self.sent = []

    def send_booked(self, patient, appointments):
        self.sent.append(("booked", patient.email, [a.session for a in appointments]))
        return True

    def send_rescheduled(self, patient, appointment):
        self.sent.append(("rescheduled", patient.email, [appointment.session]))
        return True

    def send_cancelled(self, patient, appointments):
        self.sent.append(("cancelled", patient.email, [a.session for a in appointments]))
        return True


class FailingNotifier:
    """Notifier whose SMTP relay is down."""

    def send_booked(self, patient, appointments):
        raise smtplib.SMTPException("relay unavailable")

    def send_rescheduled(self, patient, appointment):
        raise smtplib.SMTPException("relay unavailable")

    def send_cancelled(self, patient, appointments):
        raise smtplib.SMTPException("relay unavailable")


@pytest.fixture(scope="function")
def test_db():
    # Create tables
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)

@pytest.fixture
def db_session(test_db):
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()

@pytest.fixture
def notifier():
    return RecordingNotifier()

@pytest.fixture
def client(test_db, notifier):
    redis_mock = RedisMock()
    app.dependency_overrides[get_redis] = lambda: redis_mock
    app.dependency_overrides[get_notifier] = lambda: notifier
    with TestClient(app, base_url="http://testserver") as test_client:
        yield test_client
    app.dependency_overrides.pop(get_redis, None)
    app.dependency_overrides.pop(get_notifier, None)

@pytest.fixture
def make_patient(db_session):
    """Insert a patient row directly, bypassing registration."""
    def _make(name="Pat Example", email="pat@example.com"):
        patient = Patient(name=name, email=email, password_hash="not-a-real-hash")
        db_session.add(patient)
        db_session.commit()
        db_session.refresh(patient)
        return patient
    return _make
