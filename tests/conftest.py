# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# SPDX-License-Identifier: MIT
#

import os
import pytest
from datetime import datetime, timedelta, timezone
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

# Safety check to prevent tests from running against production database
os.environ["TESTING"] = "1"
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

# Create test database engine and session
TEST_DATABASE_URL = "sqlite:///:memory:"
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
    echo=False
)
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

from app.app import app
from app.config import Settings
from app.db.database import Base, get_db
from app.services.workflow_orchestrator import WorkflowOrchestrator
from tests.test_helpers import (
    create_donation,
    create_donor,
    create_ngo,
    create_volunteer,
)


class FakeClock:
    def __init__(self, now: datetime = None):
        self.now = now or datetime(2026, 10, 19, 9, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture(name="db_session", scope="function")
def db_session_fixture():
    """
    Creates a new database session for each test, with all tables created.
    """
    Base.metadata.create_all(bind=test_engine)

    db = TestSessionLocal()

    try:
        yield db
    finally:
        db.close()
        # Drop all tables after the test to ensure a clean slate
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture(name="email_service")
def email_service_fixture(mocker):
    """
    Replaces the SendGrid-backed EmailService used by OTP delivery.
    """
    mock_email_service_class = mocker.patch("app.events.otp_handlers.EmailService")
    mock_email_service_class.return_value.send_pickup_otp = mocker.AsyncMock(return_value=True)
    return mock_email_service_class.return_value


@pytest.fixture(name="client")
def client_fixture(db_session: Session, email_service):
    """
    Provides a FastAPI TestClient that overrides the get_db dependency
    to use the test database session, with OTP delivery mocked.
    """
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture(name="clock")
def clock_fixture():
    return FakeClock()


@pytest.fixture(name="test_settings")
def test_settings_fixture():
    return Settings(
        database_url=TEST_DATABASE_URL,
        secret_key="test-secret-key",
        otp_length=6,
        otp_ttl_minutes=10,
        otp_max_attempts=3,
        require_completion_proof=True,
    )


@pytest.fixture(name="orchestrator")
def orchestrator_fixture(db_session: Session, test_settings: Settings, clock: FakeClock):
    return WorkflowOrchestrator(db_session, test_settings, clock=clock)


@pytest.fixture(name="workflow")
def workflow_fixture(db_session: Session):
    """
    One donor with a New donation, one NGO and two available volunteers who
    already joined that NGO.
    """
    donor = create_donor(db_session, "donor@example.com")
    ngo = create_ngo(db_session, "ngo@example.com", "Helping Hands")
    v1 = create_volunteer(db_session, "v1@example.com", "V1", ngo_ids=[ngo.id])
    v2 = create_volunteer(db_session, "v2@example.com", "V2", ngo_ids=[ngo.id])
    donation = create_donation(db_session, donor)
    return {"donor": donor, "ngo": ngo, "v1": v1, "v2": v2, "donation": donation}
