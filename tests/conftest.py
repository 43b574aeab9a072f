"""Shared test configuration and fixtures for Fest Analytics tests"""

import logging
import os
from datetime import datetime, timedelta, timezone

from tests.config import test_config

# Must be set before fest_analytics.config is imported
os.environ.setdefault("DATABASE_URL", test_config["database_url"])
os.environ.setdefault("ADMIN_API_KEY", test_config["admin_api_key"])

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

import fest_analytics.models  # noqa: F401
from fest_analytics.config import config
from fest_analytics.main import app
from fest_analytics.models.database import get_db
from fest_analytics.models.event import Event, EventCategory, EventSubcategory
from fest_analytics.models.profile import Profile
from fest_analytics.models.registration import (
    PaymentMode,
    Registration,
    RegistrationStatus,
)
from fest_analytics.services.snapshot_service import SnapshotService

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

BASE_TIME = datetime(2026, 2, 14, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def _db_session():
    """Private DB session for fixtures only.

    Each test gets a fresh in-memory SQLite database with the schema created
    from the SQLModel metadata. Prefer the service and client fixtures.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    session = Session(engine)

    yield session

    session.close()
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db_add(_db_session):
    """Persist model instances and return them refreshed"""

    def _add(*instances):
        for instance in instances:
            _db_session.add(instance)
        _db_session.commit()
        for instance in instances:
            _db_session.refresh(instance)
        return instances[0] if len(instances) == 1 else instances

    return _add


@pytest.fixture
def snapshot_service(_db_session):
    """Create a SnapshotService instance for testing"""
    return SnapshotService(_db_session)


@pytest.fixture
def admin_client(_db_session):
    """Test client using the test database and sending a valid admin key"""
    original_overrides = app.dependency_overrides.copy()
    original_key = config["admin_api_key"]

    def get_test_db():
        return _db_session

    app.dependency_overrides.clear()
    app.dependency_overrides[get_db] = get_test_db
    config["admin_api_key"] = test_config["admin_api_key"]

    client = TestClient(app, headers={"X-Admin-Key": test_config["admin_api_key"]})

    yield client

    app.dependency_overrides.clear()
    app.dependency_overrides.update(original_overrides)
    config["admin_api_key"] = original_key


@pytest.fixture
def fest_data(db_add):
    """Two events: a solo song contest and a group dance with one team"""
    song = Event(
        name="Solo Singing",
        category=EventCategory.CULTURAL,
        subcategory=EventSubcategory.INDIVIDUAL,
        fee=100,
    )
    dance = Event(
        name="Group Dance",
        category=EventCategory.CULTURAL,
        subcategory=EventSubcategory.GROUP,
        fee=500,
        max_team_size=6,
        capacity=10,
    )
    asha, ravi, neha = (
        Profile(full_name="Asha Verma", gender="Female", school="SOET", department="CSE"),
        Profile(full_name="Ravi Kumar", gender="Male", school="SOP", department="Pharmacy"),
        Profile(full_name="Neha Singh", gender="Female", school="SOA", department="B.Arch"),
    )
    db_add(song, dance, asha, ravi, neha)

    leader = Registration(
        event_id=dance.id,
        profile_id=asha.id,
        status=RegistrationStatus.CONFIRMED,
        payment_mode=PaymentMode.ONLINE,
        transaction_id="TXN-1",
        team_members=[
            {"id": str(ravi.id), "name": "Ravi Kumar"},
            {"id": str(neha.id), "name": "Neha Singh"},
        ],
        registered_at=BASE_TIME,
    )
    members = [
        Registration(
            event_id=dance.id,
            profile_id=p.id,
            status=RegistrationStatus.CONFIRMED,
            registered_at=BASE_TIME + timedelta(minutes=i + 1),
        )
        for i, p in enumerate((ravi, neha))
    ]
    solo = Registration(
        event_id=song.id,
        profile_id=ravi.id,
        status=RegistrationStatus.PENDING,
        payment_mode=PaymentMode.CASH,
        registered_at=BASE_TIME + timedelta(minutes=10),
    )
    db_add(leader, *members, solo)

    return {"song": song, "dance": dance, "asha": asha, "ravi": ravi, "neha": neha}
