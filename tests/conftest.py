"""
Shared pytest fixtures.

Environment defaults are set before any ``app`` import so that settings load
without a ``.env`` file.  Database tests run against an in-memory SQLite
engine shared through ``StaticPool``.
"""

import datetime
import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-with-enough-length-for-hs256")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("TIMEZONE", "UTC")

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

import app.db.base  # noqa: F401
from app.adherence.dashboard import DashboardCache
from app.core.context import SessionContext
from app.core.events import EventBus
from app.core.security import get_password_hash
from app.db.repositories.user import UserRepository
from app.models.user import User
from app.services.medication_service import MedicationService
from app.services.tracking_service import MedicationTrackingService


class FakeClock:
    """Callable returning a settable naive-UTC "now"."""

    def __init__(self, now: datetime.datetime):
        self.now = now

    def __call__(self) -> datetime.datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + datetime.timedelta(**kwargs)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def cache(bus):
    cache = DashboardCache(bus)
    yield cache
    cache.close()


@pytest.fixture
def clock():
    return FakeClock(datetime.datetime(2026, 10, 19, 9, 30))


def _make_user(session: Session, email: str) -> User:
    user = User(email=email, hashed_password=get_password_hash("password123"), full_name=email.split("@")[0])
    return UserRepository(session).create(user)


@pytest.fixture
def user(db_session):
    return _make_user(db_session, "alice@example.com")


@pytest.fixture
def other_user(db_session):
    return _make_user(db_session, "bob@example.com")


@pytest.fixture
def context(user, bus):
    return SessionContext(user, bus=bus)


@pytest.fixture
def medication_service(db_session, context, bus):
    return MedicationService(db_session, context, bus=bus)


@pytest.fixture
def tracking_service(db_session, context, bus, cache, clock):
    return MedicationTrackingService(db_session, context, bus=bus, cache=cache, clock=clock, tz="UTC")


@pytest.fixture
def medication_form():
    return {
        "name": "Aspirin",
        "dosage": "100mg",
        "frequency": "once",
        "time": "08:00",
        "notes": "After breakfast",
    }
