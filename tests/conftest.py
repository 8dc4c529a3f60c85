"""Pytest fixtures and configuration for SkillSwap tests."""

import os

# Keep the app's module-level engine off the local dev database file.
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from datetime import datetime, timedelta
from itertools import count
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from skillswap.database.database import Base
from skillswap.database import models  # noqa: F401  (registers tables)
from skillswap.database.user_repository import UserRepository
from skillswap.database.swap_request_repository import SwapRequestRepository
from skillswap.database.admin_message_repository import AdminMessageRepository
from skillswap.database.content_report_repository import ContentReportRepository
from skillswap.engine.swap_lifecycle import SwapRequestService
from skillswap.engine.moderation import AdminService
from skillswap.engine.reporting import ReportingService
from skillswap.engine.search import BrowseService
from skillswap.models.user import User


# Use in-memory SQLite database for tests
TEST_DATABASE_URL = "sqlite:///:memory:"

BASE_TIME = datetime(2026, 1, 1, 9, 0, 0)


@pytest.fixture(scope="function")
def db_session():
    """Create a database session for testing.

    Uses an in-memory SQLite database that is created fresh for each test.
    """
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )
    Base.metadata.create_all(bind=engine)

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def user_repository(db_session: Session):
    return UserRepository(db_session)


@pytest.fixture
def swap_repository(db_session: Session):
    return SwapRequestRepository(db_session)


@pytest.fixture
def message_repository(db_session: Session):
    return AdminMessageRepository(db_session)


@pytest.fixture
def report_repository(db_session: Session):
    return ContentReportRepository(db_session)


@pytest.fixture
def clock():
    """Deterministic clock: every call is one minute after the previous one."""
    ticks = count()

    def now():
        return BASE_TIME + timedelta(minutes=next(ticks))

    return now


@pytest.fixture
def swap_service(user_repository, swap_repository, clock):
    return SwapRequestService(user_repository, swap_repository, clock=clock)


@pytest.fixture
def admin_service(user_repository, message_repository, report_repository, clock):
    return AdminService(user_repository, message_repository, report_repository, clock=clock)


@pytest.fixture
def reporting_service(user_repository, swap_repository):
    return ReportingService(user_repository, swap_repository)


@pytest.fixture
def browse_service(user_repository):
    return BrowseService(user_repository)


@pytest.fixture
def sample_user_base():
    """Base user data for creating test users.

    Returns a dict with default user attributes that can be overridden.
    """
    return {
        "id": "user-base",
        "name": "Test User",
        "email": None,
        "location": None,
        "profile_photo": None,
        "skills_offered": [],
        "skills_wanted": [],
        "availability": [],
        "is_public": True,
        "is_banned": False,
        "is_admin": False,
        "rating": 0.0,
        "total_swaps": 0,
        "created_at": BASE_TIME,
        "updated_at": BASE_TIME,
    }


@pytest.fixture
def make_user(sample_user_base):
    """Factory for in-memory User objects with increasing created_at."""
    seq = count(1)

    def _make(user_id: str, **overrides) -> User:
        n = next(seq)
        created = BASE_TIME + timedelta(seconds=n)
        return User(**{
            **sample_user_base,
            "id": user_id,
            "name": overrides.pop("name", user_id),
            "created_at": created,
            "updated_at": created,
            **overrides,
        })

    return _make


@pytest.fixture
def create_user(user_repository, make_user):
    """Factory that persists users through the repository."""
    def _create(user_id: str, **overrides) -> User:
        return user_repository.create(make_user(user_id, **overrides))

    return _create


@pytest.fixture
def guitarist(create_user):
    return create_user("u1", name="Alice", location="Berlin", skills_offered=["Guitar"], skills_wanted=["Photoshop"])


@pytest.fixture
def designer(create_user):
    return create_user("u2", name="Bob", location="Lisbon", skills_offered=["Photoshop"], skills_wanted=["Guitar"])


@pytest.fixture
def outsider(create_user):
    return create_user("u3", name="Carol", skills_offered=["Cooking"])


@pytest.fixture
def admin_user(create_user):
    return create_user("admin", name="Admin", is_admin=True)


@pytest.fixture
def pending_request(swap_service, guitarist, designer):
    return swap_service.create(guitarist.id, designer.id, "Guitar", "Photoshop", "Let's trade!")


@pytest.fixture
def test_client(db_session: Session):
    """Create a FastAPI test client with overridden database dependency."""
    from skillswap.api.app import app
    from skillswap.database.database import get_db

    def override_get_db():
        try:
            yield db_session
        finally:
            pass  # Don't close the session here, let the fixture handle it

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    """Build Authorization headers for a user."""
    from skillswap.auth.jwt import create_access_token

    def _headers(user: User) -> dict:
        return {"Authorization": f"Bearer {create_access_token(user.id)}"}

    return _headers
