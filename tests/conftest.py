"""
Test configuration and fixtures for News Pulse.

Implements the transaction rollback pattern:
- Session-scoped engine (in-memory SQLite unless TEST_DATABASE_URL is set)
- Function-scoped transactional session with automatic rollback
- TestClient with database dependency override
- Authenticated client fixtures for a regular user and an admin
"""

import os
import secrets
from datetime import datetime, timedelta, timezone
from typing import Generator, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.main import app
from app.models import User, Session as UserSession
from app.services.feedback import FeedbackStore
from app.services.store import SQLTreeStore
from tests.factories import create_user


# =============================================================================
# Database Fixtures
# =============================================================================


def get_test_database_url() -> str:
    """
    Get the test database URL.

    TEST_DATABASE_URL wins; otherwise an in-memory SQLite database shared
    across threads (TestClient runs sync dependencies in a threadpool).
    """
    return os.environ.get("TEST_DATABASE_URL", "sqlite://")


@pytest.fixture(scope="session")
def test_engine():
    """Create the test engine and schema once per session."""
    database_url = get_test_database_url()

    if database_url.startswith("sqlite"):
        engine = create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = create_engine(database_url)

    Base.metadata.create_all(engine)

    yield engine

    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db(test_engine) -> Generator[Session, None, None]:
    """
    Provide a transactional database session that rolls back after each test.

    Commits made by the code under test stay inside the outer transaction,
    so nothing persists between tests.
    """
    connection = test_engine.connect()
    transaction = connection.begin()

    TestingSessionLocal = sessionmaker(bind=connection)
    session = TestingSessionLocal()

    yield session

    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture
def feedback_store(db: Session) -> FeedbackStore:
    """FeedbackStore over the SQL tree in the test transaction."""
    return FeedbackStore(SQLTreeStore(db), root="NewsSentimentAnalysis")


# =============================================================================
# TestClient Fixtures
# =============================================================================


def _client_for(db: Session, token: Optional[str] = None) -> Generator[TestClient, None, None]:
    from app.config import settings

    def override_get_db():
        try:
            yield db
        finally:
            pass  # Don't close - managed by db fixture

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        if token:
            test_client.cookies.set(settings.session_cookie_name, token)
        # Set default Referer so CSRF Origin middleware allows requests
        test_client.headers["referer"] = "http://testserver/"
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def client(db: Session) -> Generator[TestClient, None, None]:
    """Unauthenticated TestClient with the database override."""
    yield from _client_for(db)


# =============================================================================
# Authentication Fixtures
# =============================================================================


@pytest.fixture
def test_user(db: Session) -> User:
    return create_user(
        db,
        email="reader@example.com",
        name="Reader",
        phone_number="9876543210",
    )


@pytest.fixture
def admin_user(db: Session) -> User:
    return create_user(
        db,
        email="admin@example.com",
        password="adminpassword123",
        name="Admin",
        phone_number="9123456780",
        is_admin=True,
    )


def _session_for(db: Session, user: User) -> UserSession:
    session = UserSession(
        user_id=user.id,
        token=secrets.token_urlsafe(32),
        expires_at=datetime.now(timezone.utc) + timedelta(days=7),
        user_agent="pytest-test-client",
        ip_address="127.0.0.1",
    )
    db.add(session)
    db.flush()
    return session


@pytest.fixture
def test_session(db: Session, test_user: User) -> UserSession:
    return _session_for(db, test_user)


@pytest.fixture
def admin_session(db: Session, admin_user: User) -> UserSession:
    return _session_for(db, admin_user)


@pytest.fixture
def auth_client(db: Session, test_session: UserSession) -> Generator[TestClient, None, None]:
    """Authenticated TestClient for a regular user."""
    yield from _client_for(db, test_session.token)


@pytest.fixture
def admin_client(db: Session, admin_session: UserSession) -> Generator[TestClient, None, None]:
    """Authenticated TestClient for an admin."""
    yield from _client_for(db, admin_session.token)


# =============================================================================
# pytest markers
# =============================================================================


def pytest_configure(config):
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
