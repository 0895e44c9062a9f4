"""Pytest configuration and fixtures."""

import os

# Point the application at the test database before anything imports src.config
if not os.getenv("DATABASE_URL"):
    os.environ["DATABASE_URL"] = "sqlite:///./test.db"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from src.database import Base, enable_unicode_lower, get_db
from src.main import app
from src.models.user import User

# Use test database - PostgreSQL in Docker, SQLite locally
if os.environ["DATABASE_URL"].startswith("postgresql"):
    # Running in Docker - use PostgreSQL test database
    SQLALCHEMY_DATABASE_URL = os.environ["DATABASE_URL"].replace(
        "/user_directory", "/user_directory_test"
    )
else:
    SQLALCHEMY_DATABASE_URL = os.environ["DATABASE_URL"]

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
if "sqlite" in SQLALCHEMY_DATABASE_URL:
    enable_unicode_lower(engine)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        # For PostgreSQL, create the test database
        from sqlalchemy_utils import create_database, database_exists

        # Create test database if it doesn't exist
        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    Base.metadata.create_all(bind=engine)
    yield
    # Don't drop database - just leave it for next run (each test cleans up after itself)


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture(autouse=True)
def published_events(monkeypatch):
    """Capture change broadcasts instead of sending them to Redis."""
    events = []
    monkeypatch.setattr("src.api.users.publish_user_event", lambda: events.append("user_changed"))
    return events


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def user_payload():
    """A valid create/replace body."""
    return {"name": "Ann", "email": "ann@x.com", "password": "secret1"}


@pytest.fixture
def make_users(db):
    """Insert users straight into the database, bypassing the API."""

    def _make(*names: str) -> list[User]:
        users = [
            User(name=name, email=f"{name.lower()}@example.com", password_hash="not-a-hash")
            for name in names
        ]
        db.add_all(users)
        db.commit()
        for user in users:
            db.refresh(user)
        return users

    return _make
