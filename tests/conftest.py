"""Pytest configuration and fixtures."""

import os

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from accounts import models  # noqa: F401
from accounts.database import Base
from accounts.schemas.user import UserCreate
from accounts.services import EmailService, FollowService, UserService, UserStorage

# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    # Running in Docker - use PostgreSQL test database
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace("/accounts", "/accounts_test")
else:
    # Running locally - use SQLite
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

DEFAULT_PASSWORD = "password123"  # noqa: S105


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


@pytest.fixture
def storage(tmp_path):
    """User directories rooted in a temporary directory."""
    return UserStorage(tmp_path / "repositories")


@pytest.fixture
def user_service(db, storage):
    return UserService(db, storage)


@pytest.fixture
def email_service(db, user_service):
    return EmailService(db, user_service)


@pytest.fixture
def follow_service(db):
    return FollowService(db)


@pytest.fixture
def make_user(user_service):
    """Factory creating users through the service."""

    def _make_user(name, email=None, password=DEFAULT_PASSWORD, is_active=False, **kwargs):
        data = UserCreate(
            name=name,
            email=email or f"{name.lower()}@example.com",
            password=password,
            is_active=is_active,
            **kwargs,
        )
        return user_service.create_user(data)

    return _make_user


@pytest.fixture
def admin(make_user):
    """The bootstrap user; always the first one created in a test."""
    return make_user("owner", "owner@example.com")


@pytest.fixture
def alice(admin, make_user):
    return make_user("alice", "alice@example.com", is_active=True)


@pytest.fixture
def bob(admin, make_user):
    return make_user("bob", "bob@example.com", is_active=True)


@pytest.fixture
def session_factory():
    """Session factory bound to the test database, for code opening its own sessions."""
    return TestingSessionLocal
