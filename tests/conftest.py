"""Pytest configuration and fixtures."""

import os

# Cheap hashing for tests; must be set before the settings are first loaded
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from shopfront import models  # noqa: F401
from shopfront.database import Base, get_db
from shopfront.main import app

DEFAULT_PASSWORD = "SecurePass123!"
DEFAULT_SHOPS = ["coffee-shop", "book-store", "tech-gadgets"]


class AuthHeaders(dict):
    """Dict subclass that also stores the user's id, username and token."""

    def __init__(
        self,
        *args,
        user_id: str | None = None,
        username: str | None = None,
        token: str | None = None,
        **kwargs,
    ):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.username = username
        self.token = token


# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    # Running in Docker - use PostgreSQL test database
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace("/shopfront", "/shopfront_test")
else:
    # Running locally - use SQLite
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
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


@pytest.fixture(scope="function")
def override_db(db):
    """Route every get_db dependency (and the subdomain middleware) to the test session."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    yield db
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def client(override_db):
    """Create a test client with database override."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def signup(client):
    """Return a helper that signs a user up through the API."""

    def _signup(username="shop_owner", password=DEFAULT_PASSWORD, shop_names=None):
        return client.post(
            "/auth/signup",
            json={
                "username": username,
                "password": password,
                "shopNames": shop_names if shop_names is not None else DEFAULT_SHOPS,
            },
        )

    return _signup


@pytest.fixture
def auth_headers(client, signup):
    """Create a user with three shops, log in and return auth headers with user info."""
    response = signup()
    assert response.status_code == 201

    response = client.post(
        "/auth/login",
        json={"username": "shop_owner", "password": DEFAULT_PASSWORD},
    )
    assert response.status_code == 200
    data = response.json()
    token = data["token"]

    return AuthHeaders(
        {"Authorization": f"Bearer {token}"},
        user_id=data["user"]["id"],
        username=data["user"]["username"],
        token=token,
    )
