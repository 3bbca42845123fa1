"""
Test configuration and fixtures for the FastAPI URL shortener.
This centralizes all test setup, making individual tests clean.
"""

import os

# Keep the app's own engine in memory so importing it never creates ./data
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.pop("BASE_URL", None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from main import app
from shortlink_app.database.connection import Base, get_db
from shortlink_app.models import URL  # noqa: F401  (registers the table)
from shortlink_app.services.short_code_factory import ShortCodeFactory
from shortlink_app.services.url_service import URLService
from shortlink_app.services.redirect_service import RedirectResolver
from shortlink_app.storage.strategies import SQLAlchemyURLStore

# Test database configuration
SQLALCHEMY_DATABASE_URL = "sqlite://"
engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """
    Create a fresh database session for each test.
    This ensures tests are isolated and don't affect each other.
    """
    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()

    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)
        ShortCodeFactory.clear_instances()


@pytest.fixture(scope="function")
def store(db_session):
    return SQLAlchemyURLStore(db_session)


@pytest.fixture(scope="function")
def url_service(store):
    return URLService(store)


@pytest.fixture(scope="function")
def resolver(store):
    return RedirectResolver(store)


@pytest.fixture(scope="function")
def client(db_session):
    """
    Create a test client with database dependency overridden.
    This is the main fixture that tests will use.
    """
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


class FixedShortCodeStrategy:
    """Returns codes from a fixed sequence, repeating the last one"""

    def __init__(self, *codes):
        self.codes = list(codes)
        self.length = len(codes[0])
        self.calls = 0

    def generate(self) -> str:
        code = self.codes[min(self.calls, len(self.codes) - 1)]
        self.calls += 1
        return code


@pytest.fixture
def fixed_strategy():
    """Factory fixture: fixed_strategy("aaaaaaa", "bbbbbbb")"""
    return FixedShortCodeStrategy
