"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown
- An in-memory Redis double for the listing cache
- FastAPI test client
"""

import pytest
import redis
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from job_tracker.core.cache import ApplicantCache, get_cache
from job_tracker.core.database import Base, get_db
from job_tracker.models.applicant import Applicant  # noqa: F401
import main
from main import app


# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class InMemoryRedis:
    """
    Stand-in for the few redis.Redis calls the cache makes.

    Set available = False to make every call fail like an unreachable server.
    """

    def __init__(self):
        self.store = {}
        self.ttls = {}
        self.available = True
        self.calls = []

    def _check(self, command):
        self.calls.append(command)
        if not self.available:
            raise redis.ConnectionError("Error 111 connecting to localhost:6379. Connection refused.")

    def get(self, key):
        self._check("GET")
        return self.store.get(key)

    def set(self, key, value, ex=None):
        self._check("SET")
        self.store[key] = value
        self.ttls[key] = ex
        return True

    def delete(self, *keys):
        self._check("DEL")
        removed = 0
        for key in keys:
            if self.store.pop(key, None) is not None:
                removed += 1
            self.ttls.pop(key, None)
        return removed

    def ping(self):
        self._check("PING")
        return True


@pytest.fixture
def db_session():
    """
    Create a fresh database session for each test.
    Tables are dropped after the test completes.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def fake_redis():
    return InMemoryRedis()


@pytest.fixture
def cache(fake_redis):
    """Applicant cache backed by the in-memory Redis double."""
    return ApplicantCache(fake_redis, ttl_seconds=180)


@pytest.fixture
def client(db_session, cache, monkeypatch):
    """
    FastAPI test client with overridden database and cache dependencies.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    # Startup hooks would reach for PostgreSQL and Redis
    monkeypatch.setattr(main, "init_db", lambda: None)
    monkeypatch.setattr(main, "check_cache_connection", lambda: None)

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_cache] = lambda: cache

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def sample_applicant_data():
    """Sample applicant payload for testing"""
    return {
        "name": "Jane Doe",
        "email": "jane.doe@example.com",
        "position": "Backend Engineer",
        "phone": "+1 555-123-4567",
        "resume": "Seven years of Python, PostgreSQL and Redis.",
        "notes": "Referred by the platform team",
    }
