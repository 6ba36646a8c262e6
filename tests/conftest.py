"""Shared test fixtures for the data room test suite.

All tests use a throwaway SQLite file. The schema is dropped and recreated
before each test, ensuring complete isolation.
"""

import os
import tempfile

# Point the app at the test database before any app imports.
_TEST_DIR = tempfile.mkdtemp(prefix="dataroom-tests-")
os.environ["DATABASE_URL"] = os.environ.get(
    "TEST_DATABASE_URL",
    f"sqlite:///{os.path.join(_TEST_DIR, 'test.db')}",
)
os.environ["SEED_DEMO_DATA"] = "false"
os.environ["LOG_FORMAT"] = "text"

import itertools
from typing import Optional

import pytest
from fastapi.testclient import TestClient

from dataroom import models  # noqa: F401  # populate metadata
from dataroom.database import Base, SessionLocal, engine, get_db
from dataroom.main import app
from dataroom.models import DataRoom, User
from dataroom.schemas.room import RoomCreate
from dataroom.services import RoomService


@pytest.fixture(autouse=True)
def _clean_tables():
    """Recreate the schema before each test.

    Runs before the test (not after) so test failures leave data
    available for debugging.
    """
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture()
def db():
    """Per-test database session."""
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture()
def client(db):
    """FastAPI TestClient with the DB dependency overridden to use the test session."""

    def _override_get_db():
        yield db

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def make_user(db):
    """Factory for users. Skips bcrypt so tests stay fast."""
    counter = itertools.count(1)

    def _make(name: Optional[str] = None, email: Optional[str] = None) -> User:
        n = next(counter)
        user = User(
            email=email or f"user{n}@example.com",
            name=name or f"User {n}",
            password_hash="not-a-real-hash",
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture()
def make_room(db):
    """Factory for rooms created through RoomService (owner gets the Creator row)."""

    def _make(owner: User, name: str = "Project Atlas", tags=()) -> DataRoom:
        return RoomService(db).create_room(
            RoomCreate(name=name, creator_id=owner.id, tags=list(tags))
        )

    return _make
