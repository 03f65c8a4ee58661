"""Pytest fixtures."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from town_portal.db.base import Base
from town_portal.models.report import Report  # noqa: F401 - register for create_all
from town_portal.main import app
from town_portal.db.session import get_db
from town_portal.services.storage import StorageError, get_storage

TEST_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


class FakeStorage:
    """In-memory attachment store; uploads whose key ends with a name in `fail_on` raise."""

    def __init__(self):
        self.blobs = {}
        self.fail_on = set()

    def upload(self, path, data, content_type):
        if any(path.endswith(name) for name in self.fail_on):
            raise StorageError(f"simulated failure for {path}")
        if path in self.blobs:
            raise StorageError(f"{path} already exists")
        self.blobs[path] = (data, content_type)
        return path


@pytest.fixture
def setup_db():
    """Fresh tables for every test."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db(setup_db):
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def storage():
    return FakeStorage()


@pytest.fixture
def client(setup_db, storage):
    """Test client with overridden DB and attachment store."""
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage] = lambda: storage
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
