import os

# Settings are read at import time; provide them before the app is imported.
os.environ.setdefault("MONGO_URI", "mongodb://localhost:27017")
os.environ.setdefault("MONGO_DB", "nutried_test")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("COOKIE_SECURE", "false")

import mongomock
import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient
from odmantic import AIOEngine

from app.db.session import get_engine
from app.main import app


# odmantic also forwards session= to every collection call; let mongomock accept it.
mongomock.ignore_feature("session")


class _NoopSession:
    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False

    def end_session(self):
        pass


class SessionMockClient(AsyncMongoMockClient):
    """mongomock has no sessions; odmantic opens one around every save/delete."""

    async def start_session(self, *args, **kwargs):
        return _NoopSession()


@pytest.fixture
def engine():
    return AIOEngine(client=SessionMockClient(), database="nutried_test")


@pytest.fixture
def client(engine):
    async def override_engine():
        return engine

    app.dependency_overrides[get_engine] = override_engine
    yield TestClient(app)
    app.dependency_overrides.clear()
