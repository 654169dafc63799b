# backend/tests/conftest.py
import os
import sys

# Go up to the project root
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..')))

# Must be set before backend.app.core.config is imported anywhere
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from unittest.mock import MagicMock
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from backend.app.db.gateway import PersistenceGateway
from backend.app.db.session import Base, get_db
from backend.app.main import app
from backend.app.schemas.records import LocationData
from backend.app.services.cache_policy import now_ms


@pytest.fixture
def engine():
    # One shared in-memory database per test
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    yield db
    db.close()


@pytest.fixture
def gateway(db_session):
    return PersistenceGateway(db_session)


@pytest.fixture
def seattle(gateway):
    return gateway.insert_location(LocationData(
        created_at=now_ms(),
        latitude=47.6,
        longitude=-122.3,
        search_query="Seattle",
        formatted_query="Seattle, WA, USA",
    ))


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def json_response():
    """Build requests.Response stand-ins that return a given body from .json()."""
    def build(body):
        response = MagicMock()
        response.status_code = 200
        response.json.return_value = body
        response.raise_for_status.return_value = None # No HTTP errors
        return response
    return build
