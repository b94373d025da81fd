"""
Shared fixtures: an app over in-memory SQLite and helpers for authenticated calls.
"""
import os

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["DB_QUERY_RETRY_DELAY"] = "0"
os.environ["DB_CONNECT_RETRY_DELAY"] = "0"
os.environ["DB_CONNECT_ATTEMPTS"] = "1"
os.environ["AMAP_API_KEY"] = ""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from tripmaster.db.session import Database
from tripmaster.main import create_app


@pytest.fixture
def database():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    db = Database(engine, retry_delay=0)
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture
def app(database):
    return create_app(database)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def register(client):
    """Register a user and return the response body."""
    def _register(username="alice", email=None, password="secret123"):
        response = client.post(
            "/api/auth/register",
            json={
                "username": username,
                "email": email or f"{username}@example.com",
                "password": password
            }
        )
        assert response.status_code == 201, response.text
        return response.json()
    return _register


@pytest.fixture
def auth_headers(register):
    """Register a user and return its Authorization header."""
    def _auth_headers(username="alice", **kwargs):
        token = register(username, **kwargs)["token"]
        return {"Authorization": f"Bearer {token}"}
    return _auth_headers
