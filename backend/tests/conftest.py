"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient

from weight_tracker.config import Settings
from weight_tracker.main import create_app


@pytest.fixture
def settings():
    """Settings for an isolated in-memory database."""
    return Settings(
        _env_file=None,
        secret_key="test-secret-key",
        database_url="sqlite://",
        environment="test",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    """Client that runs the app lifespan (creates the schema)."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def other_client(app, client):
    """Second cookie jar on the same app, for a second user."""
    return TestClient(app)


@pytest.fixture
def db_session(app, client):
    session = app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


def register(client, username="alice", password="pw123", name="Alice"):
    return client.post(
        "/api/auth/register",
        json={"username": username, "password": password, "name": name},
    )


@pytest.fixture
def alice(client):
    """Client logged in as alice."""
    response = register(client)
    assert response.status_code == 200
    return client


@pytest.fixture
def bob(other_client):
    """Client logged in as bob."""
    response = register(other_client, username="bob", password="hunter2", name="Bob")
    assert response.status_code == 200
    return other_client
