"""
Pytest fixtures for user management tests. Each test gets a fresh store and app.
"""

from __future__ import annotations

import pytest

AUTH_HEADERS = {"Authorization": "Bearer secret"}


@pytest.fixture(autouse=True)
def clean_settings_cache():
    """get_settings() is cached; clear it around every test so env changes apply."""
    from user_management.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings():
    from user_management.config import Settings

    return Settings()


@pytest.fixture
def user_store():
    """Fresh in-memory store (id base 0)."""
    from user_management.database import InMemoryUserStore

    return InMemoryUserStore()


@pytest.fixture
def app(settings, user_store):
    from user_management.api_server.server import create_app

    return create_app(settings=settings, store=user_store)


@pytest.fixture
def client(app):
    """FastAPI TestClient with a valid bearer token on every request."""
    from fastapi.testclient import TestClient

    with TestClient(app, headers=AUTH_HEADERS) as c:
        yield c


@pytest.fixture
def anon_client(app):
    """FastAPI TestClient without an Authorization header."""
    from fastapi.testclient import TestClient

    with TestClient(app) as c:
        yield c
