"""
tests/conftest.py -- Shared test fixtures for the task list service.

This module provides:
  - engine / user_store / task_store / token_service: unit-level building
    blocks on a private in-memory SQLite database per test
  - api_client: TestClient on the real FastAPI app with a patched lifespan
    that wires in stores backed by a per-test SQLite file
  - register_user(): helper that registers through the API and returns a token

Design: API tests use a temporary database file rather than an in-memory
database. TestClient runs sync route handlers in a thread pool, and each
worker thread opens its own connection; a file gives every connection the same
schema and data. Unit tests stay on the calling thread, so plain :memory: is
enough there.

The DEBUG env var must be set before any auth/core import so get_settings()
auto-generates SECRET_KEY in dev mode rather than raising ValueError.
"""

from __future__ import annotations

import os
from collections.abc import Generator
from contextlib import asynccontextmanager

# CRITICAL: Set DEBUG before any auth/core import so get_settings() can
# auto-generate SECRET_KEY in dev mode instead of raising ValueError.
os.environ.setdefault("DEBUG", "true")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine

from api.main import app
from auth.service import AuthService
from auth.store import UserStore
from auth.tokens import TokenService
from core.database import make_engine
from tasks.store import TaskStore

TEST_SECRET = "test-secret-key-that-is-at-least-32-characters"


# ---------------------------------------------------------------------------
# Unit-level fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    eng = make_engine("sqlite:///:memory:")
    yield eng
    eng.dispose()


@pytest.fixture
def user_store(engine: Engine) -> UserStore:
    return UserStore(engine)


@pytest.fixture
def task_store(engine: Engine) -> TaskStore:
    return TaskStore(engine)


@pytest.fixture
def token_service() -> TokenService:
    return TokenService(TEST_SECRET)


@pytest.fixture
def auth_service(user_store: UserStore, token_service: TokenService) -> AuthService:
    return AuthService(user_store, token_service)


# ---------------------------------------------------------------------------
# API fixtures
# ---------------------------------------------------------------------------


def _patch_lifespan(engine: Engine):
    """Return an async context manager that replaces the real lifespan.

    Wires test stores and a TokenService with a known secret into app.state,
    so tests can mint their own tokens (expired, foreign-key) with TEST_SECRET.
    """

    @asynccontextmanager
    async def test_lifespan(app):
        app.state.engine = engine
        app.state.user_store = UserStore(engine)
        app.state.task_store = TaskStore(engine)
        app.state.token_service = TokenService(TEST_SECRET)
        app.state.auth_service = AuthService(app.state.user_store, app.state.token_service)
        yield

    return test_lifespan


@pytest.fixture
def api_client(tmp_path) -> Generator[TestClient, None, None]:
    """Yield a TestClient on the real app backed by a fresh database file.

    raise_server_exceptions=False so the catch-all 500 handler is observable
    instead of re-raised into the test.
    """
    eng = make_engine(f"sqlite:///{tmp_path / 'tasklist_test.db'}")
    original = app.router.lifespan_context
    app.router.lifespan_context = _patch_lifespan(eng)
    try:
        with TestClient(app, raise_server_exceptions=False) as client:
            yield client
    finally:
        app.router.lifespan_context = original
        eng.dispose()


def register_user(client: TestClient, email: str, password: str = "correct horse") -> str:
    """Register through the API and return the bearer token."""
    resp = client.post("/api/v1/auth/register", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.text
    return resp.json()["token"]


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
