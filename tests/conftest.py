"""
Shared test fixtures.

Provides a FastAPI TestClient wired to:
  • a temporary SQLite database (via app lifespan)
  • a mock authenticated admin
  • a disabled rate limiter

The `client` fixture runs the full lifespan (DB init / shutdown).  Use
`client.portal.call(...)` to run coroutines such as order seeding on the
app's own event loop.  Service-level tests use the `database` fixture,
which opens the same kind of temp database in the test's loop instead.
"""

from __future__ import annotations

from collections.abc import Callable

import pytest
from fastapi.testclient import TestClient

from court_admin import db
from court_admin.dependencies import get_current_admin
from court_admin.main import app
from court_admin.models import AdminInfo
from tests.mocks.models import MOCK_ADMIN


# ── Fixtures ───────────────────────────────────────────────────────────────


@pytest.fixture()
def _test_env(monkeypatch, tmp_path):
    """
    Internal fixture that points the DB at a temp file and turns off
    rate limiting so the app lifespan runs cleanly.
    """
    monkeypatch.setattr(db, "DB_PATH", str(tmp_path / "test.db"))

    from court_admin.rate_limit import limiter as _limiter
    monkeypatch.setattr(_limiter, "enabled", False)


@pytest.fixture()
def act_as() -> Callable[[AdminInfo], None]:
    """Switch the admin that the auth dependency resolves to."""

    def _act_as(admin: AdminInfo) -> None:
        async def _mock_current_admin():
            return admin

        app.dependency_overrides[get_current_admin] = _mock_current_admin

    return _act_as


@pytest.fixture()
def client(_test_env, act_as) -> TestClient:
    """
    FastAPI TestClient with a temp DB and auth bypassed as MOCK_ADMIN.

    Uses a context manager so the lifespan runs (DB init/shutdown).
    """
    act_as(MOCK_ADMIN)

    with TestClient(app, raise_server_exceptions=False) as tc:
        yield tc

    app.dependency_overrides.clear()


@pytest.fixture()
def unauthed_client(_test_env) -> TestClient:
    """
    TestClient without auth overrides — requests are rejected unless
    a token is provided.
    """
    app.dependency_overrides.clear()

    with TestClient(app, raise_server_exceptions=False) as tc:
        yield tc

    app.dependency_overrides.clear()


@pytest.fixture()
async def database(_test_env):
    """Open the temp database in the current event loop for direct service tests."""
    await db.init_db()
    yield db.get_db()
    await db.close_db()
