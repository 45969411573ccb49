"""Tests for rate limiting behaviour."""

import pytest
from fastapi.testclient import TestClient

from court_admin.main import app
from tests.mocks.models import MOCK_ADMIN, court_body


class TestRateLimiting:
    """Verify that rate limiting kicks in for court mutations."""

    @pytest.fixture()
    def limited_client(self, _test_env, act_as):
        """
        TestClient with rate limiting **enabled** (unlike the default
        `client` fixture which disables it for convenience).
        """
        from court_admin.rate_limit import limiter

        limiter.enabled = True
        # Reset in-memory state so previous tests don't pollute counts
        limiter.reset()

        act_as(MOCK_ADMIN)

        with TestClient(app, raise_server_exceptions=False) as tc:
            yield tc

        app.dependency_overrides.clear()
        limiter.enabled = False

    def test_add_rate_limit(self, limited_client):
        """POST /add is limited to 30 requests/minute."""
        for i in range(30):
            resp = limited_client.post("/api/admin/court/add", json=court_body(f"Court {i}"))
            assert resp.status_code == 200, f"Request {i + 1} should succeed"

        # 31st request should be rate-limited
        resp = limited_client.post("/api/admin/court/add", json=court_body("Court 30"))
        assert resp.status_code == 429
        body = resp.json()
        assert body["code"] == -1
        assert "rate limit exceeded" in body["msg"]

    def test_list_not_limited_at_low_volume(self, limited_client):
        """GET /all at low volume should not be rate-limited."""
        for _ in range(10):
            resp = limited_client.get("/api/admin/court/all")
            assert resp.status_code == 200
