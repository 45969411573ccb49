"""Tests for error envelopes and correlation ids."""

from uuid import UUID

import pytest

from court_admin import db
from court_admin.errors import Conflict, InternalError, internal_errors
from court_admin.services.court_service import court_service
from tests.mocks.models import court_body


class TestInternalErrors:
    def test_business_errors_pass_through(self):
        with pytest.raises(Conflict):
            with internal_errors("test"):
                raise Conflict("nope")

    def test_other_errors_get_an_id(self, caplog):
        with pytest.raises(InternalError) as exc_info:
            with internal_errors("frobnicate"):
                raise KeyError("secret detail")

        err = exc_info.value
        UUID(err.error_id)  # must be a valid uuid
        assert isinstance(err.__cause__, KeyError)
        assert err.to_response().model_dump() == {
            "code": -1,
            "msg": "internal server error",
            "data": {"error_id": err.error_id},
        }
        assert f"{err.error_id} >>>> frobnicate failed" in caplog.text

    def test_each_failure_gets_a_fresh_id(self):
        ids = set()
        for _ in range(3):
            with pytest.raises(InternalError) as exc_info:
                with internal_errors("x"):
                    raise ValueError
            ids.add(exc_info.value.error_id)
        assert len(ids) == 3


class TestErrorResponses:
    def test_store_failure_hides_detail(self, client, monkeypatch, caplog):
        async def _broken(admin_id):
            raise RuntimeError("database is locked")

        monkeypatch.setattr(db, "list_courts", _broken)
        resp = client.get("/api/admin/court/all")

        assert resp.status_code == 500
        body = resp.json()
        assert body["code"] == -1
        assert body["msg"] == "internal server error"
        assert "database is locked" not in resp.text
        assert body["data"]["error_id"] in caplog.text

    def test_unexpected_error_outside_service(self, client, monkeypatch, caplog):
        async def _bug(admin, **kwargs):
            raise AttributeError("oops")

        monkeypatch.setattr(court_service, "add", _bug)
        resp = client.post("/api/admin/court/add", json=court_body())

        assert resp.status_code == 500
        body = resp.json()
        assert body["msg"] == "internal server error"
        assert "oops" not in resp.text
        assert body["data"]["error_id"] in caplog.text
