"""
Error taxonomy and JSON error envelopes.

Business errors carry a negative ``code`` and a message meant for the
caller.  Anything else is an internal error: it is logged together with a
random correlation id, and only that id is sent back to the client.

Usage::

    with internal_errors("add court"):
        court = await db.create_court(...)
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from uuid import uuid4

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from court_admin.models import ErrorRef, ErrorResponse

logger = logging.getLogger(__name__)


class CourtAdminError(Exception):
    """Base class for errors that are reported to the caller."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    code: int = -1

    def __init__(self, msg: str) -> None:
        super().__init__(msg)
        self.msg = msg

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(code=self.code, msg=self.msg)


class Conflict(CourtAdminError):
    """The request clashes with current state (duplicate name, pending orders)."""


class NotFound(CourtAdminError):
    """The court does not exist for this admin."""


class InternalError(CourtAdminError):
    """An unexpected failure; only the correlation id leaves the server."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, error_id: str) -> None:
        super().__init__("internal server error")
        self.error_id = error_id

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(
            code=self.code,
            msg=self.msg,
            data=ErrorRef(error_id=self.error_id),
        )


def new_error_id() -> str:
    return str(uuid4())


@contextmanager
def internal_errors(action: str) -> Iterator[None]:
    """
    Turn any unexpected exception raised inside the block into InternalError.

    CourtAdminError subclasses pass through untouched.
    """
    try:
        yield
    except CourtAdminError:
        raise
    except Exception as exc:
        error_id = new_error_id()
        logger.error("%s >>>> %s failed: %s", error_id, action, exc, exc_info=True)
        raise InternalError(error_id) from exc


# ── FastAPI wiring ────────────────────────────────────────────────────────


async def _court_admin_error_handler(request: Request, exc: CourtAdminError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(exclude_none=True),
    )


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    error_id = new_error_id()
    logger.error(
        "%s >>>> unhandled error on %s %s: %s",
        error_id, request.method, request.url.path, exc,
        exc_info=exc,
    )
    return await _court_admin_error_handler(request, InternalError(error_id))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CourtAdminError, _court_admin_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
