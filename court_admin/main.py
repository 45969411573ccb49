"""Main FastAPI application for the court administration API."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from slowapi.errors import RateLimitExceeded

from court_admin import __version__, db
from court_admin.config import ENVIRONMENT
from court_admin.errors import register_exception_handlers
from court_admin.rate_limit import limiter, rate_limit_exceeded_handler
from court_admin.routers import courts, health

logger = logging.getLogger(__name__)


def docs_url_for(environment: str) -> str | None:
    """Interactive docs are served everywhere except production."""
    return None if environment == "production" else "/docs"


@asynccontextmanager
async def lifespan(app: FastAPI):
    await db.init_db()
    try:
        yield
    finally:
        await db.close_db()


app = FastAPI(
    title="Court Admin API",
    description="Manage the courts owned by an administrator",
    version=__version__,
    docs_url=docs_url_for(ENVIRONMENT),
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
register_exception_handlers(app)

app.include_router(health.router)
app.include_router(courts.router)
logger.info("%s/* mounted", courts.router.prefix)
