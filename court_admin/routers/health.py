"""
Health check endpoint.

Reports whether the court database answers; the API still responds with
200 when it does not, so load balancers can tell "degraded" from "down".
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter

from court_admin import __version__, db
from court_admin.models import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    operation_id="getHealth",
    summary="Health check",
)
async def get_health() -> HealthResponse:
    try:
        await db.ping()
        database = "ok"
    except Exception:
        logger.exception("Health check could not reach the database")
        database = "unavailable"

    return HealthResponse(
        status="ok" if database == "ok" else "degraded",
        database=database,
        version=__version__,
        timestamp=datetime.now(timezone.utc),
    )
