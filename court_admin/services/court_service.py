"""
Court administration service.

Every operation is scoped to the calling admin.  Existence and uniqueness
checks made here are a courtesy for a clear error message; the unique
index and the conditional writes in ``court_admin.db`` are what actually
keep the data consistent when requests race.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from court_admin import db
from court_admin.errors import Conflict, NotFound, internal_errors
from court_admin.models import AdminInfo, Court

logger = logging.getLogger(__name__)

DUPLICATE_NAME = "duplicate court name"
PENDING_ORDERS = "court has pending orders"
NOT_FOUND = "court does not exist"


def _now() -> datetime:
    return datetime.now(timezone.utc)


class CourtAdminService:
    """Validates and persists courts on behalf of an authenticated admin."""

    async def add(
        self,
        admin: AdminInfo,
        court_name: str,
        location: str,
        label: str,
        price_per_hour: float,
    ) -> Court:
        with internal_errors("add court"):
            if await db.find_court_by_name(admin.admin_id, court_name) is not None:
                raise Conflict(DUPLICATE_NAME)
            try:
                court = await db.create_court(
                    admin.admin_id, court_name, location, label, price_per_hour
                )
            except db.DuplicateCourtName:
                raise Conflict(DUPLICATE_NAME) from None

        logger.info("admin(%s) added court(%s)", admin.admin_name, court_name)
        return court

    async def delete(self, admin: AdminInfo, court_id: int) -> None:
        """Delete a court that has no unfinished orders."""
        with internal_errors("delete court"):
            now = _now()
            if await db.has_pending_orders(admin.admin_id, court_id, now):
                raise Conflict(PENDING_ORDERS)
            if not await db.delete_court(admin.admin_id, court_id, now):
                # An order may have landed between the check and the delete.
                if await db.has_pending_orders(admin.admin_id, court_id, now):
                    raise Conflict(PENDING_ORDERS)
                raise NotFound(f"court({court_id}) does not exist")

        logger.info("admin(%s) deleted court(%s)", admin.admin_name, court_id)

    async def list(self, admin: AdminInfo) -> list[Court]:
        with internal_errors("list courts"):
            return await db.list_courts(admin.admin_id)

    async def update(
        self,
        admin: AdminInfo,
        court_id: int,
        court_name: str,
        location: str,
        label: str,
        price_per_hour: float,
    ) -> Court:
        """Replace name, location, label and price of an existing court."""
        with internal_errors("update court"):
            if await db.get_court(admin.admin_id, court_id) is None:
                raise NotFound(NOT_FOUND)
            try:
                court = await db.update_court(
                    admin.admin_id,
                    court_id,
                    court_name=court_name,
                    location=location,
                    label=label,
                    price_per_hour=price_per_hour,
                )
            except db.DuplicateCourtName:
                raise Conflict(DUPLICATE_NAME) from None
            if court is None:
                raise NotFound(NOT_FOUND)

        logger.info("admin(%s) updated court(%s)", admin.admin_name, court_id)
        return court


# Global court service instance
court_service = CourtAdminService()
