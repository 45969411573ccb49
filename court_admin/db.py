"""
SQLite database layer using aiosqlite.

Stores courts and the orders that reference them.
Tables are created automatically on first connect.

Orders are owned by the booking side of the system; this module only
reads them to decide whether a court may be deleted.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path

import aiosqlite

from court_admin.config import DB_PATH
from court_admin.models import Court

logger = logging.getLogger(__name__)

# ── Module-level connection ───────────────────────────────────────────────

_db: aiosqlite.Connection | None = None

# All requests share one connection, and so one transaction. Writers take
# this lock until they have committed or rolled back.
_write_lock: asyncio.Lock | None = None


async def init_db() -> None:
    """Open the database and create tables if they don't exist."""
    global _db, _write_lock
    db_path = Path(DB_PATH)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    _db = await aiosqlite.connect(str(db_path))
    _db.row_factory = aiosqlite.Row  # dict-like rows
    await _db.execute("PRAGMA journal_mode=WAL")
    await _db.execute("PRAGMA foreign_keys=ON")

    await _db.executescript(_SCHEMA)
    await _db.commit()
    _write_lock = asyncio.Lock()
    logger.info("Database initialized at %s", db_path)


async def close_db() -> None:
    """Close the database connection."""
    global _db, _write_lock
    if _db is not None:
        await _db.close()
        _db = None
        _write_lock = None
        logger.info("Database connection closed")


def get_db() -> aiosqlite.Connection:
    """Return the active database connection (must call init_db first)."""
    assert _db is not None, "Database not initialized — call init_db() first"
    return _db


@asynccontextmanager
async def _transaction() -> AsyncIterator[aiosqlite.Connection]:
    """Hold the write lock for one write; commit on success, roll back on error."""
    db = get_db()
    assert _write_lock is not None
    async with _write_lock:
        try:
            yield db
        except BaseException:
            await db.rollback()
            raise
        await db.commit()


async def ping() -> None:
    """Round-trip a trivial query; raises if the database is unusable."""
    async with get_db().execute("SELECT 1") as cur:
        await cur.fetchone()


# ── Schema ────────────────────────────────────────────────────────────────

_SCHEMA = """
CREATE TABLE IF NOT EXISTS courts (
    court_id        INTEGER PRIMARY KEY AUTOINCREMENT,
    admin_id        INTEGER NOT NULL,
    court_name      TEXT NOT NULL,
    location        TEXT NOT NULL,
    label           TEXT NOT NULL,
    price_per_hour  REAL NOT NULL,
    UNIQUE (admin_id, court_name)
);

CREATE INDEX IF NOT EXISTS idx_courts_admin ON courts(admin_id);

CREATE TABLE IF NOT EXISTS orders (
    order_id        INTEGER PRIMARY KEY AUTOINCREMENT,
    court_id        INTEGER,
    apt_start       TEXT NOT NULL,
    apt_end         TEXT,           -- any SQLite time string; NULL: open-ended booking
    FOREIGN KEY (court_id) REFERENCES courts(court_id) ON DELETE SET NULL
);

CREATE INDEX IF NOT EXISTS idx_orders_court_end ON orders(court_id, apt_end);
"""

# An order blocks deletion while it has not ended, or when it has no end at all.
# julianday() parses both "YYYY-MM-DD HH:MM:SS" and ISO-8601 with an offset.
_PENDING_ORDER = "(orders.apt_end IS NULL OR julianday(orders.apt_end) >= julianday(?))"


class DuplicateCourtName(Exception):
    """The (admin_id, court_name) unique index rejected a write."""


# ── Helpers ───────────────────────────────────────────────────────────────


def iso(dt: datetime) -> str:
    """UTC ISO-8601 text with microsecond precision."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat(timespec="microseconds")


def _row_to_court(row: aiosqlite.Row) -> Court:
    """Convert a database row to a Court model."""
    return Court(
        court_id=row["court_id"],
        admin_id=row["admin_id"],
        court_name=row["court_name"],
        location=row["location"],
        label=row["label"],
        price_per_hour=row["price_per_hour"],
    )


# ══════════════════════════════════════════════════════════════════════════
#                    COURT REPOSITORY
# ══════════════════════════════════════════════════════════════════════════


async def create_court(
    admin_id: int,
    court_name: str,
    location: str,
    label: str,
    price_per_hour: float,
) -> Court:
    """Insert a new court and return it with its assigned id."""
    try:
        async with _transaction() as db:
            cur = await db.execute(
                """
                INSERT INTO courts (admin_id, court_name, location, label, price_per_hour)
                VALUES (?, ?, ?, ?, ?)
                """,
                (admin_id, court_name, location, label, price_per_hour),
            )
    except aiosqlite.IntegrityError as exc:
        raise DuplicateCourtName(court_name) from exc
    return Court(
        court_id=cur.lastrowid,
        admin_id=admin_id,
        court_name=court_name,
        location=location,
        label=label,
        price_per_hour=price_per_hour,
    )


async def get_court(admin_id: int, court_id: int) -> Court | None:
    """Fetch a court by id, only if it belongs to the given admin."""
    db = get_db()
    async with db.execute(
        "SELECT * FROM courts WHERE court_id = ? AND admin_id = ?",
        (court_id, admin_id),
    ) as cur:
        row = await cur.fetchone()
    return _row_to_court(row) if row else None


async def find_court_by_name(admin_id: int, court_name: str) -> Court | None:
    db = get_db()
    async with db.execute(
        "SELECT * FROM courts WHERE admin_id = ? AND court_name = ?",
        (admin_id, court_name),
    ) as cur:
        row = await cur.fetchone()
    return _row_to_court(row) if row else None


async def list_courts(admin_id: int) -> list[Court]:
    """All courts of an admin, in whatever order the store returns them."""
    db = get_db()
    async with db.execute(
        "SELECT * FROM courts WHERE admin_id = ?", (admin_id,)
    ) as cur:
        rows = await cur.fetchall()
    return [_row_to_court(r) for r in rows]


async def update_court(
    admin_id: int,
    court_id: int,
    *,
    court_name: str,
    location: str,
    label: str,
    price_per_hour: float,
) -> Court | None:
    """
    Replace the mutable fields of a court.

    Returns None when no court with that id belongs to the admin.
    """
    try:
        async with _transaction() as db:
            cur = await db.execute(
                """
                UPDATE courts SET
                    court_name = ?, location = ?, label = ?, price_per_hour = ?
                WHERE court_id = ? AND admin_id = ?
                """,
                (court_name, location, label, price_per_hour, court_id, admin_id),
            )
    except aiosqlite.IntegrityError as exc:
        raise DuplicateCourtName(court_name) from exc
    if cur.rowcount == 0:
        return None
    return Court(
        court_id=court_id,
        admin_id=admin_id,
        court_name=court_name,
        location=location,
        label=label,
        price_per_hour=price_per_hour,
    )


async def has_pending_orders(admin_id: int, court_id: int, now: datetime) -> bool:
    """True if one of the admin's courts still has an order that has not ended."""
    db = get_db()
    async with db.execute(
        f"""
        SELECT 1 FROM orders
        JOIN courts ON courts.court_id = orders.court_id
        WHERE orders.court_id = ? AND courts.admin_id = ? AND {_PENDING_ORDER}
        LIMIT 1
        """,
        (court_id, admin_id, iso(now)),
    ) as cur:
        row = await cur.fetchone()
    return row is not None


async def delete_court(admin_id: int, court_id: int, now: datetime) -> bool:
    """
    Delete a court unless it has pending orders.

    The pending-order condition is part of the DELETE itself, so an order
    placed after an earlier check still prevents the delete. Returns True if
    a row was actually deleted.
    """
    async with _transaction() as db:
        cur = await db.execute(
            f"""
            DELETE FROM courts
            WHERE court_id = ? AND admin_id = ?
              AND NOT EXISTS (
                  SELECT 1 FROM orders
                  WHERE orders.court_id = courts.court_id AND {_PENDING_ORDER}
              )
            """,
            (court_id, admin_id, iso(now)),
        )
    return cur.rowcount > 0
