"""SQLiteRequestLogger — durable, single-file record of denied requests."""

from __future__ import annotations

import asyncio
from datetime import datetime
from typing import TYPE_CHECKING

try:
    import aiosqlite
except ImportError as exc:
    raise ImportError(
        "SQLiteRequestLogger requires the 'aiosqlite' package. "
        "Install it with: pip install aiosqlite"
    ) from exc

from secfetch._internal.clock import Clock, SystemClock
from secfetch.exceptions import SinkError
from secfetch.sinks.base import DeniedRequest, RequestLogger

if TYPE_CHECKING:
    from starlette.requests import HTTPConnection

_CREATE_TABLE = """
CREATE TABLE IF NOT EXISTS denied_requests (
    id         INTEGER PRIMARY KEY AUTOINCREMENT,
    method     TEXT NOT NULL,
    path       TEXT NOT NULL,
    site       TEXT NOT NULL,
    mode       TEXT NOT NULL,
    dest       TEXT NOT NULL,
    user       TEXT NOT NULL,
    origin     TEXT NOT NULL,
    user_agent TEXT NOT NULL,
    timestamp  TEXT NOT NULL
)
"""

_COLUMNS = "method, path, site, mode, dest, user, origin, user_agent, timestamp"


class SQLiteRequestLogger(RequestLogger):
    """Persists denied requests to a single SQLite file.

    All writes go through one ``aiosqlite`` connection, which serialises
    concurrent requests.

    Parameters:
        db_path: Path to the SQLite database file.  Use ``":memory:"``
                 for an in-memory database (useful for testing).
        clock:   Injectable clock for testing.
    """

    def __init__(self, db_path: str = "secfetch.db", clock: Clock | None = None) -> None:
        self._db_path = db_path
        self._clock = clock or SystemClock()
        self._db: aiosqlite.Connection | None = None
        self._connect_lock = asyncio.Lock()

    async def _connect(self) -> aiosqlite.Connection:
        async with self._connect_lock:
            if self._db is None:
                db: aiosqlite.Connection | None = None
                try:
                    db = await aiosqlite.connect(self._db_path)
                    await db.execute(_CREATE_TABLE)
                    await db.commit()
                except aiosqlite.Error as e:
                    if db is not None:
                        await db.close()
                    raise SinkError("connect", str(e)) from e
                self._db = db
            return self._db

    async def close(self) -> None:
        if self._db:
            await self._db.close()
            self._db = None

    # ── RequestLogger ────────────────────────────────────────

    async def log_request(self, request: HTTPConnection) -> None:
        record = DeniedRequest.from_connection(request, self._clock)
        db = await self._connect()
        try:
            await db.execute(
                f"INSERT INTO denied_requests ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    record.method,
                    record.path,
                    record.site,
                    record.mode,
                    record.dest,
                    record.user,
                    record.origin,
                    record.user_agent,
                    record.timestamp.isoformat(),
                ),
            )
            await db.commit()
        except aiosqlite.Error as e:
            raise SinkError("log_request", str(e)) from e

    # ── reading back ─────────────────────────────────────────

    async def list_records(self, limit: int = 100) -> list[DeniedRequest]:
        """Return up to *limit* records, oldest first."""
        db = await self._connect()
        try:
            cursor = await db.execute(
                f"SELECT {_COLUMNS} FROM denied_requests ORDER BY id LIMIT ?",
                (limit,),
            )
            rows = await cursor.fetchall()
        except aiosqlite.Error as e:
            raise SinkError("list_records", str(e)) from e
        return [
            DeniedRequest(*row[:-1], timestamp=datetime.fromisoformat(row[-1]))
            for row in rows
        ]

    async def count(self) -> int:
        db = await self._connect()
        try:
            cursor = await db.execute("SELECT COUNT(*) FROM denied_requests")
            row = await cursor.fetchone()
        except aiosqlite.Error as e:
            raise SinkError("count", str(e)) from e
        return int(row[0]) if row else 0
