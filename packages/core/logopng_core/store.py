"""SQLite persistence for rendered logo snapshots."""

from __future__ import annotations

import sqlite3
from contextlib import closing
from datetime import datetime, timezone
from pathlib import Path

from .errors import StoreError
from .models import TimelineEntry

# Fixed-width UTC timestamps so that text order equals time order.
_TS_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"

_SCHEMA = """
    CREATE TABLE IF NOT EXISTS timeline (
        created_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%f000Z', 'now')) PRIMARY KEY,
        image_png BLOB NOT NULL
    )
"""


def format_timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime(_TS_FORMAT)


def parse_timestamp(value: str) -> datetime:
    return datetime.strptime(value, _TS_FORMAT).replace(tzinfo=timezone.utc)


class TimelineStore:
    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self.path, timeout=10)

    def create_schema_if_absent(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        try:
            with closing(self._connect()) as conn, conn:
                conn.execute(_SCHEMA)
        except sqlite3.Error as exc:
            raise StoreError(f"could not create timeline schema in {self.path}: {exc}") from exc

    def insert_snapshot(self, png: bytes, captured_at: datetime | None = None) -> datetime:
        captured_at = captured_at or datetime.now(timezone.utc)
        try:
            with closing(self._connect()) as conn, conn:
                conn.execute(
                    "INSERT INTO timeline (created_at, image_png) VALUES (?, ?)",
                    (format_timestamp(captured_at), sqlite3.Binary(png)),
                )
        except sqlite3.Error as exc:
            raise StoreError(f"error inserting {len(png)} bytes into timeline: {exc}") from exc
        return captured_at

    def query_snapshots(self, limit: int | None = None) -> list[TimelineEntry]:
        sql = "SELECT created_at, image_png FROM timeline ORDER BY created_at"
        params: tuple[int, ...] = ()
        if limit is not None:
            sql += " LIMIT ?"
            params = (int(limit),)
        try:
            with closing(self._connect()) as conn:
                rows = conn.execute(sql, params).fetchall()
        except sqlite3.Error as exc:
            raise StoreError(f"timeline query failed: {exc}") from exc
        return [TimelineEntry(captured_at=parse_timestamp(ts), image=bytes(png)) for ts, png in rows]

    def latest_image(self) -> bytes | None:
        try:
            with closing(self._connect()) as conn:
                row = conn.execute("SELECT image_png FROM timeline ORDER BY created_at DESC LIMIT 1").fetchone()
        except sqlite3.Error as exc:
            raise StoreError(f"timeline query failed: {exc}") from exc
        return bytes(row[0]) if row else None

    def count(self) -> int:
        try:
            with closing(self._connect()) as conn:
                (n,) = conn.execute("SELECT COUNT(*) FROM timeline").fetchone()
        except sqlite3.Error as exc:
            raise StoreError(f"timeline count failed: {exc}") from exc
        return int(n)
