"""
SQLite-backed circle store
==========================

- One connection per store, shared across worker threads.
- Every statement runs in ``asyncio.to_thread`` under an ``asyncio.Lock``.
- ``sqlite3`` errors and unparseable rows surface as ``UpstreamFailure``.
"""

from __future__ import annotations

import asyncio
import datetime
import json
import logging
import pathlib
import sqlite3
from typing import Any, Mapping, Sequence

from .errors import UpstreamFailure, ValidationFailure
from .gateway import PersistenceGateway
from .models import MUTABLE_FIELDS, Circle

logger = logging.getLogger(__name__)

_COLUMNS = (
    "id, name, description, emoji, image_url, channel, owner, created_on, sub_channels"
)


def connect(path: str) -> sqlite3.Connection:
    if path != ":memory:":
        pathlib.Path(path).parent.mkdir(parents=True, exist_ok=True)

    # Autocommit; we use explicit `with conn:` blocks in worker threads.
    conn = sqlite3.connect(path, isolation_level=None, check_same_thread=False)
    conn.execute("PRAGMA journal_mode=WAL;")
    conn.execute("PRAGMA synchronous=NORMAL;")
    # Reduce SQLITE_BUSY errors under contention
    conn.execute("PRAGMA busy_timeout=3000;")

    # dict-like rows
    conn.row_factory = sqlite3.Row
    return conn


def migrate(conn: sqlite3.Connection) -> None:
    """Execute schema.sql (idempotent)."""
    schema_file = pathlib.Path(__file__).with_name("schema.sql")
    sql = schema_file.read_text(encoding="utf-8")
    with conn:
        conn.executescript(sql)


def _row_to_circle(row: sqlite3.Row) -> Circle:
    created_on = datetime.datetime.fromisoformat(row["created_on"])
    if created_on.tzinfo is None:
        created_on = created_on.replace(tzinfo=datetime.timezone.utc)
    return Circle(
        id=row["id"],
        name=row["name"],
        description=row["description"],
        emoji=row["emoji"],
        image_url=row["image_url"],
        channel=row["channel"],
        owner=row["owner"],
        created_on=created_on,
        sub_channels=tuple(str(c) for c in json.loads(row["sub_channels"])),
    )


def _circle_to_row(circle: Circle) -> tuple[Any, ...]:
    return (
        circle.id,
        circle.name,
        circle.description,
        circle.emoji,
        circle.image_url,
        circle.channel,
        circle.owner,
        circle.created_on.isoformat(),
        json.dumps(list(circle.sub_channels)),
    )


class SqliteCircleStore(PersistenceGateway):
    """:class:`PersistenceGateway` over a local SQLite file."""

    def __init__(self, conn: sqlite3.Connection, lock: asyncio.Lock | None = None):
        self.conn = conn
        self._lock = lock or asyncio.Lock()

    @classmethod
    def open(cls, path: str) -> "SqliteCircleStore":
        """Connect to ``path`` and apply the schema."""

        conn = connect(path)
        migrate(conn)
        logger.info("Opened circle store at %s", path)
        return cls(conn)

    def close(self) -> None:
        self.conn.close()

    async def _call(self, fn, what: str):
        try:
            async with self._lock:
                return await asyncio.to_thread(fn)  # blocking sqlite call
        except sqlite3.Error as exc:
            raise UpstreamFailure(f"Circle store failed to {what}: {exc}") from exc

    async def list_all(self) -> Sequence[Circle]:
        sql = f"SELECT {_COLUMNS} FROM circles ORDER BY created_on"

        def _query() -> list[sqlite3.Row]:
            return self.conn.execute(sql).fetchall()

        rows = await self._call(_query, "list circles")
        try:
            return [_row_to_circle(r) for r in rows]
        except (ValueError, TypeError, KeyError) as exc:
            # One bad document fails the whole fetch; callers never see a partial page.
            raise UpstreamFailure(f"Circle store returned a malformed record: {exc}") from exc

    async def insert(self, circle: Circle) -> Circle:
        sql = f"INSERT INTO circles ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)"
        row = _circle_to_row(circle)

        def _run() -> None:
            with self.conn:
                self.conn.execute(sql, row)

        await self._call(_run, f"insert circle {circle.id}")
        return circle

    async def update(self, circle_id: str, fields: Mapping[str, Any]) -> Circle:
        unknown = set(fields) - MUTABLE_FIELDS
        if unknown:
            raise ValidationFailure(
                f"Cannot update circle field(s): {', '.join(sorted(unknown))}"
            )

        values = {k: str(v) for k, v in fields.items()}

        def _run() -> sqlite3.Row | None:
            with self.conn:
                if values:
                    assignments = ", ".join(f"{k}=?" for k in values)
                    self.conn.execute(
                        f"UPDATE circles SET {assignments} WHERE id=?",
                        (*values.values(), circle_id),
                    )
                return self.conn.execute(
                    f"SELECT {_COLUMNS} FROM circles WHERE id=?", (circle_id,)
                ).fetchone()

        row = await self._call(_run, f"update circle {circle_id}")
        if row is None:
            raise UpstreamFailure(f"Circle {circle_id} not found in store")
        return _row_to_circle(row)

    async def delete(self, circle_id: str) -> None:
        def _run() -> int:
            with self.conn:
                cur = self.conn.execute("DELETE FROM circles WHERE id=?", (circle_id,))
                return cur.rowcount

        deleted = await self._call(_run, f"delete circle {circle_id}")
        if not deleted:
            raise UpstreamFailure(f"Circle {circle_id} not found in store")
