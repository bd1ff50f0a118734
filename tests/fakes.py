"""In-memory collaborators shared by the directory tests."""

from __future__ import annotations

import dataclasses
import datetime

from circle_bot.directory.errors import UpstreamFailure
from circle_bot.directory.gateway import PersistenceGateway
from circle_bot.directory.models import Circle


def make_circle(circle_id: str = "r1", **overrides) -> Circle:
    fields = dict(
        id=circle_id,
        name="Chess Club",
        description="Weekly blitz and puzzles",
        emoji="♟\ufe0f",
        image_url="https://example.com/chess.png",
        channel="456",
        owner="789",
        created_on=datetime.datetime(2023, 3, 14, tzinfo=datetime.timezone.utc),
        sub_channels=(),
    )
    fields.update(overrides)
    return Circle(**fields)


class FakeGateway(PersistenceGateway):
    def __init__(self, records=None) -> None:
        self.records: dict[str, Circle] = {c.id: c for c in (records or [])}
        self.fail_with: Exception | None = None
        self.calls: list[tuple] = []

    def _maybe_fail(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    async def list_all(self):
        self.calls.append(("list_all",))
        self._maybe_fail()
        return list(self.records.values())

    async def insert(self, circle):
        self.calls.append(("insert", circle.id))
        self._maybe_fail()
        self.records[circle.id] = circle
        return circle

    async def update(self, circle_id, fields):
        self.calls.append(("update", circle_id, dict(fields)))
        self._maybe_fail()
        if circle_id not in self.records:
            raise UpstreamFailure(f"Circle {circle_id} not found in store")
        current = self.records[circle_id]
        updated = dataclasses.replace(current, **fields)
        self.records[circle_id] = updated
        return updated

    async def delete(self, circle_id):
        self.calls.append(("delete", circle_id))
        self._maybe_fail()
        if self.records.pop(circle_id, None) is None:
            raise UpstreamFailure(f"Circle {circle_id} not found in store")


class FakeRoles:
    """Role-assignment gateway backed by a set of (user, role) pairs."""

    def __init__(self) -> None:
        self.held: set[tuple[int, str]] = set()
        self.fail_on: set[str] = set()

    async def has_role(self, user_id, role_id):
        if "has_role" in self.fail_on:
            raise RuntimeError("gateway timeout")
        return (user_id, role_id) in self.held

    async def grant_role(self, user_id, role_id):
        if "grant_role" in self.fail_on:
            raise RuntimeError("missing permissions")
        self.held.add((user_id, role_id))

    async def revoke_role(self, user_id, role_id):
        if "revoke_role" in self.fail_on:
            raise RuntimeError("missing permissions")
        self.held.discard((user_id, role_id))


class FakeNotifier:
    def __init__(self, fail: bool = False) -> None:
        self.sent: list[tuple[str, str]] = []
        self.fail = fail

    async def send(self, channel_id, content):
        if self.fail:
            raise UpstreamFailure("channel unavailable")
        self.sent.append((channel_id, content))


def http_error(status: int = 500, message: str = "boom"):
    """Build a ``discord.HTTPException`` without a real aiohttp response."""

    import discord
    from types import SimpleNamespace

    return discord.HTTPException(SimpleNamespace(status=status, reason="Error"), message)
