import asyncio
from types import SimpleNamespace

import discord

from circle_bot.directory import DirectoryService, UpstreamFailure, scheduler
from circle_bot.event_hooks import ready_hook

from fakes import FakeGateway, make_circle


class _Client:
    def __init__(self, gateway):
        self.user = SimpleNamespace(name="circles", id=42)
        self.directory = DirectoryService(gateway)
        self.presence = None

    async def change_presence(self, *, activity):
        self.presence = activity


def _record_scheduler(monkeypatch):
    started = []

    async def fake_start(directory, interval):
        started.append((directory, interval))

    monkeypatch.setattr(scheduler, "start", fake_start)
    return started


def test_ready_hydrates_directory_and_starts_scheduler(monkeypatch):
    started = _record_scheduler(monkeypatch)
    client = _Client(FakeGateway([make_circle("r1")]))

    asyncio.run(ready_hook.handle(client))

    assert asyncio.run(client.directory.cache.count()) == 1
    assert client.presence.type is discord.ActivityType.watching
    assert started == [(client.directory, 0.0)]


def test_ready_survives_store_outage(monkeypatch):
    started = _record_scheduler(monkeypatch)
    gateway = FakeGateway([make_circle("r1")])
    gateway.fail_with = UpstreamFailure("store unreachable")
    client = _Client(gateway)

    asyncio.run(ready_hook.handle(client))

    assert asyncio.run(client.directory.list()) == []
    assert len(started) == 1
