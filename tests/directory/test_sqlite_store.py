import asyncio
import datetime
import sqlite3

import pytest

from circle_bot.directory.errors import UpstreamFailure, ValidationFailure
from circle_bot.directory.sqlite_store import SqliteCircleStore

from fakes import make_circle


@pytest.fixture
def store(tmp_path):
    s = SqliteCircleStore.open(str(tmp_path / "circles.db"))
    yield s
    s.close()


def test_insert_then_list_round_trips_records(store):
    chess = make_circle("r1", sub_channels=("900", "901"))

    async def scenario():
        await store.insert(chess)
        return await store.list_all()

    assert asyncio.run(scenario()) == [chess]


def test_list_all_orders_by_creation(store):
    later = make_circle(
        "late", created_on=datetime.datetime(2024, 1, 1, tzinfo=datetime.timezone.utc)
    )
    earlier = make_circle("early")

    async def scenario():
        await store.insert(later)
        await store.insert(earlier)
        return [c.id for c in await store.list_all()]

    assert asyncio.run(scenario()) == ["early", "late"]


def test_duplicate_insert_is_upstream_failure(store):
    async def scenario():
        await store.insert(make_circle("r1"))
        await store.insert(make_circle("r1"))

    with pytest.raises(UpstreamFailure):
        asyncio.run(scenario())


def test_update_changes_fields_and_returns_stored_record(store):
    async def scenario():
        await store.insert(make_circle("r1", sub_channels=("77",)))
        return await store.update("r1", {"name": "Go Club"})

    updated = asyncio.run(scenario())
    assert updated.name == "Go Club"
    assert updated.description == make_circle().description
    assert updated.sub_channels == ("77",)
    assert updated.created_on == make_circle().created_on


@pytest.mark.parametrize(
    "fields", [{"created_on": "2020-01-01"}, {"sub_channels": ["900"]}]
)
def test_update_rejects_fixed_fields(store, fields):
    async def scenario():
        await store.insert(make_circle("r1"))
        await store.update("r1", fields)

    with pytest.raises(ValidationFailure):
        asyncio.run(scenario())


def test_update_missing_row_is_upstream_failure(store):
    with pytest.raises(UpstreamFailure):
        asyncio.run(store.update("missing", {"name": "x"}))


def test_delete_removes_row(store):
    async def scenario():
        await store.insert(make_circle("r1"))
        await store.delete("r1")
        return await store.list_all()

    assert asyncio.run(scenario()) == []


def test_delete_missing_row_is_upstream_failure(store):
    with pytest.raises(UpstreamFailure):
        asyncio.run(store.delete("missing"))


def test_malformed_row_fails_the_whole_listing(store):
    async def scenario():
        await store.insert(make_circle("good"))
        store.conn.execute(
            "INSERT INTO circles (id, name, description, emoji, image_url, channel, owner, created_on)"
            " VALUES ('bad', 'n', 'd', 'e', 'i', 'c', 'o', 'not-a-date')"
        )
        await store.list_all()

    with pytest.raises(UpstreamFailure) as excinfo:
        asyncio.run(scenario())

    assert "malformed" in str(excinfo.value)


def test_sqlite_errors_are_wrapped(store):
    store.conn.close()
    with pytest.raises(UpstreamFailure) as excinfo:
        asyncio.run(store.list_all())
    assert isinstance(excinfo.value.__cause__, sqlite3.Error)
    # Reopen so the fixture teardown can close cleanly.
    store.conn = sqlite3.connect(":memory:")
