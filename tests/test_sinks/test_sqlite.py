"""Tests for SQLiteRequestLogger."""

import asyncio

import aiosqlite
import pytest
from cases import make_request

from secfetch import SinkError
from secfetch.sinks import SQLiteRequestLogger


@pytest.fixture
async def sqlite_sink(clock):
    sink = SQLiteRequestLogger(":memory:", clock=clock)
    yield sink
    await sink.close()


async def test_empty(sqlite_sink):
    assert await sqlite_sink.count() == 0
    assert await sqlite_sink.list_records() == []


async def test_log_and_read_back(sqlite_sink, clock):
    await sqlite_sink.log_request(make_request("/transfer", method="PUT"))
    [record] = await sqlite_sink.list_records()
    assert record.path == "/transfer"
    assert record.method == "PUT"
    assert record.site == "cross-site"
    assert record.mode == "cors"
    assert record.timestamp == clock.now()


async def test_count_and_limit(sqlite_sink):
    for i in range(5):
        await sqlite_sink.log_request(make_request(f"/{i}"))
    assert await sqlite_sink.count() == 5
    records = await sqlite_sink.list_records(limit=2)
    assert [r.path for r in records] == ["/0", "/1"]


async def test_persists_across_connections(tmp_path, clock):
    path = str(tmp_path / "denied.db")
    first = SQLiteRequestLogger(path, clock=clock)
    await first.log_request(make_request("/a"))
    await first.close()

    second = SQLiteRequestLogger(path, clock=clock)
    assert await second.count() == 1
    await second.close()


async def test_unopenable_path_raises_sink_error(tmp_path):
    sink = SQLiteRequestLogger(str(tmp_path / "missing" / "denied.db"))
    with pytest.raises(SinkError) as exc_info:
        await sink.count()
    assert exc_info.value.operation == "connect"


async def test_concurrent_first_writes_share_one_connection(monkeypatch, clock):
    opened = []
    real_connect = aiosqlite.connect

    def counting_connect(*args, **kwargs):
        opened.append(args)
        return real_connect(*args, **kwargs)

    monkeypatch.setattr(aiosqlite, "connect", counting_connect)
    sink = SQLiteRequestLogger(":memory:", clock=clock)
    try:
        await asyncio.gather(*(sink.log_request(make_request(f"/{i}")) for i in range(5)))
        assert len(opened) == 1
        assert await sink.count() == 5
    finally:
        await sink.close()
