"""Shared test fixtures."""

from datetime import UTC, datetime

import httpx
import pytest
from cases import USER_DATA
from starlette.responses import PlainTextResponse

from secfetch.sinks import InMemoryRequestLogger


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self._now = start

    def now(self) -> datetime:
        return datetime.fromtimestamp(self._now, tz=UTC)


class CallCounter:
    """ASGI app that serves USER_DATA and counts how often it ran."""

    def __init__(self):
        self.calls = 0

    async def __call__(self, scope, receive, send):
        self.calls += 1
        await PlainTextResponse(USER_DATA)(scope, receive, send)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sink(clock):
    return InMemoryRequestLogger(clock=clock)


@pytest.fixture
def inner():
    return CallCounter()


@pytest.fixture
async def make_client():
    clients = []

    def _make(app):
        client = httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app),
            base_url="http://testserver",
        )
        clients.append(client)
        return client

    yield _make
    for client in clients:
        await client.aclose()
