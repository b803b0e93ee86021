"""InMemoryRequestLogger — list-backed sink for development and testing."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from secfetch._internal.clock import Clock, SystemClock
from secfetch.sinks.base import DeniedRequest, RequestLogger

if TYPE_CHECKING:
    from starlette.requests import HTTPConnection


class InMemoryRequestLogger(RequestLogger):
    """Keeps every denied request in memory.  Data is lost on process exit."""

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock = clock or SystemClock()
        self._lock = threading.Lock()
        self._records: list[DeniedRequest] = []

    async def log_request(self, request: HTTPConnection) -> None:
        record = DeniedRequest.from_connection(request, self._clock)
        with self._lock:
            self._records.append(record)

    @property
    def records(self) -> list[DeniedRequest]:
        with self._lock:
            return list(self._records)

    @property
    def count(self) -> int:
        with self._lock:
            return len(self._records)

    def clear(self) -> None:
        with self._lock:
            self._records.clear()
