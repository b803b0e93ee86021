"""RequestLogger ABC — where the log-only middleware reports rejected requests."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any

from secfetch.context import FetchMetadata

if TYPE_CHECKING:
    from starlette.requests import HTTPConnection

    from secfetch._internal.clock import Clock


@dataclass(frozen=True)
class DeniedRequest:
    """Snapshot of a request the policy would have rejected.

    The connection handed to a sink is only valid for the duration of the
    call, so sinks copy what they need into one of these.
    """

    method: str
    path: str
    site: str
    mode: str
    dest: str
    user: str
    origin: str
    user_agent: str
    timestamp: datetime

    @classmethod
    def from_connection(cls, conn: HTTPConnection, clock: Clock) -> DeniedRequest:
        metadata = FetchMetadata.from_scope(conn.scope)
        return cls(
            method=metadata.method,
            path=conn.url.path,
            site=metadata.site,
            mode=metadata.mode,
            dest=metadata.dest,
            user=metadata.user,
            origin=conn.headers.get("origin", ""),
            user_agent=conn.headers.get("user-agent", ""),
            timestamp=clock.now(),
        )

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["timestamp"] = self.timestamp.isoformat()
        return data


class RequestLogger(ABC):
    """Anything that can record a request the policy would deny.

    ``log_request`` is called at most once per denied request, possibly
    concurrently for different requests.  Implementations that keep shared
    state are responsible for their own synchronisation.
    """

    @abstractmethod
    async def log_request(self, request: HTTPConnection) -> None:
        """Record *request*.  Must not read the body or keep the object."""
        ...
