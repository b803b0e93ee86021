"""FetchMetadata — the read-only view of a request that the policy inspects."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from starlette.datastructures import Headers
from starlette.types import Scope

SITE_HEADER = "sec-fetch-site"
MODE_HEADER = "sec-fetch-mode"
DEST_HEADER = "sec-fetch-dest"
USER_HEADER = "sec-fetch-user"


@dataclass(frozen=True)
class FetchMetadata:
    """Fetch Metadata values extracted from a single request.

    Attributes:
        site:   ``Sec-Fetch-Site`` value, ``""`` when the browser did not send it.
        mode:   ``Sec-Fetch-Mode`` value, ``""`` when absent.
        method: HTTP method exactly as delivered by the server.
        dest:   ``Sec-Fetch-Dest`` value.  Informational only.
        user:   ``Sec-Fetch-User`` value.  Informational only.
    """

    site: str = ""
    mode: str = ""
    method: str = "GET"
    dest: str = ""
    user: str = ""

    @classmethod
    def from_headers(cls, headers: Mapping[str, str], method: str) -> FetchMetadata:
        """Read the Fetch Metadata headers from *headers*.

        Lookups are case-insensitive; a missing header reads as ``""``.
        """
        if not isinstance(headers, Headers):
            headers = Headers(headers=dict(headers))
        return cls(
            site=headers.get(SITE_HEADER, ""),
            mode=headers.get(MODE_HEADER, ""),
            method=method,
            dest=headers.get(DEST_HEADER, ""),
            user=headers.get(USER_HEADER, ""),
        )

    @classmethod
    def from_scope(cls, scope: Scope) -> FetchMetadata:
        """Build from an ASGI ``http`` or ``websocket`` scope.

        A websocket handshake is always a GET upgrade request.
        """
        method = scope.get("method", "GET") if scope["type"] == "http" else "GET"
        return cls.from_headers(Headers(scope=scope), method)
