"""ASGI middleware applying the Fetch Metadata policy around an application.

Both wrappers are plain app-to-app transforms, so they compose with any ASGI
framework::

    app = protect(router)
    app = protect_log_only(router, LoggingRequestLogger())

or, with Starlette::

    app.add_middleware(FetchMetadataMiddleware)
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from starlette.requests import HTTPConnection, Request
from starlette.responses import PlainTextResponse
from starlette.websockets import WebSocketClose

from secfetch.context import FetchMetadata
from secfetch.policy import evaluate

if TYPE_CHECKING:
    from starlette.types import ASGIApp, Receive, Scope, Send

    from secfetch.sinks.base import RequestLogger

log = logging.getLogger(__name__)

DENIED_MESSAGE = "Invalid resource access\n"

# WebSocket close code for "policy violation".
_WS_POLICY_VIOLATION = 1008

_GUARDED_SCOPES = ("http", "websocket")


class FetchMetadataMiddleware:
    """Rejects cross-site requests before they reach *app*.

    Denied HTTP requests get ``403 Forbidden`` with a plain-text body.
    Denied websocket handshakes are closed before acceptance, which servers
    report to the client as a 403.  Lifespan and other scopes pass through.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] not in _GUARDED_SCOPES:
            await self.app(scope, receive, send)
            return

        if not evaluate(FetchMetadata.from_scope(scope)).allowed:
            if scope["type"] == "websocket":
                await WebSocketClose(code=_WS_POLICY_VIOLATION)(scope, receive, send)
            else:
                await PlainTextResponse(DENIED_MESSAGE, status_code=403)(scope, receive, send)
            return

        await self.app(scope, receive, send)


class FetchMetadataLogOnlyMiddleware:
    """Reports requests the policy would reject, but serves them anyway.

    Meant for rolling the policy out: run in this mode, check the logs, then
    switch to :class:`FetchMetadataMiddleware`.

    Parameters:
        app:    The wrapped ASGI application.
        logger: Receives a read-only view of every request that would have
                been denied.  ``log_request`` may be sync or async.
    """

    def __init__(self, app: ASGIApp, logger: RequestLogger) -> None:
        self.app = app
        self.logger = logger

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] in _GUARDED_SCOPES:
            if not evaluate(FetchMetadata.from_scope(scope)).allowed:
                await self._report(scope)

        await self.app(scope, receive, send)

    async def _report(self, scope: Scope) -> None:
        # No receive channel: the logger must not consume the request body.
        conn = Request(scope) if scope["type"] == "http" else HTTPConnection(scope)
        try:
            result = self.logger.log_request(conn)
            if asyncio.iscoroutine(result):
                await result
        except Exception:
            log.exception("request logger failed for %s %s", scope["type"], scope.get("path", ""))


def protect(app: ASGIApp) -> ASGIApp:
    """Isolate *app* from potentially malicious cross-site requests."""
    return FetchMetadataMiddleware(app)


def protect_log_only(app: ASGIApp, logger: RequestLogger) -> ASGIApp:
    """Behave like :func:`protect`, but only log requests that would be blocked."""
    return FetchMetadataLogOnlyMiddleware(app, logger)
