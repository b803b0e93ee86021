# Copyright (c) 2024 OpenMined
# SPDX-License-Identifier: Apache-2.0
"""Executor for replaying recorded requests through the guard.

Orchestrates the audit flow:
1. Create sink from configuration (log-only mode)
2. Wrap a stub application with the configured guard
3. Replay every request through the real middleware
4. Return per-request decisions and totals
"""

from __future__ import annotations

from typing import Any

from starlette.responses import Response

from secfetch.context import MODE_HEADER, SITE_HEADER, FetchMetadata
from secfetch.exceptions import SecFetchError
from secfetch.policy import evaluate
from secfetch.sinks import RequestLogger

from .factory import SinkFactory, build_guard
from .schema import DecisionSchema, RequestSchema, RunnerInput, RunnerOutput


class ReplayError(SecFetchError):
    """Raised when a request cannot be replayed."""


async def _stub_app(scope: Any, receive: Any, send: Any) -> None:
    await Response(status_code=200)(scope, receive, send)


class Executor:
    """Replays requests through the guard described by ``RunnerInput.config``.

    Pass a sink to the constructor to override sink creation, e.g. to inspect
    what log-only mode recorded.

    Example:
        executor = Executor()
        output = await executor.execute(input_data)

        # For testing with an in-memory sink:
        sink = InMemoryRequestLogger()
        executor = Executor(sink=sink)
    """

    def __init__(self, sink: RequestLogger | None = None) -> None:
        """Initialize executor with optional injected sink.

        Args:
            sink: Optional sink to use instead of creating from config.
        """
        self._injected_sink = sink

    async def execute(self, input_data: RunnerInput) -> RunnerOutput:
        """Replay all requests.

        Args:
            input_data: Requests and guard configuration

        Returns:
            RunnerOutput with per-request decisions, or error details

        Note:
            This method catches all exceptions and returns them as
            RunnerOutput errors, ensuring valid JSON is always returned.
        """
        try:
            return await self._execute_internal(input_data)
        except Exception as e:
            return RunnerOutput(
                success=False,
                mode=input_data.config.mode,
                error=str(e),
                error_type=type(e).__name__,
            )

    async def _execute_internal(self, input_data: RunnerInput) -> RunnerOutput:
        """Internal execution logic.

        Separated from execute() to allow exception propagation
        for testing while execute() catches all errors.
        """
        config = input_data.config
        sink = self._injected_sink
        owns_sink = False
        if config.mode == "log_only" and sink is None:
            sink = SinkFactory().create(config.sink)
            owns_sink = True

        try:
            guard = build_guard(_stub_app, config, sink=sink)
            decisions: list[DecisionSchema] = []
            for request in input_data.requests:
                decision = evaluate(
                    FetchMetadata(site=request.site, mode=request.mode, method=request.method)
                )
                entry = DecisionSchema(
                    request=request,
                    allowed=decision.allowed,
                    reason=decision.reason,
                )
                try:
                    entry.status_code = await self._replay(guard, request)
                except ReplayError as e:
                    entry.error = str(e)
                decisions.append(entry)

            allowed_count = sum(1 for d in decisions if d.allowed)
            return RunnerOutput(
                success=True,
                mode=config.mode,
                decisions=decisions,
                allowed_count=allowed_count,
                denied_count=len(decisions) - allowed_count,
            )
        finally:
            # Always close the sink if we created it
            if owns_sink and hasattr(sink, "close"):
                await sink.close()

    async def _replay(self, guard: Any, request: RequestSchema) -> int:
        """Send one request through *guard* and return the response status.

        Raises:
            ReplayError: If the guard completes without starting a response
        """
        scope = self._build_scope(request)
        status: list[int] = []

        async def receive() -> dict[str, Any]:
            return {"type": "http.request", "body": b"", "more_body": False}

        async def send(message: dict[str, Any]) -> None:
            if message["type"] == "http.response.start":
                status.append(message["status"])

        await guard(scope, receive, send)
        if not status:
            raise ReplayError(f"No response for {request.method} {request.path}")
        return status[0]

    def _build_scope(self, request: RequestSchema) -> dict[str, Any]:
        """Build an ASGI http scope carrying the request's Fetch Metadata.

        Empty values are left out, as a browser that does not send the
        header would.

        Raises:
            ReplayError: If a header value cannot be sent over HTTP
        """
        headers = [(b"host", b"audit.invalid")]
        for name, value in ((SITE_HEADER, request.site), (MODE_HEADER, request.mode)):
            if not value:
                continue
            try:
                headers.append((name.encode(), value.encode("latin-1")))
            except UnicodeEncodeError as e:
                raise ReplayError(f"{name} value {value!r} is not a valid header value") from e

        path, _, query = request.path.partition("?")
        return {
            "type": "http",
            "asgi": {"version": "3.0"},
            "http_version": "1.1",
            "method": request.method,
            "scheme": "http",
            "path": path,
            "raw_path": path.encode("utf-8"),
            "query_string": query.encode("utf-8"),
            "root_path": "",
            "headers": headers,
            "client": None,
            "server": ("audit.invalid", 80),
        }
