# Copyright (c) 2024 OpenMined
# SPDX-License-Identifier: Apache-2.0
"""Configuration and data transfer objects for the guard and the audit runner.

``GuardConfigSchema`` is how deployments pick between enforcing and
log-only mode.  ``RunnerInput`` / ``RunnerOutput`` are the JSON contract of
``python -m secfetch.runner``.
"""

from __future__ import annotations

import os
from typing import Literal

from pydantic import BaseModel, Field

from secfetch.exceptions import GuardConfigError

GuardMode = Literal["enforce", "log_only"]

_MODES: tuple[str, ...] = ("enforce", "log_only")


class SinkConfigSchema(BaseModel):
    """Where log-only mode records would-be denials.

    Attributes:
        type: Sink type ("logging", "memory" or "sqlite")
        path: Path to SQLite database file (for sqlite type)
        logger_name: Logger to emit on (for logging type)
    """

    type: str = "logging"
    path: str = ""
    logger_name: str = "secfetch"


class GuardConfigSchema(BaseModel):
    """Deployment settings for the Fetch Metadata guard.

    Attributes:
        mode: "enforce" rejects cross-site requests, "log_only" reports them
        sink: Sink used in log-only mode
    """

    mode: GuardMode = "enforce"
    sink: SinkConfigSchema = Field(default_factory=SinkConfigSchema)

    @classmethod
    def from_env(cls) -> GuardConfigSchema:
        """Build from ``SECFETCH_*`` environment variables.

        Recognised: ``SECFETCH_MODE`` (``enforce`` / ``log_only``, a dash is
        accepted too), ``SECFETCH_SINK``, ``SECFETCH_SINK_PATH``,
        ``SECFETCH_LOGGER``.

        Raises:
            GuardConfigError: If ``SECFETCH_MODE`` is not a known mode
        """
        mode = os.environ.get("SECFETCH_MODE", "enforce").strip().lower().replace("-", "_")
        if mode not in _MODES:
            raise GuardConfigError(
                "SECFETCH_MODE", f"expected one of {', '.join(_MODES)}, got '{mode}'"
            )
        sink = SinkConfigSchema(
            type=os.environ.get("SECFETCH_SINK", "logging"),
            path=os.environ.get("SECFETCH_SINK_PATH", ""),
            logger_name=os.environ.get("SECFETCH_LOGGER", "secfetch"),
        )
        return cls(mode=mode, sink=sink)  # type: ignore[arg-type]


class RequestSchema(BaseModel):
    """A recorded request to replay through the guard.

    Attributes:
        site: Sec-Fetch-Site value ("" when the header was absent)
        mode: Sec-Fetch-Mode value ("" when the header was absent)
        method: HTTP method, compared case-sensitively
        path: Request path
    """

    site: str = ""
    mode: str = ""
    method: str = "GET"
    path: str = "/"


class RunnerInput(BaseModel):
    """Complete input read from stdin.

    Attributes:
        requests: Requests to replay, in order
        config: Guard configuration to replay them against
    """

    requests: list[RequestSchema] = Field(default_factory=list)
    config: GuardConfigSchema = Field(default_factory=GuardConfigSchema)


class DecisionSchema(BaseModel):
    """Outcome for one replayed request.

    Attributes:
        request: The request as replayed
        allowed: Whether the policy allows it
        reason: Which policy rule matched
        status_code: Status the client would have received (None if not replayed)
        error: Why the request could not be replayed
    """

    request: RequestSchema
    allowed: bool
    reason: str = ""
    status_code: int | None = None
    error: str = ""


class RunnerOutput(BaseModel):
    """Complete output written to stdout.

    The runner always outputs valid JSON matching this schema, even on
    errors.

    Attributes:
        success: Whether the replay completed
        mode: Guard mode the requests were replayed in
        decisions: One entry per replayed request
        allowed_count: Number of requests the policy allows
        denied_count: Number of requests the policy denies
        error: Error message (on failure)
        error_type: Error class name (on failure)
    """

    success: bool
    mode: str = ""
    decisions: list[DecisionSchema] = Field(default_factory=list)
    allowed_count: int = 0
    denied_count: int = 0
    error: str = ""
    error_type: str = ""
