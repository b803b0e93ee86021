# Copyright (c) 2024 OpenMined
# SPDX-License-Identifier: Apache-2.0
"""Guard configuration and the policy audit runner.

The runner replays recorded request headers through the guard so a policy
can be checked before switching from log-only to enforcing mode.

Usage:
    python -m secfetch.runner < input.json > output.json

Exports:
    Executor: Replays requests through the configured guard
    SinkFactory: Creates request sinks from configuration
    build_guard: Wraps an ASGI app according to GuardConfigSchema
    GuardConfigSchema: Deployment settings (mode, sink)
    RunnerInput: Input schema read from stdin
    RunnerOutput: Output schema written to stdout
"""

from .executor import Executor, ReplayError
from .factory import SinkFactory, SinkFactoryError, build_guard
from .schema import (
    DecisionSchema,
    GuardConfigSchema,
    RequestSchema,
    RunnerInput,
    RunnerOutput,
    SinkConfigSchema,
)

__all__ = [
    "DecisionSchema",
    "Executor",
    "GuardConfigSchema",
    "ReplayError",
    "RequestSchema",
    "RunnerInput",
    "RunnerOutput",
    "SinkConfigSchema",
    "SinkFactory",
    "SinkFactoryError",
    "build_guard",
]
