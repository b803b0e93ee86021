"""Custom exceptions for the secfetch package.

The policy and the middleware never raise; these cover configuration and
the optional persistent sinks.
"""

from __future__ import annotations


class SecFetchError(Exception):
    """Base exception for all secfetch errors."""


class GuardConfigError(SecFetchError):
    """Raised when the guard configuration is invalid."""

    def __init__(self, setting: str, message: str) -> None:
        self.setting = setting
        super().__init__(f"Invalid setting '{setting}': {message}")


class SinkError(SecFetchError):
    """Raised when a request sink fails to record or read back."""

    def __init__(self, operation: str, detail: str = "") -> None:
        self.operation = operation
        msg = f"Sink error during '{operation}'"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)
