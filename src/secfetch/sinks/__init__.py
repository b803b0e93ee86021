"""Sinks that record requests the log-only middleware would have rejected."""

from secfetch.sinks.base import DeniedRequest, RequestLogger
from secfetch.sinks.log import LoggingRequestLogger
from secfetch.sinks.memory import InMemoryRequestLogger
from secfetch.sinks.sqlite import SQLiteRequestLogger

__all__ = [
    "DeniedRequest",
    "InMemoryRequestLogger",
    "LoggingRequestLogger",
    "RequestLogger",
    "SQLiteRequestLogger",
]
