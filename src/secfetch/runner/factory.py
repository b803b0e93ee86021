# Copyright (c) 2024 OpenMined
# SPDX-License-Identifier: Apache-2.0
"""Sink factory and guard builder.

Uses the Registry pattern to map sink type strings to sink classes,
allowing extensibility without modifying factory code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from secfetch.exceptions import SecFetchError
from secfetch.middleware import protect, protect_log_only
from secfetch.sinks import (
    InMemoryRequestLogger,
    LoggingRequestLogger,
    RequestLogger,
    SQLiteRequestLogger,
)

from .schema import GuardConfigSchema, SinkConfigSchema

if TYPE_CHECKING:
    from starlette.types import ASGIApp


class SinkFactoryError(SecFetchError):
    """Raised when sink creation fails."""


class SinkFactory:
    """Creates request sinks from configuration.

    Sink types are registered at class level and can be extended via the
    `register` class method.

    Example:
        sink = SinkFactory().create(SinkConfigSchema(type="sqlite", path="denied.db"))
    """

    # Class-level registry mapping type strings to sink classes
    _registry: ClassVar[dict[str, type[RequestLogger]]] = {
        "logging": LoggingRequestLogger,
        "memory": InMemoryRequestLogger,
        "sqlite": SQLiteRequestLogger,
    }

    @classmethod
    def register(cls, type_name: str, sink_class: type[RequestLogger]) -> None:
        """Register a custom sink type.

        Args:
            type_name: Type string to use in configuration
            sink_class: RequestLogger subclass, constructible without arguments

        Raises:
            TypeError: If sink_class is not a RequestLogger
        """
        if not (isinstance(sink_class, type) and issubclass(sink_class, RequestLogger)):
            raise TypeError(f"{sink_class!r} is not a RequestLogger subclass")
        cls._registry[type_name] = sink_class

    @classmethod
    def registered_types(cls) -> list[str]:
        """Return list of registered sink type names."""
        return list(cls._registry.keys())

    def create(self, config: SinkConfigSchema) -> RequestLogger:
        """Create a sink instance.

        Args:
            config: Sink configuration

        Returns:
            Created sink

        Raises:
            SinkFactoryError: If the type is unknown or the config is incomplete
        """
        sink_class = self._registry.get(config.type)
        if not sink_class:
            available = ", ".join(sorted(self.registered_types()))
            raise SinkFactoryError(
                f"Unknown sink type: '{config.type}'. Available types: {available}"
            )

        if sink_class is SQLiteRequestLogger:
            if not config.path:
                raise SinkFactoryError("SQLite sink requires 'path' configuration")
            return SQLiteRequestLogger(config.path)
        if sink_class is LoggingRequestLogger:
            return LoggingRequestLogger(logger_name=config.logger_name)
        return sink_class()


def build_guard(
    app: ASGIApp,
    config: GuardConfigSchema,
    sink: RequestLogger | None = None,
) -> ASGIApp:
    """Wrap *app* according to *config*.

    Args:
        app: The application to protect
        config: Guard configuration
        sink: Sink to use in log-only mode instead of creating one from
              ``config.sink``.  Ignored in enforce mode.

    Returns:
        The wrapped application
    """
    if config.mode == "log_only":
        return protect_log_only(app, sink or SinkFactory().create(config.sink))
    return protect(app)
