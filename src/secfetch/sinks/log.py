"""LoggingRequestLogger — one stdlib log record per denied request."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from secfetch._internal.clock import Clock, SystemClock
from secfetch.sinks.base import DeniedRequest, RequestLogger

if TYPE_CHECKING:
    from starlette.requests import HTTPConnection


class LoggingRequestLogger(RequestLogger):
    """Writes denied requests to a :mod:`logging` logger.

    Parameters:
        logger_name: Name of the logger to emit on.
        level:       Log level for each record.
        clock:       Injectable clock for testing.
    """

    def __init__(
        self,
        logger_name: str = "secfetch",
        level: int = logging.WARNING,
        clock: Clock | None = None,
    ) -> None:
        self._logger = logging.getLogger(logger_name)
        self._level = level
        self._clock = clock or SystemClock()

    async def log_request(self, request: HTTPConnection) -> None:
        record = DeniedRequest.from_connection(request, self._clock)
        self._logger.log(
            self._level,
            "fetch metadata policy would deny %s %s (site=%r mode=%r dest=%r origin=%r)",
            record.method,
            record.path,
            record.site,
            record.mode,
            record.dest,
            record.origin,
            extra={"secfetch": record.to_dict()},
        )
