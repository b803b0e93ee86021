"""secfetch — protect ASGI applications from cross-site requests with Fetch Metadata.

Browsers label every request with ``Sec-Fetch-Site`` and ``Sec-Fetch-Mode``.
The policy allows same-site traffic, user-initiated requests and top-level
cross-site GET navigations, and rejects every other cross-site request.
Requests without Fetch Metadata are allowed so older clients keep working.

Suggested usage is to protect the whole application, not single routes::

    app = protect(router)

A log-only mode reports would-be rejections without blocking anything, to
test the policy before enforcing it::

    app = protect_log_only(router, LoggingRequestLogger())

Routes that must answer cross-site requests (e.g. CORS APIs) are exempted by
routing, not by configuration: protect an inner router and mount it on an
outer one that registers the exempt routes unwrapped::

    protected = Router(routes=[Route("/account", account)])
    app = Router(
        routes=[
            Route("/public-api", public_api),
            Mount("/", app=protect(protected)),
        ]
    )
"""

from secfetch.context import FetchMetadata
from secfetch.exceptions import GuardConfigError, SecFetchError, SinkError
from secfetch.middleware import (
    DENIED_MESSAGE,
    FetchMetadataLogOnlyMiddleware,
    FetchMetadataMiddleware,
    protect,
    protect_log_only,
)
from secfetch.policy import allowed, evaluate
from secfetch.result import Decision
from secfetch.sinks import RequestLogger

__all__ = [
    "DENIED_MESSAGE",
    "Decision",
    "FetchMetadata",
    "FetchMetadataLogOnlyMiddleware",
    "FetchMetadataMiddleware",
    "GuardConfigError",
    "RequestLogger",
    "SecFetchError",
    "SinkError",
    "allowed",
    "evaluate",
    "protect",
    "protect_log_only",
]
