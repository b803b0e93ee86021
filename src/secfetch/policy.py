"""The Fetch Metadata resource isolation policy.

A request is allowed when the browser says it came from the protected site
itself or from the user agent, or when it is a top-level cross-site GET
navigation.  Everything else cross-site is rejected.

Requests without ``Sec-Fetch-Site`` are allowed: older browsers and some
proxies do not send Fetch Metadata, and rejecting them would break those
clients.  Do not change this to fail closed without accepting that trade-off.
"""

from __future__ import annotations

from secfetch.context import FetchMetadata
from secfetch.result import Decision

_SITE_REASONS = {
    "": "fetch metadata not sent",
    "none": "user agent initiated",
    "same-site": "same-site request",
    "same-origin": "same-origin request",
}

NAVIGATE = "navigate"


def allowed(site: str, mode: str, method: str) -> bool:
    """Return ``True`` if a request with these headers may be served.

    Total over all string inputs.  ``method`` is compared case-sensitively,
    and only ``"GET"`` qualifies for the navigation exemption (not ``HEAD``).
    """
    if site in _SITE_REASONS:
        return True

    # Any other site value is treated as cross-site.
    return mode == NAVIGATE and method == "GET"


def evaluate(metadata: FetchMetadata) -> Decision:
    """Like :func:`allowed`, but also report which rule decided."""
    reason = _SITE_REASONS.get(metadata.site)
    if reason is not None:
        return Decision.allow(reason)
    if allowed(metadata.site, metadata.mode, metadata.method):
        return Decision.allow("cross-site navigation")
    return Decision.deny("cross-site request")
