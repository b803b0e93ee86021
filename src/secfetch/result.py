"""Decision — the outcome of evaluating one request."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Decision:
    """Immutable allow/deny verdict for a single request.

    Attributes:
        allowed: ``True`` if the request may reach the wrapped application.
        reason:  Which rule matched, e.g. ``"same-origin request"``.
    """

    allowed: bool
    reason: str = ""

    def __bool__(self) -> bool:
        return self.allowed

    # ── Factory helpers ──────────────────────────────────────

    @staticmethod
    def allow(reason: str = "") -> Decision:
        return Decision(allowed=True, reason=reason)

    @staticmethod
    def deny(reason: str) -> Decision:
        return Decision(allowed=False, reason=reason)
