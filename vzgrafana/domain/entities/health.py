"""Reachability of the volkszaehler middleware, as seen by /health."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional


class ServiceStatus(str, Enum):
    UP = "up"
    DEGRADED = "degraded"
    DOWN = "down"
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class CheckAttempt:
    """Outcome of one GET against a middleware URL."""

    url: str
    status: ServiceStatus
    status_code: Optional[int] = None
    error: str = ""
    latency_ms: float = 0.0


@dataclass(slots=True)
class MiddlewareHealth:
    """
    Attempts run against the configured middleware endpoint, in order.

    The last attempt decides the status; without any attempt (no endpoint
    configured) the status is unknown.
    """

    endpoint: str
    attempts: List[CheckAttempt] = field(default_factory=list)
    checked_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def status(self) -> ServiceStatus:
        if not self.attempts:
            return ServiceStatus.UNKNOWN
        return self.attempts[-1].status
