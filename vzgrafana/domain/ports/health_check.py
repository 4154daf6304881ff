"""Domain service abstraction for health checks."""

from __future__ import annotations

from typing import Protocol

from vzgrafana.domain.entities.health import MiddlewareHealth


class IHealthCheckService(Protocol):
    """Interface for probing the middleware."""

    async def evaluate(self) -> MiddlewareHealth:
        ...
