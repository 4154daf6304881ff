"""Checks the volkszaehler middleware for /health."""

from __future__ import annotations

from time import perf_counter
from typing import Iterable

import httpx

from vzgrafana.domain.entities.health import (
    MiddlewareHealth,
    CheckAttempt,
    ServiceStatus,
)
from vzgrafana.domain.ports.health_check import IHealthCheckService
from vzgrafana.infrastructure.gateways.volkszaehler_gateway import VolkszaehlerGateway
from vzgrafana.shared import ENTITY_PATH, get_logger

logger = get_logger(__name__)


def status_for_code(status_code: int) -> ServiceStatus:
    if status_code >= 500:
        return ServiceStatus.DOWN
    if status_code >= 400:
        return ServiceStatus.DEGRADED
    return ServiceStatus.UP


class HealthCheckService(IHealthCheckService):
    """Check the middleware endpoint the gateway currently uses."""

    def __init__(
        self,
        gateway: VolkszaehlerGateway,
        *,
        http_timeout: float = 5.0,
        paths: Iterable[str] = (ENTITY_PATH, ""),
    ) -> None:
        self._gateway = gateway
        self._http_timeout = http_timeout
        self._paths = tuple(paths)

    async def evaluate(self) -> MiddlewareHealth:
        """
        Try each check path until one answers without being down.

        The base URL is read from the gateway on every call since endpoint
        detection may have switched it to /middleware.php at startup.
        """
        health = MiddlewareHealth(endpoint=self._gateway.base_url)
        if not health.endpoint:
            return health

        for path in self._paths:
            attempt = await self._attempt(f"{health.endpoint}{path}")
            health.attempts.append(attempt)
            if attempt.status is not ServiceStatus.DOWN:
                break

        return health

    async def _attempt(self, url: str) -> CheckAttempt:
        start = perf_counter()
        try:
            async with httpx.AsyncClient(timeout=self._http_timeout) as client:
                response = await client.get(url)
        except httpx.RequestError as exc:
            logger.debug("health.check_failed", url=url, error=str(exc))
            return CheckAttempt(
                url=url,
                status=ServiceStatus.DOWN,
                error=str(exc),
                latency_ms=(perf_counter() - start) * 1000,
            )

        return CheckAttempt(
            url=url,
            status=status_for_code(response.status_code),
            status_code=response.status_code,
            latency_ms=(perf_counter() - start) * 1000,
        )
