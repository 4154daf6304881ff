"""Use case for the health endpoint."""

from vzgrafana.application.dtos.health_dto import MiddlewareHealthDTO
from vzgrafana.domain.entities.health import ServiceStatus
from vzgrafana.domain.ports.health_check import IHealthCheckService
from vzgrafana.shared import get_logger

logger = get_logger(__name__)


class CheckMiddlewareHealthUseCase:
    """Report whether the volkszaehler middleware answers."""

    def __init__(self, health_check_service: IHealthCheckService) -> None:
        self._health_check_service = health_check_service

    async def execute(self) -> MiddlewareHealthDTO:
        health = await self._health_check_service.evaluate()
        if health.status is not ServiceStatus.UP:
            logger.warning(
                "health.middleware_unavailable",
                status=health.status.value,
                endpoint=health.endpoint,
                attempts=len(health.attempts),
            )
        return MiddlewareHealthDTO.from_domain(health)
