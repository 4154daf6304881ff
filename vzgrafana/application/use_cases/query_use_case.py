"""
Query Use Case - Application Layer

Fans a dashboard query out to the middleware, one task per target, and
assembles the results in request order. A failing target degrades to an
empty series without affecting its siblings.
"""

import asyncio
import time
from typing import Callable, List, Optional, Sequence, Tuple, cast

from vzgrafana.application.dtos.grafana_dto import QueryRequestDTO, QueryResponseDTO
from vzgrafana.application.services.entity_name_cache import EntityNameCache
from vzgrafana.domain.entities.errors import (
    BackendError,
    DomainError,
    QueryExecutionError,
)
from vzgrafana.domain.entities.query import (
    Datapoint,
    DisplaySource,
    DisplayTarget,
    QueryOutcome,
    QueryResponse,
    QueryTarget,
    TimeRange,
)
from vzgrafana.domain.gateways.middleware_gateway import IMiddlewareGateway
from vzgrafana.domain.services.time_buckets import round_timestamp
from vzgrafana.shared import get_logger

logger = get_logger(__name__)

DEFAULT_MAX_CONCURRENCY = 8

_PathResult = Tuple[List[Datapoint], Optional[DomainError]]


class ExecuteQueryUseCase:
    """Query fan-out engine behind POST /query."""

    def __init__(
        self,
        gateway: IMiddlewareGateway,
        entity_cache: EntityNameCache,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """
        Args:
            gateway: Middleware gateway used for series and forecasts
            entity_cache: Source of display names
            max_concurrency: Upper bound of targets fetched at the same time
            clock: Wall clock in unix seconds, stamps forecast datapoints
        """
        self._gateway = gateway
        self._entity_cache = entity_cache
        self._max_concurrency = max(1, max_concurrency)
        self._clock = clock

    async def handle(self, request: QueryRequestDTO) -> List[QueryResponseDTO]:
        """Run a decoded /query request and map the results to DTOs."""
        targets = [target.to_domain() for target in request.targets]
        outcomes = await self.execute(
            targets, request.range.to_domain(), request.max_data_points
        )
        return [QueryResponseDTO.from_domain(outcome.response) for outcome in outcomes]

    async def execute(
        self,
        targets: Sequence[QueryTarget],
        time_range: TimeRange,
        max_data_points: int = 0,
    ) -> List[QueryOutcome]:
        """
        Query all targets concurrently.

        Every target owns one slot of the result list, so the output is
        index aligned with `targets` whatever order the fetches finish in.
        Cancelling the caller cancels all in-flight fetches.

        Returns:
            One outcome per target, in input order
        """
        slots: List[Optional[QueryOutcome]] = [None] * len(targets)
        semaphore = asyncio.Semaphore(self._max_concurrency)

        async def run(index: int, target: QueryTarget) -> None:
            async with semaphore:
                slots[index] = await self._query_target(
                    target, time_range, max_data_points
                )

        started = time.perf_counter()
        await asyncio.gather(*(run(idx, target) for idx, target in enumerate(targets)))

        missing = [idx for idx, outcome in enumerate(slots) if outcome is None]
        if missing:
            raise QueryExecutionError(
                "query targets produced no outcome", details={"indexes": missing}
            )

        outcomes = cast(List[QueryOutcome], slots)
        logger.info(
            "query.executed",
            targets=len(targets),
            degraded=sum(1 for outcome in outcomes if outcome.degraded),
            elapsed_ms=round((time.perf_counter() - started) * 1000, 1),
        )
        return outcomes

    async def _query_target(
        self, target: QueryTarget, time_range: TimeRange, max_data_points: int
    ) -> QueryOutcome:
        try:
            if target.is_forecast:
                datapoints, error = await self._query_forecast(target)
            else:
                datapoints, error = await self._query_series(
                    target, time_range, max_data_points
                )
        except Exception as e:
            logger.error(
                "query.target_failed",
                target=target.target,
                ref_id=target.ref_id,
                error=str(e),
                exc_info=e,
            )
            datapoints = []
            error = QueryExecutionError(
                f"query target {target.target!r} failed: {e}",
                details={"ref_id": target.ref_id},
            )

        return QueryOutcome(
            response=QueryResponse(
                target=self._resolve_display(target), datapoints=datapoints
            ),
            error=error,
        )

    async def _query_series(
        self, target: QueryTarget, time_range: TimeRange, max_data_points: int
    ) -> _PathResult:
        group = target.payload.group.lower()
        options = target.payload.options.lower()
        tuples = target.payload.tuples if target.payload.tuples > 0 else max_data_points

        try:
            series = await self._gateway.fetch_series(
                target.target,
                time_range.from_seconds,
                time_range.to_seconds,
                group,
                options,
                tuples,
            )
        except BackendError as e:
            logger.warning(
                "query.target_degraded",
                target=target.target,
                ref_id=target.ref_id,
                path="series",
                error=str(e),
                error_type=type(e).__name__,
            )
            return [], e

        datapoints = [
            Datapoint(
                value=item.value,
                timestamp=(
                    round_timestamp(item.timestamp, group) if group else item.timestamp
                ),
            )
            for item in series
        ]
        return datapoints, None

    async def _query_forecast(self, target: QueryTarget) -> _PathResult:
        period = target.payload.period
        if not period:
            logger.debug("query.forecast_skipped", target=target.target)
            return [], None

        try:
            forecast = await self._gateway.fetch_forecast(target.target, period)
        except BackendError as e:
            logger.warning(
                "query.target_degraded",
                target=target.target,
                ref_id=target.ref_id,
                path="forecast",
                error=str(e),
                error_type=type(e).__name__,
            )
            return [], e

        # forecast datapoints are stamped in seconds, series in milliseconds
        return [Datapoint(value=forecast.consumption, timestamp=int(self._clock()))], None

    def _resolve_display(self, target: QueryTarget) -> DisplayTarget:
        if target.payload.name:
            return DisplayTarget(target.payload.name, DisplaySource.OVERRIDE)

        name = self._entity_cache.lookup(target.target)
        if name is not None:
            return DisplayTarget(name, DisplaySource.CACHE)

        return DisplayTarget(target.target, DisplaySource.ENTITY_ID)
