from __future__ import annotations

import asyncio
import sys
from collections import Counter
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from vzgrafana.domain.entities.entity import EntityKind, EntityNode  # noqa: E402
from vzgrafana.domain.entities.errors import (  # noqa: E402
    BackendError,
    BackendTransportError,
)
from vzgrafana.domain.entities.query import TimeRange  # noqa: E402
from vzgrafana.domain.entities.time_series import Forecast, SeriesTuple  # noqa: E402
from vzgrafana.domain.gateways.middleware_gateway import (  # noqa: E402
    IMiddlewareGateway,
)


class StubMiddlewareGateway(IMiddlewareGateway):
    """In-memory middleware with call counting, delays and failures."""

    def __init__(
        self,
        entities: Optional[List[EntityNode]] = None,
        series: Optional[Dict[str, List[SeriesTuple]]] = None,
        forecasts: Optional[Dict[str, Forecast]] = None,
    ) -> None:
        self.entities = entities or []
        self.series = series or {}
        self.forecasts = forecasts or {}
        self.failures: Dict[str, BackendError] = {}
        self.delays: Dict[str, float] = {}
        self.entities_error: Optional[BackendError] = None
        self.calls: Counter[str] = Counter()
        self.series_calls: List[tuple] = []
        self.forecast_calls: List[tuple] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def detect_endpoint(self) -> str:
        self.calls["detect_endpoint"] += 1
        return "http://vz"

    async def fetch_entities(self) -> List[EntityNode]:
        self.calls["fetch_entities"] += 1
        if self.entities_error is not None:
            raise self.entities_error
        return self.entities

    async def fetch_entity(self, entity_id: str) -> EntityNode:
        self.calls["fetch_entity"] += 1
        for node in self.entities:
            if node.id == entity_id:
                return node
        raise BackendTransportError(f"unknown entity {entity_id}")

    async def fetch_series(
        self,
        entity_id: str,
        from_seconds: int,
        to_seconds: int,
        group: str = "",
        options: str = "",
        tuples: int = 0,
    ) -> List[SeriesTuple]:
        self.calls["fetch_series"] += 1
        self.series_calls.append(
            (entity_id, from_seconds, to_seconds, group, options, tuples)
        )
        await self._simulate(entity_id)
        return list(self.series.get(entity_id, []))

    async def fetch_forecast(self, entity_id: str, period: str) -> Forecast:
        self.calls["fetch_forecast"] += 1
        self.forecast_calls.append((entity_id, period))
        await self._simulate(entity_id)
        return self.forecasts[entity_id]

    async def _simulate(self, entity_id: str) -> None:
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(entity_id, 0))
            if entity_id in self.failures:
                raise self.failures[entity_id]
        finally:
            self.in_flight -= 1


@pytest.fixture(autouse=True)
def _offline_startup(monkeypatch) -> None:
    monkeypatch.setenv("VZ_DETECT_ENDPOINT", "false")
    monkeypatch.setenv("QUERY_REFRESH_CACHE_ON_STARTUP", "false")


@pytest.fixture()
def entity_tree() -> List[EntityNode]:
    return [
        EntityNode(id="uuid-meter", kind=EntityKind.LEAF, title="Meter"),
        EntityNode(
            id="grp-house",
            kind=EntityKind.GROUP,
            title="House",
            children=[
                EntityNode(id="uuid-fridge", kind=EntityKind.LEAF, title="Fridge"),
                EntityNode(
                    id="grp-cellar",
                    kind=EntityKind.GROUP,
                    title="Cellar",
                    children=[
                        EntityNode(
                            id="uuid-heater", kind=EntityKind.LEAF, title="Heater"
                        ),
                    ],
                ),
                EntityNode(id="uuid-oven", kind=EntityKind.LEAF, title="Oven"),
            ],
        ),
    ]


@pytest.fixture()
def stub_gateway(entity_tree: List[EntityNode]) -> StubMiddlewareGateway:
    return StubMiddlewareGateway(entities=entity_tree)


@pytest.fixture()
def time_range() -> TimeRange:
    return TimeRange(
        start=datetime(2023, 3, 15, tzinfo=timezone.utc),
        end=datetime(2023, 3, 16, tzinfo=timezone.utc),
    )


@pytest.fixture()
def gateway_factory():
    return StubMiddlewareGateway
