"""Domain entities for middleware series data and forecasts."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class SeriesTuple:
    """A single middleware tuple; timestamp is in milliseconds since epoch."""

    timestamp: int
    value: float


@dataclass(slots=True)
class Forecast:
    """Predicted consumption for a period as returned by /prognosis."""

    consumption: float
    factor: float = 0.0
