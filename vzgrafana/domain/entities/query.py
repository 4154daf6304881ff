"""
Query domain entities.

Value objects describing a dashboard query after it has been decoded from the
wire: targets, the requested time range and the per-target results.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional

from vzgrafana.domain.entities.errors import DomainError

PROGNOSIS_CONTEXT = "prognosis"


@dataclass(slots=True)
class TargetPayload:
    """Optional per-target settings; empty strings mean "not set"."""

    context: str = ""
    group: str = ""
    options: str = ""
    name: str = ""
    period: str = ""
    tuples: int = 0


@dataclass(slots=True)
class QueryTarget:
    """One series (or forecast) requested by a dashboard panel."""

    target: str
    payload: TargetPayload = field(default_factory=TargetPayload)
    ref_id: str = ""

    @property
    def is_forecast(self) -> bool:
        return self.payload.context.lower() == PROGNOSIS_CONTEXT


@dataclass(slots=True)
class TimeRange:
    """Absolute time range of a query."""

    start: datetime
    end: datetime

    @property
    def from_seconds(self) -> int:
        return int(self.start.timestamp())

    @property
    def to_seconds(self) -> int:
        return int(self.end.timestamp())

    @property
    def span_seconds(self) -> int:
        return self.to_seconds - self.from_seconds


class DisplaySource(str, Enum):
    """Where the display name of a response came from."""

    ENTITY_ID = "entity_id"
    CACHE = "cache"
    OVERRIDE = "override"


@dataclass(frozen=True, slots=True)
class DisplayTarget:
    """Display name of a response, tagged with how it was resolved."""

    value: str
    source: DisplaySource = DisplaySource.ENTITY_ID

    @property
    def resolved(self) -> bool:
        return self.source is not DisplaySource.ENTITY_ID

    def __str__(self) -> str:
        return self.value


@dataclass(slots=True)
class Datapoint:
    """A response datapoint; the timestamp unit depends on the query path."""

    value: float
    timestamp: int


@dataclass(slots=True)
class QueryResponse:
    """Result for a single target."""

    target: DisplayTarget
    datapoints: List[Datapoint] = field(default_factory=list)


@dataclass(slots=True)
class QueryOutcome:
    """
    A target's response plus the failure that degraded it, if any.

    A degraded outcome always carries an empty datapoint list.
    """

    response: QueryResponse
    error: Optional[DomainError] = None

    @property
    def degraded(self) -> bool:
        return self.error is not None
