"""
Domain Entities Package

This package contains the core domain entities and errors.
"""

from .entity import EntityKind, EntityNode, FlatEntity
from .errors import (
    BackendApiError,
    BackendDecodeError,
    BackendError,
    BackendTransportError,
    DomainError,
    QueryExecutionError,
)
from .health import CheckAttempt, MiddlewareHealth, ServiceStatus
from .query import (
    PROGNOSIS_CONTEXT,
    Datapoint,
    DisplaySource,
    DisplayTarget,
    QueryOutcome,
    QueryResponse,
    QueryTarget,
    TargetPayload,
    TimeRange,
)
from .time_series import Forecast, SeriesTuple

__all__ = [
    "EntityKind",
    "EntityNode",
    "FlatEntity",
    "DomainError",
    "BackendError",
    "BackendTransportError",
    "BackendApiError",
    "BackendDecodeError",
    "QueryExecutionError",
    "MiddlewareHealth",
    "CheckAttempt",
    "ServiceStatus",
    "PROGNOSIS_CONTEXT",
    "Datapoint",
    "DisplaySource",
    "DisplayTarget",
    "QueryOutcome",
    "QueryResponse",
    "QueryTarget",
    "TargetPayload",
    "TimeRange",
    "Forecast",
    "SeriesTuple",
]
