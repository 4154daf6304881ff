"""
Use Cases Package - Application Layer

Use cases behind each Grafana datasource endpoint.
"""

from .health_use_cases import CheckMiddlewareHealthUseCase
from .metadata_use_cases import (
    ListAnnotationsUseCase,
    ListTagKeysUseCase,
    ListTagValuesUseCase,
)
from .query_use_case import ExecuteQueryUseCase
from .search_use_case import SearchEntitiesUseCase

__all__ = [
    "ExecuteQueryUseCase",
    "CheckMiddlewareHealthUseCase",
    "ListAnnotationsUseCase",
    "ListTagKeysUseCase",
    "ListTagValuesUseCase",
    "SearchEntitiesUseCase",
]
