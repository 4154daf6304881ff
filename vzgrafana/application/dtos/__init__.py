"""
DTOs Package - Application Layer

Data Transfer Objects exchanged between the application layer and the
presentation layer.
"""

from .grafana_dto import (
    AnnotationDTO,
    AnnotationResponseDTO,
    AnnotationsRequestDTO,
    QueryRequestDTO,
    QueryResponseDTO,
    RangeDTO,
    SearchRequestDTO,
    SearchResponseDTO,
    TagKeyDTO,
    TagValueDTO,
    TargetDTO,
    TargetPayloadDTO,
)
from .health_dto import CheckAttemptDTO, MiddlewareHealthDTO

__all__ = [
    "AnnotationDTO",
    "AnnotationResponseDTO",
    "AnnotationsRequestDTO",
    "QueryRequestDTO",
    "QueryResponseDTO",
    "RangeDTO",
    "SearchRequestDTO",
    "SearchResponseDTO",
    "TagKeyDTO",
    "TagValueDTO",
    "TargetDTO",
    "TargetPayloadDTO",
    "MiddlewareHealthDTO",
    "CheckAttemptDTO",
]
