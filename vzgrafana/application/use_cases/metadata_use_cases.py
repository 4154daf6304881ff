"""Use cases for the annotation and ad hoc filter endpoints."""

from typing import List

from vzgrafana.application.dtos.grafana_dto import (
    AnnotationResponseDTO,
    AnnotationsRequestDTO,
    TagKeyDTO,
    TagValueDTO,
)

TAG_KEYS = ("group",)
TAG_VALUES = ("Current", "Consumption")


class ListAnnotationsUseCase:
    """The middleware has no event source, so there are never annotations."""

    async def execute(
        self, request: AnnotationsRequestDTO
    ) -> List[AnnotationResponseDTO]:
        return []


class ListTagKeysUseCase:
    """Ad hoc filter keys offered to the dashboard."""

    async def execute(self) -> List[TagKeyDTO]:
        return [TagKeyDTO(type="string", text=key) for key in TAG_KEYS]


class ListTagValuesUseCase:
    async def execute(self) -> List[TagValueDTO]:
        return [TagValueDTO(text=value) for value in TAG_VALUES]
