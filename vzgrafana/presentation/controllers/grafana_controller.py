"""
Grafana Router - Presentation Layer

Endpoints of the Grafana SimpleJSON datasource protocol.
"""

from typing import List, Optional

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, status

from vzgrafana.application.dtos.grafana_dto import (
    AnnotationResponseDTO,
    AnnotationsRequestDTO,
    QueryRequestDTO,
    QueryResponseDTO,
    SearchRequestDTO,
    SearchResponseDTO,
    TagKeyDTO,
    TagValueDTO,
)
from vzgrafana.application.use_cases.metadata_use_cases import (
    ListAnnotationsUseCase,
    ListTagKeysUseCase,
    ListTagValuesUseCase,
)
from vzgrafana.application.use_cases.query_use_case import ExecuteQueryUseCase
from vzgrafana.application.use_cases.search_use_case import SearchEntitiesUseCase
from vzgrafana.shared import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["Grafana"])


@router.post("/search", response_model=List[SearchResponseDTO])
@inject
async def search(
    request: Optional[SearchRequestDTO] = None,
    search_entities_use_case: SearchEntitiesUseCase = Depends(
        Provide["search_entities_use_case"]
    ),
) -> List[SearchResponseDTO]:
    """
    List the channels available as query targets.

    Each search refreshes the entity name cache. When the middleware is
    unavailable the list is empty rather than an error.
    """
    try:
        return await search_entities_use_case.execute(request)
    except Exception as e:
        logger.error("search.failed", error=str(e), exc_info=e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to search entities: {str(e)}",
        )


@router.post("/query", response_model=List[QueryResponseDTO])
@inject
async def query(
    request: QueryRequestDTO,
    execute_query_use_case: ExecuteQueryUseCase = Depends(
        Provide["execute_query_use_case"]
    ),
) -> List[QueryResponseDTO]:
    """
    Query all targets of a panel.

    Targets are fetched concurrently and returned in request order. A target
    whose middleware call fails is returned with no datapoints.

    Args:
        request: Decoded Grafana query
        execute_query_use_case: Injected query fan-out engine

    Returns:
        One series per target
    """
    logger.debug(
        "query.requested",
        panel_id=request.panel_id,
        targets=len(request.targets),
        max_data_points=request.max_data_points,
    )

    try:
        return await execute_query_use_case.handle(request)
    except Exception as e:
        logger.error("query.failed", error=str(e), exc_info=e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to execute query: {str(e)}",
        )


@router.post("/annotations", response_model=List[AnnotationResponseDTO])
@inject
async def annotations(
    request: AnnotationsRequestDTO,
    list_annotations_use_case: ListAnnotationsUseCase = Depends(
        Provide["list_annotations_use_case"]
    ),
) -> List[AnnotationResponseDTO]:
    return await list_annotations_use_case.execute(request)


@router.post("/tag-keys", response_model=List[TagKeyDTO])
@inject
async def tag_keys(
    list_tag_keys_use_case: ListTagKeysUseCase = Depends(
        Provide["list_tag_keys_use_case"]
    ),
) -> List[TagKeyDTO]:
    return await list_tag_keys_use_case.execute()


@router.post("/tag-values", response_model=List[TagValueDTO])
@inject
async def tag_values(
    list_tag_values_use_case: ListTagValuesUseCase = Depends(
        Provide["list_tag_values_use_case"]
    ),
) -> List[TagValueDTO]:
    return await list_tag_values_use_case.execute()
