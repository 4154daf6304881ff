"""
Search Use Case - Application Layer

Lists the channels a dashboard can query. Every search refreshes the entity
name cache, so new channels show up without restarting the bridge.
"""

from typing import List, Optional

from vzgrafana.application.dtos.grafana_dto import SearchRequestDTO, SearchResponseDTO
from vzgrafana.application.services.entity_name_cache import EntityNameCache
from vzgrafana.shared import get_logger

logger = get_logger(__name__)


class SearchEntitiesUseCase:
    """Use case for POST /search."""

    def __init__(self, entity_cache: EntityNameCache) -> None:
        self._entity_cache = entity_cache

    async def execute(
        self, request: Optional[SearchRequestDTO] = None
    ) -> List[SearchResponseDTO]:
        """
        Refresh the cache and return all flattened entities.

        The search term is not used for filtering: the middleware only
        exposes public entities and the list is short.
        """
        refresh = await self._entity_cache.refresh()
        if refresh.failed:
            logger.warning("search.entities_unavailable", error=str(refresh.error))

        logger.info(
            "search.completed",
            term=request.target if request else "",
            results=len(refresh.entities),
        )
        return [SearchResponseDTO.from_domain(entity) for entity in refresh.entities]
