"""
Entity Name Cache - Application Layer

Maps channel uuids to the human readable, group-qualified titles shown in
dashboards. The mapping is rebuilt from full entity tree snapshots and read
concurrently by every query target.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from vzgrafana.domain.entities.entity import FlatEntity
from vzgrafana.domain.entities.errors import BackendError
from vzgrafana.domain.gateways.middleware_gateway import IMiddlewareGateway
from vzgrafana.domain.services.entity_flattener import flatten_entities
from vzgrafana.shared import get_logger

logger = get_logger(__name__)


@dataclass(slots=True)
class CacheRefresh:
    """Result of a cache refresh: the flattened entities or the failure."""

    entities: List[FlatEntity] = field(default_factory=list)
    error: Optional[BackendError] = None

    @property
    def failed(self) -> bool:
        return self.error is not None


class EntityNameCache:
    """
    Lock protected uuid -> display title mapping.

    Stale names are preferred over no names: a failed or empty refresh keeps
    the previous mapping. Readers always see either the old or the new
    mapping as a whole.
    """

    def __init__(self, gateway: IMiddlewareGateway) -> None:
        self._gateway = gateway
        self._names: Dict[str, str] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._names)

    def lookup(self, entity_id: str) -> Optional[str]:
        """Return the cached display title of a uuid, if any."""
        with self._lock:
            return self._names.get(entity_id)

    def rebuild(self, entities: Sequence[FlatEntity]) -> bool:
        """
        Replace the mapping with the given entities.

        The first title seen for a uuid wins. An empty sequence leaves the
        current mapping untouched.

        Returns:
            True if the mapping was replaced
        """
        if not entities:
            logger.debug("entity_cache.rebuild_skipped", reason="empty snapshot")
            return False

        with self._lock:
            self._names = {}
            for entity in entities:
                self._names.setdefault(entity.id, entity.display_title)
            size = len(self._names)

        logger.info("entity_cache.rebuilt", entries=size)
        return True

    async def refresh(self) -> CacheRefresh:
        """
        Fetch the entity tree, flatten it and rebuild the mapping.

        Backend failures are returned, not raised, and leave the cache as is.
        """
        try:
            nodes = await self._gateway.fetch_entities()
        except BackendError as e:
            logger.warning(
                "entity_cache.refresh_failed",
                error=str(e),
                error_type=type(e).__name__,
                cached_entries=len(self),
            )
            return CacheRefresh(error=e)

        entities = flatten_entities(nodes)
        self.rebuild(entities)
        return CacheRefresh(entities=entities)
