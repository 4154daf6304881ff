"""
Domain Gateway - Volkszaehler Middleware

This module defines the gateway interface the query engine and the entity
cache use to reach the volkszaehler middleware.
"""

from abc import ABC, abstractmethod
from typing import List

from vzgrafana.domain.entities.entity import EntityNode
from vzgrafana.domain.entities.time_series import Forecast, SeriesTuple


class IMiddlewareGateway(ABC):
    """Interface for the volkszaehler middleware gateway."""

    async def detect_endpoint(self) -> str:
        """
        Resolve the effective API endpoint.

        Gateways without endpoint discovery have nothing to resolve.

        Returns:
            The base URL subsequent requests will use
        """
        return ""

    @abstractmethod
    async def fetch_entities(self) -> List[EntityNode]:
        """
        Retrieve the public entity tree.

        Returns:
            Top level entity nodes, groups carrying their children

        Raises:
            BackendError: When the request or its decoding fails
        """
        pass

    @abstractmethod
    async def fetch_entity(self, entity_id: str) -> EntityNode:
        """
        Retrieve a single entity by its uuid.

        Raises:
            BackendError: When the request or its decoding fails
        """
        pass

    @abstractmethod
    async def fetch_series(
        self,
        entity_id: str,
        from_seconds: int,
        to_seconds: int,
        group: str = "",
        options: str = "",
        tuples: int = 0,
    ) -> List[SeriesTuple]:
        """
        Retrieve the tuples of a channel for a time range.

        Args:
            entity_id: uuid of the channel
            from_seconds: Range start, unix seconds
            to_seconds: Range end, unix seconds
            group: Grouping keyword (hour, day, month, ...) or empty
            options: Middleware data options (e.g. "consumption") or empty
            tuples: Maximum number of tuples, 0 for no limit

        Returns:
            Tuples in the order delivered by the middleware

        Raises:
            BackendError: When the request or its decoding fails
        """
        pass

    @abstractmethod
    async def fetch_forecast(self, entity_id: str, period: str) -> Forecast:
        """
        Retrieve the consumption prognosis of a channel.

        Args:
            entity_id: uuid of the channel
            period: Prognosis period keyword (day, month, year)

        Raises:
            BackendError: When the request or its decoding fails
        """
        pass
