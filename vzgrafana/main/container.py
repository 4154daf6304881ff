"""
Dependency container injection module - Main Layer

This module implements the dependency injection container
to simplify the management and lifecycle of dependencies
in the application.
"""

from contextlib import asynccontextmanager

from dependency_injector import containers, providers

from vzgrafana.application.services.entity_name_cache import EntityNameCache
from vzgrafana.application.use_cases.health_use_cases import CheckMiddlewareHealthUseCase
from vzgrafana.application.use_cases.metadata_use_cases import (
    ListAnnotationsUseCase,
    ListTagKeysUseCase,
    ListTagValuesUseCase,
)
from vzgrafana.application.use_cases.query_use_case import ExecuteQueryUseCase
from vzgrafana.application.use_cases.search_use_case import SearchEntitiesUseCase
from vzgrafana.infrastructure.gateways.volkszaehler_gateway import VolkszaehlerGateway
from vzgrafana.infrastructure.services.health_check_service import HealthCheckService
from vzgrafana.shared import get_logger

from .config import AppSettings

logger = get_logger(__name__)


class AppContainer(containers.DeclarativeContainer):
    """Composition Root using dependecy-injector."""

    wiring_config = containers.WiringConfiguration(packages=["..presentation"])

    # Settings
    config = providers.Configuration()

    # Gateways
    volkszaehler_gateway = providers.Singleton(
        VolkszaehlerGateway,
        base_url=config.volkszaehler.api_url,
        timeout=config.volkszaehler.timeout,
        debug=config.server.debug,
    )

    # Application services
    entity_name_cache = providers.Singleton(
        EntityNameCache,
        gateway=volkszaehler_gateway,
    )

    health_check_service = providers.Singleton(
        HealthCheckService,
        gateway=volkszaehler_gateway,
    )

    # Application (use cases)
    execute_query_use_case = providers.Factory(
        ExecuteQueryUseCase,
        gateway=volkszaehler_gateway,
        entity_cache=entity_name_cache,
        max_concurrency=config.query.max_concurrency,
    )

    search_entities_use_case = providers.Factory(
        SearchEntitiesUseCase,
        entity_cache=entity_name_cache,
    )

    list_annotations_use_case = providers.Factory(ListAnnotationsUseCase)
    list_tag_keys_use_case = providers.Factory(ListTagKeysUseCase)
    list_tag_values_use_case = providers.Factory(ListTagValuesUseCase)

    check_health_use_case = providers.Factory(
        CheckMiddlewareHealthUseCase,
        health_check_service=health_check_service,
    )


# -------------------------
# Global Container Instance
# -------------------------
_app_container: AppContainer | None = None


def init_container(settings: AppSettings) -> AppContainer:
    """Initialize global container with application settings."""

    global _app_container

    container = AppContainer()
    container.config.from_pydantic(settings)
    _app_container = container
    return container


def get_container() -> AppContainer:
    """Get the initialized global container."""

    if _app_container is None:
        raise RuntimeError("Container has not been initialized yet")

    return _app_container


@asynccontextmanager
async def app_lifespan():
    """
    Startup work against the middleware.

    Resolves the middleware endpoint and loads the entity names once, the
    same way a search would. Neither step fails the startup: an unreachable
    middleware only means names appear after the first successful search.
    """
    container = get_container()
    gateway = container.volkszaehler_gateway()

    try:
        if container.config.volkszaehler.detect_endpoint():
            await gateway.detect_endpoint()

        if container.config.query.refresh_cache_on_startup():
            refresh = await container.entity_name_cache().refresh()
            logger.info(
                "container.entity_cache.warmed",
                entities=len(refresh.entities),
                failed=refresh.failed,
            )

        logger.info("container.resources.initialized")
        yield container

    finally:
        logger.info("container.resources.shutdown")
