"""System endpoints: datasource connection test and health."""

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import PlainTextResponse

from vzgrafana.application.dtos.health_dto import MiddlewareHealthDTO
from vzgrafana.application.use_cases.health_use_cases import CheckMiddlewareHealthUseCase
from vzgrafana.shared import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["System"])


@router.api_route("/", methods=["GET", "POST"], response_class=PlainTextResponse)
async def root(request: Request) -> str:
    """Answer Grafana's "Save & Test" with a plain ok."""
    body = await request.body()
    if body:
        logger.debug("root.body", body=body.decode("utf-8", errors="replace"))
    return "ok\n"


@router.get("/health", response_model=MiddlewareHealthDTO)
@inject
async def health(
    check_health_use_case: CheckMiddlewareHealthUseCase = Depends(
        Provide["check_health_use_case"]
    ),
) -> MiddlewareHealthDTO:
    """Return the health status of the volkszaehler middleware."""
    try:
        health_status = await check_health_use_case.execute()
        logger.debug("health.check.success", status=health_status.status.value)
        return health_status
    except Exception as exc:
        logger.error("health.check.failure", error=str(exc), exc_info=exc)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Unable to retrieve system health status",
        ) from exc
