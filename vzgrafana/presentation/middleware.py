"""
HTTP middleware and error handlers - Presentation Layer

Every request is logged with its duration. In debug mode the request and
response bodies are logged as well, without consuming them.
"""

from time import perf_counter

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.types import ASGIApp

from vzgrafana.shared import get_logger

logger = get_logger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and duration of each inbound request."""

    def __init__(self, app: ASGIApp, debug: bool = False) -> None:
        super().__init__(app)
        self.debug = debug

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start = perf_counter()

        if self.debug:
            body = await request.body()
            logger.debug(
                "http.request_body",
                path=request.url.path,
                body=body.decode("utf-8", errors="replace"),
            )

        response = await call_next(request)

        if self.debug:
            chunks = [chunk async for chunk in response.body_iterator]
            content = b"".join(
                chunk if isinstance(chunk, bytes) else chunk.encode("utf-8")
                for chunk in chunks
            )
            logger.debug(
                "http.response_body",
                path=request.url.path,
                body=content.decode("utf-8", errors="replace"),
            )
            response = Response(
                content=content,
                status_code=response.status_code,
                headers=dict(response.headers),
                media_type=response.media_type,
            )

        logger.info(
            "http.request",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            elapsed_ms=round((perf_counter() - start) * 1000, 1),
        )
        return response


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report undecodable request bodies as 400 like the SimpleJSON backends do."""
    logger.warning(
        "http.request_invalid", path=request.url.path, errors=str(exc.errors())
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": f"json decode failed: {exc.errors()}"},
    )
