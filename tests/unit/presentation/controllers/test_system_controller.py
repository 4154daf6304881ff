from __future__ import annotations

import pytest
from fastapi import HTTPException, Request

from vzgrafana.application.use_cases.health_use_cases import (
    CheckMiddlewareHealthUseCase,
)
from vzgrafana.domain.entities.health import (
    CheckAttempt,
    MiddlewareHealth,
    ServiceStatus,
)
from vzgrafana.presentation.controllers.system_controller import health, root


class _HealthService:
    def __init__(self, status: ServiceStatus):
        self._health = MiddlewareHealth(
            endpoint="http://vz",
            attempts=[CheckAttempt(url="http://vz/entity.json", status=status)],
        )

    async def evaluate(self) -> MiddlewareHealth:
        return self._health


def _request(method: str, body: bytes = b"") -> Request:
    async def receive():
        return {"type": "http.request", "body": body, "more_body": False}

    scope = {
        "type": "http",
        "method": method,
        "path": "/",
        "headers": [],
        "query_string": b"",
        "server": ("test", 80),
    }
    return Request(scope, receive)


@pytest.mark.asyncio
@pytest.mark.parametrize("method", ["GET", "POST"])
async def test_root_answers_ok(method: str) -> None:
    assert await root(_request(method, b'{"test": true}')) == "ok\n"


@pytest.mark.asyncio
async def test_health_endpoint_returns_status():
    dto = await health(
        check_health_use_case=CheckMiddlewareHealthUseCase(
            _HealthService(ServiceStatus.UP)
        )
    )
    assert dto.status is ServiceStatus.UP
    assert dto.endpoint == "http://vz"


@pytest.mark.asyncio
async def test_health_endpoint_failure_is_unavailable():
    class _Broken:
        async def evaluate(self) -> MiddlewareHealth:
            raise RuntimeError("boom")

    with pytest.raises(HTTPException) as exc:
        await health(check_health_use_case=CheckMiddlewareHealthUseCase(_Broken()))
    assert exc.value.status_code == 503
