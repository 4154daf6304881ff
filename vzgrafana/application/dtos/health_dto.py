"""DTOs for the /health response."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from vzgrafana.domain.entities.health import (
    CheckAttempt,
    MiddlewareHealth,
    ServiceStatus,
)


class CheckAttemptDTO(BaseModel):
    """A single middleware attempt."""

    url: str
    status: ServiceStatus
    status_code: Optional[int] = Field(default=None, description="HTTP status, if any")
    error: str = Field(default="", description="Transport error, if any")
    latency_ms: float = Field(description="Round trip in milliseconds")

    @classmethod
    def from_domain(cls, attempt: CheckAttempt) -> "CheckAttemptDTO":
        return cls(
            url=attempt.url,
            status=attempt.status,
            status_code=attempt.status_code,
            error=attempt.error,
            latency_ms=round(attempt.latency_ms, 1),
        )


class MiddlewareHealthDTO(BaseModel):
    """Body of GET /health."""

    status: ServiceStatus = Field(description="Status decided by the last attempt")
    endpoint: str = Field(description="Middleware URL in use")
    checked_at: datetime
    attempts: List[CheckAttemptDTO] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, health: MiddlewareHealth) -> "MiddlewareHealthDTO":
        return cls(
            status=health.status,
            endpoint=health.endpoint,
            checked_at=health.checked_at,
            attempts=[
                CheckAttemptDTO.from_domain(attempt) for attempt in health.attempts
            ],
        )

    model_config = {
        "json_schema_extra": {
            "example": {
                "status": "up",
                "endpoint": "https://demo.volkszaehler.org/middleware.php",
                "checked_at": "2023-03-15T12:00:00Z",
                "attempts": [
                    {
                        "url": "https://demo.volkszaehler.org/middleware.php"
                        "/entity.json",
                        "status": "up",
                        "status_code": 200,
                        "error": "",
                        "latency_ms": 42.0,
                    }
                ],
            }
        }
    }
