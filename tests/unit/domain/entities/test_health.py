from __future__ import annotations

from datetime import timezone

from vzgrafana.domain.entities.health import (
    CheckAttempt,
    MiddlewareHealth,
    ServiceStatus,
)


def test_health_without_attempts_is_unknown() -> None:
    health = MiddlewareHealth(endpoint="")
    assert health.status is ServiceStatus.UNKNOWN
    assert health.checked_at.tzinfo == timezone.utc


def test_last_attempt_decides_status() -> None:
    health = MiddlewareHealth(
        endpoint="http://vz",
        attempts=[
            CheckAttempt(url="http://vz/entity.json", status=ServiceStatus.DOWN),
            CheckAttempt(url="http://vz", status=ServiceStatus.DEGRADED, status_code=404),
        ],
    )
    assert health.status is ServiceStatus.DEGRADED
