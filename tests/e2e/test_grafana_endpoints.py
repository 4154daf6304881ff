from __future__ import annotations

import pytest
from dependency_injector import providers
from fastapi.testclient import TestClient

from vzgrafana.domain.entities.errors import BackendApiError
from vzgrafana.domain.entities.health import (
    CheckAttempt,
    MiddlewareHealth,
    ServiceStatus,
)
from vzgrafana.domain.entities.time_series import Forecast, SeriesTuple
from vzgrafana.main.app import create_app
from vzgrafana.main.container import get_container


class _HealthCheckService:
    def __init__(self, status: ServiceStatus):
        self._health = MiddlewareHealth(
            endpoint="http://vz",
            attempts=[CheckAttempt(url="http://vz/entity.json", status=status)],
        )

    async def evaluate(self) -> MiddlewareHealth:
        return self._health


QUERY_RANGE = {"from": "2023-03-15T00:00:00.000Z", "to": "2023-03-16T00:00:00.000Z"}


@pytest.fixture()
def client(stub_gateway):
    app = create_app()
    container = get_container()

    container.volkszaehler_gateway.override(providers.Object(stub_gateway))
    container.health_check_service.override(
        providers.Object(_HealthCheckService(ServiceStatus.UP))
    )

    with TestClient(app) as test_client:
        yield test_client

    container.volkszaehler_gateway.reset_override()
    container.health_check_service.reset_override()


def test_root_answers_datasource_test(client) -> None:
    assert client.get("/").text == "ok\n"
    assert client.post("/", json={}).text == "ok\n"


def test_health_endpoint(client) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "up"
    assert payload["endpoint"] == "http://vz"
    assert payload["attempts"][0]["url"] == "http://vz/entity.json"


def test_search_lists_flattened_entities(client) -> None:
    response = client.post("/search", json={"target": ""})

    assert response.status_code == 200
    assert response.json() == [
        {"text": "Meter", "value": "uuid-meter"},
        {"text": "Fridge (House)", "value": "uuid-fridge"},
        {"text": "Heater (Cellar)", "value": "uuid-heater"},
        {"text": "Oven (House)", "value": "uuid-oven"},
    ]


def test_search_without_body(client) -> None:
    response = client.post("/search")

    assert response.status_code == 200
    assert len(response.json()) == 4


def test_query_fans_out_and_keeps_order(client, stub_gateway) -> None:
    client.post("/search", json={})
    stub_gateway.series = {
        "uuid-fridge": [SeriesTuple(1678838400000, 5.0)],
        "uuid-oven": [SeriesTuple(1678838400000, 1.5), SeriesTuple(1678842000000, 2.5)],
    }
    stub_gateway.failures["uuid-heater"] = BackendApiError("Invalid UUID")
    stub_gateway.delays = {"uuid-fridge": 0.02}
    stub_gateway.forecasts["uuid-meter"] = Forecast(consumption=42.0)

    response = client.post(
        "/query",
        json={
            "range": QUERY_RANGE,
            "targets": [
                {"target": "uuid-fridge", "refId": "A"},
                {"target": "uuid-heater", "refId": "B"},
                {"target": "uuid-oven", "refId": "C", "payload": {"name": "Stove"}},
                {"target": "uuid-unknown", "refId": "D"},
                {
                    "target": "uuid-meter",
                    "refId": "E",
                    "payload": {"context": "prognosis", "period": "day"},
                },
            ],
            "maxDataPoints": 100,
        },
    )

    assert response.status_code == 200
    body = response.json()
    assert [series["target"] for series in body] == [
        "Fridge (House)",
        "Heater (Cellar)",
        "Stove",
        "uuid-unknown",
        "Meter",
    ]
    assert body[0]["datapoints"] == [[5.0, 1678838400000]]
    assert body[1]["datapoints"] == []
    assert body[2]["datapoints"] == [[1.5, 1678838400000], [2.5, 1678842000000]]
    assert body[3]["datapoints"] == []
    assert len(body[4]["datapoints"]) == 1
    assert body[4]["datapoints"][0][0] == 42.0


def test_query_with_malformed_json_is_bad_request(client) -> None:
    response = client.post(
        "/query",
        content="{not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["detail"].startswith("json decode failed")


def test_query_without_range_is_bad_request(client) -> None:
    response = client.post("/query", json={"targets": []})
    assert response.status_code == 400


def test_metadata_endpoints(client) -> None:
    assert client.post("/annotations", json={"annotation": {"name": "x"}}).json() == []
    assert client.post("/tag-keys", json={}).json() == [
        {"type": "string", "text": "group"}
    ]
    assert client.post("/tag-values", json={"key": "group"}).json() == [
        {"text": "Current"},
        {"text": "Consumption"},
    ]


def test_cors_preflight(client) -> None:
    response = client.options(
        "/query",
        headers={
            "Origin": "http://grafana.local",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "content-type",
        },
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"


def test_query_accepts_null_target_fields(client, stub_gateway) -> None:
    stub_gateway.series = {"a": [SeriesTuple(1678838400000, 3.0)]}

    response = client.post(
        "/query",
        json={
            "range": QUERY_RANGE,
            "targets": [{"target": "a", "refId": None, "type": None}],
            "maxDataPoints": None,
            "intervalMs": None,
        },
    )

    assert response.status_code == 200
    assert response.json() == [{"target": "a", "datapoints": [[3.0, 1678838400000]]}]
