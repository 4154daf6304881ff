from __future__ import annotations

from datetime import timezone

import pytest
from pydantic import ValidationError

from vzgrafana.application.dtos.grafana_dto import (
    QueryRequestDTO,
    QueryResponseDTO,
    SearchResponseDTO,
    TargetDTO,
)
from vzgrafana.domain.entities.entity import FlatEntity
from vzgrafana.domain.entities.query import (
    Datapoint,
    DisplaySource,
    DisplayTarget,
    QueryResponse,
)


def _query_body(**overrides):
    body = {
        "panelId": 3,
        "range": {
            "from": "2023-03-15T00:00:00.000Z",
            "to": "2023-03-16T00:00:00.000Z",
            "raw": {"from": "now-24h", "to": "now"},
        },
        "rangeRaw": {"from": "now-24h", "to": "now"},
        "interval": "2m",
        "intervalMs": 120000,
        "targets": [
            {
                "target": "uuid-fridge",
                "refId": "A",
                "type": "timeserie",
                "payload": {"group": "Hour", "options": "consumption", "tuples": 48},
            }
        ],
        "adhocFilters": [{"key": "group", "operator": "=", "value": "hour"}],
        "format": "json",
        "maxDataPoints": 720,
    }
    body.update(overrides)
    return body


def test_query_request_decodes_wire_names() -> None:
    request = QueryRequestDTO.model_validate(_query_body())

    assert request.panel_id == 3
    assert request.interval_ms == 120000
    assert request.max_data_points == 720
    assert request.range_raw.from_ == "now-24h"
    assert request.adhoc_filters[0].key == "group"
    assert request.range.from_.tzinfo is not None

    target = request.targets[0]
    assert target.ref_id == "A"
    assert target.payload.group == "Hour"
    assert target.payload.tuples == 48


def test_query_request_requires_a_range() -> None:
    body = _query_body()
    del body["range"]

    with pytest.raises(ValidationError):
        QueryRequestDTO.model_validate(body)


def test_range_to_domain() -> None:
    request = QueryRequestDTO.model_validate(_query_body())
    time_range = request.range.to_domain()

    assert time_range.start.astimezone(timezone.utc).hour == 0
    assert time_range.from_seconds == 1678838400
    assert time_range.to_seconds == 1678924800


def test_target_accepts_data_as_payload_alias() -> None:
    target = TargetDTO.model_validate(
        {"target": "uuid", "data": {"context": "prognosis", "period": "day"}}
    )

    domain = target.to_domain()
    assert domain.is_forecast
    assert domain.payload.period == "day"


def test_target_tolerates_null_payload_fields() -> None:
    target = TargetDTO.model_validate(
        {"target": "uuid", "payload": {"group": None, "name": None, "tuples": ""}}
    )
    assert target.payload.group == ""
    assert target.payload.name == ""
    assert target.payload.tuples == 0

    bare = TargetDTO.model_validate({"target": "uuid", "payload": None})
    assert bare.to_domain().payload.context == ""


def test_target_ignores_unknown_fields() -> None:
    target = TargetDTO.model_validate(
        {"target": "uuid", "hide": False, "payload": {"unit": "W"}}
    )
    assert target.target == "uuid"


def test_query_response_from_domain() -> None:
    response = QueryResponse(
        target=DisplayTarget("Oven (House)", DisplaySource.CACHE),
        datapoints=[Datapoint(12.0, 1678838400000), Datapoint(13.5, 1678842000000)],
    )

    dto = QueryResponseDTO.from_domain(response)

    assert dto.model_dump(mode="json") == {
        "target": "Oven (House)",
        "datapoints": [[12.0, 1678838400000], [13.5, 1678842000000]],
    }


def test_search_response_from_domain() -> None:
    dto = SearchResponseDTO.from_domain(FlatEntity("uuid-oven", "Oven (House)"))
    assert dto.model_dump() == {"text": "Oven (House)", "value": "uuid-oven"}


def test_target_null_fields_fall_back_to_defaults() -> None:
    target = TargetDTO.model_validate({"target": "a", "refId": None, "type": None})

    assert target.target == "a"
    assert target.ref_id == ""
    assert target.type == "timeserie"

    unnamed = TargetDTO.model_validate({"target": None})
    assert unnamed.target == ""


def test_query_request_null_fields_fall_back_to_defaults() -> None:
    request = QueryRequestDTO.model_validate(
        _query_body(
            interval=None,
            intervalMs=None,
            format=None,
            maxDataPoints=None,
            adhocFilters=[{"key": "group", "operator": None, "value": None}],
        )
    )

    assert request.interval == ""
    assert request.interval_ms == 0
    assert request.format == ""
    assert request.max_data_points == 0
    assert request.adhoc_filters[0].operator == ""

    empty = QueryRequestDTO.model_validate(_query_body(targets=None))
    assert empty.targets == []
