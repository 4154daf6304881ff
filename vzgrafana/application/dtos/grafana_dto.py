"""
Grafana DTOs - Application Layer

Pydantic models for the Grafana SimpleJSON datasource protocol. Field names
follow the wire format through aliases; optional fields default so partial
requests from older Grafana versions still decode.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional, Tuple

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
)

from vzgrafana.domain.entities.entity import FlatEntity
from vzgrafana.domain.entities.query import (
    QueryResponse,
    QueryTarget,
    TargetPayload,
    TimeRange,
)

_WIRE_CONFIG = ConfigDict(populate_by_name=True, extra="ignore")


def _null_as_default(cls: type[BaseModel], value: Any, info: ValidationInfo) -> Any:
    """Decode a JSON null like an absent field."""
    if value is None:
        return cls.model_fields[info.field_name].get_default(call_default_factory=True)
    return value


class RelativeRangeDTO(BaseModel):
    """Range as typed in the dashboard, e.g. now-6h."""

    from_: str = Field(default="", alias="from")
    to: str = ""

    model_config = _WIRE_CONFIG


class RangeDTO(BaseModel):
    """Absolute time range of a request."""

    from_: datetime = Field(alias="from")
    to: datetime
    raw: Optional[RelativeRangeDTO] = None

    model_config = _WIRE_CONFIG

    def to_domain(self) -> TimeRange:
        return TimeRange(start=self.from_, end=self.to)


class TargetPayloadDTO(BaseModel):
    """Per-target options entered in the query editor."""

    context: str = ""
    group: str = ""
    options: str = ""
    name: str = ""
    period: str = ""
    tuples: int = 0

    model_config = _WIRE_CONFIG

    @field_validator("context", "group", "options", "name", "period", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("tuples", mode="before")
    @classmethod
    def _blank_tuples(cls, value: Any) -> Any:
        if value is None or value == "":
            return 0
        return value

    def to_domain(self) -> TargetPayload:
        return TargetPayload(
            context=self.context,
            group=self.group,
            options=self.options,
            name=self.name,
            period=self.period,
            tuples=self.tuples,
        )


class TargetDTO(BaseModel):
    """A single query target."""

    target: str = ""
    ref_id: str = Field(default="", alias="refId")
    type: str = "timeserie"
    payload: TargetPayloadDTO = Field(
        default_factory=TargetPayloadDTO,
        validation_alias=AliasChoices("payload", "data"),
    )

    model_config = _WIRE_CONFIG

    @field_validator("target", "ref_id", "type", "payload", mode="before")
    @classmethod
    def _null_fields(cls, value: Any, info: ValidationInfo) -> Any:
        return _null_as_default(cls, value, info)

    def to_domain(self) -> QueryTarget:
        return QueryTarget(
            target=self.target,
            payload=self.payload.to_domain(),
            ref_id=self.ref_id,
        )


class FilterDTO(BaseModel):
    """Ad hoc filter component."""

    key: str = ""
    operator: str = ""
    value: str = ""

    @field_validator("key", "operator", "value", mode="before")
    @classmethod
    def _null_fields(cls, value: Any, info: ValidationInfo) -> Any:
        return _null_as_default(cls, value, info)


class QueryRequestDTO(BaseModel):
    """Body of POST /query."""

    panel_id: Optional[int] = Field(default=None, alias="panelId")
    range: RangeDTO
    range_raw: Optional[RelativeRangeDTO] = Field(default=None, alias="rangeRaw")
    interval: str = ""
    interval_ms: int = Field(default=0, alias="intervalMs")
    targets: List[TargetDTO] = Field(default_factory=list)
    adhoc_filters: List[FilterDTO] = Field(
        default_factory=list, alias="adhocFilters"
    )
    format: str = ""
    max_data_points: int = Field(default=0, alias="maxDataPoints")

    @field_validator(
        "interval",
        "interval_ms",
        "targets",
        "adhoc_filters",
        "format",
        "max_data_points",
        mode="before",
    )
    @classmethod
    def _null_fields(cls, value: Any, info: ValidationInfo) -> Any:
        return _null_as_default(cls, value, info)

    model_config = {
        **_WIRE_CONFIG,
        "json_schema_extra": {
            "example": {
                "panelId": 1,
                "range": {
                    "from": "2023-03-15T00:00:00.000Z",
                    "to": "2023-03-16T00:00:00.000Z",
                },
                "intervalMs": 60000,
                "targets": [
                    {
                        "target": "82fd1080-9ff3-11e1-b4b8-4b66a0b3e6d4",
                        "refId": "A",
                        "payload": {"group": "hour"},
                    }
                ],
                "maxDataPoints": 500,
            }
        },
    }


class QueryResponseDTO(BaseModel):
    """One series of the /query response."""

    target: str = Field(description="Display name of the series")
    datapoints: List[Tuple[float, int]] = Field(
        default_factory=list, description="[value, timestamp] pairs"
    )

    @classmethod
    def from_domain(cls, response: QueryResponse) -> "QueryResponseDTO":
        return cls(
            target=str(response.target),
            datapoints=[(point.value, point.timestamp) for point in response.datapoints],
        )

    model_config = {
        "json_schema_extra": {
            "example": {
                "target": "Fridge (Kitchen)",
                "datapoints": [[42.5, 1678885200000], [40.1, 1678888800000]],
            }
        }
    }


class SearchRequestDTO(BaseModel):
    """Body of POST /search."""

    target: str = ""

    model_config = _WIRE_CONFIG


class SearchResponseDTO(BaseModel):
    """A selectable metric: display text and the uuid used as target."""

    text: str
    value: str

    @classmethod
    def from_domain(cls, entity: FlatEntity) -> "SearchResponseDTO":
        return cls(text=entity.display_title, value=entity.id)


class AnnotationDTO(BaseModel):
    """Annotation definition sent by Grafana."""

    name: str = ""
    datasource: str = ""
    icon_color: str = Field(default="", alias="iconColor")
    enable: bool = False
    show_line: bool = Field(default=False, alias="showLine")
    query: str = ""

    model_config = _WIRE_CONFIG


class AnnotationsRequestDTO(BaseModel):
    """Body of POST /annotations."""

    range: Optional[RangeDTO] = None
    range_raw: Optional[RelativeRangeDTO] = Field(default=None, alias="rangeRaw")
    annotation: AnnotationDTO = Field(default_factory=AnnotationDTO)

    model_config = _WIRE_CONFIG


class AnnotationResponseDTO(BaseModel):
    """A single annotation event."""

    annotation: AnnotationDTO
    time: int = Field(description="Milliseconds since epoch")
    title: str
    tags: str = ""
    text: str = ""


class TagKeyDTO(BaseModel):
    """Ad hoc filter key."""

    type: str
    text: str


class TagValueDTO(BaseModel):
    """Ad hoc filter value."""

    text: str
