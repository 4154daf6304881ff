"""
Infrastructure Gateway - Volkszaehler Middleware Implementation

HTTP client for the volkszaehler middleware JSON API: entity tree, channel
data and consumption prognosis.
"""

from time import perf_counter
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from vzgrafana.domain.entities.entity import EntityKind, EntityNode
from vzgrafana.domain.entities.errors import (
    BackendApiError,
    BackendDecodeError,
    BackendTransportError,
)
from vzgrafana.domain.entities.time_series import Forecast, SeriesTuple
from vzgrafana.domain.gateways.middleware_gateway import IMiddlewareGateway
from vzgrafana.domain.services.time_buckets import infer_bucket
from vzgrafana.shared import ENTITY_PATH, MIDDLEWARE_SUFFIX, get_logger

logger = get_logger(__name__)

GROUP_TYPE = "group"
REQUEST_HEADERS = {"Accept": "application/json"}


class VolkszaehlerGateway(IMiddlewareGateway):
    """Implementation of the middleware gateway using httpx."""

    def __init__(self, base_url: str, timeout: float = 30.0, debug: bool = False):
        """
        Initialize the volkszaehler gateway.

        Args:
            base_url: Middleware URL, e.g. "https://demo.volkszaehler.org/middleware.php"
            timeout: Request timeout in seconds
            debug: Log response bodies
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.debug = debug

    async def detect_endpoint(self) -> str:
        """
        Validate the configured URL, falling back to its /middleware.php.

        The configured URL is kept when neither candidate answers, so
        requests keep retrying it once the middleware comes up.
        """
        logger.info("volkszaehler.endpoint.validating", url=self.base_url)

        if await self._reachable(self.base_url):
            logger.info("volkszaehler.endpoint.validated", url=self.base_url)
            return self.base_url

        candidate = f"{self.base_url}{MIDDLEWARE_SUFFIX}"
        logger.info("volkszaehler.endpoint.trying", url=candidate)

        if await self._reachable(candidate):
            logger.info("volkszaehler.endpoint.detected", url=candidate)
            self.base_url = candidate
            return candidate

        logger.warning(
            "volkszaehler.endpoint.unavailable",
            url=self.base_url,
            note="will keep retrying using configured url",
        )
        return self.base_url

    async def fetch_entities(self) -> List[EntityNode]:
        payload = await self._get_json(ENTITY_PATH)

        entities = payload.get("entities")
        if entities is None:
            return []
        if not isinstance(entities, list):
            raise BackendDecodeError(
                "json decode failed: entities is not a list",
                details={"entities": entities},
            )
        return [self._parse_entity(item) for item in entities]

    async def fetch_entity(self, entity_id: str) -> EntityNode:
        payload = await self._get_json(f"/entity/{quote(entity_id, safe='')}.json")

        entity = payload.get("entity")
        if not isinstance(entity, dict):
            raise BackendDecodeError(
                "json decode failed: missing entity", details={"uuid": entity_id}
            )
        return self._parse_entity(entity)

    async def fetch_series(
        self,
        entity_id: str,
        from_seconds: int,
        to_seconds: int,
        group: str = "",
        options: str = "",
        tuples: int = 0,
    ) -> List[SeriesTuple]:
        params = {"from": str(from_seconds * 1000), "to": str(to_seconds * 1000)}

        if tuples > 0:
            params["tuples"] = str(tuples)
            if not group:
                inferred = infer_bucket(to_seconds - from_seconds, tuples)
                group = inferred.value if inferred else ""

        if group:
            params["group"] = group
        if options:
            params["options"] = options

        payload = await self._get_json(
            f"/data/{quote(entity_id, safe='')}.json", params=params
        )

        data = payload.get("data") or {}
        if not isinstance(data, dict):
            raise BackendDecodeError("json decode failed: data is not an object")
        return [self._parse_tuple(item) for item in data.get("tuples") or []]

    async def fetch_forecast(self, entity_id: str, period: str) -> Forecast:
        payload = await self._get_json(
            f"/prognosis/{quote(entity_id, safe='')}.json", params={"period": period}
        )

        prognosis = payload.get("prognosis")
        if not isinstance(prognosis, dict):
            raise BackendDecodeError(
                "json decode failed: missing prognosis", details={"uuid": entity_id}
            )
        try:
            return Forecast(
                consumption=float(prognosis.get("consumption") or 0.0),
                factor=float(prognosis.get("factor") or 0.0),
            )
        except (TypeError, ValueError) as e:
            raise BackendDecodeError(f"json decode failed: {e}") from e

    async def _reachable(self, url: str) -> bool:
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(
                    f"{url}{ENTITY_PATH}", headers=REQUEST_HEADERS
                )
            return response.status_code == 200
        except httpx.HTTPError as e:
            logger.debug("volkszaehler.endpoint.check_failed", url=url, error=str(e))
            return False

    async def _get_json(
        self, endpoint: str, params: Optional[Dict[str, str]] = None
    ) -> Dict[str, Any]:
        """
        GET a middleware endpoint and return its decoded JSON object.

        Raises:
            BackendTransportError: Connection failure, timeout or HTTP error
            BackendApiError: The middleware answered with an exception
            BackendDecodeError: The body is not a JSON object
        """
        url = f"{self.base_url}{endpoint}"
        start = perf_counter()

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(url, params=params, headers=REQUEST_HEADERS)
        except httpx.TimeoutException as e:
            logger.error("volkszaehler.request_timeout", url=url, error=str(e))
            raise BackendTransportError(
                f"volkszaehler request timed out: {e}", details={"url": url}
            ) from e
        except httpx.RequestError as e:
            logger.error("volkszaehler.request_error", url=url, error=str(e))
            raise BackendTransportError(
                f"volkszaehler request failed: {e}", details={"url": url}
            ) from e

        logger.info(
            "volkszaehler.request",
            method="GET",
            url=url,
            params=params,
            status_code=response.status_code,
            elapsed_ms=round((perf_counter() - start) * 1000, 1),
        )
        if self.debug:
            logger.debug("volkszaehler.response_body", url=url, body=response.text)

        try:
            payload = response.json()
        except ValueError as e:
            if response.status_code >= 400:
                raise BackendTransportError(
                    f"volkszaehler HTTP error {response.status_code}: {response.text}",
                    details={"url": url, "status_code": response.status_code},
                ) from e
            raise BackendDecodeError(
                f"json decode failed: {e}", details={"url": url}
            ) from e

        if not isinstance(payload, dict):
            raise BackendDecodeError(
                "json decode failed: response is not an object", details={"url": url}
            )

        exception = payload.get("exception")
        if exception:
            self._raise_api_exception(exception, url, response.status_code)

        if response.status_code >= 400:
            raise BackendTransportError(
                f"volkszaehler HTTP error {response.status_code}: {response.text}",
                details={"url": url, "status_code": response.status_code},
            )

        return payload

    @staticmethod
    def _raise_api_exception(exception: Any, url: str, status_code: int) -> None:
        if isinstance(exception, dict):
            message = str(exception.get("message") or "unknown error")
            exception_type = exception.get("type")
        else:
            message = str(exception)
            exception_type = None

        logger.warning(
            "volkszaehler.api_exception",
            url=url,
            status_code=status_code,
            exception_type=exception_type,
            message=message,
        )
        raise BackendApiError(
            message,
            exception_type=exception_type,
            details={"url": url, "status_code": status_code},
        )

    def _parse_entity(self, raw: Any) -> EntityNode:
        if not isinstance(raw, dict):
            raise BackendDecodeError(
                "json decode failed: entity is not an object", details={"entity": raw}
            )

        entity_type = str(raw.get("type") or "")
        children = raw.get("children") or []
        if not isinstance(children, list):
            raise BackendDecodeError(
                "json decode failed: children is not a list",
                details={"uuid": raw.get("uuid")},
            )

        return EntityNode(
            id=str(raw.get("uuid") or ""),
            kind=EntityKind.GROUP if entity_type == GROUP_TYPE else EntityKind.LEAF,
            title=str(raw.get("title") or ""),
            children=[self._parse_entity(child) for child in children],
            entity_type=entity_type,
        )

    @staticmethod
    def _parse_tuple(raw: Any) -> SeriesTuple:
        # [timestamp, value, count]; the count is not used
        try:
            timestamp, value = raw[0], raw[1]
            return SeriesTuple(
                timestamp=int(timestamp),
                value=float(value) if value is not None else 0.0,
            )
        except (IndexError, KeyError, TypeError, ValueError) as e:
            raise BackendDecodeError(
                f"json decode failed: invalid tuple {raw!r}", details={"tuple": raw}
            ) from e
