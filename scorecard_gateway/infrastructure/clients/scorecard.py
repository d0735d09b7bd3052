"""College Scorecard API HTTP client"""

import time
import httpx
from typing import Any, Dict, List, Optional
from scorecard_gateway.domain.models import SchoolRecord
from scorecard_gateway.domain.exceptions import ConfigError, NotFoundError, RecordParseError, UpstreamError
from scorecard_gateway.domain.records import ESTIMATE_FIELDS, first_result, parse_school_record
from scorecard_gateway.infrastructure.observability.logging import log_upstream_call
from scorecard_gateway.infrastructure.observability.metrics import (
    upstream_failure_counter,
    upstream_latency_histogram,
)
from scorecard_gateway.config import settings


class ScorecardClient:
    """Client for the api.data.gov College Scorecard schools endpoint"""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url or settings.scorecard_api_base
        self.api_key = api_key if api_key is not None else settings.datagov_api_key
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def require_api_key(self) -> str:
        """
        Raises:
            ConfigError: If no API key is configured
        """
        if not self.api_key:
            raise ConfigError("Missing API key. Set DATAGOV_API_KEY in the environment or .env")
        return self.api_key

    async def query(
        self,
        fields: List[str],
        filters: Optional[Dict[str, str]] = None,
        per_page: int = 1,
        page: int = 0,
        sort: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Run one query and return the raw result page ({"metadata": ..., "results": [...]}).

        Records in the page are flattened: keys are the dotted field names.

        Raises:
            ConfigError: If no API key is configured
            UpstreamError: On timeout, non-success status, or a body that is not a JSON object
        """
        params = {
            "api_key": self.require_api_key(),
            "per_page": str(per_page),
            "fields": ",".join(fields),
        }
        if page:
            params["page"] = str(page)
        if sort:
            params["sort"] = sort
        params.update(filters or {})

        start_time = time.perf_counter()
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                with upstream_latency_histogram.time():
                    response = await client.get(self.base_url, params=params)
                response.raise_for_status()
                data = response.json()

            except httpx.TimeoutException as e:
                upstream_failure_counter.labels(status="timeout").inc()
                raise UpstreamError(504, f"College Scorecard API timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                upstream_failure_counter.labels(status=str(e.response.status_code)).inc()
                raise UpstreamError(e.response.status_code, e.response.text) from e
            except ValueError as e:
                upstream_failure_counter.labels(status="invalid_json").inc()
                raise UpstreamError(502, "College Scorecard API returned invalid JSON") from e

        log_upstream_call(params, response.status_code, (time.perf_counter() - start_time) * 1000)

        if not isinstance(data, dict):
            raise RecordParseError("Result page is not a JSON object")
        return data

    async def first(self, fields: List[str], filters: Dict[str, str]) -> Optional[Dict[str, Any]]:
        """First matching flattened record, None when nothing matches"""
        page = await self.query(fields, filters, per_page=1)
        return first_result(page)

    async def get_school(self, school_id: int) -> SchoolRecord:
        """
        Fetch everything the estimate engine needs for one school.

        Raises:
            NotFoundError: If no school has this id
            RecordParseError: If the record is malformed
        """
        raw = await self.first(ESTIMATE_FIELDS, {"id": str(school_id)})
        if raw is None:
            raise NotFoundError(f"School {school_id} not found")
        return parse_school_record(raw)
