"""Single-field lookups (tuition, acceptance rate) by school id or exact name"""

from typing import Any, Dict, List, Optional

from scorecard_gateway.domain.exceptions import InvalidInputError, NotFoundError
from scorecard_gateway.domain.inputs import coerce_school_id
from scorecard_gateway.domain.models import AcceptanceInfo, TuitionInfo
from scorecard_gateway.domain.records import (
    ACCEPTANCE_FIELDS,
    ID,
    NAME,
    TUITION_FIELDS,
    parse_acceptance,
    parse_tuition,
)
from scorecard_gateway.infrastructure.clients.scorecard import ScorecardClient


def lookup_filters(school_id: Any = None, name: Optional[str] = None) -> Dict[str, str]:
    """Id wins over name when both are given"""
    if school_id is not None and str(school_id).strip():
        return {ID: str(coerce_school_id(school_id, name="id"))}
    if name and name.strip():
        return {NAME: name.strip()}
    raise InvalidInputError("Provide id or name")


class LookupService:
    """Uncached one-record projections of a school"""

    def __init__(self, client: ScorecardClient):
        self.client = client

    async def _first(self, fields: List[str], school_id: Any, name: Optional[str]) -> Dict[str, Any]:
        self.client.require_api_key()
        filters = lookup_filters(school_id, name)
        raw = await self.client.first(fields, filters)
        if raw is None:
            raise NotFoundError("School not found")
        return raw

    async def tuition(self, school_id: Any = None, name: Optional[str] = None) -> TuitionInfo:
        return parse_tuition(await self._first(TUITION_FIELDS, school_id, name))

    async def acceptance(self, school_id: Any = None, name: Optional[str] = None) -> AcceptanceInfo:
        return parse_acceptance(await self._first(ACCEPTANCE_FIELDS, school_id, name))
