"""Estimate use case: resolve the school upstream, then run the estimate engine"""

from typing import Any

from scorecard_gateway.domain.estimate import compute_estimate
from scorecard_gateway.domain.inputs import coerce_income, coerce_school_id
from scorecard_gateway.domain.models import EstimateResult
from scorecard_gateway.infrastructure.clients.scorecard import ScorecardClient
from scorecard_gateway.infrastructure.observability.metrics import record_estimate


class EstimateService:
    """Builds aid estimates for a school id and household income"""

    def __init__(self, client: ScorecardClient):
        self.client = client

    async def estimate(self, school_id: Any, income: Any) -> EstimateResult:
        """
        Raises:
            ConfigError: If no API key is configured
            InvalidInputError: If school_id or income is missing or malformed
            NotFoundError: If no school has this id
            UpstreamError: If the Scorecard API fails or returns a malformed record
        """
        self.client.require_api_key()
        school_id = coerce_school_id(school_id)
        income = coerce_income(income)

        record = await self.client.get_school(school_id)
        result = compute_estimate(record, income)

        record_estimate(result.bracket.label)
        return result
