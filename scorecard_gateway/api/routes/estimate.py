"""POST /api/estimate - heuristic financial aid package for a school and income"""

import time
from fastapi import APIRouter, Depends, Request

from scorecard_gateway.api.cancellation import run_until_disconnect
from scorecard_gateway.api.dependencies import get_estimate_service, get_request_id, internal_errors
from scorecard_gateway.api.routes.schemas import (
    LOOKUP_ERROR_RESPONSES,
    EstimateRequest,
    EstimateResponse,
)
from scorecard_gateway.infrastructure.observability.logging import log_estimate
from scorecard_gateway.services.estimate import EstimateService

router = APIRouter()


@router.post("/estimate", response_model=EstimateResponse, responses=LOOKUP_ERROR_RESPONSES)
async def create_estimate(
    request_body: EstimateRequest,
    request: Request,
    service: EstimateService = Depends(get_estimate_service),
):
    """
    Estimate grants, work-study, loans and out-of-pocket cost.

    Flow:
    1. Validate school id and income
    2. Fetch the school's cost fields from the Scorecard
    3. Resolve income bracket and net price
    4. Allocate the net price into the four-part package
    """
    start_time = time.time()
    request_id = get_request_id(request)

    with internal_errors(request_id, "estimate"):
        result = await run_until_disconnect(
            request, service.estimate(request_body.school_id, request_body.income)
        )

    duration_ms = (time.time() - start_time) * 1000
    log_estimate(request_id, result.school.id, result.bracket.label, result.net_price, duration_ms)

    return EstimateResponse.from_result(result)
