"""GET /api/tuition and /api/acceptance - single-school projections"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, Request

from scorecard_gateway.api.cancellation import run_until_disconnect
from scorecard_gateway.api.dependencies import get_lookup_service, get_request_id, internal_errors
from scorecard_gateway.api.routes.schemas import (
    LOOKUP_ERROR_RESPONSES,
    AcceptanceResponse,
    TuitionResponse,
)
from scorecard_gateway.services.lookups import LookupService

router = APIRouter()


@router.get("/tuition", response_model=TuitionResponse, responses=LOOKUP_ERROR_RESPONSES)
async def get_tuition(
    request: Request,
    id: Optional[str] = Query(None, description="Scorecard unit id"),
    name: Optional[str] = Query(None, description="Exact school name"),
    service: LookupService = Depends(get_lookup_service),
):
    with internal_errors(get_request_id(request), "tuition lookup"):
        info = await run_until_disconnect(request, service.tuition(id, name))
    return TuitionResponse.from_info(info)


@router.get("/acceptance", response_model=AcceptanceResponse, responses=LOOKUP_ERROR_RESPONSES)
async def get_acceptance(
    request: Request,
    id: Optional[str] = Query(None, description="Scorecard unit id"),
    name: Optional[str] = Query(None, description="Exact school name"),
    service: LookupService = Depends(get_lookup_service),
):
    """Overall admission rate as a percentage with one decimal place"""
    with internal_errors(get_request_id(request), "acceptance lookup"):
        info = await run_until_disconnect(request, service.acceptance(id, name))
    return AcceptanceResponse.from_info(info)
