"""GET /api/schools - search schools by name or state code"""

from typing import Any, Dict, Optional
from fastapi import APIRouter, Depends, Query, Request

from scorecard_gateway.api.cancellation import run_until_disconnect
from scorecard_gateway.api.dependencies import get_request_id, get_search_service, internal_errors
from scorecard_gateway.api.routes.schemas import ERROR_RESPONSES
from scorecard_gateway.services.search import SchoolSearchService

router = APIRouter()


@router.get("/schools", responses=ERROR_RESPONSES)
async def search_schools(
    request: Request,
    q: Optional[str] = Query(None, description="School name fragment or two-letter state code"),
    per_page: Optional[str] = Query(None, description="Page size (default 12)"),
    service: SchoolSearchService = Depends(get_search_service),
) -> Dict[str, Any]:
    """
    Search the College Scorecard, sorted by school name.

    Returns:
        The raw Scorecard page; records keep their flattened field names
        (id, school.name, school.city, school.state)
    """
    with internal_errors(get_request_id(request), "school search"):
        return await run_until_disconnect(request, service.search(q, per_page))
