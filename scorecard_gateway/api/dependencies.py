"""Dependency injection for FastAPI endpoints"""

from contextlib import contextmanager
import logging
from typing import Iterator

from fastapi import Depends, Request
from scorecard_gateway.domain.exceptions import DomainException, InternalError
from scorecard_gateway.infrastructure.cache import QueryCache
from scorecard_gateway.infrastructure.clients.scorecard import ScorecardClient
from scorecard_gateway.services.estimate import EstimateService
from scorecard_gateway.services.lookups import LookupService
from scorecard_gateway.services.search import SchoolSearchService


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_scorecard_client(request: Request) -> ScorecardClient:
    """Provide the app-wide Scorecard API client"""
    return request.app.state.scorecard_client


def get_query_cache(request: Request) -> QueryCache:
    """Provide the app-wide search cache"""
    return request.app.state.query_cache


def get_search_service(
    request: Request,
    client: ScorecardClient = Depends(get_scorecard_client),
    cache: QueryCache = Depends(get_query_cache),
) -> SchoolSearchService:
    app_settings = request.app.state.settings
    return SchoolSearchService(
        client,
        cache,
        default_per_page=app_settings.default_per_page,
        max_per_page=app_settings.max_per_page,
    )


def get_estimate_service(client: ScorecardClient = Depends(get_scorecard_client)) -> EstimateService:
    return EstimateService(client)


def get_lookup_service(client: ScorecardClient = Depends(get_scorecard_client)) -> LookupService:
    return LookupService(client)


@contextmanager
def internal_errors(request_id: str, action: str) -> Iterator[None]:
    """Let domain errors through; log anything else and re-raise it as InternalError"""
    try:
        yield
    except DomainException:
        raise
    except Exception as e:
        logging.error(f"Unexpected error in {action}: {e}", exc_info=True, extra={"request_id": request_id})
        raise InternalError(f"{action} failed") from e
