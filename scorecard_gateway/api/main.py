"""FastAPI application factory"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from scorecard_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from scorecard_gateway.api.routes import estimate, lookups, schools
from scorecard_gateway.domain.exceptions import (
    ConfigError,
    DomainException,
    InternalError,
    InvalidInputError,
    NotFoundError,
    UpstreamError,
)
from scorecard_gateway.infrastructure.cache import QueryCache
from scorecard_gateway.infrastructure.clients.scorecard import ScorecardClient
from scorecard_gateway.infrastructure.observability.logging import setup_logging
from scorecard_gateway.config import Settings, settings

# Setup structured logging
setup_logging(settings.log_level)


def _error_body(error: str, detail=None) -> dict:
    body = {"error": error}
    if detail is not None:
        body["detail"] = detail
    return body


async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    """Map the domain error taxonomy onto HTTP responses ({error, detail?})"""
    request_id = getattr(request.state, "request_id", "unknown")

    if isinstance(exc, UpstreamError):
        status = exc.status if 400 <= exc.status < 600 else 502
        logging.error(f"Upstream error: {exc}", extra={"request_id": request_id, "upstream_status": exc.status})
        return JSONResponse(status_code=status, content=_error_body("Upstream error", exc.detail))

    if isinstance(exc, NotFoundError):
        return JSONResponse(status_code=404, content=_error_body(str(exc)))

    if isinstance(exc, (InvalidInputError, ConfigError)):
        logging.warning(f"Rejected request: {exc}", extra={"request_id": request_id})
        return JSONResponse(status_code=400, content=_error_body(str(exc)))

    if isinstance(exc, InternalError):
        return JSONResponse(status_code=500, content=_error_body(str(exc)))

    logging.error(f"Unhandled domain error: {exc}", extra={"request_id": request_id})
    return JSONResponse(status_code=500, content=_error_body("Internal server error"))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content=_error_body("Invalid input", jsonable_encoder(exc.errors())))


def create_app(
    app_settings: Settings | None = None,
    scorecard_client: ScorecardClient | None = None,
    query_cache: QueryCache | None = None,
) -> FastAPI:
    """Create and configure FastAPI application; this is where the shared client and cache are built"""
    app_settings = app_settings or settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if not app.state.scorecard_client.configured:
            logging.warning("DATAGOV_API_KEY is missing; Scorecard requests will be rejected")
        yield

    app = FastAPI(
        title="Scorecard Aid Gateway",
        description="College search and heuristic financial aid estimates over the College Scorecard API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.state.settings = app_settings
    app.state.scorecard_client = scorecard_client or ScorecardClient(
        base_url=app_settings.scorecard_api_base,
        api_key=app_settings.datagov_api_key or "",
        timeout=app_settings.http_timeout_seconds,
    )
    app.state.query_cache = query_cache or QueryCache(
        ttl_seconds=app_settings.cache_ttl_seconds,
        coalesce=app_settings.cache_coalesce_misses,
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {
            "status": "ok",
            "service": app_settings.service_name,
            "api_key_configured": app.state.scorecard_client.configured,
        }

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(schools.router, prefix="/api", tags=["schools"])
    app.include_router(estimate.router, prefix="/api", tags=["estimates"])
    app.include_router(lookups.router, prefix="/api", tags=["lookups"])

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn"""
    import uvicorn

    uvicorn.run("scorecard_gateway.api.main:app", host=settings.host, port=settings.port)
