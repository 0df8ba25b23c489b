"""FastAPI application factory"""

import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from worth_gateway.api.dependencies import get_request_id
from worth_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from worth_gateway.api.v1 import accounts, dashboard, demo
from worth_gateway.domain.exceptions import AccountNotFoundError, DataUnavailableError, ValidationError
from worth_gateway.infrastructure.observability.logging import setup_logging
from worth_gateway.infrastructure.observability.metrics import storage_failures_counter
from worth_gateway.config import settings

# Setup structured logging
setup_logging(settings.log_level)


async def data_unavailable_handler(request: Request, exc: DataUnavailableError) -> JSONResponse:
    storage_failures_counter.inc()
    logging.error(f"Storage error: {exc}", extra={"request_id": get_request_id(request)})
    return JSONResponse(status_code=503, content={"detail": "Data unavailable"})


async def not_found_handler(request: Request, exc: AccountNotFoundError) -> JSONResponse:
    logging.info(f"Not found: {exc}", extra={"request_id": get_request_id(request)})
    return JSONResponse(status_code=404, content={"detail": str(exc)})


async def validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
    logging.warning(f"Validation error: {exc}", extra={"request_id": get_request_id(request)})
    return JSONResponse(status_code=422, content={"detail": str(exc)})


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Worth Gateway",
        description="Balance history, activity windows and net worth service",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    app.add_exception_handler(DataUnavailableError, data_unavailable_handler)
    app.add_exception_handler(AccountNotFoundError, not_found_handler)
    app.add_exception_handler(ValidationError, validation_handler)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(accounts.router, prefix="/v1", tags=["accounts"])
    app.include_router(dashboard.router, prefix="/v1", tags=["dashboard"])
    app.include_router(demo.router, prefix="/v1", tags=["demo"])

    return app


app = create_app()
