"""FastAPI application factory"""

import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from giving_ledger.api.middleware import RequestIDMiddleware, MetricsMiddleware
from giving_ledger.api.v1 import advice, dashboard, entries, profiles, reports
from giving_ledger.domain.exceptions import (
    DomainException,
    EntryNotFoundError,
    InsufficientDataError,
    InvalidInputError,
    ProfileNotFoundError,
)
from giving_ledger.infrastructure.observability.logging import setup_logging
from giving_ledger.config import settings

# Setup structured logging
setup_logging(settings.log_level)

# Domain errors that reach the API boundary, most specific first
ERROR_STATUS = (
    (ProfileNotFoundError, 404),
    (EntryNotFoundError, 404),
    (InvalidInputError, 422),
    (InsufficientDataError, 422),
)


async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    """Translate domain exceptions into HTTP errors"""
    status_code = next((code for error, code in ERROR_STATUS if isinstance(exc, error)), 500)
    if status_code == 500:
        logging.error(f"Unhandled domain error: {exc}", extra={"request_id": getattr(request.state, "request_id", None)})
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})

    logging.warning(f"{type(exc).__name__}: {exc}", extra={"request_id": getattr(request.state, "request_id", None)})
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Giving Ledger",
        description="Income, expense, and donation analytics with giving and financial-health scores",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    app.add_exception_handler(DomainException, domain_exception_handler)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(profiles.router, prefix="/v1", tags=["profiles"])
    app.include_router(entries.router, prefix="/v1", tags=["entries"])
    app.include_router(dashboard.router, prefix="/v1", tags=["dashboard"])
    app.include_router(reports.router, prefix="/v1", tags=["reports"])
    app.include_router(advice.router, prefix="/v1", tags=["advice"])

    return app


app = create_app()
