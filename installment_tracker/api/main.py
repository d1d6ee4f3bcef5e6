"""FastAPI application factory"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from installment_tracker.api.middleware import RequestIDMiddleware, MetricsMiddleware
from installment_tracker.api.v1 import plans, snapshot, summary
from installment_tracker.config import settings
from installment_tracker.domain.exceptions import (
    DomainException,
    IndexOutOfRange,
    InvalidScheduleParameters,
    InvalidSnapshot,
    NotFoundError,
    ValidationError,
)
from installment_tracker.infrastructure.database.session import init_db
from installment_tracker.infrastructure.observability.logging import setup_logging

# Setup structured logging
setup_logging(settings.log_level)

# Most specific first; anything else from the domain layer is a 400
ERROR_STATUS = [
    (NotFoundError, 404),
    (IndexOutOfRange, 404),
    (ValidationError, 422),
    (InvalidScheduleParameters, 422),
    (InvalidSnapshot, 422),
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    """Translate domain errors into HTTP responses"""
    status_code = next((code for exc_type, code in ERROR_STATUS if isinstance(exc, exc_type)), 400)
    logging.info(
        f"Request rejected: {exc}",
        extra={"request_id": getattr(request.state, "request_id", "unknown"), "error": type(exc).__name__},
    )
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Installment Tracker",
        description="Monthly installment plans, paid dues and amounts owed",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
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
    app.include_router(plans.router, prefix="/v1", tags=["plans"])
    app.include_router(summary.router, prefix="/v1", tags=["summary"])
    app.include_router(snapshot.router, prefix="/v1", tags=["snapshot"])

    return app


app = create_app()
