"""FastAPI application factory"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from check_gateway.api.dependencies import get_request_id
from check_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from check_gateway.api.v1 import analytics, checks, notifications
from check_gateway.infrastructure.observability.logging import setup_logging
from check_gateway.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Check Portfolio Gateway",
        description="Liquidity analytics, risk signals and alerts for check portfolios",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        logging.error(f"Unexpected error: {exc}", extra={"request_id": get_request_id(request)})
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(analytics.router, prefix="/v1", tags=["analytics"])
    app.include_router(checks.router, prefix="/v1", tags=["checks"])
    app.include_router(notifications.router, prefix="/v1", tags=["notifications"])

    return app


app = create_app()
