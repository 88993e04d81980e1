"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from creditgo_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from creditgo_gateway.api.v1 import profile, tiers, transactions, validation
from creditgo_gateway.infrastructure.database.session import init_db
from creditgo_gateway.infrastructure.observability.logging import setup_logging
from creditgo_gateway.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="CreditGo Gateway",
        description="Safe repayment, credit score and SMS income analysis service",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    init_db()

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name, "demo_mode": settings.demo_mode}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(transactions.router, prefix="/v1", tags=["transactions"])
    app.include_router(profile.router, prefix="/v1", tags=["profile"])
    app.include_router(validation.router, prefix="/v1", tags=["validation"])
    app.include_router(tiers.router, prefix="/v1", tags=["credit"])

    return app


app = create_app()
