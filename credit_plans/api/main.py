"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from credit_plans.api.middleware import RequestIDMiddleware, MetricsMiddleware
from credit_plans.api.v1 import credits, plan
from credit_plans.infrastructure.observability.logging import setup_logging
from credit_plans.config import settings

setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Credit Plans",
        description="Installment plan preview and credit submission service",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Last added runs outermost
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(plan.router, prefix="/v1", tags=["plans"])
    app.include_router(credits.router, prefix="/v1", tags=["credits"])

    return app


app = create_app()
