"""FastAPI application wiring for the candidate availability API."""

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from careers.apps.candidate_api import routers, system
from careers.core.db import init_models
from careers.core.logging import configure_logging
from careers.core.settings import get_settings
from careers.domain.availability.service import AvailabilityGateway, AvailabilityService

configure_logging()
request_logger = logging.getLogger("careers.api.requests")
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting candidate availability API...")
    await init_models()

    routes = [r.path for r in app.routes if hasattr(r, "path")]
    logger.info("Application started with %d routes", len(routes))
    try:
        yield
    finally:
        logger.info("Application shut down complete")


def create_app(gateway: Optional[AvailabilityGateway] = None) -> FastAPI:
    settings = get_settings()
    docs_url = "/docs" if settings.api_docs_enabled else None
    redoc_url = "/redoc" if settings.api_docs_enabled else None
    openapi_url = "/openapi.json" if settings.api_docs_enabled else None

    app = FastAPI(
        title="Candidate Availability API",
        lifespan=lifespan,
        docs_url=docs_url,
        redoc_url=redoc_url,
        openapi_url=openapi_url,
    )
    app.state.availability_gateway = gateway or AvailabilityService()

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.cors_origins),
            allow_methods=["GET", "PUT"],
            allow_headers=["Content-Type"],
        )

    app.include_router(system.router)
    app.include_router(routers.router)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            duration = (time.perf_counter() - start) * 1000
            request_logger.exception(
                "HTTP %s %s failed",
                request.method,
                request.url.path,
                extra={"path": request.url.path, "method": request.method, "duration_ms": duration},
            )
            raise
        duration = (time.perf_counter() - start) * 1000
        request_logger.info(
            "HTTP %s %s -> %s (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            duration,
            extra={
                "path": request.url.path,
                "method": request.method,
                "status": response.status_code,
                "duration_ms": round(duration, 1),
            },
        )
        return response

    return app


app = create_app()

__all__ = ["app", "create_app", "lifespan"]
