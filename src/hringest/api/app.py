"""FastAPI application with lifespan, store wiring and router mounting."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request

from hringest.api.errors import register_exception_handlers
from hringest.api.routes import health, stats, upload
from hringest.core.config import AppSettings
from hringest.core.logging import setup_logging
from hringest.core.protocols import IAuditStore, IRecordStore
from hringest.persistence import create_persistence
from hringest.pipeline.service import IngestService
from hringest.pipeline.stats import StatsService

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Log application start and stop."""
    settings: AppSettings = app.state.settings
    logger.info(
        f"HR ingest API starting on port {settings.server.port}",
        extra={"environment": settings.environment, "store_backend": settings.store_backend},
    )
    yield
    logger.info("HR ingest API shutting down")


def create_app(
    settings: AppSettings | None = None,
    *,
    record_store: IRecordStore | None = None,
    audit_store: IAuditStore | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Stores default to the backend selected by ``settings.store_backend``;
    pass them explicitly to share or fake them.
    """
    if settings is None:
        settings = AppSettings()
    setup_logging(settings.log_level, settings.log_format)

    if record_store is None or audit_store is None:
        default_records, default_audit = create_persistence(settings)
        record_store = default_records if record_store is None else record_store
        audit_store = default_audit if audit_store is None else audit_store

    app = FastAPI(
        title="HR Data Ingest API",
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.ingest_service = IngestService(
        record_store=record_store,
        audit_store=audit_store,
        audit_duplicates=settings.audit_duplicates,
        require_headers=settings.upload.require_headers,
    )
    app.state.stats_service = StatsService(record_store=record_store, audit_store=audit_store)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info(
            f"{request.method} {request.url.path}",
            extra={"method": request.method, "path": request.url.path},
        )
        return await call_next(request)

    @app.get("/", tags=["health"])
    async def index() -> dict:
        return {
            "message": "HR Data Ingest API",
            "version": VERSION,
            "status": "operational",
            "endpoints": {
                "upload": "POST /api/upload",
                "stats": "GET /api/stats",
                "audit": "GET /api/audit/{batchId}",
                "health": "GET /api/health",
            },
        }

    app.include_router(health.router, prefix="/api")
    app.include_router(upload.router, prefix="/api")
    app.include_router(stats.router, prefix="/api")
    register_exception_handlers(app, settings)
    return app
