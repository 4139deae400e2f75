"""FastAPI application with lifespan, error mapping and router mounting."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from achexport.api.routes import health, nacha
from achexport.core.config import AppSettings
from achexport.core.exceptions import AchExportError, BatchValidationError, OriginatorNotFoundError
from achexport.core.logging import TraceIDMiddleware, setup_logging
from achexport.persistence import create_persistence
from achexport.services.nacha_service import NachaExportService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Initialize and tear down application resources."""
    settings = AppSettings()
    setup_logging(settings.service_name, settings.log_level)
    originators, file_store, audit_log, cache = create_persistence(settings)
    app.state.settings = settings
    app.state.cache = cache
    app.state.service = NachaExportService(
        settings=settings,
        originators=originators,
        file_store=file_store,
        audit_log=audit_log,
    )
    logger.info("achexport started", extra={"environment": settings.environment})
    yield


def _error(status_code: int, exc: Exception, details: object = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": str(exc), "details": details},
    )


async def _batch_validation_handler(request: Request, exc: BatchValidationError) -> JSONResponse:
    return _error(422, exc, exc.issues)


async def _originator_not_found_handler(request: Request, exc: OriginatorNotFoundError) -> JSONResponse:
    return _error(404, exc)


async def _achexport_error_handler(request: Request, exc: AchExportError) -> JSONResponse:
    logger.error("Request failed: %s", exc, exc_info=exc)
    return _error(500, exc, type(exc).__name__)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="ACH Export Service",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.add_middleware(TraceIDMiddleware)
    app.add_exception_handler(BatchValidationError, _batch_validation_handler)
    app.add_exception_handler(OriginatorNotFoundError, _originator_not_found_handler)
    app.add_exception_handler(AchExportError, _achexport_error_handler)
    app.include_router(health.router)
    app.include_router(nacha.router, prefix="/nacha")
    return app
