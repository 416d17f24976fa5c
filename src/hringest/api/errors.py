"""Exception handlers rendering the uniform ``{success: false, ...}`` envelope."""

from __future__ import annotations

import logging
import traceback

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from hringest.core.config import AppSettings
from hringest.core.exceptions import ApiError, UploadRejectedError

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI, settings: AppSettings) -> None:
    """Attach the JSON error handlers to ``app``."""

    @app.exception_handler(UploadRejectedError)
    async def upload_rejected(request: Request, exc: UploadRejectedError) -> JSONResponse:
        body = {"success": False, "error": exc.error}
        if exc.message is not None:
            body["message"] = exc.message
        body.update(exc.extra)
        return JSONResponse(status_code=exc.status_code, content=body)

    @app.exception_handler(ApiError)
    async def api_error(request: Request, exc: ApiError) -> JSONResponse:
        body = {"success": False, "error": exc.error}
        if exc.details is not None:
            body["details"] = exc.details
        return JSONResponse(status_code=exc.status_code, content=body)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == 404:
            return JSONResponse(status_code=404, content={"success": False, "error": "Route not found"})
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def request_invalid(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"success": False, "error": "Invalid request", "details": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(Exception)
    async def unhandled(request: Request, exc: Exception) -> JSONResponse:
        logger.error(f"Error: {exc}", exc_info=exc)
        body = {"success": False, "error": str(exc) or "Internal Server Error"}
        if not settings.is_production:
            body["stack"] = "".join(traceback.format_exception(exc))
        return JSONResponse(status_code=500, content=body)
