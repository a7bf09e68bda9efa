"""
Exception Handlers for the FastAPI Application.

This module turns every failure into a JSON body:

- ``ApiError`` and request validation errors become the standard error envelope.
- Unknown routes get a "Route not found" body naming the method and path.
- Anything else is logged with full context and answered with a 500.
"""

import traceback

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront_api.core.clock import utc_timestamp
from storefront_api.core.errors import ApiError
from storefront_api.core.logging_config import get_logger
from storefront_api.core.monitoring import log_error
from storefront_api.server import responses
from storefront_api.server.core.config import settings
from storefront_api.server.validators import api_error_from_validation

logger = get_logger(__name__)


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    """Render an ``ApiError`` as the error envelope with its own status code."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.debug(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=responses.error(exc.message, exc.status_code, exc.details),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report invalid request bodies as 400 instead of FastAPI's default 422."""
    return await api_error_handler(request, api_error_from_validation(exc.errors()))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render routing errors; an unmatched path or method becomes a 404 "Route not found" body."""
    if exc.status_code in (404, 405):
        return JSONResponse(
            status_code=404,
            content={
                "error": "Route not found",
                "path": request.url.path,
                "message": f"{request.method} {request.url.path} - Endpoint does not exist",
            },
        )
    return JSONResponse(
        status_code=exc.status_code,
        content=responses.error(str(exc.detail), exc.status_code),
        headers=getattr(exc, "headers", None),
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Global exception handler to log detailed error information.

    This handler is called for any unhandled exception in the application.
    It logs the full error context and returns a JSON response; outside
    production the traceback is included under ``details``.

    Args:
        request: The HTTP request that caused the exception
        exc: The exception that was raised

    Returns:
        JSONResponse with error details
    """
    error_id = id(exc)
    stack = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))

    logger.error(
        f"Unhandled exception [{error_id}] in {request.method} {request.url.path}: {str(exc)}",
        exc_info=True,
        extra={
            "error_id": error_id,
            "method": request.method,
            "path": request.url.path,
            "query_params": dict(request.query_params),
            "client": request.client.host if request.client else "unknown",
            "error_type": type(exc).__name__,
        },
    )
    log_error(type(exc).__name__, str(exc), {"path": request.url.path, "method": request.method})

    content = {
        "error": str(exc) or "Internal Server Error",
        "statusCode": 500,
        "timestamp": utc_timestamp(),
    }
    if not settings.is_production:
        content["details"] = stack
    return JSONResponse(status_code=500, content=content)


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI application.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)
    logger.debug("Exception handlers registered successfully")
