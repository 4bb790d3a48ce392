"""Exception handlers for applications rendering through controllers."""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from controller_render.exceptions import ErrorCode, RenderException
from controller_render.logging_config import get_logger, log_with_context

logger = get_logger(__name__)


async def render_exception_handler(request: Request, exc: RenderException) -> JSONResponse:
    """Handle render exceptions with proper HTTP status codes.

    Returns structured JSON error responses with status code, error code,
    message, and optional details for client-side error handling.
    """
    log_with_context(
        logger,
        "warning",
        "Render error",
        error_code=exc.code.value,
        error_message=exc.message,
        status_code=exc.status_code,
        method=request.method,
        url=str(request.url),
        event_type="render_error",
    )

    error_content: dict[str, Any] = {"code": exc.code.value, "message": exc.message, "details": exc.details}

    return JSONResponse(
        status_code=exc.status_code,
        content={"error": error_content},
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions without exposing their details."""
    log_with_context(
        logger,
        "error",
        "Unhandled exception",
        error=str(exc),
        error_type=type(exc).__name__,
        method=request.method,
        url=str(request.url),
        event_type="unhandled_error",
    )
    logger.error("Exception traceback:", exc_info=exc)

    return JSONResponse(
        status_code=500,
        content={"error": {"code": ErrorCode.INTERNAL_ERROR.value, "message": "Internal server error"}},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register render and fallback exception handlers with the application.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(RenderException, render_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
