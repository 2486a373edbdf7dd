"""FastAPI exception handlers for the stub backend.

DashboardError subclasses, request validation errors and unhandled
exceptions are all rendered as the response envelope the client expects:
{ success: false, data: null, message }.
"""

from __future__ import annotations

import logging
import traceback

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from etl_dashboard.errors import DashboardError

logger = logging.getLogger(__name__)


def _envelope(status_code: int, message: str) -> JSONResponse:
    """Build a JSON envelope error response."""
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "data": None,
            "message": message,
        },
    )


async def _dashboard_error_handler(_request: Request, exc: DashboardError) -> JSONResponse:
    """Handle DashboardError subclasses."""
    return _envelope(exc.status_code, exc.message)


async def _validation_error_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle FastAPI / Pydantic RequestValidationError (422)."""
    fields = ", ".join(
        " -> ".join(str(loc) for loc in err["loc"]) for err in exc.errors()
    )
    return _envelope(422, f"Validation error: {fields}")


async def _unhandled_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unhandled exceptions — log traceback, return generic 500."""
    logger.error(
        "Unhandled exception: %s\n%s",
        exc,
        traceback.format_exc(),
    )
    return _envelope(500, "Internal server error")


def register_error_handlers(app: FastAPI) -> None:
    """Wire up all exception handlers on the FastAPI application."""
    app.add_exception_handler(DashboardError, _dashboard_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _unhandled_error_handler)  # type: ignore[arg-type]
