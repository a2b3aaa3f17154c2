"""
Global Exception Handler for FastAPI Application.

This module provides a global exception handler that catches all unhandled
exceptions and logs detailed information including error ID, request context,
and full traceback. The client only ever receives the generic
``InternalError`` body; the error ID stays in the server log.
"""

import traceback
import uuid

from fastapi import Request
from fastapi.responses import JSONResponse

from quotely.core.errors import InternalError
from quotely.core.logging_config import get_logger
from quotely.core.monitoring import log_error

logger = get_logger(__name__)


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Global exception handler to log detailed error information.

    This handler is called for any unhandled exception in the application.

    Args:
        request: The HTTP request that caused the exception
        exc: The exception that was raised

    Returns:
        JSONResponse with the generic internal error body
    """
    # Generate unique error ID for tracking
    error_id = uuid.uuid4().hex

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
            "traceback": traceback.format_exc(),
        },
    )
    log_error(type(exc).__name__, str(exc), {"error_id": error_id, "path": request.url.path})

    error = InternalError()
    return JSONResponse(status_code=error.status_code, content=error.to_dict())
