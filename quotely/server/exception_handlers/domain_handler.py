"""
Domain and Framework Exception Handlers.

Maps the error taxonomy, request validation failures, framework HTTP errors
and persistence failures onto the ``{error, message}`` response contract.
"""

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from quotely.core.errors import (
    Conflict,
    Forbidden,
    InternalError,
    InvalidToken,
    NotFound,
    QuotelyError,
    ValidationError,
)
from quotely.core.logging_config import get_logger
from quotely.core.monitoring import log_error

logger = get_logger(__name__)

HTTP_STATUS_KINDS = {
    401: InvalidToken.kind,
    403: Forbidden.kind,
    404: NotFound.kind,
    409: Conflict.kind,
}


def error_response(status_code: int, kind: str, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": kind, "message": message})


async def quotely_error_handler(request: Request, exc: QuotelyError) -> JSONResponse:
    """Render a domain error with its own status code."""
    logger.warning(f"{exc.kind} in {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    field = ".".join(location) or "request"
    return f"{field}: {first.get('msg', 'invalid value')}"


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report the first invalid field as ``400 ValidationError``."""
    message = _describe_validation_error(exc)
    logger.info(f"Rejected request {request.method} {request.url.path}: {message}")
    return error_response(ValidationError.status_code, ValidationError.kind, message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Fold framework HTTP errors (unknown route, wrong method) into the error taxonomy."""
    if exc.status_code in HTTP_STATUS_KINDS:
        kind = HTTP_STATUS_KINDS[exc.status_code]
    elif 400 <= exc.status_code < 500:
        kind = ValidationError.kind
    else:
        kind = InternalError.kind
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": kind, "message": message},
        headers=getattr(exc, "headers", None),
    )


async def persistence_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Hide persistence failures behind ``500 InternalError``."""
    logger.error(f"Database error in {request.method} {request.url.path}: {exc}", exc_info=True)
    log_error(type(exc).__name__, str(exc), {"path": request.url.path})
    error = InternalError()
    return JSONResponse(status_code=error.status_code, content=error.to_dict())
