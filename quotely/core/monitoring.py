"""
Monitoring and Tracing Configuration Module.

This module provides integration with Pydantic Logfire for monitoring and
tracing of the Quotely server, including:
- API endpoint tracing
- Database operation monitoring
- Moderation and relationship change events
- Error tracking

Logfire stays dormant unless it is enabled and a token is configured. While
dormant every helper degrades to a debug log line.
"""

from typing import TYPE_CHECKING, Any, Optional

import logfire
from fastapi import FastAPI

from quotely.core.logging_config import get_logger

if TYPE_CHECKING:
    from quotely.server.core.config import LogfireConfig

logger = get_logger(__name__)

_active = False


def is_logfire_active() -> bool:
    """Return whether events are currently forwarded to Logfire."""
    return _active


def initialize_logfire(config: "LogfireConfig", app: Optional[FastAPI] = None) -> None:
    """
    Initialize Pydantic Logfire for monitoring and tracing.

    Sets up Logfire with automatic instrumentation for SQLAlchemy and, when an
    application instance is given, FastAPI.

    Args:
        config: Logfire settings group
        app: FastAPI application instance for FastAPI instrumentation (optional).
    """
    global _active

    if not config.enabled:
        logger.info("Logfire monitoring is disabled. Set LOGFIRE_ENABLED=true to enable.")
        return

    if not config.token:
        logger.warning(
            "Logfire is enabled but LOGFIRE_TOKEN is not set. "
            "Monitoring will not work. Set LOGFIRE_TOKEN to enable Logfire."
        )
        return

    logfire.configure(
        token=config.token,
        service_name=config.service_name,
        environment=config.environment,
    )
    logfire.instrument_sqlalchemy()
    if app is not None:
        logfire.instrument_fastapi(app=app)
    _active = True

    logger.info(
        f"Logfire monitoring initialized: environment={config.environment}, service={config.service_name}"
    )


def log_api_request(method: str, path: str, status_code: int, duration_ms: float) -> None:
    """
    Log an API request with performance metrics.

    Args:
        method: HTTP method
        path: Request path
        status_code: HTTP status code
        duration_ms: Request duration in milliseconds
    """
    if not _active:
        logger.debug(f"{method} {path} -> {status_code} ({duration_ms:.2f}ms)")
        return
    logfire.info(
        "API request completed",
        method=method,
        path=path,
        status_code=status_code,
        duration_ms=duration_ms,
    )


def log_change_event(event: str, payload: dict[str, Any]) -> None:
    """
    Log a content or relationship change event.

    Args:
        event: Event name (e.g. ``content.moderated``)
        payload: Event attributes
    """
    if not _active:
        logger.debug(f"Change event {event}: {payload}")
        return
    logfire.info("Change event {event}", event=event, **payload)


def log_error(error_type: str, error_message: str, context: Optional[dict] = None) -> None:
    """
    Log an error with context for debugging.

    Args:
        error_type: Type of error
        error_message: Error message
        context: Additional context dictionary
    """
    if not _active:
        logger.debug(f"{error_type}: {error_message}")
        return
    logfire.error(
        "{error_type}: {error_message}",
        error_type=error_type,
        error_message=error_message,
        **(context or {}),
    )
