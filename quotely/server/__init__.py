"""
Quotely Server Package.

This package contains the web server implementation for Quotely.
It includes the API definition, configuration, request dependencies,
middleware and exception handlers.

Subpackages:
    api: FastAPI route definitions and endpoint logic.
    core: Configuration and constants.
    exception_handlers: Mapping of errors onto the JSON error contract.
    middleware: Request logging and timing.
    services: FastAPI dependencies wiring sessions, repositories and services.
"""
