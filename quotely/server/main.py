"""
Main Application Entry Point.

This module builds the FastAPI application, configures middleware (CORS,
request logging), registers exception handlers and includes all API routers.
The database is opened in the lifespan and shared through ``app.state``.
"""

from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from quotely.core.database import Database, build_repos
from quotely.core.logging_config import get_logger, setup_logging
from quotely.core.monitoring import initialize_logfire
from quotely.core.notifications import LoggingChangeNotifier
from quotely.core.services import CredentialService, TokenIssuer

from .api.v1 import auth, content, health, relationships, users
from .core import constant
from .core.config import DEFAULT_JWT_SECRET, Settings, settings as default_settings
from .exception_handlers import setup_exception_handlers
from .middleware import RequestLoggingMiddleware

logger = get_logger(__name__)


async def bootstrap_admin(database: Database, config: Settings) -> None:
    """Create or promote the configured administrator account."""
    admin = config.admin
    if not admin.enabled:
        logger.info("No administrator configured; set QUOTELY_ADMIN_EMAIL and QUOTELY_ADMIN_PASSWORD to create one")
        return
    auth_config = config.auth
    async with database.session() as session:
        service = CredentialService(
            build_repos(session),
            TokenIssuer(auth_config.jwt_secret, algorithm=auth_config.jwt_algorithm),
            bcrypt_rounds=auth_config.bcrypt_rounds,
        )
        await service.ensure_admin(admin.email, admin.password, admin.name)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    Opens the database on startup, optionally creates tables and the
    administrator account, and disposes the engine on shutdown.
    """
    config: Settings = app.state.settings
    logger.info("Starting up Quotely Server...")
    if config.auth.jwt_secret == DEFAULT_JWT_SECRET:
        logger.warning("QUOTELY_JWT_SECRET is not set; using the development secret")

    database = Database(config.database.url, echo=config.database.echo)
    app.state.database = database
    try:
        if config.database.create_all:
            await database.create_all()
        await bootstrap_admin(database, config)
        logger.info("Database initialized successfully")

        yield
    finally:
        logger.info("Shutting down Quotely Server...")
        await database.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Settings to use; defaults to the environment-bound settings

    Returns:
        Configured FastAPI instance
    """
    config = settings or default_settings

    app = FastAPI(
        title=constant.PROJECT_NAME,
        description="""
        Quotely Server API

        Browse, submit and curate quotes and proverbs. Submissions are reviewed
        by administrators; users keep favorites and likes of approved content.
        """,
        version=constant.API_VERSION,
        openapi_url=f"{constant.API_V1_STR}/openapi.json",
        docs_url=f"{constant.API_V1_STR}/docs",
        redoc_url=f"{constant.API_V1_STR}/redoc",
        lifespan=lifespan,
    )
    app.state.settings = config
    app.state.notifier = LoggingChangeNotifier()

    cors = config.cors
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors.origins,
        allow_credentials=cors.allow_credentials,
        allow_methods=cors.allow_methods,
        allow_headers=cors.allow_headers,
    )
    app.add_middleware(RequestLoggingMiddleware)

    setup_exception_handlers(app)
    initialize_logfire(config.logfire, app)

    app.include_router(health.router, tags=["health"])
    app.include_router(health.router, prefix=constant.API_V1_STR, tags=["health"])
    app.include_router(auth.router, prefix=f"{constant.API_V1_STR}/auth", tags=["auth"])
    app.include_router(content.router, prefix=f"{constant.API_V1_STR}/content", tags=["content"])
    app.include_router(
        relationships.router, prefix=f"{constant.API_V1_STR}/relationships", tags=["relationships"]
    )
    app.include_router(users.router, prefix=f"{constant.API_V1_STR}/users", tags=["users"])
    return app


app = create_app()


def run() -> None:
    """Run the server with uvicorn using the configured host and port."""
    setup_logging()
    uvicorn.run(
        "quotely.server.main:app",
        host=default_settings.server_host,
        port=default_settings.server_port,
        log_config=None,
    )


if __name__ == "__main__":
    run()
