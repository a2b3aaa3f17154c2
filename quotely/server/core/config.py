"""
Configuration Settings.

This module defines the application configuration using Pydantic's BaseSettings.
It automatically loads all configuration from environment variables and .env file
without explicit dotenv loading.
"""

from datetime import timedelta
from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# =====================================================================
# Grouped Configuration Models
# =====================================================================


class DatabaseConfig(BaseModel):
    """Relational store configuration."""

    url: str = Field(
        default="sqlite+aiosqlite:///./quotely.db",
        alias="QUOTELY_DATABASE_URL",
        description="Async SQLAlchemy connection URL",
    )
    echo: bool = Field(default=False, alias="QUOTELY_DATABASE_ECHO", description="Echo SQL statements")
    create_all: bool = Field(
        default=False,
        alias="QUOTELY_DATABASE_CREATE_ALL",
        description="Create missing tables at start-up (development only)",
    )

    model_config = {"populate_by_name": True}


class AuthConfig(BaseModel):
    """Password hashing and token signing configuration."""

    jwt_secret: str = Field(alias="QUOTELY_JWT_SECRET", description="Secret used to sign bearer tokens")
    jwt_algorithm: str = Field(default="HS256", alias="QUOTELY_JWT_ALGORITHM", description="JWT signing algorithm")
    jwt_expires_in_days: int = Field(
        default=7, ge=1, alias="QUOTELY_JWT_EXPIRES_IN_DAYS", description="Token lifetime in days"
    )
    bcrypt_rounds: int = Field(
        default=10, ge=4, le=31, alias="QUOTELY_BCRYPT_ROUNDS", description="bcrypt cost factor"
    )

    model_config = {"populate_by_name": True}

    @property
    def token_lifetime(self) -> timedelta:
        return timedelta(days=self.jwt_expires_in_days)


class PaginationConfig(BaseModel):
    """Listing page size configuration."""

    default_page_size: int = Field(default=20, ge=1, alias="QUOTELY_DEFAULT_PAGE_SIZE")
    max_page_size: int = Field(default=100, ge=1, alias="QUOTELY_MAX_PAGE_SIZE")

    model_config = {"populate_by_name": True}


class AdminConfig(BaseModel):
    """Privileged account bootstrapped at start-up."""

    email: Optional[str] = Field(default=None, alias="QUOTELY_ADMIN_EMAIL", description="Admin email address")
    password: Optional[str] = Field(default=None, alias="QUOTELY_ADMIN_PASSWORD", description="Admin password")
    name: str = Field(default="Administrator", alias="QUOTELY_ADMIN_NAME", description="Admin display name")

    model_config = {"populate_by_name": True}

    @property
    def enabled(self) -> bool:
        return bool(self.email and self.password)


class CORSConfig(BaseModel):
    """CORS configuration."""

    origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS", description="Allowed CORS origins (use * for all)")
    allow_credentials: bool = Field(
        default=True, alias="CORS_ALLOW_CREDENTIALS", description="Allow credentials in CORS requests"
    )
    allow_methods: list[str] = Field(
        default=["*"], alias="CORS_ALLOW_METHODS", description="Allowed HTTP methods (use * for all)"
    )
    allow_headers: list[str] = Field(
        default=["*"], alias="CORS_ALLOW_HEADERS", description="Allowed HTTP headers (use * for all)"
    )

    model_config = {"populate_by_name": True}


class LogfireConfig(BaseModel):
    """Logfire monitoring configuration."""

    enabled: bool = Field(default=False, alias="LOGFIRE_ENABLED", description="Enable Logfire tracing")
    token: Optional[str] = Field(default=None, alias="LOGFIRE_TOKEN", description="Logfire write token")
    service_name: str = Field(default="quotely-server", alias="LOGFIRE_SERVICE_NAME")
    environment: str = Field(default="development", alias="LOGFIRE_ENVIRONMENT")

    model_config = {"populate_by_name": True}


# =====================================================================
# Main Settings Class
# =====================================================================

DEFAULT_JWT_SECRET = "quotely-development-secret-change-me-before-deploying"


class Settings(BaseSettings):
    """
    Application settings model.

    All properties are automatically bound from environment variables and .env file.
    Pydantic's BaseSettings handles dotenv loading automatically via model_config.
    """

    # =====================================================================
    # Pydantic Configuration
    # =====================================================================
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
        populate_by_name=True,
    )

    # =====================================================================
    # Quotely Server Configuration
    # =====================================================================
    server_host: str = Field(
        default="0.0.0.0",
        description="Quotely server host address to bind to",
        alias="QUOTELY_SERVER_HOST",
    )
    server_port: int = Field(
        default=8000,
        description="Quotely server port number",
        alias="QUOTELY_SERVER_PORT",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        alias="QUOTELY_LOG_LEVEL",
    )
    log_format: str = Field(
        default="detailed",
        description="Log line format (simple, detailed, json)",
        alias="QUOTELY_LOG_FORMAT",
    )
    log_file_dir: Optional[str] = Field(
        default=None,
        description="Directory for the log file; file logging is off when unset",
        alias="QUOTELY_LOG_FILE_DIR",
    )

    # =====================================================================
    # Database Configuration
    # =====================================================================
    database_url: str = Field(default="sqlite+aiosqlite:///./quotely.db", alias="QUOTELY_DATABASE_URL")
    database_echo: bool = Field(default=False, alias="QUOTELY_DATABASE_ECHO")
    database_create_all: bool = Field(default=False, alias="QUOTELY_DATABASE_CREATE_ALL")

    # =====================================================================
    # Authentication Configuration
    # =====================================================================
    jwt_secret: str = Field(default=DEFAULT_JWT_SECRET, alias="QUOTELY_JWT_SECRET")
    jwt_algorithm: str = Field(default="HS256", alias="QUOTELY_JWT_ALGORITHM")
    jwt_expires_in_days: int = Field(default=7, alias="QUOTELY_JWT_EXPIRES_IN_DAYS")
    bcrypt_rounds: int = Field(default=10, alias="QUOTELY_BCRYPT_ROUNDS")

    # =====================================================================
    # Pagination Configuration
    # =====================================================================
    default_page_size: int = Field(default=20, alias="QUOTELY_DEFAULT_PAGE_SIZE")
    max_page_size: int = Field(default=100, alias="QUOTELY_MAX_PAGE_SIZE")

    # =====================================================================
    # Admin Bootstrap Configuration
    # =====================================================================
    admin_email: Optional[str] = Field(default=None, alias="QUOTELY_ADMIN_EMAIL")
    admin_password: Optional[str] = Field(default=None, alias="QUOTELY_ADMIN_PASSWORD")
    admin_name: str = Field(default="Administrator", alias="QUOTELY_ADMIN_NAME")

    # =====================================================================
    # CORS Configuration
    # =====================================================================
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(default=["*"], alias="CORS_ALLOW_METHODS")
    cors_allow_headers: list[str] = Field(default=["*"], alias="CORS_ALLOW_HEADERS")

    # =====================================================================
    # Monitoring Configuration
    # =====================================================================
    logfire_enabled: bool = Field(default=False, alias="LOGFIRE_ENABLED")
    logfire_token: Optional[str] = Field(default=None, alias="LOGFIRE_TOKEN")
    logfire_service_name: str = Field(default="quotely-server", alias="LOGFIRE_SERVICE_NAME")
    logfire_environment: str = Field(default="development", alias="LOGFIRE_ENVIRONMENT")

    # =====================================================================
    # Computed Properties (Grouped Configurations)
    # =====================================================================

    @property
    def database(self) -> DatabaseConfig:
        """Get database configuration from environment variables."""
        return DatabaseConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def auth(self) -> AuthConfig:
        """Get authentication configuration from environment variables."""
        return AuthConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def pagination(self) -> PaginationConfig:
        """Get pagination configuration from environment variables."""
        return PaginationConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def admin(self) -> AdminConfig:
        """Get admin bootstrap configuration from environment variables."""
        return AdminConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def cors(self) -> CORSConfig:
        """Get CORS configuration from environment variables."""
        return CORSConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def logfire(self) -> LogfireConfig:
        """Get Logfire configuration from environment variables."""
        return LogfireConfig.model_validate(self.model_dump(by_alias=True))


settings = Settings()
