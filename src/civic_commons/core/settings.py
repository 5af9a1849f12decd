"""Application settings and configuration.

This module defines all configuration options for the Civic Commons service.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Civic Commons", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Security and authentication
    secret_key: str = Field(alias="SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(
        default=60 * 24 * 7,
        alias="ACCESS_TOKEN_EXPIRE_MINUTES",
    )

    # Database configuration
    database_url: str = Field(default="sqlite:///./civic_commons.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # News ingestion
    news_ingestion_enabled: bool = Field(default=False, alias="NEWS_INGESTION_ENABLED")
    news_api_key: str | None = Field(default=None, alias="NEWS_API_KEY")
    news_api_base_url: str = Field(
        default="https://newsapi.org/v2",
        alias="NEWS_API_BASE_URL",
    )
    news_country: str = Field(default="us", alias="NEWS_COUNTRY")
    news_default_location: str = Field(
        default="United States",
        alias="NEWS_DEFAULT_LOCATION",
    )
    news_fetch_interval_seconds: float = Field(
        default=30 * 60,
        alias="NEWS_FETCH_INTERVAL_SECONDS",
    )
    news_http_timeout_seconds: float = Field(
        default=10.0,
        alias="NEWS_HTTP_TIMEOUT_SECONDS",
    )
    news_sample_fallback: bool = Field(default=True, alias="NEWS_SAMPLE_FALLBACK")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(
        default=["*"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["*"],
        alias="CORS_ALLOW_HEADERS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @property
    def database_url_sync(self) -> str:
        """Return a sync-compatible database URL for tooling.

        Converts asyncpg URLs to psycopg for synchronous operations such as
        Alembic migrations.
        """
        url = self.effective_database_url
        if url.startswith("postgresql+asyncpg"):
            return url.replace("postgresql+asyncpg", "postgresql+psycopg", 1)
        return url

    @property
    def effective_database_url(self) -> str:
        """Return the database URL respecting testing overrides."""
        if self.use_testing_database and self.test_database_url:
            return self.test_database_url
        return self.database_url

    @property
    def database_connect_args(self) -> dict[str, object]:
        """Return DBAPI connect arguments for the effective database URL.

        SQLite connections are shared across FastAPI's threadpool workers, so
        the same-thread check is disabled for them.
        """
        if self.effective_database_url.startswith("sqlite"):
            return {"check_same_thread": False}
        return {}


settings = Settings()  # type: ignore[call-arg]
