"""Runtime configuration for the forum backend.

Every option is read from the environment (or a local ``.env`` file) through
pydantic-settings. Only ``SECRET_KEY`` has no default.
"""

import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Forum configuration; field aliases are the environment variable names."""

    # Service identity
    app_name: str = Field(default="People's Forum", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")

    # Bearer tokens are HS256-signed with this key and live for one hour.
    secret_key: str = Field(alias="SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(default=60, ge=1, alias="ACCESS_TOKEN_EXPIRE_MINUTES")

    # Storage
    database_url: str = Field(default="sqlite:///./peoples_forum.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # None keeps the post feed unbounded.
    default_feed_limit: int | None = Field(default=None, ge=1, alias="DEFAULT_FEED_LIMIT")

    # Browser clients
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(default=["*"], alias="CORS_ALLOW_HEADERS")

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @field_validator("secret_key")
    @classmethod
    def secret_key_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("SECRET_KEY must not be empty")
        return v

    @field_validator("log_level")
    @classmethod
    def known_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def effective_database_url(self) -> str:
        """Return the test database URL when testing mode is on, else ``DATABASE_URL``."""
        if self.use_testing_database and self.test_database_url:
            return self.test_database_url
        return self.database_url


settings = Settings()  # type: ignore[call-arg]
