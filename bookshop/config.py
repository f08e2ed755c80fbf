"""
Application Configuration Module

This module uses Pydantic Settings for type-safe configuration management.

Configuration is read once at process start from environment variables,
falling back to a local .env file. The same variable names the AWS SDKs
understand are used for the store connection:

    AWS_REGION=eu-west-1
    AWS_ACCESS_KEY_ID=...
    AWS_SECRET_ACCESS_KEY=...
    DYNAMODB_ENDPOINT_URL=http://localhost:8000   # DynamoDB Local only

Usage:
    from bookshop.config import get_settings

    settings = get_settings()
    print(settings.books_table)
"""

from functools import lru_cache
from typing import Any, Dict, List, Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Pydantic Settings automatically:
    1. Reads from environment variables (case-insensitive)
    2. Falls back to .env file if env var not found
    3. Validates types and raises errors for invalid values
    """

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------
    app_name: str = Field(
        default="Book Shop API",
        description="Application name displayed in docs and logs"
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode (detailed errors, auto-reload)"
    )
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind the server to"
    )
    port: int = Field(
        default=5555,
        description="Port to bind the server to"
    )
    environment: str = Field(
        default="development",
        description="Environment: development, staging, production"
    )
    welcome_message: str = Field(
        default="Welcome to the Book Shop",
        description="Plain text returned by the root endpoint"
    )

    # -------------------------------------------------------------------------
    # DynamoDB Settings
    # -------------------------------------------------------------------------
    aws_region: str = Field(
        default="us-east-1",
        description="AWS region hosting the books table"
    )
    aws_access_key_id: Optional[str] = Field(
        default=None,
        description="Access key id (falls back to the default AWS credential chain)"
    )
    aws_secret_access_key: Optional[SecretStr] = Field(
        default=None,
        description="Secret access key (never logged)"
    )
    dynamodb_endpoint_url: Optional[str] = Field(
        default=None,
        description="Custom endpoint, e.g. DynamoDB Local at http://localhost:8000"
    )
    books_table: str = Field(
        default="Books",
        description="Name of the DynamoDB table holding book records"
    )

    # -------------------------------------------------------------------------
    # CORS Settings
    # -------------------------------------------------------------------------
    allowed_origins: str = Field(
        default="*",
        description="Comma-separated list of allowed CORS origins (* for any)"
    )

    # -------------------------------------------------------------------------
    # Logging Settings
    # -------------------------------------------------------------------------
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------
    @property
    def allowed_origins_list(self) -> List[str]:
        """Parse comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]

    @property
    def has_static_credentials(self) -> bool:
        """True when both halves of an access key pair are configured."""
        return bool(self.aws_access_key_id and self.aws_secret_access_key)

    @property
    def aws_client_kwargs(self) -> Dict[str, Any]:
        """
        Keyword arguments for ``boto3.client("dynamodb", ...)``.

        Credentials are only passed when both are set, otherwise boto3
        resolves them itself (environment, shared config, instance role).

        Returns:
            Dict of client constructor arguments
        """
        kwargs: Dict[str, Any] = {"region_name": self.aws_region}
        if self.dynamodb_endpoint_url:
            kwargs["endpoint_url"] = self.dynamodb_endpoint_url
        if self.has_static_credentials:
            kwargs["aws_access_key_id"] = self.aws_access_key_id
            kwargs["aws_secret_access_key"] = self.aws_secret_access_key.get_secret_value()
        return kwargs

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """
        Validate that log_level is a valid Python logging level.

        Raises:
            ValueError: If log level is invalid
        """
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v.upper()

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment is a known value."""
        valid_envs = {"development", "staging", "production"}
        if v.lower() not in valid_envs:
            raise ValueError(f"environment must be one of {valid_envs}")
        return v.lower()

    @field_validator("books_table")
    @classmethod
    def validate_books_table(cls, v: str) -> str:
        """DynamoDB table names are 3-255 characters."""
        v = v.strip()
        if not 3 <= len(v) <= 255:
            raise ValueError("books_table must be between 3 and 255 characters")
        return v


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    The first call reads the environment and .env file and validates
    everything; later calls return the same instance.

    Returns:
        Cached Settings instance
    """
    return Settings()
