"""
Application configuration with Pydantic Settings for validation and type safety.
Supports environment-specific configurations and .env file loading.
"""

from enum import Enum
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator


class Environment(str, Enum):
    """Application environment types"""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """
    Application settings with validation.
    Settings are loaded from environment variables or .env file.
    """

    # Application settings
    app_name: str = Field(default="leChef", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: Environment = Field(
        default=Environment.DEVELOPMENT, description="Application environment"
    )
    debug: bool = Field(default=False, description="Debug mode")

    # Server settings
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, ge=1, le=65535, description="Server port")

    # Database settings
    database_url: str = Field(
        default="postgresql+psycopg2://user@localhost:5432/lechef",
        description="SQLAlchemy database URL",
    )
    db_echo: bool = Field(default=False, description="SQLAlchemy echo SQL statements")
    db_init_attempts: int = Field(
        default=8, ge=1, description="Database initialization retry attempts"
    )
    db_init_delay_sec: float = Field(
        default=2.0, ge=0, description="Delay between DB init attempts"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="%(asctime)s %(levelname)s %(name)s: %(message)s",
        description="Log format string",
    )

    # CORS settings
    cors_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:8000"],
        description="Allowed CORS origins",
    )
    cors_allow_credentials: bool = Field(
        default=True, description="Allow CORS credentials"
    )
    cors_allow_methods: list[str] = Field(
        default=["*"], description="Allowed HTTP methods"
    )
    cors_allow_headers: list[str] = Field(
        default=["*"], description="Allowed HTTP headers"
    )

    # API settings
    api_prefix: str = Field(default="", description="API route prefix")
    api_title: str = Field(default="leChef API", description="API documentation title")
    api_description: str = Field(
        default="Recipes, weekly meal plans and shopping lists with AI-assisted recipe generation",
        description="API documentation description",
    )
    public_base_url: str = Field(
        default="http://localhost:8000",
        description="Externally reachable base URL used for upload and file URLs",
    )

    # AI provider settings
    openai_api_key: Optional[str] = Field(
        default=None, description="Chat-completion provider API key"
    )
    openai_api_url: str = Field(
        default="https://api.openai.com/v1/chat/completions",
        description="Chat-completion endpoint",
    )
    openai_model: str = Field(default="gpt-4o-mini", description="Chat model")
    ai_temperature: float = Field(default=0.7, ge=0, le=2, description="Sampling temperature")
    ai_max_retries: int = Field(default=3, ge=1, description="Attempts per AI call")
    ai_retry_delay_sec: float = Field(
        default=1.0, ge=0, description="Base delay between AI call attempts"
    )
    ai_timeout_sec: float = Field(default=120.0, gt=0, description="AI request timeout")
    webpage_text_limit: int = Field(
        default=50_000, ge=1, description="Max characters of page text sent to the AI"
    )
    webpage_fetch_timeout_sec: float = Field(
        default=20.0, gt=0, description="Timeout for fetching recipe pages"
    )

    # Storage settings
    storage_dir: str = Field(default="storage", description="Directory for uploaded files")
    upload_url_ttl_sec: int = Field(
        default=3600, ge=1, description="Lifetime of an issued upload URL"
    )
    max_upload_bytes: int = Field(
        default=10 * 1024 * 1024, description="Max image size before compression"
    )
    max_image_bytes: int = Field(
        default=500 * 1024, description="Target image size after compression"
    )
    max_image_width: int = Field(default=1200, description="Max image width or height")
    image_quality: int = Field(default=70, ge=1, le=95, description="Compression quality")
    image_fallback_quality: int = Field(
        default=50, ge=1, le=95, description="Quality for the second compression pass"
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v):
        """Validate and normalize environment value"""
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.environment == Environment.PRODUCTION

    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.environment == Environment.DEVELOPMENT

    def is_testing(self) -> bool:
        """Check if running in testing environment"""
        return self.environment == Environment.TESTING


# Global settings instance
settings = Settings()
